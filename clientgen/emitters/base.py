"""
Emitter base - shared traversal and rendering for every target language.

An emitter turns the canonical Type Definition set and the resource actions
into a source tree. Language subclasses only provide conventions (doc type
syntax, path expressions, support files); the traversal, reference checking,
template rendering and file writing live here.

A run renders every file in memory before writing anything, so a failed
reference check or template error leaves the output directory untouched.

Example:
    ```python
    emitter = JavascriptEmitter(JavascriptNameResolver("acme", "transfer"))
    written = emitter.emit(definitions, specification.resources, Path("out/transfer"))
    ```
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import suppress
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple
import os
import re
import tempfile

from jinja2 import Environment, PackageLoader, StrictUndefined, TemplateError

from ..errors import EmissionError, UnresolvedReferenceError
from ..ir import ReferenceKind, ResourceAction, ScalarType, TypeDefinition, TypeKind, TypeReference
from ..naming import NameResolver, to_pascal_case
from ..observability import get_logger

logger = get_logger(__name__)

DATE_SCALARS = {ScalarType.DATETIME.value, ScalarType.DATE.value}

_PATH_PARAMETER = re.compile(r"\{([^}]+)\}")


class TypeIndex:
    """Produced definitions by name, in emission order."""

    def __init__(self, definitions: Iterable[TypeDefinition]):
        self.definitions: List[TypeDefinition] = list(definitions)
        self._by_name: Dict[str, TypeDefinition] = {d.name: d for d in self.definitions}

    def __contains__(self, name: str) -> bool:
        return name in self._by_name

    def get(self, name: str) -> Optional[TypeDefinition]:
        return self._by_name.get(name)

    def kind_of(self, name: str) -> TypeKind:
        return self._by_name[name].kind


def write_atomic(path: Path, content: str) -> None:
    """Write ``content`` to a temporary sibling, then move it over ``path``."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, temporary = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as handle:
            handle.write(content)
        os.replace(temporary, path)
    except BaseException:
        with suppress(OSError):
            os.unlink(temporary)
        raise


def enum_constant_name(value: str) -> str:
    constant = re.sub(r"[^A-Za-z0-9]+", "_", value).strip("_").upper()
    if not constant:
        return "EMPTY"
    if constant[0].isdigit():
        return f"VALUE_{constant}"
    return constant


class Emitter(ABC):
    """
    Base class of per-language emitters.

    Guarantees:
    - Output is a pure function of the inputs (no timestamps, stable order)
    - Unknown type references abort the run before anything is written
    - Every file is written atomically
    """

    language: str = ""

    def __init__(
        self,
        resolver: NameResolver,
        common_package: Optional[str] = None,
        base_url: Optional[str] = None,
        version: str = "1.0.0",
    ):
        """
        Args:
            resolver: Naming conventions of the target language
            common_package: Runtime library providing Entity/Result/Filter
            base_url: Default API base URL written into support files
            version: Version of the generated package
        """
        self.resolver = resolver
        self.common_package = common_package or self.default_common_package()
        self.base_url = base_url or ""
        self.version = version
        self.environment = Environment(
            loader=PackageLoader("clientgen", f"templates/{self.language}"),
            undefined=StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            autoescape=False,
        )
        self.environment.filters["quoted"] = self.quote

    # -- public contract ---------------------------------------------------

    def emit(
        self,
        type_definitions: Iterable[TypeDefinition],
        resource_actions: Iterable[ResourceAction],
        output_root: Path,
    ) -> List[Path]:
        """Render and write the whole source tree; return written paths in order."""
        return self.write(self.render(type_definitions, resource_actions), output_root)

    def write(self, files: Dict[str, str], output_root: Path) -> List[Path]:
        """Write already rendered files below ``output_root``."""
        output_root = Path(output_root)
        written: List[Path] = []
        for relative, content in files.items():
            target = output_root / relative
            try:
                write_atomic(target, content)
            except OSError as exc:
                raise EmissionError(
                    f"Cannot write {target}: {exc}",
                    target_language=self.language,
                    path=str(target),
                ) from exc
            written.append(target)
        logger.info("Wrote %d %s files to %s", len(written), self.language, output_root)
        return written

    def render(
        self,
        type_definitions: Iterable[TypeDefinition],
        resource_actions: Iterable[ResourceAction],
    ) -> Dict[str, str]:
        """Render every output file in memory, keyed by relative path."""
        index = TypeIndex(type_definitions)
        actions = list(resource_actions)
        self.check_references(index, actions)

        files: Dict[str, str] = {}
        for definition in index.definitions:
            self._add(files, self.resolver.file_name_for(definition), self.render_entity(definition, index))
        groups = self.group_actions(actions)
        for client, client_actions in groups:
            self._add(files, self.resolver.file_name_for(client), self.render_client(client, client_actions, index))
        for relative, content in self.render_support_files(index, groups).items():
            self._add(files, relative, content)
        return files

    def check_references(self, index: TypeIndex, actions: List[ResourceAction]) -> None:
        for definition in index.definitions:
            for name in definition.referenced_type_names():
                if name not in index:
                    raise UnresolvedReferenceError(name, f"type {definition.name}", self.language)
        for action in actions:
            for name in action.referenced_type_names():
                if name not in index:
                    raise UnresolvedReferenceError(name, action.describe(), self.language)

    def group_actions(self, actions: List[ResourceAction]) -> List[Tuple[str, List[ResourceAction]]]:
        """Actions grouped by client, groups in first-appearance order."""
        groups: Dict[str, List[ResourceAction]] = {}
        for action in actions:
            groups.setdefault(action.client, []).append(action)
        return list(groups.items())

    # -- rendering ---------------------------------------------------------

    def render_entity(self, definition: TypeDefinition, index: TypeIndex) -> str:
        template = "enum" if definition.kind == TypeKind.ENUM else "entity"
        return self.render_template(template, self.entity_view(definition, index))

    def render_client(self, client: str, actions: List[ResourceAction], index: TypeIndex) -> str:
        return self.render_template("client", self.client_view(client, actions, index))

    def render_template(self, name: str, context: Dict[str, Any]) -> str:
        template_name = name if name.endswith(".j2") else f"{name}.{self.file_extension}.j2"
        try:
            return self.environment.get_template(template_name).render(**self.base_context(), **context)
        except TemplateError as exc:
            raise EmissionError(
                f"Template {template_name} failed: {exc}",
                target_language=self.language,
                path=template_name,
            ) from exc

    def base_context(self) -> Dict[str, Any]:
        return {
            "common_package": self.common_package,
            "base_url": self.base_url,
            "version": self.version,
        }

    # -- view models -------------------------------------------------------

    def entity_view(self, definition: TypeDefinition, index: TypeIndex) -> Dict[str, Any]:
        class_name = self.resolver.class_name_for(definition.name)
        imports: List[str] = []

        def remember(type_name: str) -> None:
            local = self.resolver.class_name_for(type_name)
            if local != class_name and local not in imports:
                imports.append(local)

        if definition.parent:
            base_class, base_is_common = self.resolver.class_name_for(definition.parent), False
            remember(definition.parent)
        elif definition.kind == TypeKind.RESULT:
            base_class, base_is_common = "Result", True
        elif definition.is_filter and definition.extends_base_filter:
            base_class, base_is_common = "Filter", True
        else:
            base_class, base_is_common = "Entity", True

        properties = []
        for prop in definition.properties:
            category = self.conversion_category(prop.reference, index)
            if category in ("entity", "entity_list"):
                remember(prop.reference.element.name)
            accessors = self.resolver.property_accessor_names_for(prop)
            properties.append(
                {
                    "key": prop.name,
                    "getter": accessors.getter,
                    "setter": accessors.setter,
                    "variable": self.resolver.variable_name_for(prop.name),
                    "category": category,
                    "class_name": self.element_class(prop.reference),
                    "doc_type": self.doc_type(prop.reference, index),
                    "nullable": prop.nullable,
                    "description_lines": self.description_lines(prop.description),
                }
            )

        view: Dict[str, Any] = {
            "class_name": class_name,
            "kind": definition.kind.value,
            "base_class": base_class,
            "base_is_common": base_is_common,
            "imports": imports,
            "uses_date": any(p["category"] in ("date", "date_list") for p in properties),
            "properties": properties,
            "description_lines": self.description_lines(definition.description),
            "enum_cases": self.enum_cases(definition.enum_values),
            "item": None,
        }
        if definition.kind == TypeKind.RESULT and definition.item_type is not None:
            category = self.conversion_category(definition.item_type, index)
            if category in ("entity", "entity_list"):
                remember(definition.item_type.element.name)
            view["item"] = {
                "category": category,
                "class_name": self.element_class(definition.item_type),
                "doc_type": self.doc_type(definition.item_type, index),
            }
            view["items_key"] = definition.items_key
            view["uses_date"] = view["uses_date"] or category in ("date", "date_list")
        return view

    def client_view(
        self, client: str, actions: List[ResourceAction], index: TypeIndex
    ) -> Dict[str, Any]:
        imports: List[str] = []
        methods = []
        taken: Dict[str, int] = {}
        for action in actions:
            for name in action.referenced_type_names():
                local = self.resolver.class_name_for(name)
                if local not in imports:
                    imports.append(local)
            view = self.action_view(action, index)
            view["name"] = self.unique_method_name(view["name"], action, taken)
            methods.append(view)
        return {
            "class_name": self.resolver.client_class_name_for(client),
            "imports": imports,
            "methods": methods,
        }

    def unique_method_name(self, name: str, action: ResourceAction, taken: Dict[str, int]) -> str:
        """
        Disambiguate a method name within one client.

        A repeated name gains ``By<Parameters>`` when the action has path
        parameters, then a numeric suffix if it is still taken.
        """
        candidate = name
        if candidate in taken and action.path_parameters:
            candidate += "By" + "And".join(to_pascal_case(p) for p in action.path_parameters)
        if candidate in taken:
            taken[candidate] += 1
            candidate = f"{candidate}{taken[candidate]}"
        taken.setdefault(candidate, 1)
        return candidate

    def action_view(self, action: ResourceAction, index: TypeIndex) -> Dict[str, Any]:
        parameters = [
            {"variable": self.resolver.variable_name_for(name), "doc_type": self.path_parameter_doc_type()}
            for name in action.path_parameters
        ]
        taken = {parameter["variable"] for parameter in parameters}

        body = None
        if action.request_type is not None:
            request = action.request_type
            if request.kind == ReferenceKind.TYPE:
                variable = self.resolver.variable_name_for(request.name)
            else:
                variable = "payload"
            if variable in taken:
                variable = f"{variable}Body"
            body = {
                "variable": variable,
                "doc_type": self.doc_type(request, index, qualified=True),
                "category": self.conversion_category(request, index),
                "class_name": self.element_class(request),
            }

        response = {"category": "none", "doc_type": None, "class_name": None, "items_key": None}
        if action.response_type is not None:
            reference = action.response_type
            category = self.conversion_category(reference, index)
            if category == "entity" and index.kind_of(reference.name) == TypeKind.RESULT:
                category = "result"
            response = {
                "category": category,
                "doc_type": self.doc_type(reference, index, qualified=True),
                "class_name": self.element_class(reference),
                "items_key": index.get(reference.name).items_key if category == "result" else None,
            }

        return {
            "name": self.resolver.method_name_for(action),
            "http_method": action.method.value,
            "path": action.path,
            "path_expression": self.path_expression(action),
            "description_lines": self.description_lines(action.description),
            "parameters": parameters,
            "body": body,
            "arguments": [p["variable"] for p in parameters] + ([body["variable"]] if body else []),
            "response": response,
        }

    def conversion_category(self, reference: TypeReference, index: TypeIndex) -> str:
        """
        How a value of this reference crosses the entity boundary.

        ``date``/``date_list`` go through the DateFactory helper,
        ``entity``/``entity_list`` are wrapped in generated classes,
        ``plain`` values (scalars and enums) pass through unchanged.
        """
        element = reference.element
        if element.kind == ReferenceKind.SCALAR:
            if element.name in DATE_SCALARS:
                return "date_list" if reference.is_array else "date"
            return "plain"
        if index.kind_of(element.name) == TypeKind.ENUM:
            return "plain"
        return "entity_list" if reference.is_array else "entity"

    def element_class(self, reference: TypeReference) -> Optional[str]:
        element = reference.element
        if element.kind == ReferenceKind.TYPE:
            return self.resolver.class_name_for(element.name)
        return None

    def enum_cases(self, values: List[str]) -> List[Dict[str, str]]:
        cases: List[Dict[str, str]] = []
        used: Dict[str, int] = {}
        for value in values:
            constant = enum_constant_name(value)
            if constant in used:
                used[constant] += 1
                constant = f"{constant}_{used[constant]}"
            else:
                used[constant] = 1
            cases.append({"constant": constant, "value": self.quote(value)})
        return cases

    def path_parts(self, action: ResourceAction) -> List[Tuple[str, str]]:
        """Relative path split into ``("literal", text)`` and ``("parameter", variable)`` parts."""
        path = action.path.lstrip("/")
        parts: List[Tuple[str, str]] = []
        position = 0
        for match in _PATH_PARAMETER.finditer(path):
            if match.start() > position:
                parts.append(("literal", path[position:match.start()]))
            parts.append(("parameter", self.resolver.variable_name_for(match.group(1))))
            position = match.end()
        if position < len(path) or not parts:
            parts.append(("literal", path[position:]))
        return parts

    @staticmethod
    def description_lines(description: Optional[str]) -> List[str]:
        if not description:
            return []
        return [line.rstrip() for line in description.strip().splitlines()]

    @staticmethod
    def quote(value: str) -> str:
        """Single-quoted string literal (JavaScript and PHP share the syntax)."""
        return "'" + value.replace("\\", "\\\\").replace("'", "\\'") + "'"

    @staticmethod
    def _add(files: Dict[str, str], relative: str, content: str) -> None:
        if relative in files:
            raise EmissionError(f"Two generated files map to {relative}", path=relative)
        files[relative] = content

    # -- language hooks ----------------------------------------------------

    file_extension: str = ""

    @abstractmethod
    def default_common_package(self) -> str:
        ...

    @abstractmethod
    def doc_type(self, reference: TypeReference, index: TypeIndex, qualified: bool = False) -> str:
        ...

    @abstractmethod
    def path_parameter_doc_type(self) -> str:
        ...

    @abstractmethod
    def path_expression(self, action: ResourceAction) -> str:
        ...

    @abstractmethod
    def render_support_files(
        self, index: TypeIndex, groups: List[Tuple[str, List[ResourceAction]]]
    ) -> Dict[str, str]:
        """Fixed files that are not derived from a single type or client."""
