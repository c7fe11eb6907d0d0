"""
PHP emitter - PSR-4 entities and an API client per grouping.

Generates:
    1. ``src/Entity/<Type>.php`` per type definition
    2. ``src/Service/<Client>Client.php`` per client grouping
    3. ``src/Service/DateFactory.php``, ``src/Service/ClientFactory.php``
       and ``composer.json``
"""

from __future__ import annotations

from typing import Any, Dict, List, Tuple

from ..ir import ReferenceKind, ResourceAction, TypeKind, TypeReference
from ..naming import PhpNameResolver, split_words
from .base import Emitter, TypeIndex

SCALAR_DOC_TYPES = {
    "string": "string",
    "integer": "int",
    "number": "float",
    "boolean": "bool",
    "datetime": "\\DateTimeImmutable",
    "date": "\\DateTimeImmutable",
    "any": "mixed",
}


class PhpEmitter(Emitter):
    language = "php"
    file_extension = "php"
    resolver: PhpNameResolver

    def default_common_package(self) -> str:
        vendor = "".join(word.capitalize() for word in split_words(self.resolver.vendor_prefix))
        return f"{vendor}\\Component\\RestClientCommon" if vendor else "RestClientCommon"

    def base_context(self) -> Dict[str, Any]:
        context = super().base_context()
        context["namespace"] = self.resolver.namespace()
        return context

    def doc_type(self, reference: TypeReference, index: TypeIndex, qualified: bool = False) -> str:
        if reference.kind == ReferenceKind.ARRAY:
            inner = self.doc_type(reference.items, index, qualified)
            return "array" if inner == "mixed" else f"{inner}[]"
        if reference.kind == ReferenceKind.SCALAR:
            return SCALAR_DOC_TYPES[reference.name]
        if index.kind_of(reference.name) == TypeKind.ENUM:
            return "string"
        class_name = self.resolver.class_name_for(reference.name)
        return f"Entities\\{class_name}" if qualified else class_name

    def path_parameter_doc_type(self) -> str:
        return "string"

    def path_expression(self, action: ResourceAction) -> str:
        parts = self.path_parts(action)
        arguments = [f"urlencode(${text})" for kind, text in parts if kind == "parameter"]
        if not arguments:
            return self.quote("".join(text for _, text in parts))
        template = "".join(
            text.replace("%", "%%") if kind == "literal" else "%s" for kind, text in parts
        )
        return f"sprintf({self.quote(template)}, {', '.join(arguments)})"

    def render_support_files(
        self, index: TypeIndex, groups: List[Tuple[str, List[ResourceAction]]]
    ) -> Dict[str, str]:
        namespace = self.resolver.namespace()
        vendor = self.resolver.package_name().split("/")[0]
        return {
            "src/Service/DateFactory.php": self.render_template("date_factory", {}),
            "src/Service/ClientFactory.php": self.render_template(
                "client_factory",
                {"clients": [self.resolver.client_class_name_for(client) for client, _ in groups]},
            ),
            "composer.json": self.render_template(
                "composer.json.j2",
                {
                    "package_name": self.resolver.package_name(),
                    "common_requirement": f"{vendor}/lib-rest-client-common",
                    "autoload_prefix": namespace.replace("\\", "\\\\") + "\\\\",
                },
            ),
        }
