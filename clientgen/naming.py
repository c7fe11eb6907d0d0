"""
Name resolution - maps specification names to target-language identifiers.

Every mapping here is a pure function of its input, which keeps generated
file paths and member names stable between runs.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import FrozenSet, List, Optional, Union
import re

from .ir import PropertyDefinition, ReferenceKind, ResourceAction, ScalarType, TypeDefinition

_WORD_BOUNDARY = re.compile(r"[A-Z]+(?![a-z])|[A-Z]?[a-z]+[0-9]*|[0-9]+")
_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

DEFAULT_VERBS = {
    "GET": "get",
    "POST": "create",
    "PUT": "update",
    "PATCH": "update",
    "DELETE": "delete",
    "HEAD": "head",
    "OPTIONS": "options",
}


def split_words(name: str) -> List[str]:
    """Split ``snake_case``, ``kebab-case``, spaced and camelCase names into words."""
    words: List[str] = []
    for chunk in re.split(r"[^A-Za-z0-9]+", name):
        if chunk:
            words.extend(_WORD_BOUNDARY.findall(chunk) or [chunk])
    return words


def to_pascal_case(name: str) -> str:
    return "".join(word[:1].upper() + word[1:] for word in split_words(name))


def to_camel_case(name: str) -> str:
    pascal = to_pascal_case(name)
    if not pascal:
        return pascal
    words = split_words(name)
    first = words[0]
    if first.isupper() and len(first) > 1:
        # leading acronym: "URLPath" -> "urlPath"
        return first.lower() + pascal[len(first):]
    return pascal[:1].lower() + pascal[1:]


@dataclass(frozen=True)
class AccessorNames:
    getter: str
    setter: str


class NameResolver(ABC):
    """
    Identifier and file-path conventions of one target language.

    Args:
        vendor_prefix: Vendor/organisation prefix for package names
        api_name: Name of the API being generated
        package: Explicit package name, overriding the derived one
    """

    language: str = ""
    reserved_words: FrozenSet[str] = frozenset()

    def __init__(self, vendor_prefix: str = "", api_name: str = "", package: Optional[str] = None):
        self.vendor_prefix = vendor_prefix
        self.api_name = api_name
        self.package = package

    def class_name_for(self, raw_name: str) -> str:
        return to_pascal_case(raw_name)

    def client_class_name_for(self, client: str) -> str:
        return f"{to_pascal_case(client)}Client"

    @abstractmethod
    def file_name_for(self, subject: Union[TypeDefinition, str]) -> str:
        """Relative output path of an entity (definition) or a client (grouping name)."""

    def property_accessor_names_for(self, prop: PropertyDefinition) -> AccessorNames:
        base = to_pascal_case(prop.name)
        reference = prop.reference
        boolean = reference.kind == ReferenceKind.SCALAR and reference.name == ScalarType.BOOLEAN.value
        return AccessorNames(getter=("is" if boolean else "get") + base, setter="set" + base)

    def variable_name_for(self, name: str) -> str:
        variable = to_camel_case(name) or "value"
        if variable in self.reserved_words or variable[0].isdigit():
            variable = f"{variable}Value" if not variable[0].isdigit() else f"value{variable}"
        return variable

    def method_name_for(self, action: ResourceAction) -> str:
        """
        Client method name for an action.

        An explicit ``displayName`` that is already an identifier wins.
        Otherwise a trailing static path segment of a non-GET action becomes
        the verb (``PUT /transfer/{id}/sign`` -> ``signTransfer``), and the
        HTTP method supplies it in every other case.
        """
        if action.display_name and _IDENTIFIER.match(action.display_name):
            return action.display_name[:1].lower() + action.display_name[1:]

        segments = [segment for segment in action.path.split("/") if segment]
        static = [segment for segment in segments if not segment.startswith("{")]
        verb = DEFAULT_VERBS[action.method.value]
        if (
            action.method.value != "GET"
            and len(segments) >= 2
            and not segments[-1].startswith("{")
        ):
            verb = to_camel_case(segments[-1])
            static = static[:-1]
        return verb + "".join(to_pascal_case(segment) for segment in static)


class JavascriptNameResolver(NameResolver):
    language = "javascript"
    reserved_words = frozenset(
        {
            "break", "case", "catch", "class", "const", "continue", "debugger",
            "default", "delete", "do", "else", "enum", "export", "extends",
            "false", "finally", "for", "function", "if", "import", "in",
            "instanceof", "let", "new", "null", "return", "static", "super",
            "switch", "this", "throw", "true", "try", "typeof", "var", "void",
            "while", "with", "yield", "data", "request",
        }
    )

    def file_name_for(self, subject: Union[TypeDefinition, str]) -> str:
        if isinstance(subject, TypeDefinition):
            return f"src/entity/{self.class_name_for(subject.name)}.js"
        return f"src/service/{self.client_class_name_for(subject)}.js"

    def package_name(self) -> str:
        if self.package:
            return self.package
        name = "-".join(word.lower() for word in split_words(self.api_name)) or "api"
        if self.vendor_prefix:
            return f"{self.vendor_prefix}-{name}-client"
        return f"{name}-client"


class PhpNameResolver(NameResolver):
    language = "php"
    reserved_words = frozenset({"this", "data", "request"})

    def file_name_for(self, subject: Union[TypeDefinition, str]) -> str:
        if isinstance(subject, TypeDefinition):
            return f"src/Entity/{self.class_name_for(subject.name)}.php"
        return f"src/Service/{self.client_class_name_for(subject)}.php"

    def namespace(self) -> str:
        parts = [to_pascal_case(self.vendor_prefix), f"{to_pascal_case(self.api_name) or 'Api'}Client"]
        return "\\".join(part for part in parts if part)

    def package_name(self) -> str:
        if self.package:
            return self.package
        vendor = "-".join(word.lower() for word in split_words(self.vendor_prefix)) or "vendor"
        name = "-".join(word.lower() for word in split_words(self.api_name)) or "api"
        return f"{vendor}/lib-{name}-client"
