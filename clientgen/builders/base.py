"""Builder contract and helpers shared by the type-shape strategies."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, List, Optional

from ..ir import PropertyDefinition, ReferenceKind, ScalarType, TypeDefinition, TypeReference
from ..type_tokens import ARRAY_TOKEN, is_scalar_token, parse_type_node, parse_type_token


class TypeDefinitionBuilder(ABC):
    """
    Strategy that recognizes one category of raw declaration.

    ``supports`` runs against every declaration until a builder accepts it, so
    it must stay cheap and free of side effects.
    """

    @abstractmethod
    def supports(self, name: str, declaration: Any) -> bool:
        ...

    @abstractmethod
    def build_type_definition(self, name: str, declaration: Any) -> Optional[TypeDefinition]:
        """Return a new definition, or ``None`` when the declaration is not emittable."""

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


def declared_type(declaration: Any) -> Optional[str]:
    """The ``type`` a declaration extends, if it names exactly one."""
    if isinstance(declaration, str):
        return declaration.strip()
    if not isinstance(declaration, dict):
        return None
    value = declaration.get("type")
    if isinstance(value, list) and len(value) == 1:
        value = value[0]
    if isinstance(value, str):
        return value.strip()
    return None


def parent_name(declaration: Any, *ignored: str) -> Optional[str]:
    """Name of the declared supertype when it is another user type."""
    token = declared_type(declaration)
    if not token or token in ignored or is_scalar_token(token):
        return None
    reference, _ = parse_type_token(token)
    if reference.kind != ReferenceKind.TYPE:
        return None
    return reference.name


def description_of(declaration: Any) -> Optional[str]:
    if isinstance(declaration, dict) and declaration.get("description") is not None:
        return str(declaration["description"]).strip()
    return None


def parse_properties(node: Any, required_by_default: bool = True) -> List[PropertyDefinition]:
    """
    Parse a RAML ``properties`` (or ``queryParameters``) mapping.

    A trailing ``?`` on the key or ``required: false`` makes the property
    nullable, as does a ``nil`` union in its type.
    """
    if not isinstance(node, dict):
        return []

    properties: List[PropertyDefinition] = []
    for raw_name, raw in node.items():
        name = str(raw_name)
        required = required_by_default
        if name.endswith("?"):
            name = name[:-1]
            required = False
        description = None
        if isinstance(raw, dict):
            required = bool(raw.get("required", required))
            if raw.get("description") is not None:
                description = str(raw["description"]).strip()

        reference, nil = parse_type_node(raw if raw is not None else "string")
        if reference is None:
            reference = TypeReference.scalar(ScalarType.ANY)

        properties.append(
            PropertyDefinition(
                name=name,
                raw_type=_raw_token(raw),
                reference=reference,
                nullable=nil or not required,
                description=description,
            )
        )
    return properties


def _raw_token(raw: Any) -> str:
    if raw is None:
        return "string"
    if isinstance(raw, str):
        return raw.strip()
    if isinstance(raw, dict):
        if "enum" in raw:
            return str(raw.get("type") or "string")
        token = declared_type(raw)
        if token == ARRAY_TOKEN or (token is None and "items" in raw):
            return f"{_raw_token(raw.get('items', 'any'))}[]"
        if token:
            return token
        return "object" if "properties" in raw else "string"
    return str(raw)
