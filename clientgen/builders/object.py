"""Plain object types, optionally extending another declared type."""

from __future__ import annotations

from typing import Any, Optional

from ..ir import TypeDefinition, TypeKind
from ..type_tokens import is_scalar_token
from .base import (
    TypeDefinitionBuilder,
    declared_type,
    description_of,
    parent_name,
    parse_properties,
)


class ObjectTypeDefinitionBuilder(TypeDefinitionBuilder):
    def supports(self, name: str, declaration: Any) -> bool:
        if isinstance(declaration, dict) and "properties" in declaration:
            return True
        token = declared_type(declaration)
        if token is None:
            return False
        if token == "object":
            return True
        return parent_name(declaration) is not None and not is_scalar_token(token)

    def build_type_definition(self, name: str, declaration: Any) -> Optional[TypeDefinition]:
        properties = []
        if isinstance(declaration, dict):
            properties = parse_properties(declaration.get("properties"))

        return TypeDefinition(
            name=name,
            kind=TypeKind.OBJECT,
            properties=properties,
            parent=parent_name(declaration, "object"),
            description=description_of(declaration),
        )
