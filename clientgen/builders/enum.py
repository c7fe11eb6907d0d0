from __future__ import annotations

from typing import Any, Optional

from ..ir import TypeDefinition, TypeKind
from .base import TypeDefinitionBuilder, declared_type, description_of

_ENUM_BASES = {None, "string", "integer", "number"}


class EnumTypeDefinitionBuilder(TypeDefinitionBuilder):
    """Builds enumerations from scalar declarations with an ``enum`` list."""

    def supports(self, name: str, declaration: Any) -> bool:
        return (
            isinstance(declaration, dict)
            and isinstance(declaration.get("enum"), list)
            and declared_type(declaration) in _ENUM_BASES
        )

    def build_type_definition(self, name: str, declaration: Any) -> Optional[TypeDefinition]:
        return TypeDefinition(
            name=name,
            kind=TypeKind.ENUM,
            description=description_of(declaration),
            enum_values=[str(value) for value in declaration["enum"]],
        )
