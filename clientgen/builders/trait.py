from __future__ import annotations

from typing import Any, Optional

from ..ir import TypeDefinition
from .base import TypeDefinitionBuilder

TRAIT_KEYS = frozenset({"queryParameters", "queryString", "headers", "responses", "body", "is", "usage"})


class TraitDefinitionBuilder(TypeDefinitionBuilder):
    """Consumes trait-shaped declarations; they only contribute to actions."""

    def supports(self, name: str, declaration: Any) -> bool:
        return (
            isinstance(declaration, dict)
            and "properties" not in declaration
            and any(key in TRAIT_KEYS for key in declaration)
        )

    def build_type_definition(self, name: str, declaration: Any) -> Optional[TypeDefinition]:
        return None
