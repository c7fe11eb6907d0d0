"""Filter types: query-style shapes that share one runtime base filter."""

from __future__ import annotations

from typing import Any, Optional

from ..ir import TypeDefinition, TypeKind
from .base import (
    TypeDefinitionBuilder,
    declared_type,
    description_of,
    parent_name,
    parse_properties,
)

BASE_FILTER_NAME = "Filter"


class FilterTypeDefinitionBuilder(TypeDefinitionBuilder):
    """
    Builds filter definitions from types or traits.

    The declaration named ``Filter`` is the shared base filter; generated
    clients import it from the common runtime library instead of emitting it.
    """

    def supports(self, name: str, declaration: Any) -> bool:
        if name == BASE_FILTER_NAME or declared_type(declaration) == BASE_FILTER_NAME:
            return True
        return (
            name.endswith(BASE_FILTER_NAME)
            and isinstance(declaration, dict)
            and ("properties" in declaration or "queryParameters" in declaration)
        )

    def build_type_definition(self, name: str, declaration: Any) -> Optional[TypeDefinition]:
        properties = []
        if isinstance(declaration, dict):
            properties = parse_properties(declaration.get("properties"))
            properties.extend(
                parse_properties(declaration.get("queryParameters"), required_by_default=False)
            )

        return TypeDefinition(
            name=name,
            kind=TypeKind.FILTER,
            properties=properties,
            parent=parent_name(declaration, BASE_FILTER_NAME),
            description=description_of(declaration),
            is_base_filter=name == BASE_FILTER_NAME,
        )
