"""Result types: collection wrappers around a list of entities."""

from __future__ import annotations

from typing import Any, Optional

from ..ir import TypeDefinition, TypeKind
from .base import TypeDefinitionBuilder, declared_type, description_of, parse_properties

RESULT_BASE_NAME = "Result"
DEFAULT_ITEMS_KEY = "items"


class ResultTypeDefinitionBuilder(TypeDefinitionBuilder):
    """
    Builds ``result`` definitions for declarations extending ``Result``.

    The first array property names the items key and the item type; it is
    removed from the member list since the common ``Result`` base exposes the
    items. Without an array property the declaration is not emittable.
    """

    def supports(self, name: str, declaration: Any) -> bool:
        return isinstance(declaration, dict) and declared_type(declaration) == RESULT_BASE_NAME

    def build_type_definition(self, name: str, declaration: Any) -> Optional[TypeDefinition]:
        properties = parse_properties(declaration.get("properties"))
        items = next((p for p in properties if p.reference.is_array), None)
        if items is None:
            return None

        return TypeDefinition(
            name=name,
            kind=TypeKind.RESULT,
            properties=[p for p in properties if p is not items],
            description=description_of(declaration),
            item_type=items.reference.items,
            items_key=items.name or DEFAULT_ITEMS_KEY,
        )
