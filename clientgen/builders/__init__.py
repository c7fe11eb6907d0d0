"""Type-shape builders and their registry."""

from .base import TypeDefinitionBuilder, parse_properties
from .enum import EnumTypeDefinitionBuilder
from .filter import BASE_FILTER_NAME, FilterTypeDefinitionBuilder
from .object import ObjectTypeDefinitionBuilder
from .registry import BuilderRegistry, RegistryEntry
from .result import ResultTypeDefinitionBuilder
from .trait import TraitDefinitionBuilder

__all__ = [
    "TypeDefinitionBuilder",
    "parse_properties",
    "BuilderRegistry",
    "RegistryEntry",
    "BASE_FILTER_NAME",
    "FilterTypeDefinitionBuilder",
    "ResultTypeDefinitionBuilder",
    "EnumTypeDefinitionBuilder",
    "TraitDefinitionBuilder",
    "ObjectTypeDefinitionBuilder",
]
