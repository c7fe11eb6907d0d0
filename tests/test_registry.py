"""Tests for the builder registry."""

import logging

import pytest

from clientgen.builders import (
    BuilderRegistry,
    EnumTypeDefinitionBuilder,
    FilterTypeDefinitionBuilder,
    ObjectTypeDefinitionBuilder,
    ResultTypeDefinitionBuilder,
    TraitDefinitionBuilder,
)
from clientgen.errors import BuilderRegistryError


class TestBuilderRegistry:
    """Test ordering, collisions and freezing."""

    def test_sorted_by_position_regardless_of_registration_order(self):
        registry = BuilderRegistry()
        obj, flt, enum = ObjectTypeDefinitionBuilder(), FilterTypeDefinitionBuilder(), EnumTypeDefinitionBuilder()
        registry.register(obj, 500)
        registry.register(flt, 100)
        registry.register(enum, 300)

        assert [entry.position for entry in registry.entries()] == [100, 300, 500]
        assert list(registry) == [flt, enum, obj]
        assert len(registry) == 3

    def test_string_positions(self):
        registry = BuilderRegistry()
        registry.register(ObjectTypeDefinitionBuilder(), "b-object")
        registry.register(FilterTypeDefinitionBuilder(), "a-filter")
        assert [entry.position for entry in registry.entries()] == ["a-filter", "b-object"]

    def test_collision_is_an_error(self):
        registry = BuilderRegistry()
        registry.register(ObjectTypeDefinitionBuilder(), 100)

        with pytest.raises(BuilderRegistryError) as exc_info:
            registry.register(EnumTypeDefinitionBuilder(), 100)

        assert exc_info.value.code == "CG002"
        assert exc_info.value.position == 100

    def test_replace_logs_and_keeps_last(self, caplog):
        registry = BuilderRegistry()
        replacement = EnumTypeDefinitionBuilder()
        registry.register(ObjectTypeDefinitionBuilder(), 100)

        with caplog.at_level(logging.WARNING, logger="clientgen"):
            registry.register(replacement, 100, replace=True)

        assert list(registry) == [replacement]
        assert "EnumTypeDefinitionBuilder() replaces ObjectTypeDefinitionBuilder()" in caplog.text

    def test_incomparable_position(self):
        registry = BuilderRegistry()
        registry.register(ObjectTypeDefinitionBuilder(), 100)
        with pytest.raises(BuilderRegistryError):
            registry.register(EnumTypeDefinitionBuilder(), "first")

    def test_frozen_registry_rejects_registration(self):
        registry = BuilderRegistry().freeze()
        assert registry.frozen
        with pytest.raises(BuilderRegistryError):
            registry.register(ObjectTypeDefinitionBuilder(), 1)

    def test_default_registry_order(self):
        registry = BuilderRegistry.default()
        assert [type(builder) for builder in registry] == [
            FilterTypeDefinitionBuilder,
            ResultTypeDefinitionBuilder,
            EnumTypeDefinitionBuilder,
            TraitDefinitionBuilder,
            ObjectTypeDefinitionBuilder,
        ]

    def test_first_match(self):
        registry = BuilderRegistry.default()
        assert isinstance(registry.first_match("StatusFilter", {"properties": {}}), FilterTypeDefinitionBuilder)
        assert isinstance(registry.first_match("Money", {"properties": {}}), ObjectTypeDefinitionBuilder)
        assert registry.first_match("Mystery", 42) is None
