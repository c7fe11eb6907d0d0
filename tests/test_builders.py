"""Tests for the type-shape builders and type expression parsing."""

import pytest

from clientgen.builders import (
    EnumTypeDefinitionBuilder,
    FilterTypeDefinitionBuilder,
    ObjectTypeDefinitionBuilder,
    ResultTypeDefinitionBuilder,
    TraitDefinitionBuilder,
    parse_properties,
)
from clientgen.ir import ReferenceKind, ScalarType, TypeKind, TypeReference
from clientgen.type_tokens import parse_type_node, parse_type_token


class TestTypeTokens:
    """Test parsing of RAML type expressions."""

    @pytest.mark.parametrize(
        "token, expected",
        [
            ("string", TypeReference.scalar(ScalarType.STRING)),
            ("date-only", TypeReference.scalar(ScalarType.DATE)),
            ("datetime-only", TypeReference.scalar(ScalarType.DATETIME)),
            ("object", TypeReference.scalar(ScalarType.ANY)),
            ("Money", TypeReference.to_type("Money")),
            ("Money[]", TypeReference.array_of(TypeReference.to_type("Money"))),
            ("string | integer", TypeReference.scalar(ScalarType.ANY)),
            ("array", TypeReference.array_of(TypeReference.scalar(ScalarType.ANY))),
        ],
    )
    def test_parse_token(self, token, expected):
        reference, _ = parse_type_token(token)
        assert reference == expected

    def test_nil_union_is_nullable(self):
        reference, nullable = parse_type_token("Money | nil")
        assert reference == TypeReference.to_type("Money")
        assert nullable is True

    def test_nullable_elements_do_not_make_array_nullable(self):
        reference, nullable = parse_type_token("(Money | nil)[]")
        assert reference.is_array
        assert nullable is False

    def test_inline_nodes(self):
        assert parse_type_node({"enum": ["a"]})[0] == TypeReference.scalar(ScalarType.STRING)
        assert parse_type_node({"type": "array", "items": "Money"})[0] == TypeReference.array_of(
            TypeReference.to_type("Money")
        )
        assert parse_type_node({"properties": {"a": "string"}})[0] == TypeReference.scalar(ScalarType.ANY)
        assert parse_type_node(None) == (None, False)


class TestParseProperties:
    """Test property parsing shared by the builders."""

    def test_optional_markers(self):
        properties = parse_properties(
            {
                "id": "integer",
                "note?": "string",
                "tag": {"type": "string", "required": False, "description": "Free text "},
                "parent": "Transfer | nil",
            }
        )
        assert [p.name for p in properties] == ["id", "note", "tag", "parent"]
        assert [p.nullable for p in properties] == [False, True, True, True]
        assert properties[2].description == "Free text"

    def test_raw_types_preserved(self):
        properties = parse_properties({"items": {"type": "array", "items": "Money"}, "meta": None})
        assert properties[0].raw_type == "Money[]"
        assert properties[1].raw_type == "string"
        assert properties[1].reference == TypeReference.scalar(ScalarType.STRING)

    def test_non_mapping_yields_nothing(self):
        assert parse_properties(["a", "b"]) == []

    def test_untyped_array(self):
        """A bare array keyword is a list of untyped values, not a type name."""
        (tags,) = parse_properties({"tags": "array"})
        assert tags.reference == TypeReference.array_of(TypeReference.scalar(ScalarType.ANY))
        assert list(tags.reference.referenced_type_names()) == []


class TestFilterBuilder:
    """Test filter recognition and building."""

    builder = FilterTypeDefinitionBuilder()

    def test_supports(self):
        assert self.builder.supports("Filter", {"properties": {}})
        assert self.builder.supports("Anything", {"type": "Filter"})
        assert self.builder.supports("StatusFilter", {"queryParameters": {"status": "string"}})
        assert not self.builder.supports("Transfer", {"properties": {}})
        assert not self.builder.supports("EmptyFilter", {"usage": "nothing"})

    def test_base_filter(self):
        definition = self.builder.build_type_definition("Filter", {"properties": {"limit?": "integer"}})
        assert definition.kind == TypeKind.FILTER
        assert definition.is_base_filter
        assert not definition.extends_base_filter

    def test_filter_extending_base(self):
        definition = self.builder.build_type_definition(
            "TransfersFilter",
            {"type": "Filter", "properties": {"status": "string"}, "queryParameters": {"page": "integer"}},
        )
        assert definition.parent is None
        assert not definition.is_base_filter
        assert [p.name for p in definition.properties] == ["status", "page"]
        assert definition.get_property("page").nullable

    def test_filter_with_local_parent(self):
        definition = self.builder.build_type_definition(
            "ArchivedFilter", {"type": "TransfersFilter", "properties": {}}
        )
        assert definition.parent == "TransfersFilter"


class TestResultBuilder:
    """Test result (collection wrapper) building."""

    builder = ResultTypeDefinitionBuilder()

    def test_supports_only_result_subtypes(self):
        assert self.builder.supports("TransferResult", {"type": "Result", "properties": {}})
        assert not self.builder.supports("TransferResult", {"properties": {}})
        assert not self.builder.supports("TransferResult", "Result")

    def test_items_extracted(self):
        definition = self.builder.build_type_definition(
            "TransferResult",
            {"type": "Result", "properties": {"total": "integer", "transfers": "Transfer[]"}},
        )
        assert definition.kind == TypeKind.RESULT
        assert definition.items_key == "transfers"
        assert definition.item_type == TypeReference.to_type("Transfer")
        assert [p.name for p in definition.properties] == ["total"]

    def test_nested_array_items(self):
        definition = self.builder.build_type_definition(
            "LedgerResult", {"type": "Result", "properties": {"pages": "Money[][]"}}
        )
        assert definition.item_type == TypeReference.array_of(TypeReference.to_type("Money"))

    def test_without_array_property(self):
        assert self.builder.build_type_definition("Empty", {"type": "Result", "properties": {"a": "string"}}) is None


class TestEnumBuilder:
    """Test enumeration building."""

    builder = EnumTypeDefinitionBuilder()

    def test_supports(self):
        assert self.builder.supports("Status", {"enum": ["new", "done"]})
        assert self.builder.supports("Code", {"type": "integer", "enum": [1, 2]})
        assert not self.builder.supports("Flag", {"type": "boolean", "enum": [True]})
        assert not self.builder.supports("Status", {"enum": "new"})

    def test_values_kept_in_order_as_strings(self):
        definition = self.builder.build_type_definition("Code", {"enum": [3, 1, 2], "description": "Codes"})
        assert definition.kind == TypeKind.ENUM
        assert definition.enum_values == ["3", "1", "2"]
        assert definition.description == "Codes"


class TestTraitBuilder:
    """Test that trait-shaped declarations are consumed without output."""

    builder = TraitDefinitionBuilder()

    def test_supports(self):
        assert self.builder.supports("paged", {"queryParameters": {"page": "integer"}})
        assert not self.builder.supports("Money", {"properties": {}, "headers": {}})
        assert not self.builder.supports("alias", "string")

    def test_builds_nothing(self):
        assert self.builder.build_type_definition("paged", {"queryParameters": {}}) is None


class TestObjectBuilder:
    """Test plain object building."""

    builder = ObjectTypeDefinitionBuilder()

    def test_supports(self):
        assert self.builder.supports("Money", {"properties": {"amount": "number"}})
        assert self.builder.supports("Blob", {"type": "object"})
        assert self.builder.supports("Alias", "Transfer")
        assert not self.builder.supports("Name", "string")
        assert not self.builder.supports("Mystery", 42)
        assert not self.builder.supports("Tags", "array")

    def test_parent(self):
        definition = self.builder.build_type_definition(
            "InternationalTransfer", {"type": "Transfer", "properties": {"swift_code": "string"}}
        )
        assert definition.kind == TypeKind.OBJECT
        assert definition.parent == "Transfer"
        assert definition.properties[0].reference.kind == ReferenceKind.SCALAR

    def test_object_base_is_not_a_parent(self):
        assert self.builder.build_type_definition("Blob", {"type": "object"}).parent is None
