"""Tests for name resolution."""

import pytest

from clientgen.ir import HttpMethod, PropertyDefinition, ResourceAction, ScalarType, TypeDefinition, TypeReference
from clientgen.naming import (
    JavascriptNameResolver,
    PhpNameResolver,
    split_words,
    to_camel_case,
    to_pascal_case,
)


class TestCasing:
    """Test word splitting and case conversion."""

    @pytest.mark.parametrize(
        "name, words",
        [
            ("created_at", ["created", "at"]),
            ("swift-code", ["swift", "code"]),
            ("Transfer Result", ["Transfer", "Result"]),
            ("transferID", ["transfer", "ID"]),
            ("URLPath", ["URL", "Path"]),
            ("address2", ["address2"]),
        ],
    )
    def test_split_words(self, name, words):
        assert split_words(name) == words

    def test_pascal_and_camel(self):
        assert to_pascal_case("created_at") == "CreatedAt"
        assert to_camel_case("created_at") == "createdAt"
        assert to_camel_case("URLPath") == "urlPath"
        assert to_camel_case("") == ""


class TestNameResolver:
    """Test the conventions shared by every language."""

    resolver = JavascriptNameResolver(vendor_prefix="acme", api_name="transfer")

    def test_class_names(self):
        assert self.resolver.class_name_for("transfer_event") == "TransferEvent"
        assert self.resolver.client_class_name_for("Transfer") == "TransferClient"

    def test_accessors(self):
        flag = PropertyDefinition("is_urgent", "boolean", TypeReference.scalar(ScalarType.BOOLEAN))
        amount = PropertyDefinition("amount", "Money", TypeReference.to_type("Money"))
        assert self.resolver.property_accessor_names_for(flag).getter == "isIsUrgent"
        accessors = self.resolver.property_accessor_names_for(amount)
        assert (accessors.getter, accessors.setter) == ("getAmount", "setAmount")

    def test_variable_names(self):
        assert self.resolver.variable_name_for("swift_code") == "swiftCode"
        assert self.resolver.variable_name_for("default") == "defaultValue"
        assert self.resolver.variable_name_for("data") == "dataValue"
        assert self.resolver.variable_name_for("3d") == "value3D"

    @pytest.mark.parametrize(
        "method, path, display_name, expected",
        [
            ("GET", "/transfers", None, "getTransfers"),
            ("POST", "/transfers", None, "createTransfers"),
            ("GET", "/transfers/{id}", None, "getTransfers"),
            ("DELETE", "/transfers/{id}", None, "deleteTransfers"),
            ("PATCH", "/transfers/{id}", None, "updateTransfers"),
            ("PUT", "/transfer/{id}/sign", None, "signTransfer"),
            ("POST", "/transfers/bulk-cancel", None, "bulkCancelTransfers"),
            ("GET", "/transfers/{id}/events", None, "getTransfersEvents"),
            ("GET", "/transfers", "ListTransfers", "listTransfers"),
            ("GET", "/transfers", "List transfers", "getTransfers"),
        ],
    )
    def test_method_names(self, method, path, display_name, expected):
        action = ResourceAction(
            client="Transfer", method=HttpMethod(method), path=path, display_name=display_name
        )
        assert self.resolver.method_name_for(action) == expected


class TestJavascriptResolver:
    """Test JavaScript file layout and package naming."""

    def test_file_names(self):
        resolver = JavascriptNameResolver("acme", "transfer")
        assert resolver.file_name_for(TypeDefinition(name="transfer_event")) == "src/entity/TransferEvent.js"
        assert resolver.file_name_for("Transfer") == "src/service/TransferClient.js"

    def test_package_name(self):
        assert JavascriptNameResolver("acme", "money transfer").package_name() == "acme-money-transfer-client"
        assert JavascriptNameResolver("", "transfer").package_name() == "transfer-client"
        assert JavascriptNameResolver("acme", "transfer", package="@acme/x").package_name() == "@acme/x"


class TestPhpResolver:
    """Test PHP file layout, namespaces and package naming."""

    def test_file_names(self):
        resolver = PhpNameResolver("acme", "transfer")
        assert resolver.file_name_for(TypeDefinition(name="Money")) == "src/Entity/Money.php"
        assert resolver.file_name_for("Transfer") == "src/Service/TransferClient.php"

    def test_namespace(self):
        assert PhpNameResolver("acme", "money-transfer").namespace() == "Acme\\MoneyTransferClient"
        assert PhpNameResolver("", "transfer").namespace() == "TransferClient"

    def test_package_name(self):
        assert PhpNameResolver("acme", "transfer").package_name() == "acme/lib-transfer-client"
        assert PhpNameResolver("", "").package_name() == "vendor/lib-api-client"
