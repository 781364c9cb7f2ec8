"""
Tests for the Lambda inventory module.
"""

from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError, EndpointConnectionError

from lambda_cleaner.core.exceptions import (
    DeleteError,
    InventoryFetchError,
    VersionFetchError,
)
from lambda_cleaner.core.inventory import (
    LATEST_VERSION,
    FunctionDescriptor,
    LambdaInventory,
    VersionRecord,
)


def _client_error(code, message="boom", operation="ListFunctions"):
    return ClientError({"Error": {"Code": code, "Message": message}}, operation)


def _stub_inventory(pages=None, error=None):
    """Inventory whose Lambda client returns canned paginator pages."""
    aws_client = MagicMock()
    aws_client.region = "us-east-1"
    lambda_client = MagicMock()
    aws_client.get_lambda_client.return_value = lambda_client

    paginator = MagicMock()
    if error is not None:
        paginator.paginate.side_effect = error
    else:
        paginator.paginate.return_value = iter(pages or [])
    lambda_client.get_paginator.return_value = paginator

    return LambdaInventory(aws_client), lambda_client, paginator


class TestVersionRecord:
    """Tests for VersionRecord dataclass."""

    def test_latest_is_sentinel(self):
        record = VersionRecord(version=LATEST_VERSION)
        assert record.is_latest is True
        assert record.number is None

    def test_numbered_version(self):
        record = VersionRecord(version="12")
        assert record.is_latest is False
        assert record.number == 12

    def test_unparseable_version(self):
        assert VersionRecord(version="beta").number is None

    def test_from_api(self):
        record = VersionRecord.from_api(
            {"Version": "3", "LastModified": "2024-01-15T10:30:00.000+0000"}
        )
        assert record == VersionRecord("3", "2024-01-15T10:30:00.000+0000")


class TestNameFilter:
    """Tests for the exact-or-substring name filter."""

    @pytest.mark.parametrize("name_filter", [None, ""])
    def test_empty_filter_matches_everything(self, name_filter):
        assert LambdaInventory.matches_filter("anything", name_filter)

    def test_exact_match(self):
        assert LambdaInventory.matches_filter("abc", "abc")

    def test_substring_match(self):
        assert LambdaInventory.matches_filter("xx-abc-yy", "abc")

    def test_case_sensitive(self):
        assert not LambdaInventory.matches_filter("ABC-service", "abc")


class TestListFunctionsStubbed:
    """Pagination and error handling against a stubbed client."""

    def test_concatenates_pages(self):
        pages = [
            {"Functions": [{"FunctionName": "a", "FunctionArn": "arn:a", "Runtime": "python3.12"}]},
            {"Functions": [{"FunctionName": "b", "FunctionArn": "arn:b"}]},
            {"Functions": []},
        ]
        inventory, lambda_client, paginator = _stub_inventory(pages)

        functions = inventory.list_functions()

        assert [f.name for f in functions] == ["a", "b"]
        assert functions[0].runtime == "python3.12"
        assert functions[1].runtime == ""
        lambda_client.get_paginator.assert_called_once_with("list_functions")
        paginator.paginate.assert_called_once_with(
            PaginationConfig={"PageSize": 50}
        )

    def test_filter_applies_across_pages(self):
        pages = [
            {"Functions": [{"FunctionName": "abc"}, {"FunctionName": "other"}]},
            {"Functions": [{"FunctionName": "my-abc-api"}]},
        ]
        inventory, _, _ = _stub_inventory(pages)

        assert [f.name for f in inventory.list_functions("abc")] == ["abc", "my-abc-api"]

    def test_client_error_becomes_inventory_fetch_error(self):
        inventory, _, _ = _stub_inventory(
            error=_client_error("AccessDeniedException", "not authorized")
        )

        with pytest.raises(InventoryFetchError) as exc_info:
            inventory.list_functions()

        assert "not authorized" in exc_info.value.message
        assert exc_info.value.details["error_code"] == "AccessDeniedException"

    def test_transport_error_becomes_inventory_fetch_error(self):
        inventory, _, _ = _stub_inventory(
            error=EndpointConnectionError(endpoint_url="https://lambda")
        )

        with pytest.raises(InventoryFetchError):
            inventory.list_functions()

    def test_iter_functions_is_lazy(self):
        inventory, lambda_client, _ = _stub_inventory([])
        inventory.iter_functions()
        lambda_client.get_paginator.assert_not_called()


class TestListVersionsStubbed:
    """Version listing against a stubbed client."""

    def test_concatenates_pages(self):
        pages = [
            {"Versions": [{"Version": "$LATEST"}, {"Version": "1"}]},
            {"Versions": [{"Version": "2"}]},
        ]
        inventory, _, paginator = _stub_inventory(pages)

        versions = inventory.list_versions("f1")

        assert [v.version for v in versions] == ["$LATEST", "1", "2"]
        paginator.paginate.assert_called_once_with(
            FunctionName="f1", PaginationConfig={"PageSize": 50}
        )

    def test_error_becomes_version_fetch_error(self):
        inventory, _, _ = _stub_inventory(
            error=_client_error("TooManyRequestsException", "Rate exceeded")
        )

        with pytest.raises(VersionFetchError) as exc_info:
            inventory.list_versions("f1")

        assert exc_info.value.function_name == "f1"
        assert "Rate exceeded" in exc_info.value.message


class TestDeleteVersionStubbed:
    """Delete calls against a stubbed client."""

    def test_delete_is_qualified(self):
        inventory, lambda_client, _ = _stub_inventory()

        inventory.delete_version("f1", "4")

        lambda_client.delete_function.assert_called_once_with(
            FunctionName="f1", Qualifier="4"
        )

    def test_refuses_latest(self):
        inventory, lambda_client, _ = _stub_inventory()

        with pytest.raises(DeleteError):
            inventory.delete_version("f1", LATEST_VERSION)

        lambda_client.delete_function.assert_not_called()

    def test_known_error_code_gets_friendly_message(self):
        inventory, lambda_client, _ = _stub_inventory()
        lambda_client.delete_function.side_effect = _client_error(
            "ResourceConflictException", "raw message", "DeleteFunction"
        )

        with pytest.raises(DeleteError) as exc_info:
            inventory.delete_version("f1", "2")

        assert exc_info.value.message == "Version is in use or being updated"
        assert exc_info.value.version == "2"

    def test_unknown_error_code_keeps_api_message(self):
        inventory, lambda_client, _ = _stub_inventory()
        lambda_client.delete_function.side_effect = _client_error(
            "ServiceException", "internal failure", "DeleteFunction"
        )

        with pytest.raises(DeleteError) as exc_info:
            inventory.delete_version("f1", "2")

        assert exc_info.value.message == "internal failure"


class TestLambdaInventoryMoto:
    """End-to-end inventory tests against moto."""

    def test_list_functions(self, aws_client, make_function):
        make_function("orders-api")
        make_function("billing-worker")

        inventory = LambdaInventory(aws_client)
        functions = inventory.list_functions()

        assert sorted(f.name for f in functions) == ["billing-worker", "orders-api"]
        assert all(isinstance(f, FunctionDescriptor) for f in functions)
        assert all(f.arn.startswith("arn:aws:lambda:") for f in functions)

    def test_list_functions_with_filter(self, aws_client, make_function):
        make_function("orders-api")
        make_function("billing-worker")

        inventory = LambdaInventory(aws_client)

        assert [f.name for f in inventory.list_functions("orders")] == ["orders-api"]

    def test_list_versions(self, aws_client, make_function):
        make_function("orders-api", versions=3)

        inventory = LambdaInventory(aws_client)
        versions = [v.version for v in inventory.list_versions("orders-api")]

        assert LATEST_VERSION in versions
        assert sorted(v for v in versions if v != LATEST_VERSION) == ["1", "2", "3"]

    def test_delete_version(self, aws_client, make_function):
        make_function("orders-api", versions=2)

        inventory = LambdaInventory(aws_client)
        inventory.delete_version("orders-api", "1")

        versions = [v.version for v in inventory.list_versions("orders-api")]
        assert "1" not in versions
        assert "2" in versions
