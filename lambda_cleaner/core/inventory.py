"""
Lambda Inventory Module
=======================

Read side of the Lambda API: enumerates functions and the published
versions of each function, hiding pagination. Also issues the single
destructive call the cleaner needs, a delete qualified by version.

No retention logic lives here.

Classes
-------
FunctionDescriptor
    Snapshot of one Lambda function.
VersionRecord
    One version of a function, numbered or ``$LATEST``.
LambdaInventory
    Wrapper around the boto3 Lambda client.

Example
-------
>>> from lambda_cleaner.core import AWSClient, LambdaInventory
>>>
>>> inventory = LambdaInventory(AWSClient(region="ap-northeast-2"))
>>> for function in inventory.list_functions("orders"):
...     versions = inventory.list_versions(function.name)
...     print(function.name, [v.version for v in versions])

Notes
-----
Both listing calls walk boto3 paginators. ``ListVersionsByFunction``
returns at most 50 versions per page, so a single call would silently
truncate long histories.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional

from botocore.exceptions import BotoCoreError, ClientError

from lambda_cleaner.core.exceptions import (
    DeleteError,
    InventoryFetchError,
    VersionFetchError,
)

# Module logger
logger = logging.getLogger(__name__)

LATEST_VERSION = "$LATEST"
PAGE_SIZE = 50


def _error_message(error: Exception) -> str:
    """Extract the human-readable message from a boto3 error."""
    if isinstance(error, ClientError):
        return error.response.get("Error", {}).get("Message", str(error))
    return str(error)


def _error_code(error: Exception) -> str:
    if isinstance(error, ClientError):
        return error.response.get("Error", {}).get("Code", "Unknown")
    return error.__class__.__name__


@dataclass(frozen=True)
class FunctionDescriptor:
    """
    Immutable snapshot of a Lambda function.

    Attributes:
        name: Function name (unique per region)
        arn: Function ARN
        runtime: Runtime identifier, empty for container image functions
        last_modified: ISO-8601 timestamp reported by Lambda
    """

    name: str
    arn: str
    runtime: str = ""
    last_modified: str = ""

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> FunctionDescriptor:
        """Build a descriptor from a ``ListFunctions`` entry."""
        return cls(
            name=data["FunctionName"],
            arn=data.get("FunctionArn", ""),
            runtime=data.get("Runtime", ""),
            last_modified=data.get("LastModified", ""),
        )


@dataclass(frozen=True)
class VersionRecord:
    """
    One version of a Lambda function.

    Attributes:
        version: Decimal version string, or ``$LATEST``
        last_modified: ISO-8601 timestamp reported by Lambda
    """

    version: str
    last_modified: str = ""

    @property
    def is_latest(self) -> bool:
        """True for the mutable ``$LATEST`` pointer."""
        return self.version == LATEST_VERSION

    @property
    def number(self) -> Optional[int]:
        """Integer value of a numbered version, None if not a decimal string."""
        if self.is_latest or not self.version.isdecimal():
            return None
        return int(self.version)

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> VersionRecord:
        """Build a record from a ``ListVersionsByFunction`` entry."""
        return cls(
            version=data["Version"],
            last_modified=data.get("LastModified", ""),
        )


class LambdaInventory:
    """
    Enumerates Lambda functions and their versions.

    Parameters
    ----------
    aws_client : AWSClient
        Instance of AWSClient for AWS API access.
    page_size : int, default=50
        Page size requested from the Lambda list APIs.

    Raises
    ------
    InventoryFetchError
        From ``list_functions`` when the function list cannot be read.
    VersionFetchError
        From ``list_versions`` when one function's versions cannot be read.
    DeleteError
        From ``delete_version`` when a version cannot be deleted.
    """

    # Common error codes and user-friendly messages
    DELETE_ERROR_MESSAGES = {
        "ResourceNotFoundException": "Version no longer exists",
        "ResourceConflictException": "Version is in use or being updated",
        "TooManyRequestsException": "Request rate limit exceeded",
        "AccessDeniedException": "Insufficient permissions to delete version",
        "AccessDenied": "Insufficient permissions to delete version",
    }

    def __init__(self, aws_client, page_size: int = PAGE_SIZE) -> None:
        self.aws_client = aws_client
        self.region = aws_client.region
        self.page_size = page_size
        self._lambda_client = None

    @property
    def lambda_client(self):
        """Lazy load Lambda client."""
        if self._lambda_client is None:
            self._lambda_client = self.aws_client.get_lambda_client()
        return self._lambda_client

    @staticmethod
    def matches_filter(name: str, name_filter: Optional[str]) -> bool:
        """
        Check a function name against the name filter.

        An empty filter matches everything. Otherwise the name must equal
        the filter or contain it (case-sensitive).
        """
        if not name_filter:
            return True
        return name == name_filter or name_filter in name

    def iter_functions(
        self,
        name_filter: Optional[str] = None,
    ) -> Iterator[FunctionDescriptor]:
        """
        Lazily yield functions one page at a time.

        Parameters
        ----------
        name_filter : str, optional
            Exact name or substring to keep.

        Yields
        ------
        FunctionDescriptor
            Each matching function.

        Raises
        ------
        InventoryFetchError
            If any page cannot be fetched.
        """
        paginator = self.lambda_client.get_paginator("list_functions")

        logger.debug(f"Fetching Lambda functions in {self.region}")

        try:
            for page in paginator.paginate(
                PaginationConfig={"PageSize": self.page_size}
            ):
                for data in page.get("Functions", []):
                    function = FunctionDescriptor.from_api(data)
                    if self.matches_filter(function.name, name_filter):
                        yield function
        except (ClientError, BotoCoreError) as e:
            logger.debug(f"Failed to list Lambda functions: {e}")
            raise InventoryFetchError(
                f"Failed to list Lambda functions: {_error_message(e)}",
                region=self.region,
                details={"error_code": _error_code(e)},
            ) from e

    def list_functions(
        self,
        name_filter: Optional[str] = None,
    ) -> List[FunctionDescriptor]:
        """
        Fetch all functions, following continuation markers.

        Parameters
        ----------
        name_filter : str, optional
            Exact name or substring to keep. Empty returns everything.

        Returns
        -------
        list of FunctionDescriptor
            Matching functions in the order Lambda returned them.

        Example
        -------
        >>> names = [f.name for f in inventory.list_functions("api")]
        """
        functions = list(self.iter_functions(name_filter))
        logger.debug(
            f"Found {len(functions)} Lambda functions in {self.region}"
            + (f" matching '{name_filter}'" if name_filter else "")
        )
        return functions

    def list_versions(self, function_name: str) -> List[VersionRecord]:
        """
        Fetch every version of one function, ``$LATEST`` included.

        Parameters
        ----------
        function_name : str
            Name of the Lambda function.

        Returns
        -------
        list of VersionRecord
            Versions in the order Lambda returned them.

        Raises
        ------
        VersionFetchError
            If the versions cannot be fetched.
        """
        paginator = self.lambda_client.get_paginator("list_versions_by_function")
        versions: List[VersionRecord] = []

        try:
            for page in paginator.paginate(
                FunctionName=function_name,
                PaginationConfig={"PageSize": self.page_size},
            ):
                versions.extend(
                    VersionRecord.from_api(v) for v in page.get("Versions", [])
                )
        except (ClientError, BotoCoreError) as e:
            logger.debug(f"Failed to list versions of {function_name}: {e}")
            raise VersionFetchError(
                f"Failed to list versions of {function_name}: {_error_message(e)}",
                function_name=function_name,
                region=self.region,
                details={"error_code": _error_code(e)},
            ) from e

        logger.debug(f"Found {len(versions)} versions of {function_name}")
        return versions

    def delete_version(self, function_name: str, version: str) -> None:
        """
        Delete one published version of a function.

        Parameters
        ----------
        function_name : str
            Name of the Lambda function.
        version : str
            Version qualifier to delete. ``$LATEST`` is refused.

        Raises
        ------
        DeleteError
            If the version is ``$LATEST`` or the API call fails.
        """
        if version == LATEST_VERSION:
            raise DeleteError(
                f"Refusing to delete {LATEST_VERSION}",
                function_name=function_name,
                version=version,
            )

        try:
            self.lambda_client.delete_function(
                FunctionName=function_name,
                Qualifier=version,
            )
        except (ClientError, BotoCoreError) as e:
            code = _error_code(e)
            message = self.DELETE_ERROR_MESSAGES.get(code, _error_message(e))
            raise DeleteError(
                message,
                function_name=function_name,
                version=version,
                details={"error_code": code},
            ) from e

        logger.debug(f"Deleted {function_name}:{version}")

    def __repr__(self) -> str:
        return f"LambdaInventory(region='{self.region}')"
