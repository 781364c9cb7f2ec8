"""
Core Infrastructure Components
==============================

- :class:`AWSClient` - Manages the boto3 session and Lambda client
- :class:`LambdaInventory` - Lists functions and versions, deletes versions
- :class:`MinIntervalGate` - Paces successive delete calls
- Exception hierarchy for error handling

Exceptions
----------
LambdaCleanerError
    Base exception for all Lambda Cleaner errors.
InventoryFetchError
    The function list could not be fetched (fatal for the run).
VersionFetchError
    One function's versions could not be fetched (fatal for the function).
DeleteError
    One version could not be deleted (fatal for the version).
"""

from lambda_cleaner.core.aws_client import AWSClient
from lambda_cleaner.core.exceptions import (
    AWSClientError,
    CleanerError,
    CredentialsError,
    DeleteError,
    InventoryError,
    InventoryFetchError,
    LambdaCleanerError,
    RegionError,
    ServiceError,
    VersionFetchError,
)
from lambda_cleaner.core.inventory import (
    LATEST_VERSION,
    FunctionDescriptor,
    LambdaInventory,
    VersionRecord,
)
from lambda_cleaner.core.rate_limiter import MinIntervalGate

__all__ = [
    # Client
    "AWSClient",
    # Inventory
    "LambdaInventory",
    "FunctionDescriptor",
    "VersionRecord",
    "LATEST_VERSION",
    # Pacing
    "MinIntervalGate",
    # Exceptions - Base
    "LambdaCleanerError",
    # Exceptions - AWS Client
    "AWSClientError",
    "CredentialsError",
    "RegionError",
    "ServiceError",
    # Exceptions - Inventory
    "InventoryError",
    "InventoryFetchError",
    "VersionFetchError",
    # Exceptions - Cleaner
    "CleanerError",
    "DeleteError",
]
