"""
Custom Exceptions for Lambda Cleaner
====================================

This module defines a hierarchy of custom exceptions used throughout
the application for consistent error handling and reporting.

Exception Hierarchy
-------------------
::

    LambdaCleanerError (base)
    ├── AWSClientError
    │   ├── CredentialsError
    │   ├── RegionError
    │   └── ServiceError
    ├── InventoryError
    │   ├── InventoryFetchError
    │   └── VersionFetchError
    └── CleanerError
        └── DeleteError

Propagation
-----------
- ``InventoryFetchError`` is fatal for the whole run.
- ``VersionFetchError`` is fatal for a single function only.
- ``DeleteError`` is fatal for a single version only.

Example
-------
>>> from lambda_cleaner.core.exceptions import InventoryFetchError
>>>
>>> try:
...     inventory.list_functions()
... except InventoryFetchError as e:
...     print(f"Cannot list functions: {e.message}")
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class LambdaCleanerError(Exception):
    """
    Base exception for all Lambda Cleaner errors.

    Parameters
    ----------
    message : str
        Human-readable error message.
    details : dict, optional
        Additional context about the error.

    Attributes
    ----------
    message : str
        The error message.
    details : dict
        Additional error details.

    Example
    -------
    >>> raise LambdaCleanerError("Something went wrong", details={"code": 500})
    """

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} (Details: {self.details})"
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert exception to dictionary for serialization.

        Returns
        -------
        dict
            Dictionary representation of the error.
        """
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }


# =============================================================================
# AWS Client Exceptions
# =============================================================================


class AWSClientError(LambdaCleanerError):
    """
    Base exception for AWS client-related errors.

    Raised when there's an issue with AWS connectivity, authentication,
    or service access.

    Parameters
    ----------
    message : str
        Human-readable error message.
    service : str, optional
        The AWS service that caused the error.
    region : str, optional
        The AWS region where the error occurred.
    details : dict, optional
        Additional context about the error.
    """

    def __init__(
        self,
        message: str,
        service: Optional[str] = None,
        region: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.service = service
        self.region = region
        full_details = details or {}
        if service:
            full_details["service"] = service
        if region:
            full_details["region"] = region
        super().__init__(message, full_details)


class CredentialsError(AWSClientError):
    """
    Raised when AWS credentials are invalid, missing, or expired.

    Example
    -------
    >>> raise CredentialsError(
    ...     "AWS credentials not found",
    ...     details={"hint": "Run 'aws configure' to set up credentials"}
    ... )
    """

    pass


class RegionError(AWSClientError):
    """Raised when there's an issue with the specified AWS region."""

    pass


class ServiceError(AWSClientError):
    """Raised when a boto3 service client cannot be created."""

    pass


# =============================================================================
# Inventory Exceptions
# =============================================================================


class InventoryError(LambdaCleanerError):
    """
    Base exception for Lambda inventory errors.

    Parameters
    ----------
    message : str
        Human-readable error message.
    function_name : str, optional
        The Lambda function involved, if any.
    region : str, optional
        The AWS region being read.
    details : dict, optional
        Additional context about the error.
    """

    def __init__(
        self,
        message: str,
        function_name: Optional[str] = None,
        region: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.function_name = function_name
        self.region = region
        full_details = details or {}
        if function_name:
            full_details["function_name"] = function_name
        if region:
            full_details["region"] = region
        super().__init__(message, full_details)


class InventoryFetchError(InventoryError):
    """
    Raised when the list of Lambda functions cannot be fetched.

    Nothing else can happen without the function list, so this error
    aborts the whole cleanup run.

    Example
    -------
    >>> raise InventoryFetchError(
    ...     "Failed to list Lambda functions: AccessDenied",
    ...     region="ap-northeast-2"
    ... )
    """

    pass


class VersionFetchError(InventoryError):
    """
    Raised when the versions of one function cannot be fetched.

    Example
    -------
    >>> raise VersionFetchError(
    ...     "Failed to list versions of my-func: Throttling",
    ...     function_name="my-func"
    ... )
    """

    pass


# =============================================================================
# Cleaner Exceptions
# =============================================================================


class CleanerError(LambdaCleanerError):
    """
    Base exception for cleaner-related errors.

    Parameters
    ----------
    message : str
        Human-readable error message.
    function_name : str, optional
        The Lambda function being cleaned.
    version : str, optional
        The version qualifier being deleted.
    details : dict, optional
        Additional context about the error.
    """

    def __init__(
        self,
        message: str,
        function_name: Optional[str] = None,
        version: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.function_name = function_name
        self.version = version
        full_details = details or {}
        if function_name:
            full_details["function_name"] = function_name
        if version:
            full_details["version"] = version
        super().__init__(message, full_details)


class DeleteError(CleanerError):
    """
    Raised when unable to delete a single function version.

    Example
    -------
    >>> raise DeleteError(
    ...     "Version is referenced by an alias",
    ...     function_name="my-func",
    ...     version="3"
    ... )
    """

    pass
