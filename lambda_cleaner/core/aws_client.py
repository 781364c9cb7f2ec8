"""
AWS Client Module
=================

Provides a wrapper around boto3 for managing the AWS Lambda connection
with built-in retry configuration and lazy session creation.

Classes
-------
AWSClient
    Main client class for AWS operations.

Example
-------
>>> from lambda_cleaner.core.aws_client import AWSClient
>>>
>>> client = AWSClient(region="ap-northeast-2", profile="production")
>>> lambda_client = client.get_lambda_client()

Notes
-----
The boto3 session and service clients are created on first access and
cached for subsequent calls. Transient transport errors and throttling
are retried by botocore itself (adaptive mode); nothing above this layer
retries a failed call.

See Also
--------
boto3 : AWS SDK for Python
botocore : Low-level AWS client library
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import boto3
from botocore.config import Config
from botocore.exceptions import (
    NoCredentialsError,
    NoRegionError,
    ProfileNotFound,
)

from lambda_cleaner.core.exceptions import (
    AWSClientError,
    CredentialsError,
    RegionError,
    ServiceError,
)

# Module logger
logger = logging.getLogger(__name__)


class AWSClient:
    """
    AWS client wrapper with retry logic and lazy client creation.

    Parameters
    ----------
    region : str, default="ap-northeast-2"
        AWS region to connect to.
    profile : str, optional
        AWS profile name from ~/.aws/credentials.
    max_retries : int, default=3
        Maximum number of attempts botocore makes for a failed API call.
    timeout : int, default=30
        Request timeout in seconds.

    Raises
    ------
    CredentialsError
        If AWS credentials or the named profile are not found.
    RegionError
        If the specified region is invalid.
    ServiceError
        If unable to create a service client.
    """

    def __init__(
        self,
        region: str = "ap-northeast-2",
        profile: Optional[str] = None,
        max_retries: int = 3,
        timeout: int = 30,
    ) -> None:
        """Initialize AWS client with the specified configuration."""
        self.region = region
        self.profile = profile
        self.max_retries = max_retries
        self.timeout = timeout

        # Lazy-loaded components
        self._session: Optional[boto3.Session] = None
        self._clients: dict[str, Any] = {}

        self._config = self._create_config()

        logger.debug(
            "Initialized AWSClient",
            extra={"region": region, "profile": profile},
        )

    def _create_config(self) -> Config:
        """
        Create boto3 configuration with retry and timeout settings.

        Returns
        -------
        Config
            Boto3 configuration object.
        """
        return Config(
            retries={
                "max_attempts": self.max_retries,
                "mode": "adaptive",
            },
            connect_timeout=self.timeout,
            read_timeout=self.timeout,
        )

    @property
    def session(self) -> boto3.Session:
        """Get or create the boto3 session (lazy initialization)."""
        if self._session is None:
            self._session = self._create_session()
        return self._session

    def _create_session(self) -> boto3.Session:
        """
        Create a new boto3 session with the configured profile and region.

        Raises
        ------
        CredentialsError
            If the specified profile is not found.
        RegionError
            If the region is invalid or missing.
        AWSClientError
            For other session creation failures.
        """
        try:
            session_kwargs = {"region_name": self.region}
            if self.profile:
                session_kwargs["profile_name"] = self.profile

            session = boto3.Session(**session_kwargs)
            logger.debug(f"Created boto3 session for region {self.region}")
            return session

        except ProfileNotFound:
            raise CredentialsError(
                f"AWS profile '{self.profile}' not found",
                details={
                    "profile": self.profile,
                    "hint": "Check ~/.aws/credentials for available profiles",
                },
            )
        except NoRegionError:
            raise RegionError(
                f"Invalid or missing region: {self.region}",
                region=self.region,
                details={"hint": "Specify a valid AWS region like 'ap-northeast-2'"},
            )
        except Exception as e:
            logger.exception("Failed to create AWS session")
            raise AWSClientError(
                f"Failed to create AWS session: {e}",
                region=self.region,
            )

    def _get_client(self, service_name: str) -> Any:
        """
        Get or create a cached boto3 client for the specified service.

        Raises
        ------
        CredentialsError
            If credentials are not found.
        ServiceError
            If unable to create the client.
        """
        if service_name in self._clients:
            return self._clients[service_name]

        try:
            client = self.session.client(service_name, config=self._config)
            self._clients[service_name] = client
            logger.debug(f"Created {service_name} client for {self.region}")
            return client

        except NoCredentialsError:
            raise CredentialsError(
                "AWS credentials not found",
                details={
                    "hint": (
                        "Configure credentials using 'aws configure' or set "
                        "AWS_ACCESS_KEY_ID and AWS_SECRET_ACCESS_KEY environment variables"
                    ),
                },
            )
        except AWSClientError:
            raise
        except Exception as e:
            logger.exception(f"Failed to create {service_name} client")
            raise ServiceError(
                f"Failed to create {service_name} client: {e}",
                service=service_name,
                region=self.region,
            )

    def get_lambda_client(self) -> Any:
        """
        Get the Lambda client.

        Returns
        -------
        Lambda.Client
            Boto3 Lambda client.

        Example
        -------
        >>> lambda_client = client.get_lambda_client()
        >>> response = lambda_client.list_functions()
        """
        return self._get_client("lambda")

    # =========================================================================
    # Context Manager Support
    # =========================================================================

    def __enter__(self) -> AWSClient:
        """Enter context manager."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit context manager and cleanup resources."""
        self._clients.clear()
        self._session = None

    def __repr__(self) -> str:
        """Return string representation of the client."""
        return (
            f"AWSClient(region='{self.region}', "
            f"profile={self.profile!r}, "
            f"max_retries={self.max_retries})"
        )


__all__ = ["AWSClient", "AWSClientError"]
