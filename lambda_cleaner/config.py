"""
Run configuration for the cleaner.

The CLI builds one ``CleanupConfig`` and hands it to the engine. Region
precedence is explicit value, then the ``AWS_REGION`` environment
variable, then ``DEFAULT_REGION``.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from lambda_cleaner.core.rate_limiter import DEFAULT_INTERVAL

DEFAULT_REGION = "ap-northeast-2"
REGION_ENV_VAR = "AWS_REGION"


def resolve_region(
    explicit: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> str:
    """
    Resolve the AWS region to use.

    Args:
        explicit: Region given on the command line or in code
        environ: Environment mapping, defaults to ``os.environ``

    Returns:
        The first non-empty value of explicit, ``AWS_REGION`` and the
        default region.
    """
    if explicit:
        return explicit
    env = os.environ if environ is None else environ
    return env.get(REGION_ENV_VAR) or DEFAULT_REGION


@dataclass
class CleanupConfig:
    """
    Options for one cleanup run.

    Attributes:
        dry_run: Report what would be deleted without deleting
        function_name: Exact name or substring filter, None for all
        force: Skip every confirmation prompt
        region: AWS region, resolved with ``resolve_region`` when None
        profile: Optional named AWS profile passed through to boto3
        delete_interval: Minimum seconds between successive deletes
    """

    dry_run: bool = False
    function_name: Optional[str] = None
    force: bool = False
    region: Optional[str] = None
    profile: Optional[str] = None
    delete_interval: float = DEFAULT_INTERVAL

    def __post_init__(self) -> None:
        self.region = resolve_region(self.region)
        if not self.function_name:
            self.function_name = None

    @property
    def requires_confirmation(self) -> bool:
        """True when destructive actions must be confirmed interactively."""
        return not (self.dry_run or self.force)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "dry_run": self.dry_run,
            "function_name": self.function_name,
            "force": self.force,
            "region": self.region,
            "profile": self.profile,
            "delete_interval": self.delete_interval,
        }
