"""
Cleaner for deleting old Lambda function versions.

Keeps the highest numbered version of every function (and ``$LATEST``)
and deletes the rest, one function at a time, oldest version first.
Provides dry-run mode, confirmation gating, per-function error isolation
and paced delete calls.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from ..config import CleanupConfig
from ..core.exceptions import DeleteError, LambdaCleanerError
from ..core.inventory import FunctionDescriptor, LambdaInventory, VersionRecord
from ..core.rate_limiter import MinIntervalGate
from ..reporters.cli_reporter import CLIReporter

logger = logging.getLogger(__name__)

CONFIRM_MESSAGE = (
    "This permanently deletes old versions of Lambda functions. Continue?"
)
CONTINUE_MESSAGE = (
    "An error occurred while cleaning {name}. Continue with the next function?"
)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _error_message(error: Exception) -> str:
    if isinstance(error, LambdaCleanerError):
        return error.message
    return str(error)


class DeleteStatus(Enum):
    """Status of a single version delete."""

    SUCCESS = "success"
    FAILED = "failed"
    DRY_RUN = "dry_run"


@dataclass
class DeleteResult:
    """
    Result of a single version deletion attempt.

    Attributes:
        version: Version qualifier
        status: Result status
        error_message: Error message if failed
        timestamp: When the operation was attempted
    """

    version: str
    status: DeleteStatus
    error_message: Optional[str] = None
    timestamp: datetime = field(default_factory=_utcnow)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "version": self.version,
            "status": self.status.value,
            "error_message": self.error_message,
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass(frozen=True)
class RetentionDecision:
    """
    Which versions of one function to keep and which to delete.

    Attributes:
        to_keep: Highest numbered version, None when there is none
        to_delete: Every other numbered version, ascending
        skipped: Versions whose identifier is not a decimal number; they
            are neither deleted nor counted as preserved
    """

    to_keep: Optional[VersionRecord]
    to_delete: Tuple[VersionRecord, ...] = ()
    skipped: Tuple[VersionRecord, ...] = ()

    @property
    def numbered_count(self) -> int:
        return len(self.to_delete) + (1 if self.to_keep else 0)


def decide_retention(versions: Iterable[VersionRecord]) -> RetentionDecision:
    """
    Apply the retention policy to one function's versions.

    ``$LATEST`` is ignored. Numbered versions are ordered by integer value,
    never by modification time; the highest is kept and the others become
    deletion candidates, oldest first.

    Args:
        versions: Every version of a single function

    Returns:
        RetentionDecision for that function
    """
    numbered: List[VersionRecord] = []
    skipped: List[VersionRecord] = []

    for record in versions:
        if record.is_latest:
            continue
        if record.number is None:
            skipped.append(record)
            continue
        numbered.append(record)

    if not numbered:
        return RetentionDecision(to_keep=None, skipped=tuple(skipped))

    numbered.sort(key=lambda record: record.number)
    return RetentionDecision(
        to_keep=numbered[-1],
        to_delete=tuple(numbered[:-1]),
        skipped=tuple(skipped),
    )


@dataclass
class FunctionResult:
    """
    Outcome of cleaning one function.

    Attributes:
        function_name: Lambda function name
        kept_version: Version that was preserved, if any
        saved: Number of numbered versions preserved (0 or 1)
        deletions: Per-version delete results, ascending
        skipped_versions: Unparseable versions left untouched
        error: Message of the error that aborted this function, if any
    """

    function_name: str
    kept_version: Optional[str] = None
    saved: int = 0
    deletions: List[DeleteResult] = field(default_factory=list)
    skipped_versions: List[str] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def candidates(self) -> int:
        return len(self.deletions)

    @property
    def deleted(self) -> int:
        return sum(1 for d in self.deletions if d.status == DeleteStatus.SUCCESS)

    @property
    def failed(self) -> int:
        return sum(1 for d in self.deletions if d.status == DeleteStatus.FAILED)

    @property
    def would_delete(self) -> int:
        return sum(1 for d in self.deletions if d.status == DeleteStatus.DRY_RUN)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "function_name": self.function_name,
            "kept_version": self.kept_version,
            "saved": self.saved,
            "deleted": self.deleted,
            "failed": self.failed,
            "would_delete": self.would_delete,
            "skipped_versions": list(self.skipped_versions),
            "error": self.error,
            "deletions": [d.to_dict() for d in self.deletions],
        }


@dataclass
class RunSummary:
    """
    Totals for a whole cleanup run.

    Attributes:
        functions_total: Functions matched by the filter
        functions_processed: Functions attempted, errored ones included
        versions_deleted: Versions actually deleted
        versions_preserved: Versions kept (one per function with versions)
        errors: Functions whose cleanup raised an error
        would_delete: Candidates reported in dry-run mode
        delete_failures: Individual delete calls that failed
        dry_run: Whether the run was a dry run
        cancelled: The pre-run confirmation was declined
        halted: The operator stopped the run after an error
        results: Individual results for each function
    """

    functions_total: int = 0
    functions_processed: int = 0
    versions_deleted: int = 0
    versions_preserved: int = 0
    errors: int = 0
    would_delete: int = 0
    delete_failures: int = 0
    dry_run: bool = False
    cancelled: bool = False
    halted: bool = False
    results: List[FunctionResult] = field(default_factory=list)
    start_time: datetime = field(default_factory=_utcnow)
    end_time: Optional[datetime] = None

    def add_result(self, result: FunctionResult) -> None:
        """Add a function result and update totals."""
        self.results.append(result)
        self.functions_processed += 1
        self.versions_deleted += result.deleted
        self.versions_preserved += result.saved
        self.would_delete += result.would_delete
        self.delete_failures += result.failed
        if result.error is not None:
            self.errors += 1

    def complete(self) -> None:
        """Mark the run as complete."""
        self.end_time = _utcnow()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "functions_total": self.functions_total,
            "functions_processed": self.functions_processed,
            "versions_deleted": self.versions_deleted,
            "versions_preserved": self.versions_preserved,
            "errors": self.errors,
            "would_delete": self.would_delete,
            "delete_failures": self.delete_failures,
            "dry_run": self.dry_run,
            "cancelled": self.cancelled,
            "halted": self.halted,
            "results": [r.to_dict() for r in self.results],
            "start_time": self.start_time.isoformat(),
            "end_time": self.end_time.isoformat() if self.end_time else None,
        }


class VersionCleaner:
    """
    Deletes every Lambda version except the newest numbered one.

    Functions are processed strictly one after another and each function's
    candidates are deleted oldest first. Safety features:
    - Dry-run mode (report without deleting)
    - One confirmation before any destructive action
    - Per-function error isolation with a continue/halt prompt
    - Minimum interval between delete calls
    """

    def __init__(
        self,
        inventory: LambdaInventory,
        confirm_callback: Callable[[str], bool],
        reporter: Optional[CLIReporter] = None,
        rate_limiter: Optional[MinIntervalGate] = None,
    ):
        """
        Initialize the cleaner.

        Args:
            inventory: LambdaInventory used for every Lambda API call
            confirm_callback: Asks a yes/no question, returns True for yes
            reporter: Progress output, defaults to a CLIReporter
            rate_limiter: Delete pacing, defaults to a 100 ms gate
        """
        self.inventory = inventory
        self.confirm_callback = confirm_callback
        self.reporter = reporter or CLIReporter()
        self.rate_limiter = rate_limiter or MinIntervalGate()

    def cleanup(self, config: CleanupConfig) -> RunSummary:
        """
        Clean every function matching the configuration.

        Args:
            config: Run options

        Returns:
            RunSummary with totals and per-function results

        Raises:
            InventoryFetchError: If the function list cannot be fetched
        """
        summary = RunSummary(dry_run=config.dry_run)

        if config.requires_confirmation and not self.confirm_callback(CONFIRM_MESSAGE):
            logger.info("Cleanup cancelled before start")
            summary.cancelled = True
            summary.complete()
            self.reporter.print_cancelled()
            return summary

        functions = self.inventory.list_functions(config.function_name)
        summary.functions_total = len(functions)

        if not functions:
            summary.complete()
            self.reporter.print_no_functions(config.function_name)
            return summary

        self.reporter.print_targets(len(functions))

        for index, function in enumerate(functions, 1):
            self.reporter.print_function_start(function, index, len(functions))

            try:
                result = self.cleanup_function(function, dry_run=config.dry_run)
            except Exception as e:
                result = FunctionResult(
                    function_name=function.name, error=_error_message(e)
                )

            summary.add_result(result)

            if result.error is None:
                self.reporter.print_function_result(result, dry_run=config.dry_run)
                continue

            logger.debug(f"Failed to clean {function.name}: {result.error}")
            if result.deletions:
                self.reporter.print_function_result(result, dry_run=config.dry_run)
            self.reporter.print_function_error(function.name, result.error)

            if config.requires_confirmation and not self.confirm_callback(
                CONTINUE_MESSAGE.format(name=function.name)
            ):
                logger.info(f"Cleanup halted by user after {function.name}")
                summary.halted = True
                break

        summary.complete()
        self.reporter.print_summary(summary)
        return summary

    def cleanup_function(
        self,
        function: FunctionDescriptor,
        dry_run: bool = False,
    ) -> FunctionResult:
        """
        Clean one function.

        Args:
            function: Function to clean
            dry_run: If True, only report what would be deleted

        Returns:
            FunctionResult for the function. An unexpected error during the
            deletes stops this function and is stored in ``error``, next to
            the deletions that already completed.

        Raises:
            VersionFetchError: If the version list cannot be fetched
        """
        versions = self.inventory.list_versions(function.name)
        decision = decide_retention(versions)

        result = FunctionResult(
            function_name=function.name,
            skipped_versions=[r.version for r in decision.skipped],
        )

        if decision.skipped:
            logger.warning(
                f"{function.name}: ignoring non-numeric versions "
                f"{result.skipped_versions}"
            )
            self.reporter.print_skipped_versions(result.skipped_versions)

        if decision.to_keep is not None:
            result.kept_version = decision.to_keep.version
            result.saved = 1

        if not decision.to_delete:
            return result

        self.reporter.print_decision(decision)
        self.rate_limiter.reset()

        for record in decision.to_delete:
            if dry_run:
                deletion = DeleteResult(record.version, DeleteStatus.DRY_RUN)
            else:
                try:
                    deletion = self._delete_version(function.name, record.version)
                except Exception as e:
                    # Deletes already done stay on the result
                    result.error = _error_message(e)
                    return result
            result.deletions.append(deletion)
            self.reporter.print_deletion(deletion)

        return result

    def _delete_version(self, function_name: str, version: str) -> DeleteResult:
        """Delete one version, turning a DeleteError into a FAILED result."""
        self.rate_limiter.wait()
        try:
            self.inventory.delete_version(function_name, version)
        except DeleteError as e:
            logger.warning(f"Failed to delete {function_name}:{version}: {e.message}")
            return DeleteResult(version, DeleteStatus.FAILED, error_message=e.message)

        self.rate_limiter.mark()
        return DeleteResult(version, DeleteStatus.SUCCESS)
