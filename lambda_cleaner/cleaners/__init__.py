"""
Version Cleaners
================

Retention policy and cleanup engine for Lambda function versions.

Safety Features
---------------
1. **Dry-run mode**: Report what would be deleted without making changes
2. **Confirmation**: One prompt before any deletion, one after each error
3. **Error isolation**: A failing function or version never aborts the run
4. **Pacing**: A minimum interval between successive delete calls
5. **$LATEST protection**: The unpublished version is never a candidate
"""

from lambda_cleaner.cleaners.version_cleaner import (
    DeleteResult,
    DeleteStatus,
    FunctionResult,
    RetentionDecision,
    RunSummary,
    VersionCleaner,
    decide_retention,
)

__all__ = [
    "DeleteResult",
    "DeleteStatus",
    "FunctionResult",
    "RetentionDecision",
    "RunSummary",
    "VersionCleaner",
    "decide_retention",
]
