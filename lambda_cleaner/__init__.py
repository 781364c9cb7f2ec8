"""
Lambda Cleaner: AWS Lambda Version Pruner
=========================================

Deletes old published versions of AWS Lambda functions, keeping only the
highest numbered version of each function plus ``$LATEST``.

Modules
-------
core
    AWS client, Lambda inventory, rate limiter, logging and exceptions
cleaners
    Retention policy and the cleanup engine
reporters
    Output formatters (CLI, JSON)

Example
-------
>>> from lambda_cleaner import AWSClient, CleanupConfig, LambdaInventory, VersionCleaner
>>>
>>> config = CleanupConfig(dry_run=True, region="ap-northeast-2")
>>> inventory = LambdaInventory(AWSClient(region=config.region))
>>> cleaner = VersionCleaner(inventory, confirm_callback=lambda message: False)
>>> summary = cleaner.cleanup(config)
>>> print(f"Would delete {summary.would_delete} versions")

Notes
-----
Requires AWS credentials configured via:
- Environment variables (AWS_ACCESS_KEY_ID, AWS_SECRET_ACCESS_KEY)
- AWS credentials file (~/.aws/credentials)
- IAM role (when running on AWS infrastructure)
"""

__version__ = "1.0.0"
__license__ = "MIT"

# Public API
from lambda_cleaner.cleaners.version_cleaner import RunSummary, VersionCleaner
from lambda_cleaner.config import CleanupConfig
from lambda_cleaner.core.aws_client import AWSClient, AWSClientError
from lambda_cleaner.core.inventory import LambdaInventory

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Core classes
    "AWSClient",
    "AWSClientError",
    "CleanupConfig",
    "LambdaInventory",
    "RunSummary",
    "VersionCleaner",
]
