"""
Lambda Cleaner CLI

Main entry point for the command-line interface.
"""

import sys
from typing import Optional

import click
from dotenv import load_dotenv
from rich.console import Console
from rich.prompt import Confirm

from . import __version__
from .cleaners.version_cleaner import VersionCleaner
from .config import CleanupConfig
from .core.aws_client import AWSClient
from .core.exceptions import LambdaCleanerError
from .core.inventory import LambdaInventory
from .core.logging import get_logger, setup_logging
from .core.rate_limiter import MinIntervalGate
from .reporters.cli_reporter import CLIReporter
from .reporters.json_reporter import JSONReporter


console = Console()
logger = get_logger(__name__)


def confirm_action(message: str) -> bool:
    """Ask a yes/no question on the terminal, defaulting to no."""
    return Confirm.ask(f"[yellow]{message}[/yellow]", default=False, console=console)


@click.command()
@click.version_option(version=__version__, prog_name="lambda-cleaner")
@click.option(
    "--dry-run",
    "-d",
    is_flag=True,
    default=False,
    help="Preview what would be deleted without actually deleting",
)
@click.option(
    "--function-name",
    "-f",
    default=None,
    help="Only clean functions whose name equals or contains this value",
)
@click.option(
    "--force",
    is_flag=True,
    default=False,
    help="Skip all confirmation prompts (dangerous!)",
)
@click.option(
    "--region",
    "-r",
    default=None,
    help="AWS region (default: $AWS_REGION, then ap-northeast-2)",
)
@click.option(
    "--profile",
    "-p",
    default=None,
    help="AWS profile name from ~/.aws/credentials",
)
@click.option(
    "--output",
    "-o",
    default=None,
    help="Write the run summary to this JSON file",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    default=False,
    help="Show debug logging",
)
@click.option(
    "--log-file",
    default=None,
    help="Also write logs to this file",
)
def cli(
    dry_run: bool,
    function_name: Optional[str],
    force: bool,
    region: Optional[str],
    profile: Optional[str],
    output: Optional[str],
    verbose: bool,
    log_file: Optional[str],
):
    """
    Delete old versions of AWS Lambda functions.

    Keeps $LATEST and the highest numbered version of every function and
    deletes all other published versions.

    Examples:

        # Preview what would be deleted (safe)
        lambda-cleaner --dry-run

        # Clean functions whose name contains "orders"
        lambda-cleaner --function-name orders

        # Skip confirmation (dangerous!)
        lambda-cleaner --region us-east-1 --force
    """
    load_dotenv()
    setup_logging(level="DEBUG" if verbose else "WARNING", log_file=log_file)

    config = CleanupConfig(
        dry_run=dry_run,
        function_name=function_name,
        force=force,
        region=region,
        profile=profile,
    )
    logger.debug(f"Run configuration: {config.to_dict()}")

    reporter = CLIReporter(console)
    reporter.print_header(config.region)
    reporter.print_mode_banner(config.dry_run, config.force)

    try:
        with AWSClient(region=config.region, profile=config.profile) as client:
            cleaner = VersionCleaner(
                LambdaInventory(client),
                confirm_callback=confirm_action,
                reporter=reporter,
                rate_limiter=MinIntervalGate(config.delete_interval),
            )
            summary = cleaner.cleanup(config)

        if output and not summary.cancelled:
            path = JSONReporter(output_path=output).report(summary, region=config.region)
            reporter.print_export(path)

    except LambdaCleanerError as e:
        logger.debug("Cleanup failed", exc_info=True)
        reporter.print_error(e.message)
        sys.exit(1)
    except KeyboardInterrupt:
        console.print("\n[yellow]Cleanup interrupted by user.[/yellow]")
        sys.exit(130)
    except Exception as e:
        logger.debug("Unexpected failure", exc_info=True)
        reporter.print_error(str(e))
        sys.exit(1)


def main():
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
