"""
Output Reporters
================

CLIReporter
    Rich terminal output for progress and the run summary.
JSONReporter
    Exports a finished run summary to a JSON file.
"""

from lambda_cleaner.reporters.cli_reporter import CLIReporter
from lambda_cleaner.reporters.json_reporter import JSONReporter

__all__ = [
    "CLIReporter",
    "JSONReporter",
]
