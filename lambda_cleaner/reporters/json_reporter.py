"""
JSON Reporter Module
====================

Exports a finished run summary to JSON for scripting and audit trails.

Example
-------
>>> from lambda_cleaner.reporters import JSONReporter
>>>
>>> reporter = JSONReporter(output_path="cleanup.json")
>>> filepath = reporter.report(summary)

Output Structure
----------------
::

    {
        "metadata": {
            "generated_at": "2024-01-15T10:30:00",
            "tool": "lambda-cleaner",
            "region": "ap-northeast-2"
        },
        "summary": {
            "functions_total": 3,
            "versions_deleted": 2,
            ...
            "results": [...]
        }
    }
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, Optional

if TYPE_CHECKING:
    from lambda_cleaner.cleaners.version_cleaner import RunSummary

# Module logger
logger = logging.getLogger(__name__)

TOOL_NAME = "lambda-cleaner"


class JSONReporter:
    """
    Reporter for exporting run summaries to JSON.

    Parameters
    ----------
    output_path : str, optional
        Path for the output JSON file. If not provided, a timestamped
        filename is generated in the current directory.
    indent : int, default=2
        JSON indentation level. None for compact output.
    """

    def __init__(
        self,
        output_path: Optional[str] = None,
        indent: Optional[int] = 2,
    ) -> None:
        """Initialize the JSON reporter with optional output path and indentation."""
        self.output_path = output_path
        self.indent = indent
        logger.debug(f"Initialized JSONReporter (output_path={output_path})")

    def _get_output_path(self) -> Path:
        if self.output_path:
            return Path(self.output_path)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        return Path(f"lambda_cleanup_{timestamp}.json")

    def report(self, summary: RunSummary, region: Optional[str] = None) -> str:
        """
        Export a run summary to a JSON file.

        Parameters
        ----------
        summary : RunSummary
            Summary returned by ``VersionCleaner.cleanup``.
        region : str, optional
            Region the run targeted, recorded in the metadata.

        Returns
        -------
        str
            Path to the created JSON file.
        """
        output_path = self._get_output_path()

        logger.info(f"Exporting run summary to {output_path}")

        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(
                self.to_dict(summary, region), f, indent=self.indent, default=str
            )

        logger.info(f"JSON export complete: {output_path}")
        return str(output_path)

    def to_string(self, summary: RunSummary, region: Optional[str] = None) -> str:
        """Return the JSON document as a string."""
        return json.dumps(self.to_dict(summary, region), indent=self.indent, default=str)

    def to_dict(
        self,
        summary: RunSummary,
        region: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Build the JSON document as a dictionary."""
        return {
            "metadata": {
                "generated_at": datetime.now().isoformat(),
                "tool": TOOL_NAME,
                "region": region,
            },
            "summary": summary.to_dict(),
        }

    def __repr__(self) -> str:
        return f"JSONReporter(output_path={self.output_path!r})"
