"""Monitoring module for package-assignment.

Provides shipping summaries, result export and logging setup.
"""

from .export import export_to_csv, export_to_json
from .log import configure_logging
from .summary import (
    NO_CONFIGURATION_SUMMARY,
    calculate_weight,
    format_breakdown,
    format_summary,
    round_weight,
)

__all__ = [
    # Summary
    "NO_CONFIGURATION_SUMMARY",
    "calculate_weight",
    "format_breakdown",
    "format_summary",
    "round_weight",
    # Export
    "export_to_csv",
    "export_to_json",
    # Logging
    "configure_logging",
]
