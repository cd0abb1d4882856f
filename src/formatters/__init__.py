"""Text formatters."""

from src.formatters.record import format_details, format_errors, format_summary

__all__ = [
    "format_summary",
    "format_details",
    "format_errors",
]
