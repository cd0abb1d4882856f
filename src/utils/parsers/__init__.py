"""
Parser utilities for form inputs.
"""

from src.utils.parsers.number import (
    format_number,
    is_blank,
    parse_int,
    parse_number,
    round_half_up,
)

__all__ = [
    "parse_number",
    "parse_int",
    "is_blank",
    "round_half_up",
    "format_number",
]
