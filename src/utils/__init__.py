"""
Utility modules for record keeping.
"""

from src.utils.mappings import (
    CATEGORY_CODE_TO_NAME,
    FIELD_NAME_MAP,
    HEADER_ORDER,
    NAME_TO_FIELD,
    convert_category_to_code,
    display_name,
    field_for_header,
)
from src.utils.parsers import format_number, parse_int, parse_number

__all__ = [
    # Mappings
    "FIELD_NAME_MAP",
    "NAME_TO_FIELD",
    "HEADER_ORDER",
    "CATEGORY_CODE_TO_NAME",
    "display_name",
    "field_for_header",
    "convert_category_to_code",
    # Parsers
    "parse_number",
    "parse_int",
    "format_number",
]
