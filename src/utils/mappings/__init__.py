"""
Mapping modules.

Field identifier ↔ Chinese display name, category labels and district options.
"""

from src.utils.mappings.category import (
    CATEGORY_CODE_TO_NAME,
    CATEGORY_NAME_TO_CODE,
    convert_category_to_code,
    convert_category_to_name,
)
from src.utils.mappings.districts import AREAS, DISTRICTS_BY_AREA, is_known_district
from src.utils.mappings.fields import (
    DETAIL_EXCLUDED_FIELDS,
    FIELD_NAME_MAP,
    HEADER_NAMES,
    HEADER_ORDER,
    NAME_TO_FIELD,
    NUMERIC_FIELDS,
    RATING_FIELDS,
    display_name,
    field_for_header,
)

__all__ = [
    # Fields
    "FIELD_NAME_MAP",
    "NAME_TO_FIELD",
    "HEADER_ORDER",
    "HEADER_NAMES",
    "DETAIL_EXCLUDED_FIELDS",
    "NUMERIC_FIELDS",
    "RATING_FIELDS",
    "display_name",
    "field_for_header",
    # Category
    "CATEGORY_CODE_TO_NAME",
    "CATEGORY_NAME_TO_CODE",
    "convert_category_to_code",
    "convert_category_to_name",
    # Districts
    "AREAS",
    "DISTRICTS_BY_AREA",
    "is_known_district",
]
