"""
Record Formatter Module.

Formats saved records as plain text for the command line.
"""

from typing import Any

from src.modules.records.models import CommunityRecord, GeneralRecord
from src.modules.records.repository import AnyRecord
from src.utils.mappings.category import convert_category_to_name
from src.utils.mappings.fields import DETAIL_EXCLUDED_FIELDS, HEADER_ORDER, display_name
from src.utils.parsers.number import format_number, is_blank


def _text(value: Any) -> str:
    if isinstance(value, float):
        return format_number(value)
    return "" if value is None else str(value)


def _location(area: str, district: str, other_district: str = "") -> str:
    """Join area and district, preferring the free-text district when given."""
    return f"{area}{other_district or district}" or "N/A"


def format_summary(record: AnyRecord) -> str:
    """
    Format the compact summary block of a record.

    Args:
        record: GeneralRecord or CommunityRecord

    Returns:
        Multi-line summary string
    """
    if not isinstance(record, (GeneralRecord, CommunityRecord)):
        raise TypeError(f"Unsupported record type: {type(record).__name__}")

    header = f"[{record.id}] {convert_category_to_name(record.category)} | {record.timestamp}"

    if isinstance(record, GeneralRecord):
        form = record.form_data
        price = _text(form.unit_price) or "N/A"
        rating = _text(form.total_rating) or "N/A"
        return (
            f"{header}\n"
            f"    🏠 {form.property_name or 'N/A'}\n"
            f"    📍 {_location(form.area, form.district, form.other_district)}\n"
            f"    💰 單坪 {price} 萬 | ⭐ {rating}"
        )

    form = record.form_data
    return (
        f"{header}\n"
        f"    🏘️  {form.community_name or 'N/A'}\n"
        f"    📍 {_location(form.area, form.district)}"
    )


def format_details(record: AnyRecord) -> str:
    """
    Format the full field dump of a record.

    Fields already shown in the summary and empty fields are left out.
    """
    lines = [format_summary(record)]
    for identifier in HEADER_ORDER:
        if identifier in DETAIL_EXCLUDED_FIELDS:
            continue
        value = record.get_value(identifier)
        if is_blank(value):
            continue
        lines.append(f"    {display_name(identifier)}：{_text(value)}")
    return "\n".join(lines)


def format_errors(errors: dict[str, str]) -> str:
    """Format validation errors, one per line with the field's display name."""
    return "\n".join(
        f"❌ {display_name(identifier)}：{message}" for identifier, message in errors.items()
    )
