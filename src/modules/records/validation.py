"""
Form validation.

Required-field and option checks run before a form is saved.
Import paths never call this: imported rows are kept as-is.
"""

from src.modules.records.models import CommunityListing, FormData, GeneralProperty
from src.utils.mappings.districts import AREAS, is_known_district
from src.utils.parsers.number import is_blank

RATING_VALUES = frozenset({"1", "2", "3", "4", "5"})


def _check_location(form: FormData, errors: dict[str, str]) -> None:
    """Check area/district selection."""
    if is_blank(form.area):
        errors["area"] = "請選擇主要都市"
    elif form.area not in AREAS:
        errors["area"] = f"不支援的都市：{form.area}"

    if is_blank(form.district):
        errors["district"] = "請選擇行政區"
    elif "area" not in errors and not is_known_district(form.area, form.district):
        errors["district"] = f"{form.district} 不屬於 {form.area}"


def validate_form(form: FormData) -> dict[str, str]:
    """
    Validate a form before saving.

    Args:
        form: GeneralProperty or CommunityListing

    Returns:
        Field identifier → error message (empty dict when valid)
    """
    errors: dict[str, str] = {}
    _check_location(form, errors)

    if isinstance(form, GeneralProperty):
        if is_blank(form.property_name):
            errors["propertyName"] = "請輸入物件名稱"
        ratings = {
            "rating_採光": form.rating_lighting,
            "rating_生活機能": form.rating_amenities,
            "rating_交通": form.rating_transport,
            "rating_價格滿意度": form.rating_price,
            "rating_未來發展潛力": form.rating_potential,
        }
        for identifier, value in ratings.items():
            if value and value not in RATING_VALUES:
                errors[identifier] = "評分需為 1 到 5"
    elif isinstance(form, CommunityListing):
        if is_blank(form.community_name):
            errors["communityName"] = "請輸入社區名稱"
    else:
        raise TypeError(f"Unsupported form type: {type(form).__name__}")

    return errors
