"""
Category Resolver.

Turns loosely-shaped blobs (legacy storage, CSV rows, foreign JSON) into typed
records. Category inference is a best-effort heuristic kept in one place so it
can be replaced by a strict schema tag later.
"""

from typing import Any, Mapping, Optional, Union

from loguru import logger

from src.modules.records.models import (
    FORM_CLASSES,
    CommunityRecord,
    FormData,
    GeneralRecord,
    make_record,
)
from src.utils.mappings.category import (
    CATEGORY_COMMUNITY,
    CATEGORY_GENERAL,
    convert_category_to_code,
)
from src.utils.mappings.fields import (
    COMMUNITY_FIELDS,
    COMMUNITY_ONLY_FIELDS,
    GENERAL_FIELDS,
)
from src.utils.parsers.number import is_blank, parse_int

resolver_log = logger.bind(module="Resolver")

VARIANT_FIELDS: dict[str, frozenset[str]] = {
    CATEGORY_GENERAL: frozenset(GENERAL_FIELDS),
    CATEGORY_COMMUNITY: frozenset(COMMUNITY_FIELDS),
}

# Keys that carried the category tag in older stored shapes
CATEGORY_KEYS: tuple[str, ...] = ("category", "objectCategory", "type")


def infer_category(blob: Mapping[str, Any]) -> str:
    """
    Guess the category from the fields a blob has populated.

    Any populated community-only field (communityName, reason) means
    "community"; otherwise "general".

    Example:
        >>> infer_category({"communityName": "Oak Gardens"})
        "community"
        >>> infer_category({"propertyName": "信義之星"})
        "general"
    """
    for name in COMMUNITY_ONLY_FIELDS:
        if not is_blank(blob.get(name)):
            return CATEGORY_COMMUNITY
    return CATEGORY_GENERAL


def resolve_category(tag: Any, blob: Mapping[str, Any]) -> str:
    """
    Resolve the category of a blob.

    Args:
        tag: Explicit category tag, may be missing or unrecognized
        blob: Form fields used for inference when the tag is not usable

    Returns:
        "general" or "community"
    """
    code = convert_category_to_code(tag)
    if code:
        return code

    inferred = infer_category(blob)
    if not is_blank(tag):
        resolver_log.warning(f"Unknown category {tag!r}, inferred {inferred!r}")
    return inferred


def _is_scalar(value: Any) -> bool:
    return isinstance(value, (str, int, float)) and not isinstance(value, bool)


def build_form_data(category: str, blob: Mapping[str, Any]) -> FormData:
    """
    Build a complete form variant from a partial blob.

    Missing fields take their zero value ("" or None); fields that belong
    to the other variant are dropped with a warning.

    Args:
        category: "general" or "community"
        blob: Field identifier → value

    Returns:
        GeneralProperty or CommunityListing
    """
    allowed = VARIANT_FIELDS[category]
    values = {
        key: value if value is None or _is_scalar(value) else str(value)
        for key, value in blob.items()
        if key in allowed
    }

    dropped = sorted(
        key for key, value in blob.items() if key not in allowed and not is_blank(value)
    )
    if dropped:
        resolver_log.warning(f"Dropped fields not valid for {category}: {', '.join(dropped)}")

    return FORM_CLASSES[category].model_validate(values)


def _category_tag(raw: Mapping[str, Any]) -> Optional[Any]:
    """Find the first category tag among current and legacy keys."""
    for key in CATEGORY_KEYS:
        if convert_category_to_code(raw.get(key)):
            return raw.get(key)
    return raw.get("category")


def resolve_record(
    raw: Mapping[str, Any],
    fallback_id: Optional[int] = None,
) -> Union[GeneralRecord, CommunityRecord]:
    """
    Convert a stored or imported dict into a typed record.

    Args:
        raw: Dict with id, timestamp, a category tag and formData
        fallback_id: Id to use when raw id is missing or not an integer

    Returns:
        GeneralRecord or CommunityRecord

    Raises:
        ValueError: no usable id and no fallback_id
    """
    form_blob = raw.get("formData")
    if not isinstance(form_blob, Mapping):
        form_blob = {}

    record_id = parse_int(raw.get("id"))
    if record_id is None:
        if fallback_id is None:
            raise ValueError(f"Record without a usable id: {raw.get('id')!r}")
        record_id = fallback_id

    category = resolve_category(_category_tag(raw), form_blob)
    timestamp = raw.get("timestamp")

    return make_record(
        category,
        record_id,
        timestamp if isinstance(timestamp, str) else "",
        build_form_data(category, form_blob),
    )
