"""Records module."""

from src.modules.records.models import (
    CommunityListing,
    CommunityRecord,
    GeneralProperty,
    GeneralRecord,
    Record,
)
from src.modules.records.repository import AnyRecord, RecordStore
from src.modules.records.resolver import (
    build_form_data,
    infer_category,
    resolve_category,
    resolve_record,
)
from src.modules.records.validation import validate_form

__all__ = [
    "GeneralProperty",
    "CommunityListing",
    "GeneralRecord",
    "CommunityRecord",
    "Record",
    "AnyRecord",
    "RecordStore",
    "infer_category",
    "resolve_category",
    "build_form_data",
    "resolve_record",
    "validate_form",
]
