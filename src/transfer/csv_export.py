"""
CSV Export.

Record list → header row + quoted data rows, prefixed with a BOM so
spreadsheet tools show the Chinese text correctly.
"""

from datetime import datetime
from typing import Any, Optional, Sequence

from loguru import logger

from src.codec.delimited import BOM, encode
from src.modules.records.models import CommunityRecord, GeneralRecord
from src.modules.records.repository import AnyRecord, refresh_derived
from src.transfer.results import ExportResult
from src.utils.mappings.category import convert_category_to_name
from src.utils.mappings.fields import HEADER_NAMES, HEADER_ORDER

export_log = logger.bind(module="Export")

EMPTY_EXPORT_MESSAGE = "沒有記錄可以匯出！"
CSV_FILENAME_PREFIX = "property_records"


def filename_timestamp(now: datetime) -> str:
    """Format a timestamp for export file names (YYYYMMDD_HHMMSS)."""
    return now.strftime("%Y%m%d_%H%M%S")


def record_to_row(record: AnyRecord) -> list[Any]:
    """
    Flatten a record into values ordered by HEADER_ORDER.

    Fields of the other variant are empty.
    """
    if isinstance(record, GeneralRecord):
        record = refresh_derived(record)
    elif not isinstance(record, CommunityRecord):
        raise TypeError(f"Unsupported record type: {type(record).__name__}")

    row: list[Any] = []
    for identifier in HEADER_ORDER:
        if identifier == "category":
            row.append(convert_category_to_name(record.category))
        else:
            row.append(record.get_value(identifier))
    return row


def export_csv(
    records: Sequence[AnyRecord],
    now: Optional[datetime] = None,
) -> ExportResult:
    """
    Export records as CSV.

    Args:
        records: All records in the store
        now: Export time used in the file name

    Returns:
        ExportResult; failed with a message when there are no records
    """
    if not records:
        export_log.warning("Export requested with no records")
        return ExportResult.fail(EMPTY_EXPORT_MESSAGE)

    now = now or datetime.now()
    content = BOM + encode(HEADER_NAMES, (record_to_row(r) for r in records))
    filename = f"{CSV_FILENAME_PREFIX}_{filename_timestamp(now)}.csv"

    export_log.info(f"Exported {len(records)} records to {filename}")
    return ExportResult.ok(filename=filename, content=content, count=len(records))
