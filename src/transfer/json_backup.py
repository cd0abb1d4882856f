"""
JSON Backup.

Full backups of the record list. Restoring a backup replaces every record,
unlike CSV import which appends.
"""

import json
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional, Sequence

from loguru import logger

from src.codec.delimited import BOM
from src.errors import UnparseableFileError
from src.modules.records.models import TIMESTAMP_FORMAT, new_record_id
from src.modules.records.repository import AnyRecord
from src.modules.records.resolver import resolve_record
from src.transfer.csv_export import EMPTY_EXPORT_MESSAGE, filename_timestamp
from src.transfer.results import ExportResult

backup_log = logger.bind(module="Backup")

JSON_FILENAME_PREFIX = "房產紀錄_備份"
INVALID_BACKUP_MESSAGE = "檔案格式不正確，無法識別為房產記錄。"


@dataclass
class JsonBackup:
    """
    Parsed backup file.

    Attributes:
        exported_at: Backup creation time, None if absent or unreadable
        records: Records resolved from the file
    """

    exported_at: Optional[datetime] = None
    records: list[AnyRecord] = field(default_factory=list)


def export_json(
    records: Sequence[AnyRecord],
    now: Optional[datetime] = None,
) -> ExportResult:
    """
    Export all records as a JSON backup.

    Args:
        records: All records in the store
        now: Export time (written as exportedAt and used in the file name)

    Returns:
        ExportResult; failed with a message when there are no records
    """
    if not records:
        backup_log.warning("Backup requested with no records")
        return ExportResult.fail(EMPTY_EXPORT_MESSAGE)

    now = now or datetime.now().astimezone()
    payload = {
        "exportedAt": now.isoformat(),
        "records": [record.to_dict() for record in records],
    }
    content = json.dumps(payload, ensure_ascii=False, indent=2)
    filename = f"{JSON_FILENAME_PREFIX}_{filename_timestamp(now)}.json"

    backup_log.info(f"Backed up {len(records)} records to {filename}")
    return ExportResult.ok(filename=filename, content=content, count=len(records))


def _parse_exported_at(value: Any) -> Optional[datetime]:
    if not isinstance(value, str) or not value:
        return None
    try:
        # "Z" suffix from JavaScript toISOString()
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        backup_log.warning(f"Unreadable exportedAt: {value!r}")
        return None


def parse_json_backup(text: str) -> JsonBackup:
    """
    Parse a JSON backup file.

    Args:
        text: File content

    Returns:
        JsonBackup with resolved records

    Raises:
        UnparseableFileError: not JSON, or no records list
    """
    try:
        data = json.loads(text.lstrip(BOM))
    except ValueError as e:
        raise UnparseableFileError(f"{INVALID_BACKUP_MESSAGE} ({e})") from e

    if not isinstance(data, dict) or not isinstance(data.get("records"), list):
        raise UnparseableFileError(INVALID_BACKUP_MESSAGE)

    backup = JsonBackup(exported_at=_parse_exported_at(data.get("exportedAt")))
    taken: set[int] = set()
    for index, entry in enumerate(data["records"]):
        if not isinstance(entry, dict):
            backup_log.warning(f"Skipping backup entry {index}: not an object")
            continue
        record = resolve_record(entry, fallback_id=new_record_id(taken))
        taken.add(record.id)
        backup.records.append(record)

    return backup


def confirm_message(backup: JsonBackup) -> str:
    """Build the overwrite confirmation prompt for a backup."""
    if backup.exported_at is None:
        return "您確定要匯入此資料嗎？這將會覆蓋您當前所有房產記錄。"

    exported = backup.exported_at
    if exported.tzinfo is not None:
        exported = exported.astimezone()
    return (
        "您確定要匯入此資料嗎？\n\n"
        f"此備份建立於：{exported.strftime(TIMESTAMP_FORMAT)}\n\n"
        "這將會覆蓋您當前所有房產記錄。"
    )
