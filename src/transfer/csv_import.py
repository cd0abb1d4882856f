"""
CSV Import.

File text → decoded rows → typed records ready to append to the store.
Bad single fields become None/""; malformed rows are skipped; only an
unreadable or empty file fails the whole import.
"""

from datetime import datetime
from pathlib import Path
from typing import Any, Iterable, Optional

from loguru import logger

from src.codec.delimited import decode
from src.errors import UnparseableFileError
from src.modules.records.models import format_timestamp, make_record, new_record_id
from src.modules.records.resolver import build_form_data, resolve_category
from src.transfer.results import ImportResult
from src.utils.mappings.fields import NUMERIC_FIELDS, RATING_FIELDS, field_for_header
from src.utils.parsers.number import parse_int, parse_number

import_log = logger.bind(module="Import")

_RATING_FIELDS = frozenset(RATING_FIELDS)


def coerce_value(identifier: str, value: str) -> Any:
    """
    Coerce one imported field.

    Numeric fields parse to float or None; ratings and text stay strings.

    Examples:
        >>> coerce_value("totalPing", "40")
        40.0
        >>> coerce_value("totalPing", "abc")
        None
        >>> coerce_value("rating_交通", "4")
        "4"
    """
    if identifier in NUMERIC_FIELDS:
        return parse_number(value)
    if identifier in _RATING_FIELDS:
        return value.strip()
    return value


def read_import_file(path: Path) -> str:
    """
    Read an import file as UTF-8 text.

    Raises:
        UnparseableFileError: file cannot be read or decoded
    """
    try:
        return Path(path).read_bytes().decode("utf-8-sig")
    except OSError as e:
        raise UnparseableFileError(f"讀取檔案失敗: {e}") from e
    except UnicodeDecodeError as e:
        raise UnparseableFileError("檔案不是 UTF-8 文字檔，無法匯入。") from e


def import_csv(
    text: str,
    existing_ids: Iterable[int] = (),
    now: Optional[datetime] = None,
) -> ImportResult:
    """
    Parse CSV text into new records.

    Ids colliding with the store or with earlier rows are re-keyed to a
    fresh id. The store itself is never touched.

    Args:
        text: CSV file content
        existing_ids: Ids already present in the store
        now: Time used for missing timestamps and new ids

    Returns:
        ImportResult with the new records

    Raises:
        UnparseableFileError: no usable lines
    """
    table = decode(text)
    result = ImportResult(skipped_lines=list(table.skipped_lines))

    identifiers = [field_for_header(header) for header in table.headers]
    result.ignored_headers = [
        header for header, ident in zip(table.headers, identifiers) if ident is None
    ]
    if result.ignored_headers:
        import_log.warning(f"Ignoring unknown headers: {', '.join(result.ignored_headers)}")

    taken = set(existing_ids)
    timestamp_now = format_timestamp(now)

    for line_no, values in zip(table.line_numbers, table.rows):
        envelope: dict[str, str] = {}
        blob: dict[str, Any] = {}
        for identifier, value in zip(identifiers, values):
            if identifier is None:
                continue
            if identifier in ("id", "timestamp", "category"):
                envelope[identifier] = value
            else:
                blob[identifier] = coerce_value(identifier, value)

        record_id = parse_int(envelope.get("id"))
        if record_id is None:
            record_id = new_record_id(taken, now)
        elif record_id in taken:
            new_id = new_record_id(taken, now)
            import_log.warning(f"Line {line_no}: id {record_id} already exists, re-keyed to {new_id}")
            result.rekeyed.append((line_no, record_id, new_id))
            record_id = new_id
        taken.add(record_id)

        timestamp = (envelope.get("timestamp") or "").strip() or timestamp_now
        category = resolve_category(envelope.get("category"), blob)

        result.records.append(
            make_record(category, record_id, timestamp, build_form_data(category, blob))
        )

    import_log.info(
        f"Imported {len(result.records)} records, skipped {len(result.skipped_lines)} rows"
    )
    return result
