"""
Delimited text codec.

Quote-aware encoding and decoding of comma-separated rows. Every non-empty
value is wrapped in double quotes with inner quotes doubled; decoding uses a
character state machine so commas, quotes and newlines inside quoted values
survive.
"""

from dataclasses import dataclass, field
from typing import Any, Iterable, Optional, Sequence

from loguru import logger

from src.errors import UnparseableFileError
from src.utils.parsers.number import format_number

codec_log = logger.bind(module="Codec")

QUOTE = '"'
DELIMITER = ","
NEWLINE = "\n"
BOM = "\ufeff"


@dataclass
class DecodedTable:
    """
    Result of decoding delimited text.

    Attributes:
        headers: Header values from the first line
        rows: Data rows whose field count equals the header count
        line_numbers: 1-based source line of each kept row
        skipped_lines: 1-based source lines skipped as malformed
    """

    headers: list[str]
    rows: list[list[str]] = field(default_factory=list)
    line_numbers: list[int] = field(default_factory=list)
    skipped_lines: list[int] = field(default_factory=list)


# ============================================
# Encoding
# ============================================


def encode_field(value: Any) -> str:
    """
    Encode one value.

    Examples:
        >>> encode_field('say "hi" twice')
        '"say ""hi"" twice"'
        >>> encode_field(None)
        ''
        >>> encode_field(50.0)
        '"50"'
    """
    if value is None or value == "":
        return ""
    if isinstance(value, float):
        text = format_number(value)
    else:
        text = str(value)
    return QUOTE + text.replace(QUOTE, QUOTE * 2) + QUOTE


def encode_row(values: Iterable[Any]) -> str:
    """Encode values into one delimited line."""
    return DELIMITER.join(encode_field(value) for value in values)


def encode(headers: Sequence[str], rows: Iterable[Iterable[Any]]) -> str:
    """
    Encode a header line plus data rows.

    Lines are joined with "\\n" and there is no trailing newline.
    """
    lines = [encode_row(headers)]
    lines.extend(encode_row(row) for row in rows)
    return NEWLINE.join(lines)


# ============================================
# Decoding
# ============================================


def _read_record(text: str, pos: int) -> tuple[str, int]:
    """
    Read one logical record starting at pos.

    Newlines inside quotes belong to the record.

    Returns:
        (record text without its terminating newline, position after it)
    """
    in_quote = False
    for i in range(pos, len(text)):
        char = text[i]
        if char == QUOTE:
            in_quote = not in_quote
        elif char == NEWLINE and not in_quote:
            return text[pos:i], i + 1
    return text[pos:], len(text)


def _strip_cr(record: str) -> str:
    return record[:-1] if record.endswith("\r") else record


def split_lines(text: str) -> list[tuple[int, str]]:
    """
    Split text into logical lines, keeping newlines inside quotes.

    Blank lines (empty after trimming) are dropped and a trailing "\\r"
    is removed from each line.

    Returns:
        List of (1-based starting line number, line text)
    """
    lines: list[tuple[int, str]] = []
    pos = 0
    line_no = 1
    while pos < len(text):
        record, pos = _read_record(text, pos)
        line = _strip_cr(record)
        if line.strip():
            lines.append((line_no, line))
        line_no += record.count(NEWLINE) + 1
    return lines


def tokenize_line(line: str) -> list[str]:
    """
    Split one line into fields.

    A quote toggles the quoted state, except a doubled quote inside a
    quoted field which yields one literal quote. A comma ends a field only
    outside quotes.

    Examples:
        >>> tokenize_line('"a","b,c",')
        ['a', 'b,c', '']
        >>> tokenize_line('"He said ""Hi"", then left"')
        ['He said "Hi", then left']
    """
    fields: list[str] = []
    current: list[str] = []
    in_quote = False
    i = 0
    length = len(line)

    while i < length:
        char = line[i]
        if char == QUOTE:
            if in_quote and i + 1 < length and line[i + 1] == QUOTE:
                current.append(QUOTE)
                i += 2
                continue
            in_quote = not in_quote
        elif char == DELIMITER and not in_quote:
            fields.append("".join(current))
            current = []
        else:
            current.append(char)
        i += 1

    fields.append("".join(current))
    return fields


def decode(text: str) -> DecodedTable:
    """
    Decode delimited text into headers and rows.

    Rows whose field count differs from the header count are skipped
    with a warning; the rest are kept. When such a row spans several
    physical lines (an unbalanced quote), only its first physical line
    is skipped and reading resumes on the next one.

    Args:
        text: File content (a leading BOM is ignored)

    Returns:
        DecodedTable

    Raises:
        UnparseableFileError: no usable lines
    """
    if text.startswith(BOM):
        text = text[len(BOM):]

    table: Optional[DecodedTable] = None
    pos = 0
    line_no = 1

    while pos < len(text):
        start = pos
        record, pos = _read_record(text, start)
        line = _strip_cr(record)
        spanned = record.count(NEWLINE) + 1

        if not line.strip():
            line_no += spanned
            continue

        if table is None:
            table = DecodedTable(headers=[h.strip() for h in tokenize_line(line)])
            line_no += spanned
            continue

        values = tokenize_line(line)
        if len(values) != len(table.headers):
            codec_log.warning(
                f"Skipping malformed row at line {line_no}: "
                f"expected {len(table.headers)} fields, got {len(values)}"
            )
            table.skipped_lines.append(line_no)
            if spanned > 1:
                pos = start + record.index(NEWLINE) + 1
                line_no += 1
                continue
            line_no += spanned
            continue

        table.rows.append(values)
        table.line_numbers.append(line_no)
        line_no += spanned

    if table is None:
        raise UnparseableFileError("CSV 檔案內容為空。")
    return table
