"""Delimited text codec."""

from src.codec.delimited import (
    BOM,
    DecodedTable,
    decode,
    encode,
    encode_field,
    encode_row,
    split_lines,
    tokenize_line,
)

__all__ = [
    "BOM",
    "DecodedTable",
    "encode_field",
    "encode_row",
    "encode",
    "split_lines",
    "tokenize_line",
    "decode",
]
