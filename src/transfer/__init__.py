"""Export and import of records (CSV append, JSON backup replace)."""

from src.transfer.csv_export import export_csv
from src.transfer.csv_import import import_csv, read_import_file
from src.transfer.json_backup import (
    JsonBackup,
    confirm_message,
    export_json,
    parse_json_backup,
)
from src.transfer.results import ExportResult, ImportResult, write_artifact

__all__ = [
    "ExportResult",
    "ImportResult",
    "write_artifact",
    "export_csv",
    "import_csv",
    "read_import_file",
    "JsonBackup",
    "export_json",
    "parse_json_backup",
    "confirm_message",
]
