#!/usr/bin/env python3
"""
Command line interface for saved property records.

Usage:
    house-records list
    house-records add general --field 物件名稱=信義之星 --field 主要都市=台北市 ...
    house-records add community --field communityName=Oak Gardens ...
    house-records edit 1718000000000 --field totalAmount=2100
    house-records export-csv --output exports
    house-records import-csv property_records_20250601_120000.csv
    house-records import-json 房產紀錄_備份_20250601_120000.json --yes
"""

import argparse
import sys
from pathlib import Path
from typing import Callable, Optional, Sequence

from dotenv import load_dotenv
from loguru import logger

from config.settings import get_settings
from src.connections.storage import JsonFileStore
from src.errors import RecordError
from src.formatters import format_details, format_errors, format_summary
from src.modules.records import RecordStore, build_form_data, validate_form
from src.transfer import (
    confirm_message,
    export_csv,
    export_json,
    import_csv,
    parse_json_backup,
    read_import_file,
    write_artifact,
)
from src.utils.log import setup_logging
from src.utils.mappings.category import CATEGORY_COMMUNITY, CATEGORY_GENERAL
from src.utils.mappings.fields import ENVELOPE_FIELDS, FIELD_NAME_MAP, field_for_header

cli_log = logger.bind(module="CLI")


def parse_assignments(assignments: Sequence[str]) -> dict[str, str]:
    """
    Parse "key=value" pairs; keys may be identifiers or Chinese display names.

    Raises:
        ValueError: malformed pair or unknown field
    """
    values: dict[str, str] = {}
    for item in assignments:
        key, sep, value = item.partition("=")
        if not sep:
            raise ValueError(f"欄位格式錯誤 (需為 key=value)：{item}")
        key = key.strip()
        identifier = key if key in FIELD_NAME_MAP else field_for_header(key)
        if identifier is None or identifier in ENVELOPE_FIELDS:
            raise ValueError(f"未知的欄位：{key}")
        values[identifier] = value
    return values


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(prog="house-records", description="買房便利通 記錄管理")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("list", help="列出所有記錄")

    show = sub.add_parser("show", help="顯示單筆記錄")
    show.add_argument("record_id", type=int)

    add = sub.add_parser("add", help="新增記錄")
    add.add_argument("category", choices=[CATEGORY_GENERAL, CATEGORY_COMMUNITY])
    add.add_argument("--field", action="append", default=[], metavar="KEY=VALUE")

    edit = sub.add_parser("edit", help="修改記錄")
    edit.add_argument("record_id", type=int)
    edit.add_argument("--field", action="append", default=[], metavar="KEY=VALUE")

    delete = sub.add_parser("delete", help="刪除記錄")
    delete.add_argument("record_id", type=int)

    for name, help_text in (("export-csv", "匯出 CSV"), ("export-json", "匯出 JSON 備份")):
        export = sub.add_parser(name, help=help_text)
        export.add_argument("--output", type=Path, default=None, help="輸出資料夾")

    import_csv_cmd = sub.add_parser("import-csv", help="匯入 CSV (附加)")
    import_csv_cmd.add_argument("file", type=Path)

    import_json_cmd = sub.add_parser("import-json", help="匯入 JSON 備份 (覆蓋)")
    import_json_cmd.add_argument("file", type=Path)
    import_json_cmd.add_argument("--yes", action="store_true", help="不詢問直接覆蓋")

    return parser


def _ask(message: str) -> bool:
    answer = input(f"{message}\n(y/N) ")
    return answer.strip().lower() in ("y", "yes")


def run(
    args: argparse.Namespace,
    store: RecordStore,
    export_dir: Path,
    confirm: Callable[[str], bool] = _ask,
) -> int:
    """
    Execute a parsed command against the store.

    Returns:
        Process exit code
    """
    if args.command == "list":
        if not len(store):
            print("目前沒有記錄")
        for record in store.records:
            print(format_summary(record))
        print(f"共 {len(store)} 筆")
        return 0

    if args.command == "show":
        print(format_details(store.get(args.record_id)))
        return 0

    if args.command in ("add", "edit"):
        values = parse_assignments(args.field)
        if args.command == "add":
            category = args.category
        else:
            current = store.get(args.record_id)
            category = current.category
            values = {**current.form_data.model_dump(by_alias=True), **values}

        form = build_form_data(category, values)
        errors = validate_form(form)
        if errors:
            print(format_errors(errors))
            print("請檢查表單中的錯誤！")
            return 1

        if args.command == "add":
            record = store.add(category, form)
            print("記錄已儲存！")
        else:
            record = store.update(args.record_id, form)
            print("記錄已更新！")
        print(format_summary(record))
        return 0

    if args.command == "delete":
        store.delete(args.record_id)
        print("記錄已刪除！")
        return 0

    if args.command in ("export-csv", "export-json"):
        exporter = export_csv if args.command == "export-csv" else export_json
        result = exporter(store.records)
        if not result.success:
            print(result.error)
            return 1
        path = write_artifact(result, args.output or export_dir)
        print(f"資料已成功匯出！{path}")
        return 0

    if args.command == "import-csv":
        result = import_csv(read_import_file(args.file), existing_ids=store.ids)
        store.append(result.records)
        print(result.message)
        return 0

    if args.command == "import-json":
        backup = parse_json_backup(read_import_file(args.file))
        if not args.yes and not confirm(confirm_message(backup)):
            print("匯入操作已取消。")
            return 1
        store.replace_all(backup.records)
        print("資料已成功匯入！")
        return 0

    raise ValueError(f"Unknown command: {args.command}")


def main(argv: Optional[Sequence[str]] = None) -> int:
    """CLI entry point."""
    load_dotenv()
    settings = get_settings()
    setup_logging(settings.log_level)

    args = build_parser().parse_args(argv)
    store = RecordStore(JsonFileStore(settings.storage.path), settings.storage.key)

    try:
        store.load()
        return run(args, store, settings.export.directory)
    except (RecordError, ValueError) as e:
        message = e.message if isinstance(e, RecordError) else str(e)
        cli_log.error(message)
        print(f"❌ {message}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
