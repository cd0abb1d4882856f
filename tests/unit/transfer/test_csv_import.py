"""
Unit tests for src/transfer/csv_import.py
"""

import pytest

from src.codec.delimited import encode
from src.errors import UnparseableFileError
from src.modules.records.models import CommunityRecord, GeneralRecord
from src.transfer.csv_import import coerce_value, import_csv, read_import_file


class TestCoerceValue:
    """Tests for coerce_value function."""

    def test_numeric(self):
        assert coerce_value("totalPing", "40") == 40.0
        assert coerce_value("unitPrice", "50.5") == 50.5

    def test_numeric_empty_or_bad(self):
        assert coerce_value("totalPing", "") is None
        assert coerce_value("buildingAge", "十年") is None

    def test_rating_stays_text(self):
        assert coerce_value("rating_交通", " 4 ") == "4"

    def test_text(self):
        assert coerce_value("floor", "8") == "8"


class TestImportCsv:
    """Tests for import_csv function."""

    def test_basic_rows(self, fixed_now):
        text = encode(
            ["ID", "時間", "物件類別", "物件名稱", "權狀坪數", "總價(萬)"],
            [["1", "2025/01/01 10:00:00", "一般物件", "甲", "40", "2000"]],
        )
        result = import_csv(text, now=fixed_now)

        record = result.records[0]
        assert isinstance(record, GeneralRecord)
        assert record.id == 1
        assert record.timestamp == "2025/01/01 10:00:00"
        assert record.form_data.property_name == "甲"
        assert record.form_data.total_ping == "40"

    def test_malformed_row_skipped(self, fixed_now):
        lines = [
            '"ID","時間","物件類別","物件名稱","地址"',
            '"1","t","一般物件","甲","台北"',
            '"2","t","一般物件"',
            '"3","t","一般物件","丙","新北"',
        ]
        result = import_csv("\n".join(lines), now=fixed_now)
        assert [r.id for r in result.records] == [1, 3]
        assert result.skipped_lines == [3]
        assert "略過 1 筆" in result.message

    def test_category_inferred_without_column(self, fixed_now):
        text = encode(["ID", "社區名稱"], [["1", "Oak Gardens"], ["2", ""]])
        result = import_csv(text, now=fixed_now)
        assert isinstance(result.records[0], CommunityRecord)
        assert isinstance(result.records[1], GeneralRecord)

    def test_unknown_category_inferred(self, fixed_now):
        text = encode(["ID", "物件類別", "獲選的原因"], [["1", "???", "安靜"]])
        assert isinstance(import_csv(text, now=fixed_now).records[0], CommunityRecord)

    def test_missing_id_and_timestamp(self, fixed_now):
        text = encode(["ID", "時間", "物件名稱"], [["", "", "甲"], ["abc", "", "乙"]])
        result = import_csv(text, now=fixed_now)
        ids = [r.id for r in result.records]
        assert len(set(ids)) == 2
        assert ids[0] == int(fixed_now.timestamp() * 1000)
        assert result.records[0].timestamp == "2025/06/01 14:03:05"

    def test_colliding_ids_rekeyed(self, fixed_now):
        text = encode(["ID", "物件名稱"], [["1", "甲"], ["2", "乙"], ["2", "丙"]])
        result = import_csv(text, existing_ids={1}, now=fixed_now)
        ids = [r.id for r in result.records]

        assert len(result.records) == 3
        assert len(set(ids) | {1}) == 4
        assert ids[1] == 2
        assert [(old, line) for line, old, _ in result.rekeyed] == [(1, 2), (2, 4)]

    def test_repeated_collisions_all_reported(self, fixed_now):
        text = encode(["ID", "物件名稱"], [["2", "甲"], ["2", "乙"], ["2", "丙"]])
        result = import_csv(text, existing_ids={2}, now=fixed_now)
        ids = [r.id for r in result.records]

        assert len(set(ids) | {2}) == 4
        assert [old for _, old, _ in result.rekeyed] == [2, 2, 2]
        assert [new for _, _, new in result.rekeyed] == ids
        assert "3 筆記錄 ID 重複" in result.message

    def test_unknown_headers_ignored(self, fixed_now):
        text = encode(["ID", "備用欄位", "地址"], [["1", "x", "台北"]])
        result = import_csv(text, now=fixed_now)
        assert result.ignored_headers == ["備用欄位"]
        assert result.records[0].form_data.address == "台北"

    def test_bad_numeric_field_absorbed(self, fixed_now):
        text = encode(["ID", "權狀坪數", "總價(萬)"], [["1", "四十", "2000"]])
        record = import_csv(text, now=fixed_now).records[0]
        assert record.form_data.total_ping == ""
        assert record.form_data.total_amount == "2000"

    def test_derived_values_carried(self, fixed_now):
        text = encode(["ID", "單坪價格(萬)", "物件評分"], [["1", "12.5", "9"]])
        form = import_csv(text, now=fixed_now).records[0].form_data
        assert form.unit_price == 12.5
        assert form.total_rating == 9

    def test_community_row_drops_general_values(self, fixed_now):
        text = encode(["ID", "物件類別", "社區名稱", "權狀坪數"], [["1", "指定社區", "Oak", "40"]])
        record = import_csv(text, now=fixed_now).records[0]
        assert isinstance(record, CommunityRecord)
        assert record.form_data.community_name == "Oak"

    def test_empty_file(self):
        with pytest.raises(UnparseableFileError):
            import_csv("")

    def test_header_only(self):
        result = import_csv('"ID","地址"')
        assert result.records == []


class TestReadImportFile:
    """Tests for read_import_file function."""

    def test_utf8_with_bom(self, tmp_path):
        path = tmp_path / "in.csv"
        path.write_bytes("\ufeff\"ID\"".encode("utf-8"))
        assert read_import_file(path) == '"ID"'

    def test_not_utf8(self, tmp_path):
        path = tmp_path / "in.csv"
        path.write_bytes("物件".encode("big5"))
        with pytest.raises(UnparseableFileError):
            read_import_file(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(UnparseableFileError):
            read_import_file(tmp_path / "missing.csv")
