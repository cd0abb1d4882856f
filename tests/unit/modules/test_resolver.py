"""
Unit tests for src/modules/records/resolver.py
"""

import pytest

from src.modules.records.models import (
    CommunityListing,
    CommunityRecord,
    GeneralProperty,
    GeneralRecord,
)
from src.modules.records.resolver import (
    build_form_data,
    infer_category,
    resolve_category,
    resolve_record,
)


class TestInferCategory:
    """Tests for infer_category function."""

    def test_community_name(self):
        assert infer_category({"communityName": "Oak Gardens"}) == "community"

    def test_reason(self):
        assert infer_category({"reason": "近學校"}) == "community"

    def test_blank_community_fields(self):
        assert infer_category({"communityName": "", "reason": "  "}) == "general"

    def test_no_community_fields(self):
        assert infer_category({"propertyName": "信義之星", "area": "台北市"}) == "general"

    def test_empty(self):
        assert infer_category({}) == "general"


class TestResolveCategory:
    """Tests for resolve_category function."""

    def test_explicit_tag_wins(self):
        assert resolve_category("general", {"communityName": "x"}) == "general"

    def test_chinese_tag(self):
        assert resolve_category("指定社區", {}) == "community"

    def test_missing_tag_inferred(self):
        assert resolve_category(None, {"communityName": "Oak Gardens"}) == "community"

    def test_unknown_tag_inferred(self):
        assert resolve_category("villa", {}) == "general"


class TestBuildFormData:
    """Tests for build_form_data function."""

    def test_missing_fields_defaulted(self):
        form = build_form_data("general", {"propertyName": "信義之星"})
        assert isinstance(form, GeneralProperty)
        assert form.property_name == "信義之星"
        assert form.total_ping == ""
        assert form.unit_price is None

    def test_foreign_fields_dropped(self):
        form = build_form_data("community", {"communityName": "Oak", "totalPing": "40"})
        assert isinstance(form, CommunityListing)
        assert form.community_name == "Oak"

    def test_numbers_accepted(self):
        form = build_form_data("general", {"totalPing": 40.0, "unitPrice": 50.0})
        assert form.total_ping == "40"
        assert form.unit_price == 50.0

    def test_odd_values_stringified(self):
        form = build_form_data("community", {"reason": ["a", "b"], "address": True})
        assert form.reason == "['a', 'b']"
        assert form.address == "True"


class TestResolveRecord:
    """Tests for resolve_record function."""

    def test_current_shape(self, general_record):
        assert resolve_record(general_record.to_dict()) == general_record

    def test_legacy_object_category_key(self):
        record = resolve_record(
            {
                "id": 5,
                "timestamp": "t",
                "objectCategory": "community",
                "formData": {"communityName": "Oak"},
            }
        )
        assert isinstance(record, CommunityRecord)

    def test_legacy_designated_type(self):
        record = resolve_record({"id": "1718000000000", "type": "designated", "formData": {}})
        assert isinstance(record, CommunityRecord)
        assert record.id == 1718000000000

    def test_missing_category_inferred(self):
        record = resolve_record({"id": 1, "formData": {"propertyName": "x"}})
        assert isinstance(record, GeneralRecord)
        assert record.timestamp == ""

    def test_missing_form_data(self):
        record = resolve_record({"id": 1, "category": "general"})
        assert record.form_data == GeneralProperty()

    def test_fallback_id(self):
        record = resolve_record({"id": "abc", "formData": {}}, fallback_id=99)
        assert record.id == 99

    def test_no_id(self):
        with pytest.raises(ValueError):
            resolve_record({"formData": {}})
