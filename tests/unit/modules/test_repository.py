"""
Unit tests for src/modules/records/repository.py
"""

import json

import pytest

from src.connections.storage import KeyValueStore, MemoryStore
from src.errors import PersistenceError, RecordNotFoundError
from src.modules.records.models import CommunityRecord, GeneralProperty, GeneralRecord
from src.modules.records.repository import RecordStore


class FailingStore(KeyValueStore):
    """Store whose writes always fail."""

    def get(self, key):
        return None

    def set(self, key, value):
        raise PersistenceError("quota exceeded")


class TestAdd:
    """Tests for RecordStore.add."""

    def test_add_general(self, record_store, general_form_data, fixed_now):
        form = GeneralProperty.model_validate(general_form_data)
        record = record_store.add("general", form, now=fixed_now)

        assert isinstance(record, GeneralRecord)
        assert record.id == int(fixed_now.timestamp() * 1000)
        assert record.timestamp == "2025/06/01 14:03:05"
        assert record.form_data.unit_price == 50.0
        assert record.form_data.total_rating == 16
        assert len(record_store) == 1

    def test_add_persists(self, record_store, memory_storage, community_form):
        record_store.add("community", community_form)
        stored = json.loads(memory_storage.get("savedRecords"))
        assert stored[0]["category"] == "community"
        assert stored[0]["formData"]["communityName"] == "Oak Gardens"

    def test_ids_unique_for_same_instant(self, record_store, community_form, fixed_now):
        first = record_store.add("community", community_form, now=fixed_now)
        second = record_store.add("community", community_form, now=fixed_now)
        assert first.id != second.id

    def test_category_mismatch(self, record_store, community_form):
        with pytest.raises(ValueError):
            record_store.add("general", community_form)


class TestUpdateDelete:
    """Tests for RecordStore.update / delete."""

    def test_update_keeps_id_and_category(self, record_store, general_form, fixed_now):
        record = record_store.add("general", general_form, now=fixed_now)
        form = general_form.model_copy(update={"total_amount": "2400"})
        updated = record_store.update(record.id, form)

        assert updated.id == record.id
        assert updated.category == "general"
        assert updated.form_data.unit_price == 60.0
        assert record_store.get(record.id) == updated

    def test_update_wrong_variant(self, record_store, general_form, community_form):
        record = record_store.add("general", general_form)
        with pytest.raises(ValueError):
            record_store.update(record.id, community_form)

    def test_update_missing(self, record_store, general_form):
        with pytest.raises(RecordNotFoundError):
            record_store.update(1, general_form)

    def test_delete(self, record_store, community_form, memory_storage):
        record = record_store.add("community", community_form)
        record_store.delete(record.id)
        assert len(record_store) == 0
        assert json.loads(memory_storage.get("savedRecords")) == []

    def test_delete_missing(self, record_store):
        with pytest.raises(RecordNotFoundError):
            record_store.delete(42)


class TestLoad:
    """Tests for RecordStore.load."""

    def test_round_trip(self, memory_storage, sample_records):
        store = RecordStore(memory_storage)
        store.append(sample_records)

        reloaded = RecordStore(memory_storage)
        assert reloaded.load() == sample_records

    def test_empty(self, record_store):
        assert record_store.load() == []

    def test_corrupt_json(self):
        store = RecordStore(MemoryStore({"savedRecords": "{not json"}))
        assert store.load() == []

    def test_not_a_list(self):
        store = RecordStore(MemoryStore({"savedRecords": '{"a": 1}'}))
        assert store.load() == []

    def test_legacy_entries_resolved(self):
        entries = [
            {"id": "1", "timestamp": "t", "formData": {"communityName": "Oak"}},
            {"id": 2, "timestamp": "t", "formData": {"totalAmount": "1000", "totalPing": "50"}},
            "garbage",
        ]
        store = RecordStore(MemoryStore({"savedRecords": json.dumps(entries)}))
        records = store.load()

        assert len(records) == 2
        assert isinstance(records[0], CommunityRecord)
        assert isinstance(records[1], GeneralRecord)

    def test_derived_recomputed_on_load(self):
        entries = [
            {
                "id": 1,
                "category": "general",
                "formData": {"totalAmount": "1000", "totalPing": "50", "unitPrice": 999},
            }
        ]
        store = RecordStore(MemoryStore({"savedRecords": json.dumps(entries)}))
        assert store.load()[0].form_data.unit_price == 20.0

    def test_custom_key(self, memory_storage, community_form):
        store = RecordStore(memory_storage, key="other")
        store.add("community", community_form)
        assert memory_storage.get("savedRecords") is None
        assert memory_storage.get("other")


class TestAppendReplace:
    """Tests for RecordStore.append / replace_all."""

    def test_append_keeps_existing(self, record_store, general_record, community_record):
        record_store.append([general_record])
        record_store.append([community_record])
        assert record_store.records == [general_record, community_record]

    def test_append_recomputes(self, record_store, general_record):
        stale = general_record.model_copy(
            update={"form_data": general_record.form_data.model_copy(update={"unit_price": 1.0})}
        )
        record_store.append([stale])
        assert record_store.records[0].form_data.unit_price == 50.0

    def test_replace_all(self, record_store, general_record, community_record):
        record_store.append([general_record])
        count = record_store.replace_all([community_record])
        assert count == 1
        assert record_store.records == [community_record]


class TestPersistenceFailure:
    """Tests for write failures."""

    def test_failure_propagates_without_rollback(self, community_form):
        store = RecordStore(FailingStore())
        with pytest.raises(PersistenceError):
            store.add("community", community_form)
        assert len(store) == 1
