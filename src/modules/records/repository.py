"""
Record Repository.

Application state for saved records, written through to a key-value store
after every change.
"""

import json
from datetime import datetime
from typing import Iterable, Optional, Union

from loguru import logger

from src.connections.storage import KeyValueStore
from src.errors import RecordNotFoundError
from src.modules.records.models import (
    RECORD_LIST_ADAPTER,
    CommunityRecord,
    FormData,
    GeneralProperty,
    GeneralRecord,
    format_timestamp,
    make_record,
    new_record_id,
)
from src.modules.records.resolver import resolve_record
from src.utils.calculators import recalculate

records_log = logger.bind(module="Records")

AnyRecord = Union[GeneralRecord, CommunityRecord]


def refresh_derived(record: AnyRecord) -> AnyRecord:
    """Return the record with derived fields recomputed (general records only)."""
    if isinstance(record, GeneralRecord):
        return record.model_copy(update={"form_data": recalculate(record.form_data)})
    return record


def prepare_form(form: FormData) -> FormData:
    """Recompute derived fields of a form before it is stored."""
    if isinstance(form, GeneralProperty):
        return recalculate(form)
    return form


class RecordStore:
    """In-memory record list persisted as one JSON entry."""

    DEFAULT_KEY = "savedRecords"

    def __init__(self, storage: KeyValueStore, key: str = DEFAULT_KEY):
        """
        Initialize store.

        Args:
            storage: Key-value persistence collaborator
            key: Storage key holding the serialized record list
        """
        self._storage = storage
        self._key = key
        self._records: list[AnyRecord] = []

    @property
    def records(self) -> list[AnyRecord]:
        """Current records (copy of the list)."""
        return list(self._records)

    @property
    def ids(self) -> set[int]:
        return {record.id for record in self._records}

    def __len__(self) -> int:
        return len(self._records)

    def load(self) -> list[AnyRecord]:
        """
        Load records from storage.

        Unreadable content starts an empty list. Entries are resolved
        through the category resolver and derived fields are recomputed.

        Returns:
            Loaded records
        """
        raw = self._storage.get(self._key)
        self._records = []
        if not raw:
            return self.records

        try:
            entries = json.loads(raw)
        except ValueError as e:
            records_log.error(f"Error parsing saved records: {e}")
            return self.records

        if not isinstance(entries, list):
            records_log.error("Error parsing saved records: not a list")
            return self.records

        for index, entry in enumerate(entries):
            if not isinstance(entry, dict):
                records_log.warning(f"Skipping stored entry {index}: not an object")
                continue
            record = resolve_record(entry, fallback_id=new_record_id(self.ids))
            self._records.append(refresh_derived(record))

        records_log.info(f"Loaded {len(self._records)} records")
        return self.records

    def save(self) -> None:
        """
        Write all records to storage.

        Raises:
            PersistenceError: write failed (in-memory state is kept)
        """
        payload = RECORD_LIST_ADAPTER.dump_json(self._records, by_alias=True)
        self._storage.set(self._key, payload.decode("utf-8"))

    def get(self, record_id: int) -> AnyRecord:
        """
        Get a record by id.

        Raises:
            RecordNotFoundError: no such record
        """
        for record in self._records:
            if record.id == record_id:
                return record
        raise RecordNotFoundError(record_id)

    def add(
        self,
        category: str,
        form: FormData,
        now: Optional[datetime] = None,
    ) -> AnyRecord:
        """
        Create a record from a submitted form.

        Args:
            category: "general" or "community"
            form: Form data matching the category
            now: Creation time (defaults to current time)

        Returns:
            The new record
        """
        record = make_record(
            category,
            new_record_id(self.ids, now),
            format_timestamp(now),
            prepare_form(form),
        )
        self._records.append(record)
        records_log.info(f"Added {category} record {record.id}")
        self.save()
        return record

    def update(
        self,
        record_id: int,
        form: FormData,
        now: Optional[datetime] = None,
    ) -> AnyRecord:
        """
        Replace a record's form data (same id and category, new timestamp).

        Raises:
            RecordNotFoundError: no such record
            ValueError: form does not match the record's category
        """
        current = self.get(record_id)
        record = make_record(
            current.category,
            current.id,
            format_timestamp(now),
            prepare_form(form),
        )
        self._records = [record if r.id == record_id else r for r in self._records]
        records_log.info(f"Updated record {record_id}")
        self.save()
        return record

    def delete(self, record_id: int) -> AnyRecord:
        """
        Delete a record.

        Raises:
            RecordNotFoundError: no such record
        """
        record = self.get(record_id)
        self._records = [r for r in self._records if r.id != record_id]
        records_log.info(f"Deleted record {record_id}")
        self.save()
        return record

    def append(self, records: Iterable[AnyRecord]) -> int:
        """
        Append imported records (CSV import), recomputing derived fields.

        Returns:
            Number of records appended
        """
        added = [refresh_derived(record) for record in records]
        self._records.extend(added)
        records_log.info(f"Appended {len(added)} records")
        self.save()
        return len(added)

    def replace_all(self, records: Iterable[AnyRecord]) -> int:
        """
        Replace every record (JSON backup restore).

        Returns:
            Number of records after replacement
        """
        self._records = [refresh_derived(record) for record in records]
        records_log.info(f"Replaced store with {len(self._records)} records")
        self.save()
        return len(self._records)
