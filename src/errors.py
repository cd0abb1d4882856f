"""
Error types for the record layer.

Row-level and field-level problems are absorbed (skipped rows, None/"" values);
only file-level and persistence problems surface as exceptions.
"""


class RecordError(Exception):
    """Base class for record layer errors with a user-facing message."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UnparseableFileError(RecordError):
    """Import file cannot be decoded as text or has no usable lines."""


class PersistenceError(RecordError):
    """Writing the record list to the key-value store failed."""


class RecordNotFoundError(RecordError):
    """No record with the requested id exists in the store."""

    def __init__(self, record_id: int):
        super().__init__(f"找不到記錄 (ID={record_id})")
        self.record_id = record_id
