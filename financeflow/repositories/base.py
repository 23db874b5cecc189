"""
Shared helpers for store-backed repositories.

Each repository keeps its records as one JSON array under a single
store key. These helpers own the JSON codec and the error mapping so
both repositories fail the same way.
"""

from typing import Optional, TypeVar

from pydantic import TypeAdapter, ValidationError

from financeflow.audit import AuditLogger
from financeflow.services.storage import CorruptDataError, KeyValueStore, StorageError

T = TypeVar("T")


def read_records(
    store: KeyValueStore,
    key: str,
    adapter: TypeAdapter[list[T]],
    audit_logger: Optional[AuditLogger] = None,
) -> Optional[list[T]]:
    """
    Read and parse the array stored under `key`.

    Returns None when the key is absent.

    Raises:
        CorruptDataError: If the stored value is not a valid array of records
    """
    raw = store.get(key)
    if raw is None:
        return None

    try:
        return adapter.validate_json(raw)
    except ValidationError as e:
        if audit_logger:
            audit_logger.log_corrupt_data(key, str(e))
        raise CorruptDataError(key, str(e)) from e


def write_records(
    store: KeyValueStore,
    key: str,
    adapter: TypeAdapter[list[T]],
    records: list[T],
    audit_logger: Optional[AuditLogger] = None,
) -> None:
    """
    Serialize and store `records` under `key`.

    Raises:
        StorageError: If the store write fails
    """
    payload = adapter.dump_json(records).decode("utf-8")
    try:
        store.set(key, payload)
    except StorageError as e:
        if audit_logger:
            audit_logger.log_storage_error("set", key, str(e))
        raise
