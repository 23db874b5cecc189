"""Services package."""

from financeflow.services.auth import AuthService
from financeflow.services.storage import (
    CorruptDataError,
    DuplicateError,
    InMemoryStore,
    JsonFileStore,
    KeyValueStore,
    StorageError,
)

__all__ = [
    # Session
    "AuthService",
    # Storage services
    "CorruptDataError",
    "DuplicateError",
    "InMemoryStore",
    "JsonFileStore",
    "KeyValueStore",
    "StorageError",
]
