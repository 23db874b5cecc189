"""
Storage Services Package

Provides the abstract key-value interface and its implementations.
The Streamlit app uses the JSON file store; tests use the in-memory one.
"""

from financeflow.services.storage.interface import (
    CorruptDataError,
    DuplicateError,
    KeyValueStore,
    StorageError,
)
from financeflow.services.storage.memory import InMemoryStore
from financeflow.services.storage.json_file import JsonFileStore

__all__ = [
    # Interface
    "KeyValueStore",
    # Exceptions
    "CorruptDataError",
    "DuplicateError",
    "StorageError",
    # Implementations
    "InMemoryStore",
    "JsonFileStore",
]
