"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract interface for the key-value store.
This allows us to:
1. Keep data in a JSON file for the Streamlit app
2. Use in-memory storage for testing
3. Keep repositories decoupled from where the bytes end up

The interface is intentionally tiny: string keys, string values,
get / set / remove. No transactions, no locking. One session writes
to a store at a time.
"""

from abc import ABC, abstractmethod
from typing import Optional


class KeyValueStore(ABC):
    """
    Abstract interface for a synchronous string key-value store.
    
    Any storage implementation (JSON file, process memory, etc.)
    must implement these methods.
    """
    
    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """
        Read the value stored under a key.
        
        Args:
            key: The key to read
            
        Returns:
            The stored string, or None if the key is absent
            
        Raises:
            StorageError: If the backend cannot be read
        """
        pass
    
    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """
        Store a value under a key, replacing any previous value.
        
        Args:
            key: The key to write
            value: The string to store
            
        Raises:
            StorageError: If the write fails
        """
        pass
    
    @abstractmethod
    def remove(self, key: str) -> None:
        """
        Delete a key. Removing an absent key is a no-op.
        
        Raises:
            StorageError: If the write fails
        """
        pass
    
    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class CorruptDataError(StorageError):
    """Stored data exists but cannot be parsed."""
    
    def __init__(self, key: str, message: str):
        self.key = key
        super().__init__(f"Stored '{key}' is corrupt: {message}")


class DuplicateError(StorageError):
    """Attempted to store a duplicate entity."""
    pass
