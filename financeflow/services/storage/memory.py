"""
In-Memory Storage Implementation

Keeps everything in a dict for the lifetime of the process.
Used by the test suite and by the 'memory' storage backend.
"""

from typing import Optional

from financeflow.services.storage.interface import KeyValueStore


class InMemoryStore(KeyValueStore):
    """Key-value store backed by a plain dict."""
    
    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._data: dict[str, str] = dict(initial or {})
    
    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)
    
    def set(self, key: str, value: str) -> None:
        self._data[key] = value
    
    def remove(self, key: str) -> None:
        self._data.pop(key, None)
    
    def snapshot(self) -> dict[str, str]:
        """Copy of the current contents."""
        return dict(self._data)
