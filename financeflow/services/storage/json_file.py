"""
JSON File Storage Implementation

DESIGN DECISION: A single JSON file is used as the on-disk store because:
1. It mirrors the browser local storage model (flat string keys, string values)
2. No database setup required
3. Users can inspect or back up their data by copying one file

TRADEOFFS:
- The whole file is rewritten on every mutation (fine for personal use)
- No locking; one session per file

Values are stored as strings, exactly as the repositories hand them over.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Optional

from financeflow.services.storage.interface import (
    CorruptDataError,
    KeyValueStore,
    StorageError,
)


class JsonFileStore(KeyValueStore):
    """
    Key-value store persisted to a JSON object on disk.
    
    The file is read lazily on first access and cached; every write
    replaces the file atomically via a temp file + rename.
    """
    
    def __init__(self, path: Path | str):
        self._path = Path(path)
        self._data: Optional[dict[str, str]] = None
    
    @property
    def path(self) -> Path:
        return self._path
    
    def _load(self) -> dict[str, str]:
        if self._data is not None:
            return self._data
        
        if not self._path.exists():
            self._data = {}
            return self._data
        
        try:
            raw = self._path.read_text(encoding="utf-8")
        except OSError as e:
            raise StorageError(f"Failed to read store file {self._path}: {e}")
        
        if not raw.strip():
            self._data = {}
            return self._data
        
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise CorruptDataError(str(self._path), str(e))
        
        if not isinstance(data, dict) or not all(
            isinstance(k, str) and isinstance(v, str) for k, v in data.items()
        ):
            raise CorruptDataError(
                str(self._path), "expected a JSON object of string values"
            )
        
        self._data = data
        return self._data
    
    def _flush(self, data: dict[str, str]) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self._path.parent,
                prefix=f".{self._path.name}.",
                suffix=".tmp",
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    json.dump(data, fh, ensure_ascii=False, indent=2)
                os.replace(tmp_name, self._path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise StorageError(f"Failed to write store file {self._path}: {e}")
    
    def get(self, key: str) -> Optional[str]:
        return self._load().get(key)
    
    def set(self, key: str, value: str) -> None:
        data = dict(self._load())
        data[key] = value
        self._flush(data)
        self._data = data
    
    def remove(self, key: str) -> None:
        data = dict(self._load())
        if data.pop(key, None) is None:
            return
        self._flush(data)
        self._data = data
