"""Key-value storage for offline queue persistence.

The queue stores its whole document under one key, so a store only needs
string get/set/delete. The protocol allows swapping in any durable backend.
"""

import os
import tempfile
from pathlib import Path
from typing import Dict, Optional, Protocol, Union

from offline_resilience.logging import get_module_logger

logger = get_module_logger()


class KeyValueStore(Protocol):
    """String key-value storage interface.

    Methods:
        get: Return the stored value or None
        set: Store a value, replacing any previous one
        delete: Remove a key; missing keys are ignored
    """

    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...


class InMemoryKeyValueStore:
    """Process-local store. Contents are lost when the process exits."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def __contains__(self, key: str) -> bool:
        return key in self._data


class FileKeyValueStore:
    """One file per key under a directory.

    Writes go to a temporary file in the same directory and are moved into
    place with os.replace, so a crash mid-write leaves the previous value
    intact.

    Attributes:
        directory: Directory holding the key files
    """

    def __init__(self, directory: Union[str, Path]) -> None:
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        if not key or "/" in key or "\\" in key or key in (".", ".."):
            raise ValueError(f"Invalid store key: {key!r}")
        return self.directory / f"{key}.json"

    def get(self, key: str) -> Optional[str]:
        path = self._path(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None

    def set(self, key: str, value: str) -> None:
        path = self._path(key)
        fd, tmp_name = tempfile.mkstemp(dir=self.directory, prefix=f".{key}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(value)
            os.replace(tmp_name, path)
        except OSError:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise
        logger.debug("key_value_store_written", key=key, path=str(path), size=len(value))

    def delete(self, key: str) -> None:
        try:
            self._path(key).unlink()
        except FileNotFoundError:
            pass
