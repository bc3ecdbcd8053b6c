"""Key/value persistence backends.

The record store never touches a storage medium directly; it is handed
one of these objects. Both expose the same two operations the browser's
local storage offers: read a string by key and write a string by key.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Protocol

from rfp_desk.utils.logging import LoggerMixin


class KeyValueStorage(Protocol):
    """Minimal get/set-by-key persistence medium."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


class InMemoryStorage:
    """Process-local storage, used by tests and throwaway sessions."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._data)


class JSONFileStorage(LoggerMixin):
    """Key/value namespace kept in a single JSON object on disk.

    Every ``set`` rewrites the whole file through a temporary file and an
    atomic rename, so a crash mid-write leaves the previous contents.
    """

    def __init__(self, path: Path):
        self._path = Path(path)
        self._path.parent.mkdir(parents=True, exist_ok=True)

    @property
    def path(self) -> Path:
        return self._path

    def _read_all(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            self.log_warning("Storage file unreadable, treating as empty", path=str(self._path), error=str(e))
            return {}
        if not isinstance(data, dict):
            self.log_warning("Storage file is not a key/value object", path=str(self._path))
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _write_all(self, data: dict[str, str]) -> None:
        fd, tmp_name = tempfile.mkstemp(dir=self._path.parent, prefix=".rfp-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False)
            os.replace(tmp_name, self._path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def get(self, key: str) -> str | None:
        return self._read_all().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value
        self._write_all(data)
        self.log_debug("Storage key written", key=key, size=len(value))

    def remove(self, key: str) -> None:
        data = self._read_all()
        if data.pop(key, None) is not None:
            self._write_all(data)
