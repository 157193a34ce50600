"""Key-value persistence backends for client-side state.

The recent-history cache only needs ``read(key)`` and ``write(key, data)``;
anything satisfying :class:`KeyValueStorage` can be injected.
"""

import os
import re
from pathlib import Path
from typing import Protocol

from simple_explain.utils.logger import get_logger

logger = get_logger(__name__)


class KeyValueStorage(Protocol):
    """Durable key-value persistence service."""

    def read(self, key: str) -> bytes | None:
        """Return the stored bytes, or None when the key is absent."""
        ...

    def write(self, key: str, data: bytes) -> bool:
        """Persist ``data`` under ``key``. Returns False when the write failed."""
        ...


class InMemoryStorage:
    """Dict-backed storage, optionally limited to ``quota_bytes`` in total."""

    def __init__(self, quota_bytes: int | None = None):
        self.quota_bytes = quota_bytes
        self._data: dict[str, bytes] = {}

    def read(self, key: str) -> bytes | None:
        return self._data.get(key)

    def write(self, key: str, data: bytes) -> bool:
        if self.quota_bytes is not None:
            used = sum(len(v) for k, v in self._data.items() if k != key)
            if used + len(data) > self.quota_bytes:
                logger.warning(
                    "Storage quota exceeded",
                    key=key,
                    size=len(data),
                    quota=self.quota_bytes,
                )
                return False
        self._data[key] = bytes(data)
        return True


class FileStorage:
    """Stores each key as a file under ``directory``."""

    _UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]")

    def __init__(self, directory: str | os.PathLike):
        self.directory = Path(directory)

    def _path_for(self, key: str) -> Path:
        return self.directory / f"{self._UNSAFE_CHARS.sub('_', key)}.json"

    def read(self, key: str) -> bytes | None:
        path = self._path_for(key)
        try:
            return path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as e:
            logger.warning("Failed to read storage file", path=str(path), error=str(e))
            return None

    def write(self, key: str, data: bytes) -> bool:
        path = self._path_for(key)
        tmp_path = path.with_suffix(".tmp")
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            tmp_path.write_bytes(data)
            os.replace(tmp_path, path)
            return True
        except OSError as e:
            logger.warning("Failed to write storage file", path=str(path), error=str(e))
            return False
