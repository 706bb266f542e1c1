# src/taskdesk/auth/session_storage.py

from __future__ import annotations

import contextlib
import logging
import os
import re
from pathlib import Path

logger = logging.getLogger(__name__)

_SAFE_KEY = re.compile(r"^[A-Za-z0-9_.-]+$")


class FileSessionStorage:
    """
    One file per key under a local (gitignored) directory.

    The value is stored verbatim. Writes go through a temp file + os.replace
    so a crash never leaves a half-written session behind, and the file is
    made private because it holds the auth token.
    """

    def __init__(self, directory: str | Path) -> None:
        self._dir = Path(directory)

    def _path(self, key: str) -> Path:
        if not _SAFE_KEY.match(key):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self._dir / f"{key}.json"

    def get(self, key: str) -> str | None:
        path = self._path(key)
        try:
            return path.read_text("utf-8")
        except FileNotFoundError:
            return None

    def set(self, key: str, value: str) -> None:
        path = self._path(key)
        self._dir.mkdir(parents=True, exist_ok=True)
        tmp = path.with_suffix(".tmp")
        tmp.write_text(value, "utf-8")
        os.replace(tmp, path)
        with contextlib.suppress(OSError):
            # Best-effort: not critical on Windows or restricted FS.
            os.chmod(path, 0o600)
        logger.debug("Session storage: wrote key=%s path=%s", key, path)

    def remove(self, key: str) -> None:
        path = self._path(key)
        try:
            path.unlink()
            logger.debug("Session storage: removed key=%s", key)
        except FileNotFoundError:
            pass


class MemorySessionStorage:
    """In-process storage for tests and throwaway runs."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)
