"""Key-Value Stores - Imperative Shell.

This module provides whole-value get/set persistence for engine state.
Every store absorbs its own I/O failures: set() reports them as False and
get() as None, after logging.
"""

import asyncio
import copy
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Protocol


logger = logging.getLogger(__name__)


# Logical storage keys
KEY_LOCATION = "@user_location"
KEY_INTERESTED = "@interested_events"
KEY_NOT_INTERESTED = "@not_interested_events"
KEY_PREFS = "@user_prefs"


class KeyValueStore(Protocol):
    """Durable key-value storage used by the engine."""

    async def get(self, key: str) -> Any | None:
        ...

    async def set(self, key: str, value: Any) -> bool:
        ...


class MemoryStore:
    """Dict-backed store for tests and ephemeral sessions."""

    def __init__(self, initial: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = copy.deepcopy(initial or {})

    async def get(self, key: str) -> Any | None:
        return copy.deepcopy(self._data.get(key))

    async def set(self, key: str, value: Any) -> bool:
        self._data[key] = copy.deepcopy(value)
        return True


class JsonFileStore:
    """Store that keeps each key in its own JSON file.

    Writes go to a temporary file in the same directory and are moved into
    place with os.replace, so a key is never left half-written.
    """

    def __init__(self, directory: str | Path) -> None:
        """Initialize file store.

        Args:
            directory: Directory holding one file per key (created on demand)
        """
        self.directory = Path(directory)

    def _path_for(self, key: str) -> Path:
        safe = "".join(c if c.isalnum() or c in "-_" else "_" for c in key.lstrip("@"))
        return self.directory / f"{safe}.json"

    def _read(self, key: str) -> Any | None:
        path = self._path_for(key)
        if not path.exists():
            return None
        return json.loads(path.read_text(encoding="utf-8"))

    def _write(self, key: str, value: Any) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self._path_for(key)
        fd, tmp_name = tempfile.mkstemp(dir=self.directory, prefix=f".{path.stem}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(value, f)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    async def get(self, key: str) -> Any | None:
        """Read a value.

        This method performs file I/O.

        Returns:
            Stored value, or None if missing or unreadable
        """
        try:
            return await asyncio.to_thread(self._read, key)
        except (OSError, ValueError) as e:
            logger.error("Failed to read %s from %s: %s", key, self.directory, str(e))
            return None

    async def set(self, key: str, value: Any) -> bool:
        """Replace a value.

        This method performs file I/O.

        Returns:
            True if the write was successful
        """
        try:
            await asyncio.to_thread(self._write, key, value)
            return True
        except (OSError, TypeError, ValueError) as e:
            logger.error("Failed to write %s to %s: %s", key, self.directory, str(e))
            return False
