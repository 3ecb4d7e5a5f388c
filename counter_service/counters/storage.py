"""Durable JSON file storage for counter values.

Each counter name owns exactly one file under the storage directory. The file
name is the SHA-256 digest of the counter name and the document records the
name alongside the value so a load can confirm it read the right entry.
"""

from __future__ import annotations

import asyncio
import contextlib
import hashlib
import json
import os
from pathlib import Path

from counter_service.counters.errors import StorageUnavailable


class JsonCounterStorage:
    """Read and atomically replace one JSON document per counter name."""

    def __init__(self, directory: Path, *, fsync: bool = True) -> None:
        self.directory = Path(directory)
        self.fsync = fsync

    def key_for(self, name: str) -> str:
        return hashlib.sha256(name.encode("utf-8")).hexdigest()

    def path_for(self, name: str) -> Path:
        return self.directory / f"{self.key_for(name)}.json"

    def load(self, name: str) -> int | None:
        """Return the persisted value for ``name`` or ``None`` if never written."""

        path = self.path_for(name)
        try:
            raw = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except UnicodeDecodeError as exc:
            raise StorageUnavailable(name, "corrupt counter record") from exc
        except OSError as exc:
            raise StorageUnavailable(name, str(exc)) from exc

        try:
            record = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise StorageUnavailable(name, "corrupt counter record") from exc

        if not isinstance(record, dict) or record.get("name") != name:
            raise StorageUnavailable(name, "counter record does not match name")
        value = record.get("value")
        if isinstance(value, bool) or not isinstance(value, int):
            raise StorageUnavailable(name, "counter record holds a non-integer value")
        return value

    def save(self, name: str, value: int) -> None:
        """Persist ``value`` for ``name``; the previous file survives any failure."""

        path = self.path_for(name)
        tmp_path = path.with_suffix(".tmp")
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            with tmp_path.open("w", encoding="utf-8") as handle:
                json.dump({"name": name, "value": value}, handle)
                handle.flush()
                if self.fsync:
                    os.fsync(handle.fileno())
            os.replace(tmp_path, path)
        except OSError as exc:
            with contextlib.suppress(OSError):
                tmp_path.unlink(missing_ok=True)
            raise StorageUnavailable(name, str(exc)) from exc

    async def get(self, name: str) -> int | None:
        return await asyncio.to_thread(self.load, name)

    async def put(self, name: str, value: int) -> None:
        await asyncio.to_thread(self.save, name, value)
