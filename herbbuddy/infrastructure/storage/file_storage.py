"""Single-document JSON file storage with atomic writes."""

from __future__ import annotations

import asyncio
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

import aiofiles
import aiofiles.os

from herbbuddy.domain.exceptions import KeyValueStorageError

logger = logging.getLogger(__name__)


class FileKeyValueStorage:
    """Durable key-value storage kept in one JSON object on disk.

    The document is loaded on first access and rewritten on every
    mutation through a temp file + rename, so a crash mid-write leaves
    the previous document intact. All access is serialized by an
    asyncio.Lock.
    """

    def __init__(self, path: str | Path) -> None:
        """Initialize file storage.

        Args:
            path: Location of the JSON document; parent directories are
                created on first write.
        """
        self.path = Path(path).expanduser().resolve()
        self._rows: dict[str, str] | None = None
        self._lock = asyncio.Lock()

    async def _load(self) -> dict[str, str]:
        """Return the in-memory rows, reading the document on first use.

        A document that is not valid JSON, or not a string map, is moved
        aside to ``<name>.corrupt`` and the storage starts empty.
        """
        if self._rows is not None:
            return self._rows
        if not await aiofiles.os.path.exists(self.path):
            self._rows = {}
            return self._rows
        try:
            async with aiofiles.open(self.path, "r", encoding="utf-8") as f:
                content = await f.read()
        except OSError as e:
            raise KeyValueStorageError("load", None, str(e)) from e
        try:
            data: Any = json.loads(content) if content.strip() else {}
        except json.JSONDecodeError as e:
            return await self._quarantine(f"corrupt document: {e}")
        if not isinstance(data, dict) or not all(
            isinstance(v, str) for v in data.values()
        ):
            return await self._quarantine("document is not a string map")
        self._rows = data
        return self._rows

    async def _quarantine(self, reason: str) -> dict[str, str]:
        """Move the unreadable document aside and start from empty rows."""
        aside = self.path.with_name(self.path.name + ".corrupt")
        logger.warning("Discarding cache document %s (%s); kept as %s", self.path, reason, aside)
        try:
            await aiofiles.os.replace(self.path, aside)
        except OSError as e:
            raise KeyValueStorageError("load", None, f"{reason}; move aside failed: {e}") from e
        self._rows = {}
        return self._rows

    async def _flush(self, rows: dict[str, str], operation: str, key: str | None) -> None:
        """Atomically replace the document with rows."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True, mode=0o750)
            temp_fd, temp_path = tempfile.mkstemp(
                dir=self.path.parent,
                prefix=".tmp_",
                suffix=self.path.suffix,
            )
            os.close(temp_fd)
            try:
                async with aiofiles.open(temp_path, "w", encoding="utf-8") as f:
                    await f.write(json.dumps(rows, ensure_ascii=False))
                os.replace(temp_path, self.path)
            finally:
                if Path(temp_path).exists():
                    os.unlink(temp_path)
        except OSError as e:
            raise KeyValueStorageError(operation, key, str(e)) from e

    async def get(self, full_key: str) -> str | None:
        async with self._lock:
            rows = await self._load()
            return rows.get(full_key)

    async def set(self, full_key: str, value: str) -> None:
        async with self._lock:
            rows = await self._load()
            updated = {**rows, full_key: value}
            await self._flush(updated, "set", full_key)
            self._rows = updated

    async def remove(self, full_key: str) -> None:
        await self.remove_many([full_key])

    async def remove_many(self, full_keys: list[str]) -> None:
        async with self._lock:
            rows = await self._load()
            if not any(k in rows for k in full_keys):
                return
            updated = {k: v for k, v in rows.items() if k not in full_keys}
            key = full_keys[0] if len(full_keys) == 1 else None
            await self._flush(updated, "remove", key)
            self._rows = updated

    async def close(self) -> None:
        self._rows = None
