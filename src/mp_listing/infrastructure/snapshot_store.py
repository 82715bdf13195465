"""Snapshot stores — concrete implementations of SnapshotStoreProtocol.

Each store holds a single serialized snapshot. Backend failures surface as
PersistenceError so the facade can degrade gracefully.
"""

import asyncio
import logging
import os
from pathlib import Path

import redis.asyncio as aioredis
from redis.exceptions import RedisError

from src.mp_common.errors import PersistenceError

logger = logging.getLogger(__name__)


class InMemorySnapshotStore:
    """Process-local slot; useful for tests and ephemeral sessions."""

    def __init__(self, payload: str | None = None) -> None:
        self.payload = payload
        self.save_count = 0

    async def load(self) -> str | None:
        return self.payload

    async def save(self, payload: str) -> None:
        self.payload = payload
        self.save_count += 1


class JsonFileSnapshotStore:
    """Snapshot stored as a JSON file, replaced atomically on every save."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    async def load(self) -> str | None:
        return await asyncio.to_thread(self._read)

    async def save(self, payload: str) -> None:
        await asyncio.to_thread(self._write, payload)

    def _read(self) -> str | None:
        try:
            return self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as exc:
            raise PersistenceError(f"cannot read {self._path}: {exc}") from exc

    def _write(self, payload: str) -> None:
        tmp = self._path.with_name(self._path.name + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(payload, encoding="utf-8")
            os.replace(tmp, self._path)
        except OSError as exc:
            raise PersistenceError(f"cannot write {self._path}: {exc}") from exc


class RedisSnapshotStore:
    """Snapshot stored under a single Redis string key."""

    def __init__(self, client: aioredis.Redis, key: str = "marketplace-storage") -> None:
        self._client = client
        self._key = key

    async def load(self) -> str | None:
        try:
            return await self._client.get(self._key)
        except (RedisError, UnicodeDecodeError) as exc:
            raise PersistenceError(f"redis GET {self._key} failed: {exc}") from exc

    async def save(self, payload: str) -> None:
        try:
            await self._client.set(self._key, payload)
        except RedisError as exc:
            raise PersistenceError(f"redis SET {self._key} failed: {exc}") from exc
        logger.debug("Snapshot saved to redis key=%s (%d bytes)", self._key, len(payload))
