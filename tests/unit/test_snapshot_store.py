"""Tests for the snapshot store backends."""
from unittest.mock import AsyncMock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from src.mp_common.errors import PersistenceError
from src.mp_listing.infrastructure.snapshot_store import (
    InMemorySnapshotStore,
    JsonFileSnapshotStore,
    RedisSnapshotStore,
)


class TestInMemorySnapshotStore:
    @pytest.mark.asyncio
    async def test_empty_until_saved(self):
        store = InMemorySnapshotStore()
        assert await store.load() is None

        await store.save('{"listings": []}')

        assert await store.load() == '{"listings": []}'
        assert store.save_count == 1


class TestJsonFileSnapshotStore:
    @pytest.mark.asyncio
    async def test_missing_file_loads_none(self, tmp_path):
        store = JsonFileSnapshotStore(tmp_path / "catalog.json")
        assert await store.load() is None

    @pytest.mark.asyncio
    async def test_save_then_load(self, tmp_path):
        path = tmp_path / "nested" / "catalog.json"
        store = JsonFileSnapshotStore(path)

        await store.save('{"listings": []}')
        await store.save('{"listings": [], "favoriteIds": ["1"]}')

        assert await store.load() == '{"listings": [], "favoriteIds": ["1"]}'
        assert not path.with_name("catalog.json.tmp").exists()

    @pytest.mark.asyncio
    async def test_unwritable_path_raises_persistence_error(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("x")
        store = JsonFileSnapshotStore(blocker / "catalog.json")

        with pytest.raises(PersistenceError):
            await store.save("{}")

    @pytest.mark.asyncio
    async def test_undecodable_bytes_raise_persistence_error(self, tmp_path):
        path = tmp_path / "catalog.json"
        path.write_bytes(b"\xff\xfe\x00garbage")
        store = JsonFileSnapshotStore(path)

        with pytest.raises(PersistenceError):
            await store.load()

    @pytest.mark.asyncio
    async def test_unreadable_path_raises_persistence_error(self, tmp_path):
        store = JsonFileSnapshotStore(tmp_path)  # a directory, not a file
        with pytest.raises(PersistenceError):
            await store.load()


class TestRedisSnapshotStore:
    @pytest.mark.asyncio
    async def test_get_and_set_single_key(self):
        client = AsyncMock()
        client.get.return_value = '{"listings": []}'
        store = RedisSnapshotStore(client, key="mp:test")

        await store.save("payload")
        loaded = await store.load()

        client.set.assert_awaited_once_with("mp:test", "payload")
        client.get.assert_awaited_once_with("mp:test")
        assert loaded == '{"listings": []}'

    @pytest.mark.asyncio
    async def test_redis_errors_become_persistence_errors(self):
        client = AsyncMock()
        client.get.side_effect = RedisConnectionError("down")
        client.set.side_effect = RedisConnectionError("down")
        store = RedisSnapshotStore(client)

        with pytest.raises(PersistenceError):
            await store.load()
        with pytest.raises(PersistenceError):
            await store.save("{}")

    @pytest.mark.asyncio
    async def test_undecodable_value_becomes_persistence_error(self):
        client = AsyncMock()
        client.get.side_effect = UnicodeDecodeError("utf-8", b"\xff", 0, 1, "invalid start byte")
        store = RedisSnapshotStore(client)

        with pytest.raises(PersistenceError):
            await store.load()
