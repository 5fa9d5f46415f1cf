"""Testes dos locks de processamento (memória e Redis mockado)."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from app.infra.locks import PROCESSING_LOCK_KEY, MemoryProcessingLock, RedisProcessingLock
from utils.errors import RedisConnectionError


class TestMemoryProcessingLock:
    """Testes do MemoryProcessingLock."""

    @pytest.mark.asyncio
    async def test_exclusive_until_released(self) -> None:
        lock = MemoryProcessingLock()

        assert await lock.acquire("a", 60) is True
        assert await lock.acquire("b", 60) is False
        await lock.release("a")
        assert await lock.acquire("b", 60) is True

    @pytest.mark.asyncio
    async def test_release_by_other_owner_is_noop(self) -> None:
        lock = MemoryProcessingLock()
        await lock.acquire("a", 60)

        await lock.release("b")

        assert lock.held is True

    @pytest.mark.asyncio
    async def test_expired_lock_can_be_taken(self) -> None:
        lock = MemoryProcessingLock()
        await lock.acquire("a", 0)

        assert await lock.acquire("b", 60) is True

    @pytest.mark.asyncio
    async def test_refresh_extends_only_for_owner(self) -> None:
        lock = MemoryProcessingLock()
        await lock.acquire("a", 60)

        assert await lock.refresh("a", 60) is True
        assert await lock.refresh("b", 60) is False
        assert lock.held is True

    @pytest.mark.asyncio
    async def test_refresh_after_expiry_fails_once_taken_over(self) -> None:
        lock = MemoryProcessingLock()
        await lock.acquire("a", 0)
        await lock.acquire("b", 60)

        assert await lock.refresh("a", 60) is False
        await lock.release("a")
        assert lock.held is True


class TestRedisProcessingLock:
    """Testes do RedisProcessingLock."""

    @pytest.mark.asyncio
    async def test_acquire_uses_set_nx_ex(self) -> None:
        redis = MagicMock()
        redis.set = AsyncMock(return_value=True)

        assert await RedisProcessingLock(redis).acquire("owner-1", 300) is True
        redis.set.assert_awaited_once_with(PROCESSING_LOCK_KEY, "owner-1", nx=True, ex=300)

    @pytest.mark.asyncio
    async def test_acquire_busy(self) -> None:
        redis = MagicMock()
        redis.set = AsyncMock(return_value=None)

        assert await RedisProcessingLock(redis).acquire("owner-1", 300) is False

    @pytest.mark.asyncio
    async def test_release_compares_owner(self) -> None:
        redis = MagicMock()
        redis.eval = AsyncMock(return_value=1)

        await RedisProcessingLock(redis, key="k").release("owner-1")

        script, numkeys, key, owner = redis.eval.await_args.args
        assert "redis.call(\"get\", KEYS[1]) == ARGV[1]" in script
        assert (numkeys, key, owner) == (1, "k", "owner-1")

    @pytest.mark.asyncio
    async def test_refresh_compares_owner_and_sets_ttl(self) -> None:
        redis = MagicMock()
        redis.eval = AsyncMock(return_value=1)

        assert await RedisProcessingLock(redis, key="k").refresh("owner-1", 300) is True

        script, numkeys, key, owner, ttl = redis.eval.await_args.args
        assert "expire" in script
        assert (numkeys, key, owner, ttl) == (1, "k", "owner-1", 300)

    @pytest.mark.asyncio
    async def test_refresh_not_owned(self) -> None:
        redis = MagicMock()
        redis.eval = AsyncMock(return_value=0)

        assert await RedisProcessingLock(redis).refresh("owner-1", 300) is False

    @pytest.mark.asyncio
    async def test_connection_errors_wrapped(self) -> None:
        redis = MagicMock()
        redis.set = AsyncMock(side_effect=OSError("down"))
        redis.eval = AsyncMock(side_effect=OSError("down"))
        lock = RedisProcessingLock(redis)

        with pytest.raises(RedisConnectionError):
            await lock.acquire("o", 1)
        with pytest.raises(RedisConnectionError):
            await lock.release("o")
        with pytest.raises(RedisConnectionError):
            await lock.refresh("o", 1)
