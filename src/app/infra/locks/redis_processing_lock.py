"""Redis Processing Lock — exclusão mútua entre instâncias do processador.

Usa SET NX EX com token do dono: o TTL libera o lock se a instância
morrer no meio da execução; o dono o renova antes de cada evento. Renovação
e release só alteram a chave se o valor ainda for o token do dono (scripts
Lua atômicos).
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.protocols.processing_lock import ProcessingLockProtocol
from utils.errors import RedisConnectionError

if TYPE_CHECKING:
    from redis.asyncio import Redis as AsyncRedis

logger = logging.getLogger(__name__)

PROCESSING_LOCK_KEY = "instagram:process_pending:lock"

_RELEASE_SCRIPT = """
if redis.call("get", KEYS[1]) == ARGV[1] then
    return redis.call("del", KEYS[1])
end
return 0
"""

_REFRESH_SCRIPT = """
if redis.call("get", KEYS[1]) == ARGV[1] then
    return redis.call("expire", KEYS[1], ARGV[2])
end
return 0
"""


class RedisProcessingLock(ProcessingLockProtocol):
    """Lock distribuído usando Redis (Upstash compatível).

    Args:
        async_redis_client: Cliente Redis assíncrono
        key: Chave do lock (default: instagram:process_pending:lock)
    """

    def __init__(
        self,
        async_redis_client: AsyncRedis[bytes],
        key: str = PROCESSING_LOCK_KEY,
    ) -> None:
        self._redis = async_redis_client
        self._key = key

    async def acquire(self, owner: str, ttl_seconds: int) -> bool:
        try:
            acquired = await self._redis.set(self._key, owner, nx=True, ex=ttl_seconds)
        except Exception as exc:
            raise RedisConnectionError("Falha ao adquirir lock no Redis") from exc
        if not acquired:
            logger.debug("processing_lock_busy", extra={"lock_key": self._key})
        return bool(acquired)

    async def refresh(self, owner: str, ttl_seconds: int) -> bool:
        try:
            refreshed = await self._redis.eval(_REFRESH_SCRIPT, 1, self._key, owner, ttl_seconds)
        except Exception as exc:
            raise RedisConnectionError("Falha ao renovar lock no Redis") from exc
        if not refreshed:
            logger.warning("processing_lock_lost", extra={"lock_key": self._key})
        return bool(refreshed)

    async def release(self, owner: str) -> None:
        try:
            released = await self._redis.eval(_RELEASE_SCRIPT, 1, self._key, owner)
        except Exception as exc:
            raise RedisConnectionError("Falha ao liberar lock no Redis") from exc
        if not released:
            # Lock expirou (TTL) ou foi adquirido por outra execução
            logger.warning("processing_lock_not_owned", extra={"lock_key": self._key})
