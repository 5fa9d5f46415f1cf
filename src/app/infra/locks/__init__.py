"""Locks de processamento (exclusão mútua do processador de pendentes)."""

from __future__ import annotations

from app.infra.locks.memory_processing_lock import MemoryProcessingLock
from app.infra.locks.redis_processing_lock import PROCESSING_LOCK_KEY, RedisProcessingLock

__all__ = [
    "PROCESSING_LOCK_KEY",
    "MemoryProcessingLock",
    "RedisProcessingLock",
]
