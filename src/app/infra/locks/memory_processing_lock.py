"""Lock de processamento em memória — apenas para dev/test (processo único)."""

from __future__ import annotations

import threading
import time

from app.protocols.processing_lock import ProcessingLockProtocol


class MemoryProcessingLock(ProcessingLockProtocol):
    """Lock não-bloqueante com dono e expiração, restrito ao processo."""

    def __init__(self) -> None:
        self._mutex = threading.Lock()
        self._owner: str | None = None
        self._expires_at = 0.0

    def _owned_by(self, owner: str, now: float) -> bool:
        return self._owner == owner and now < self._expires_at

    async def acquire(self, owner: str, ttl_seconds: int) -> bool:
        now = time.monotonic()
        with self._mutex:
            if self._owner is not None and now < self._expires_at:
                return False
            self._owner = owner
            self._expires_at = now + ttl_seconds
            return True

    async def refresh(self, owner: str, ttl_seconds: int) -> bool:
        now = time.monotonic()
        with self._mutex:
            if not self._owned_by(owner, now):
                return False
            self._expires_at = now + ttl_seconds
            return True

    async def release(self, owner: str) -> None:
        with self._mutex:
            if self._owner == owner:
                self._owner = None
                self._expires_at = 0.0

    @property
    def held(self) -> bool:
        with self._mutex:
            return self._owner is not None and time.monotonic() < self._expires_at
