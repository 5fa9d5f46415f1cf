"""Settings de persistência e serialização do processamento.

Backends dos stores (eventos, logs de mensagem, configuração) e do lock
que garante uma única execução do processador por vez.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from config.settings.base.core import BaseSettings

StoreBackend = Literal["memory", "firestore"]
LockBackend = Literal["memory", "redis"]


@dataclass(frozen=True)
class StoreSettings:
    """Configurações de stores e lock de processamento.

    Attributes:
        backend: Backend dos stores duráveis (memory|firestore)
        lock_backend: Backend do lock de processamento (memory|redis)
        lock_ttl_seconds: TTL do lock; deve exceder a duração de uma execução
    """

    backend: StoreBackend = "memory"
    lock_backend: LockBackend = "memory"
    lock_ttl_seconds: int = 300

    def validate(self, base: BaseSettings) -> list[str]:
        """Valida configurações de persistência.

        Args:
            base: BaseSettings para verificar ambiente.

        Returns:
            Lista de erros de validação.
        """
        errors: list[str] = []

        if self.backend not in ("memory", "firestore"):
            errors.append(f"STORE_BACKEND inválido: {self.backend}")

        if self.lock_backend not in ("memory", "redis"):
            errors.append(f"PROCESSING_LOCK_BACKEND inválido: {self.lock_backend}")

        if self.backend == "memory" and not base.is_development:
            errors.append(
                "STORE_BACKEND=memory proibido em staging/production. Use Firestore."
            )

        if self.lock_backend == "memory" and not base.is_development:
            errors.append(
                "PROCESSING_LOCK_BACKEND=memory proibido em staging/production. Use Redis."
            )

        if self.lock_backend == "redis" and not base.redis_url:
            errors.append("PROCESSING_LOCK_BACKEND=redis requer REDIS_URL configurado")

        if self.backend == "firestore" and not base.gcp_project:
            errors.append("STORE_BACKEND=firestore requer GCP_PROJECT configurado")

        if self.lock_ttl_seconds <= 0:
            errors.append("PROCESSING_LOCK_TTL_SECONDS deve ser > 0")

        return errors


def _default_backends(environment: str) -> tuple[str, str]:
    if environment in ("staging", "production"):
        return "firestore", "redis"
    return "memory", "memory"


def _load_store_from_env() -> StoreSettings:
    """Carrega StoreSettings de variáveis de ambiente."""
    default_store, default_lock = _default_backends(
        os.getenv("ENVIRONMENT", "development").lower()
    )
    backend_str = os.getenv("STORE_BACKEND", default_store).lower()
    lock_str = os.getenv("PROCESSING_LOCK_BACKEND", default_lock).lower()
    backend: StoreBackend = backend_str if backend_str in ("memory", "firestore") else "memory"
    lock_backend: LockBackend = lock_str if lock_str in ("memory", "redis") else "memory"
    return StoreSettings(
        backend=backend,
        lock_backend=lock_backend,
        lock_ttl_seconds=int(os.getenv("PROCESSING_LOCK_TTL_SECONDS", "300")),
    )


@lru_cache(maxsize=1)
def get_store_settings() -> StoreSettings:
    """Retorna instância cacheada de StoreSettings."""
    return _load_store_from_env()
