"""Protocolo do lock que serializa execuções do processador."""

from __future__ import annotations

from abc import ABC, abstractmethod


class ProcessingLockProtocol(ABC):
    """Exclusão mútua entre execuções de process_pending.

    Duas execuções concorrentes poderiam carregar o mesmo evento pendente
    antes de marcá-lo e enviar a DM duas vezes. O dono renova o TTL antes
    de cada evento; se a renovação falhar, a execução precisa parar.
    """

    @abstractmethod
    async def acquire(self, owner: str, ttl_seconds: int) -> bool:
        """Tenta obter o lock sem bloquear.

        Args:
            owner: Token único da execução (usado no refresh e no release)
            ttl_seconds: Expiração do lock caso o processo morra

        Returns:
            True se obtido; False se outra execução o detém.
        """

    @abstractmethod
    async def refresh(self, owner: str, ttl_seconds: int) -> bool:
        """Renova o TTL somente se o lock ainda pertence a `owner`.

        Returns:
            False se o lock expirou ou passou para outra execução.
        """

    @abstractmethod
    async def release(self, owner: str) -> None:
        """Libera o lock somente se ainda pertence a `owner`."""
