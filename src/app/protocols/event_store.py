"""Protocolo do Event Store (eventos Instagram deduplicados).

Interfaces leves (ABCs) dependidas por Application.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from app.domain.events import InstagramEvent, NormalizedEvent


class EventStoreProtocol(ABC):
    """Contrato assíncrono para o store de eventos.

    Invariante: no máximo um evento por source_event_key. A inserção deve
    ser atômica no storage (constraint única), nunca check-then-write.
    """

    @abstractmethod
    async def insert_if_absent(self, event: NormalizedEvent) -> InstagramEvent | None:
        """Insere evento se a chave ainda não existe.

        Returns:
            Evento criado (is_processed=False) ou None se duplicado.
        """

    @abstractmethod
    async def list_pending(self) -> list[InstagramEvent]:
        """Lista eventos com is_processed=False, mais antigos primeiro."""

    @abstractmethod
    async def mark_processed(self, event_id: str) -> None:
        """Marca evento como processado (monotônico, idempotente)."""

    @abstractmethod
    async def count_pending(self) -> int:
        """Conta eventos ainda não processados."""
