"""Protocolo do store de MessageLog."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from app.domain.events import EventKind
    from app.domain.message_log import MessageLog, MessageStatus


class MessageLogStoreProtocol(ABC):
    """Contrato assíncrono para logs de envio.

    Ciclo de vida: create_pending -> (mark_sent | mark_failed), uma vez.
    """

    @abstractmethod
    async def create_pending(
        self,
        recipient_id: str,
        recipient_username: str | None,
        message_kind: EventKind,
    ) -> MessageLog:
        """Cria log em PENDING antes da tentativa de envio."""

    @abstractmethod
    async def mark_sent(self, log_id: str) -> None:
        """Resolve log como SENT e limpa erro."""

    @abstractmethod
    async def mark_failed(self, log_id: str, error: str) -> None:
        """Resolve log como FAILED com o texto do erro."""

    @abstractmethod
    async def get(self, log_id: str) -> MessageLog | None:
        """Busca log por id."""

    @abstractmethod
    async def list_recent(self, limit: int = 20) -> list[MessageLog]:
        """Lista logs mais recentes primeiro."""

    @abstractmethod
    async def count_by_status(self, status: MessageStatus) -> int:
        """Conta logs em um status."""
