"""Stores em memória — apenas para desenvolvimento e testes.

ATENÇÃO: Não usar em staging/production. Sem persistência entre reinícios.
"""

from __future__ import annotations

import threading
import uuid
from typing import TYPE_CHECKING

from app.domain.events import InstagramEvent
from app.domain.message_log import MessageLog, MessageStatus
from app.protocols.event_store import EventStoreProtocol
from app.protocols.message_log_store import MessageLogStoreProtocol

if TYPE_CHECKING:
    from app.domain.automation_config import AutomationConfig
    from app.domain.events import EventKind, NormalizedEvent


class MemoryEventStore(EventStoreProtocol):
    """Event Store em memória — apenas para dev/test.

    A checagem e a inserção acontecem sob o mesmo lock (equivalente à
    constraint única do storage real).
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._events: dict[str, InstagramEvent] = {}  # id -> evento (ordem de inserção)
        self._ids_by_key: dict[str, str] = {}  # source_event_key -> id

    async def insert_if_absent(self, event: NormalizedEvent) -> InstagramEvent | None:
        with self._lock:
            if event.source_event_key in self._ids_by_key:
                return None
            record = InstagramEvent.from_normalized(uuid.uuid4().hex, event)
            self._events[record.id] = record
            self._ids_by_key[event.source_event_key] = record.id
            return record

    async def list_pending(self) -> list[InstagramEvent]:
        with self._lock:
            pending = [event for event in self._events.values() if not event.is_processed]
        # sorted() é estável: empate em created_at mantém ordem de inserção
        return sorted(pending, key=lambda event: event.created_at)

    async def mark_processed(self, event_id: str) -> None:
        with self._lock:
            event = self._events.get(event_id)
            if event is None:
                raise KeyError(event_id)
            if not event.is_processed:
                self._events[event_id] = event.model_copy(update={"is_processed": True})

    async def count_pending(self) -> int:
        with self._lock:
            return sum(1 for event in self._events.values() if not event.is_processed)

    def get_by_key(self, source_event_key: str) -> InstagramEvent | None:
        """Busca evento pela chave de dedupe (apenas para testes)."""
        with self._lock:
            event_id = self._ids_by_key.get(source_event_key)
            return self._events.get(event_id) if event_id else None

    def all_events(self) -> list[InstagramEvent]:
        """Retorna todos os eventos (apenas para testes)."""
        with self._lock:
            return list(self._events.values())


class MemoryMessageLogStore(MessageLogStoreProtocol):
    """Store de MessageLog em memória — apenas para dev/test."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._logs: dict[str, MessageLog] = {}

    async def create_pending(
        self,
        recipient_id: str,
        recipient_username: str | None,
        message_kind: EventKind,
    ) -> MessageLog:
        log = MessageLog(
            id=uuid.uuid4().hex,
            recipient_id=recipient_id,
            recipient_username=recipient_username,
            message_kind=message_kind,
        )
        with self._lock:
            self._logs[log.id] = log
        return log

    async def mark_sent(self, log_id: str) -> None:
        self._resolve(log_id, MessageStatus.SENT, None)

    async def mark_failed(self, log_id: str, error: str) -> None:
        self._resolve(log_id, MessageStatus.FAILED, error)

    def _resolve(self, log_id: str, status: MessageStatus, error: str | None) -> None:
        with self._lock:
            log = self._logs.get(log_id)
            if log is None:
                raise KeyError(log_id)
            self._logs[log_id] = log.model_copy(update={"status": status, "error": error})

    async def get(self, log_id: str) -> MessageLog | None:
        with self._lock:
            return self._logs.get(log_id)

    async def list_recent(self, limit: int = 20) -> list[MessageLog]:
        with self._lock:
            logs = list(self._logs.values())
        # Mais recentes primeiro; empate resolvido pela ordem de criação inversa
        return list(reversed(sorted(logs, key=lambda log: log.created_at)))[:limit]

    async def count_by_status(self, status: MessageStatus) -> int:
        with self._lock:
            return sum(1 for log in self._logs.values() if log.status is status)

    def all_logs(self) -> list[MessageLog]:
        """Retorna todos os logs em ordem de criação (apenas para testes)."""
        with self._lock:
            return list(self._logs.values())


class MemoryConfigStore:
    """Provedor de configuração em memória — apenas para dev/test.

    Implementa ConfigProviderProtocol.
    """

    def __init__(self, config: AutomationConfig | None = None) -> None:
        self._config = config

    async def get(self) -> AutomationConfig | None:
        return self._config

    async def replace(self, config: AutomationConfig) -> None:
        self._config = config
