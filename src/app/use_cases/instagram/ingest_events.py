"""Use case de ingestão: persiste eventos normalizados com dedupe.

Não envia mensagens. Ingestão precisa ser rápida (o webhook sempre
responde 200); a entrega roda em operação separada.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from app.observability import record_ingest

if TYPE_CHECKING:
    from collections.abc import Iterable

    from app.domain.events import NormalizedEvent
    from app.protocols.event_store import EventStoreProtocol

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class IngestResult:
    """Contadores de uma ingestão."""

    received: int
    inserted: int
    duplicates: int


class IngestEventsUseCase:
    """Insere eventos no Event Store; duplicados são no-op."""

    def __init__(self, event_store: EventStoreProtocol) -> None:
        self._event_store = event_store

    async def execute(
        self,
        events: Iterable[NormalizedEvent],
        *,
        correlation_id: str = "",
    ) -> IngestResult:
        received = inserted = 0
        for event in events:
            received += 1
            created = await self._event_store.insert_if_absent(event)
            if created is None:
                logger.debug(
                    "event_duplicate_skipped",
                    extra={"event_kind": event.kind.value, "correlation_id": correlation_id},
                )
                continue
            inserted += 1

        result = IngestResult(
            received=received,
            inserted=inserted,
            duplicates=received - inserted,
        )
        record_ingest(result.received, result.inserted, result.duplicates, correlation_id)
        return result
