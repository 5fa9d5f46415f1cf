"""Use case do processador de eventos pendentes.

Converte eventos não processados em tentativas de envio, uma por evento,
respeitando os toggles de automação vigentes no início da execução.

Política de entrega: no máximo UMA tentativa por evento. O evento é
marcado como processado após a tentativa, com sucesso ou falha; falhas
ficam visíveis no MessageLog e não são reenfileiradas.

Exclusão mútua: o lock é renovado antes de cada evento. Se a renovação
falhar (TTL expirado ou lock tomado por outra execução), a rodada aborta
sem tocar nos eventos restantes. A lista de pendentes é relida ao fim de
cada lote, de modo que eventos ingeridos durante a rodada também são
drenados por quem detém o lock.
"""

from __future__ import annotations

import logging
import time
import uuid
from dataclasses import dataclass
from typing import TYPE_CHECKING

from app.observability import record_latency
from app.services.template_renderer import render_template
from app.use_cases.instagram._delivery import deliver_and_record
from app.use_cases.instagram.errors import (
    ProcessingInProgressError,
    ProcessingLockLostError,
)

if TYPE_CHECKING:
    from app.domain.automation_config import AutomationConfig
    from app.domain.events import InstagramEvent
    from app.protocols import (
        ConfigProviderProtocol,
        DeliveryClientProtocol,
        EventStoreProtocol,
        MessageLogStoreProtocol,
        ProcessingLockProtocol,
    )

logger = logging.getLogger(__name__)

DEFAULT_LOCK_TTL_SECONDS = 300


@dataclass(frozen=True, slots=True)
class ProcessingResult:
    """Resultado de uma execução do processador."""

    visited: int = 0
    sent: int = 0
    failed: int = 0
    skipped: int = 0


class ProcessPendingEventsUseCase:
    """Drena eventos pendentes em ordem FIFO, sequencialmente."""

    def __init__(
        self,
        *,
        config_provider: ConfigProviderProtocol,
        event_store: EventStoreProtocol,
        message_logs: MessageLogStoreProtocol,
        delivery_client: DeliveryClientProtocol,
        processing_lock: ProcessingLockProtocol,
        lock_ttl_seconds: int = DEFAULT_LOCK_TTL_SECONDS,
    ) -> None:
        self._config_provider = config_provider
        self._event_store = event_store
        self._message_logs = message_logs
        self._delivery_client = delivery_client
        self._lock = processing_lock
        self._lock_ttl_seconds = lock_ttl_seconds

    async def execute(
        self,
        *,
        template_override: str | None = None,
        correlation_id: str = "",
    ) -> ProcessingResult:
        """Executa uma rodada de processamento.

        Args:
            template_override: Template que substitui o configurado (opcional)
            correlation_id: ID de correlação para logs

        Raises:
            ProcessingInProgressError: Se outra execução detém o lock
            ProcessingLockLostError: Se o lock foi perdido durante a rodada

        Returns:
            ProcessingResult; `visited` é o total de eventos visitados
        """
        owner = uuid.uuid4().hex
        if not await self._lock.acquire(owner, self._lock_ttl_seconds):
            logger.info("processing_lock_busy", extra={"correlation_id": correlation_id})
            raise ProcessingInProgressError

        started_at = time.perf_counter()
        try:
            result = await self._run(owner, template_override, correlation_id)
        finally:
            await self._lock.release(owner)

        record_latency(
            "event_processor",
            "process_pending",
            (time.perf_counter() - started_at) * 1000,
            correlation_id,
        )
        logger.info(
            "pending_events_processed",
            extra={
                "visited": result.visited,
                "sent": result.sent,
                "failed": result.failed,
                "skipped": result.skipped,
                "correlation_id": correlation_id,
            },
        )
        return result

    async def _run(
        self,
        owner: str,
        template_override: str | None,
        correlation_id: str,
    ) -> ProcessingResult:
        # Snapshot único da configuração para toda a execução
        config = await self._config_provider.get()
        if config is None:
            logger.warning(
                "processing_skipped_config_missing",
                extra={"correlation_id": correlation_id},
            )
            return ProcessingResult()

        override = template_override.strip() if template_override else ""
        visited = sent = failed = skipped = 0

        while pending := await self._event_store.list_pending():
            for event in pending:
                await self._keep_lock(owner, visited, correlation_id)
                visited += 1
                if not config.is_enabled(event.kind):
                    await self._event_store.mark_processed(event.id)
                    skipped += 1
                    continue

                delivered = await self._deliver(event, config, override, correlation_id)
                await self._event_store.mark_processed(event.id)
                if delivered:
                    sent += 1
                else:
                    failed += 1

        return ProcessingResult(visited=visited, sent=sent, failed=failed, skipped=skipped)

    async def _keep_lock(self, owner: str, visited: int, correlation_id: str) -> None:
        if await self._lock.refresh(owner, self._lock_ttl_seconds):
            return
        logger.warning(
            "processing_aborted_lock_lost",
            extra={"visited": visited, "correlation_id": correlation_id},
        )
        raise ProcessingLockLostError

    async def _deliver(
        self,
        event: InstagramEvent,
        config: AutomationConfig,
        override: str,
        correlation_id: str,
    ) -> bool:
        template = override or config.template_for(event.kind)
        attempt = await deliver_and_record(
            config=config,
            recipient_id=event.external_user_id,
            recipient_username=event.external_username,
            kind=event.kind,
            message=render_template(template, event.external_username),
            delivery_client=self._delivery_client,
            message_logs=self._message_logs,
            correlation_id=correlation_id,
        )
        if not attempt.sent:
            logger.warning(
                "event_delivery_failed",
                extra={
                    "event_id": event.id,
                    "event_kind": event.kind.value,
                    "log_id": attempt.log_id,
                    "correlation_id": correlation_id,
                },
            )
        return attempt.sent
