"""Agendamento single-flight do processador disparado pelo webhook.

Execuções do processador são serializadas pelo lock, então o processo
mantém no máximo UMA task de drenagem. Webhooks que chegam enquanto ela
roda apenas registram uma nova rodada: ao terminar, a task roda de novo e
pega os eventos ingeridos no meio tempo. Lock ocupado (outra instância ou
gatilho manual) é retentado com atraso fixo até `max_busy_retries`.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    # Retorna False quando o lock estava ocupado e nada foi processado
    RunProcessing = Callable[[], Awaitable[bool]]

logger = logging.getLogger(__name__)

BUSY_RETRY_DELAY_SECONDS = 1.0
MAX_BUSY_RETRIES = 5


class ProcessingScheduler:
    """Mantém no máximo uma task de drenagem por processo."""

    def __init__(
        self,
        *,
        busy_retry_delay_seconds: float = BUSY_RETRY_DELAY_SECONDS,
        max_busy_retries: int = MAX_BUSY_RETRIES,
    ) -> None:
        self._busy_retry_delay_seconds = busy_retry_delay_seconds
        self._max_busy_retries = max_busy_retries
        self._task: asyncio.Task[None] | None = None
        self._next_run: RunProcessing | None = None

    @property
    def active(self) -> bool:
        return self._task is not None and not self._task.done()

    def request(self, *, correlation_id: str, run: RunProcessing) -> bool:
        """Pede uma rodada de processamento.

        Returns:
            True se uma task nova foi criada; False se o pedido foi
            agregado à task em andamento.
        """
        if self.active:
            self._next_run = run
            logger.info(
                "webhook_processing_coalesced",
                extra={"channel": "instagram", "correlation_id": correlation_id},
            )
            return False

        self._next_run = None
        self._task = asyncio.create_task(self._drain(run))
        self._task.add_done_callback(self._on_done)
        logger.info(
            "webhook_processing_scheduled",
            extra={"channel": "instagram", "correlation_id": correlation_id, "mode": "async"},
        )
        return True

    async def _drain(self, run: RunProcessing) -> None:
        busy_retries = 0
        while True:
            if await run():
                busy_retries = 0
                if self._next_run is None:
                    return
                run, self._next_run = self._next_run, None
                continue

            if busy_retries >= self._max_busy_retries:
                logger.warning(
                    "webhook_processing_gave_up_lock_busy",
                    extra={"channel": "instagram", "busy_retries": busy_retries},
                )
                return
            busy_retries += 1
            await asyncio.sleep(self._busy_retry_delay_seconds)
            if self._next_run is not None:
                run, self._next_run = self._next_run, None

    def _on_done(self, task: asyncio.Task[Any]) -> None:
        with contextlib.suppress(asyncio.CancelledError):
            exc = task.exception()
            if exc is not None:
                logger.error(
                    "webhook_processing_task_failed",
                    extra={"channel": "instagram", "error_type": type(exc).__name__},
                )

    async def drain(self, timeout_seconds: float = 30.0) -> None:
        """Aguarda a task em andamento no shutdown; cancela após o prazo."""
        task = self._task
        if task is None or task.done():
            return

        logger.info(
            "webhook_processing_shutdown_wait",
            extra={"channel": "instagram", "timeout_seconds": timeout_seconds},
        )
        _, pending = await asyncio.wait({task}, timeout=timeout_seconds)
        if not pending:
            return

        task.cancel()
        await asyncio.gather(task, return_exceptions=True)
        logger.warning(
            "webhook_processing_shutdown_cancelled",
            extra={"channel": "instagram"},
        )
