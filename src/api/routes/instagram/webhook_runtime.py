"""Runtime do processamento disparado pelo webhook Instagram.

Modos (INSTAGRAM_WEBHOOK_PROCESSING_MODE):
- inline: processa antes de responder; com lock ocupado, agenda rodada async
- async: pede rodada ao scheduler single-flight e responde imediatamente
- deferred: não processa; eventos aguardam o gatilho manual/agendado
"""

from __future__ import annotations

import logging
from typing import Any

from api.routes.instagram.processing_scheduler import ProcessingScheduler
from app.use_cases.instagram import ProcessingInProgressError
from utils.errors import InfrastructureError

logger = logging.getLogger(__name__)

_process_use_case: Any | None = None
_scheduler = ProcessingScheduler()


def get_process_use_case() -> Any:
    """Obtém o processador de pendentes (lazy-loading)."""
    global _process_use_case
    if _process_use_case is None:
        from app.bootstrap.instagram_factory import create_process_pending_events_use_case

        _process_use_case = create_process_pending_events_use_case()
    return _process_use_case


async def process_pending_safe(*, correlation_id: str, use_case: Any) -> bool:
    """Executa o processador com classificação explícita de erros.

    Returns:
        True se a rodada terminou; False se o lock estava ocupado (ou foi
        perdido) e os eventos pendentes aguardam outra rodada.
    """
    try:
        result = await use_case.execute(correlation_id=correlation_id)
    except ProcessingInProgressError as exc:
        logger.info(
            "webhook_processing_skipped_lock_busy",
            extra={
                "channel": "instagram",
                "correlation_id": correlation_id,
                "reason": str(exc),
            },
        )
        return False
    except InfrastructureError as exc:
        logger.error(
            "webhook_processing_infra_failed",
            extra={
                "channel": "instagram",
                "correlation_id": correlation_id,
                "error_type": type(exc).__name__,
            },
        )
        raise
    except Exception:
        logger.exception(
            "webhook_processing_failed",
            extra={"channel": "instagram", "correlation_id": correlation_id},
        )
        raise

    logger.info(
        "webhook_processing_completed",
        extra={
            "channel": "instagram",
            "correlation_id": correlation_id,
            "visited": result.visited,
            "sent": result.sent,
            "failed": result.failed,
        },
    )
    return True


def _request_async_run(correlation_id: str, use_case: Any) -> None:
    _scheduler.request(
        correlation_id=correlation_id,
        run=lambda: process_pending_safe(correlation_id=correlation_id, use_case=use_case),
    )


async def dispatch_processing(*, correlation_id: str, settings: Any) -> str:
    """Despacha processamento conforme o modo configurado.

    Returns:
        Modo efetivamente aplicado.
    """
    processing_mode = (settings.webhook_processing_mode or "async").lower()
    if processing_mode == "deferred":
        logger.debug(
            "webhook_processing_deferred",
            extra={"channel": "instagram", "correlation_id": correlation_id},
        )
        return processing_mode

    use_case = get_process_use_case()
    if processing_mode == "inline":
        try:
            completed = await process_pending_safe(
                correlation_id=correlation_id, use_case=use_case
            )
        except Exception:
            # Já logado; eventos persistidos seguem pendentes para a próxima execução
            return processing_mode
        if not completed:
            _request_async_run(correlation_id, use_case)
        return processing_mode

    _request_async_run(correlation_id, use_case)
    return "async"


async def drain_background_tasks(timeout_seconds: float = 30.0) -> None:
    """Aguarda a rodada async em andamento durante shutdown do processo."""
    await _scheduler.drain(timeout_seconds=timeout_seconds)
