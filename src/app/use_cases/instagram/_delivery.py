"""Tentativa de envio com registro em MessageLog.

Compartilhado entre o processador de eventos e o envio manual:
PENDING -> envio -> SENT | FAILED.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING

from app.domain.message_log import MessageStatus
from app.observability import record_delivery
from app.protocols.delivery import DeliveryResult

if TYPE_CHECKING:
    from app.domain.automation_config import AutomationConfig
    from app.domain.events import EventKind
    from app.protocols.delivery import DeliveryClientProtocol
    from app.protocols.message_log_store import MessageLogStoreProtocol

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DeliveryAttempt:
    """Resultado resolvido de uma tentativa registrada."""

    log_id: str
    status: MessageStatus
    error: str | None = None

    @property
    def sent(self) -> bool:
        return self.status is MessageStatus.SENT


async def deliver_and_record(
    *,
    config: AutomationConfig,
    recipient_id: str,
    recipient_username: str | None,
    kind: EventKind,
    message: str,
    delivery_client: DeliveryClientProtocol,
    message_logs: MessageLogStoreProtocol,
    correlation_id: str = "",
) -> DeliveryAttempt:
    """Cria log PENDING, tenta o envio e resolve o log.

    Falhas do cliente (retornadas ou levantadas, inclusive timeout) viram
    FAILED com o texto do erro; nunca propagam. Falhas do store propagam.
    """
    log = await message_logs.create_pending(recipient_id, recipient_username, kind)

    started_at = time.perf_counter()
    try:
        result = await delivery_client.send(
            access_token=config.access_token,
            business_account_id=config.business_account_id,
            recipient_id=recipient_id,
            message=message,
        )
    except Exception as exc:
        logger.warning(
            "delivery_client_raised",
            extra={
                "log_id": log.id,
                "error_type": type(exc).__name__,
                "correlation_id": correlation_id,
            },
        )
        result = DeliveryResult.failure(str(exc) or type(exc).__name__)
    latency_ms = (time.perf_counter() - started_at) * 1000

    if result.success:
        await message_logs.mark_sent(log.id)
        attempt = DeliveryAttempt(log_id=log.id, status=MessageStatus.SENT)
    else:
        error = result.error or "delivery_failed"
        await message_logs.mark_failed(log.id, error)
        attempt = DeliveryAttempt(log_id=log.id, status=MessageStatus.FAILED, error=error)

    record_delivery(
        kind=kind.value,
        status=attempt.status.value,
        latency_ms=latency_ms,
        correlation_id=correlation_id,
    )
    return attempt
