"""Use case de envio manual (escape hatch administrativo).

Ignora toggles de automação e o pipeline de eventos/dedupe. Serve para
validar credenciais enviando uma DM diretamente a um destinatário.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from app.domain.events import EventKind
from app.domain.message_log import MessageStatus
from app.services.template_renderer import render_template
from app.use_cases.instagram._delivery import deliver_and_record
from app.use_cases.instagram.errors import ConfigurationMissingError

if TYPE_CHECKING:
    from app.protocols import (
        ConfigProviderProtocol,
        DeliveryClientProtocol,
        MessageLogStoreProtocol,
    )

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ManualSendResult:
    """Resultado do envio manual."""

    log_id: str
    status: MessageStatus
    error: str | None = None

    @property
    def success(self) -> bool:
        return self.status is MessageStatus.SENT


class SendManualMessageUseCase:
    """Resolve mensagem (override ou template), registra e envia."""

    def __init__(
        self,
        *,
        config_provider: ConfigProviderProtocol,
        message_logs: MessageLogStoreProtocol,
        delivery_client: DeliveryClientProtocol,
    ) -> None:
        self._config_provider = config_provider
        self._message_logs = message_logs
        self._delivery_client = delivery_client

    async def execute(
        self,
        *,
        recipient_id: str,
        message_kind: EventKind | None = None,
        message: str | None = None,
        username: str | None = None,
        correlation_id: str = "",
    ) -> ManualSendResult:
        """Envia DM manual.

        Args:
            recipient_id: ID Instagram do destinatário (obrigatório)
            message_kind: Tipo usado para escolher template (padrão FOLLOW)
            message: Texto literal que substitui o template, se não vazio
            username: Username para personalização

        Raises:
            ValueError: Se recipient_id vazio
            ConfigurationMissingError: Se não há configuração ativa

        Returns:
            ManualSendResult com id do log criado
        """
        if not recipient_id or not recipient_id.strip():
            raise ValueError("recipient_id é obrigatório")

        config = await self._config_provider.get()
        if config is None:
            raise ConfigurationMissingError

        kind = message_kind or EventKind.FOLLOW
        override = message.strip() if message else ""
        template = override or config.template_for(kind)

        attempt = await deliver_and_record(
            config=config,
            recipient_id=recipient_id.strip(),
            recipient_username=username,
            kind=kind,
            message=render_template(template, username),
            delivery_client=self._delivery_client,
            message_logs=self._message_logs,
            correlation_id=correlation_id,
        )
        logger.info(
            "manual_message_attempted",
            extra={
                "log_id": attempt.log_id,
                "status": attempt.status.value,
                "message_kind": kind.value,
                "used_override": bool(override),
                "correlation_id": correlation_id,
            },
        )
        return ManualSendResult(log_id=attempt.log_id, status=attempt.status, error=attempt.error)
