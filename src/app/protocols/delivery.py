"""Protocolo de entrega de DM (cliente de mensageria remoto)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True, slots=True)
class DeliveryResult:
    """Resultado de uma tentativa de envio."""

    success: bool
    message_id: str | None = None
    error: str | None = None

    @classmethod
    def ok(cls, message_id: str | None = None) -> DeliveryResult:
        return cls(success=True, message_id=message_id)

    @classmethod
    def failure(cls, error: str) -> DeliveryResult:
        return cls(success=False, error=error)


class DeliveryClientProtocol(Protocol):
    """Contrato mínimo para enviar uma DM.

    O lado remoto não é idempotente: cada chamada é uma nova mensagem.
    Timeouts devem retornar failure (nunca bloquear indefinidamente).
    """

    async def send(
        self,
        *,
        access_token: str,
        business_account_id: str,
        recipient_id: str,
        message: str,
    ) -> DeliveryResult: ...
