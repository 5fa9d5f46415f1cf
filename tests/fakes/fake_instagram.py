"""Fakes compartilhados do pipeline Instagram."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any

from app.domain.automation_config import AutomationConfig
from app.protocols.delivery import DeliveryResult


def make_config(**overrides: Any) -> AutomationConfig:
    """Configuração ativa válida com overrides pontuais."""
    data: dict[str, Any] = {
        "access_token": "token-abc",
        "business_account_id": "17841400000000000",
        "verify_token": "verify-me",
        "follower_message_template": "Hi {{username}}!",
        "like_message_template": "Thanks for the like, {{username}}!",
        "follower_automation_enabled": True,
        "like_automation_enabled": True,
    }
    data.update(overrides)
    return AutomationConfig(**data)


class FakeDeliveryClient:
    """Delivery client fake: registra chamadas e devolve resultado configurado."""

    def __init__(
        self,
        result: DeliveryResult | None = None,
        raises: Exception | None = None,
        before_send: Callable[[str], Awaitable[None]] | None = None,
    ) -> None:
        self._result = result or DeliveryResult.ok(message_id="mid.1")
        self._raises = raises
        # Hook assíncrono chamado com o recipient_id antes de cada envio
        self.before_send = before_send
        self.calls: list[dict[str, str]] = []

    async def send(
        self,
        *,
        access_token: str,
        business_account_id: str,
        recipient_id: str,
        message: str,
    ) -> DeliveryResult:
        if self.before_send is not None:
            await self.before_send(recipient_id)
        self.calls.append(
            {
                "access_token": access_token,
                "business_account_id": business_account_id,
                "recipient_id": recipient_id,
                "message": message,
            }
        )
        if self._raises is not None:
            raise self._raises
        return self._result

    @property
    def messages(self) -> list[str]:
        return [call["message"] for call in self.calls]
