"""Adapters concretos para Instagram (wiring em app/bootstrap).

Este módulo é o único autorizado a acoplar app <-> api.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from api.connectors.instagram.http_client import (
    InstagramHttpClient,
    create_instagram_http_client,
)
from api.payload_builders.instagram import build_text_message_payload
from app.protocols.delivery import DeliveryClientProtocol, DeliveryResult
from config.settings import get_instagram_settings

if TYPE_CHECKING:
    from config.settings import InstagramSettings

logger = logging.getLogger(__name__)


class GraphApiDeliveryClient(DeliveryClientProtocol):
    """Envia DMs pela Graph API; toda falha vira DeliveryResult.failure."""

    def __init__(
        self,
        http_client: InstagramHttpClient | None = None,
        settings: InstagramSettings | None = None,
    ) -> None:
        self._settings = settings or get_instagram_settings()
        self._http_client = http_client or create_instagram_http_client(self._settings)

    async def send(
        self,
        *,
        access_token: str,
        business_account_id: str,
        recipient_id: str,
        message: str,
    ) -> DeliveryResult:
        try:
            endpoint = self._settings.get_messages_endpoint(business_account_id)
            payload = build_text_message_payload(recipient_id, message)
            response = await self._http_client.send_message(
                endpoint=endpoint,
                access_token=access_token,
                payload=payload,
            )
        except Exception as exc:
            logger.warning(
                "instagram_send_failed",
                extra={
                    "error_type": type(exc).__name__,
                    "status_code": getattr(exc, "status_code", None),
                },
            )
            return DeliveryResult.failure(str(exc) or type(exc).__name__)

        message_id = response.get("message_id")
        logger.info("message_sent_to_instagram_api", extra={"message_id": message_id})
        return DeliveryResult.ok(message_id=message_id)
