"""Cliente HTTP da Instagram Messaging API (Graph API).

Envia DMs de texto para o endpoint `/{business_account_id}/messages`.
Erros da Meta são convertidos em InstagramSendError com a mensagem
retornada pela API (gravada no MessageLog).
"""

from __future__ import annotations

import json
import logging
import time
from typing import TYPE_CHECKING, Any

from api.connectors.instagram.http_base import HttpClient, HttpClientConfig, HttpError
from api.connectors.instagram.meta_errors import parse_meta_error
from api.connectors.instagram.meta_logging import log_meta_error, log_success

if TYPE_CHECKING:
    import httpx

    from config.settings import InstagramSettings

logger: logging.Logger = logging.getLogger(__name__)


class InstagramSendError(HttpError):
    """Falha de envio (HTTP ou erro Meta); mensagem é segura para persistir."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        error_code: int | None = None,
        is_retryable: bool = False,
    ) -> None:
        super().__init__(message, status_code=status_code, is_retryable=is_retryable)
        self.error_code = error_code


class InstagramHttpClient(HttpClient):
    """Cliente HTTP especializado para Instagram Messaging API."""

    async def send_message(
        self,
        endpoint: str,
        access_token: str,
        payload: dict[str, Any],
    ) -> dict[str, Any]:
        """Envia mensagem via Graph API.

        Args:
            endpoint: URL completa (ex.: .../v21.0/{id}/messages)
            access_token: Bearer token da configuração ativa
            payload: Payload JSON da mensagem

        Returns:
            Response JSON da Meta (contém `message_id` em sucesso)

        Raises:
            ValueError: Se access_token está vazio
            HttpError: Timeout/conexão
            InstagramSendError: Status não-2xx ou erro Meta no corpo
        """
        if not access_token or not access_token.strip():
            raise ValueError("access_token é obrigatório para envio de mensagens")

        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {access_token}",
        }
        started_at = time.perf_counter()
        response = await self.post(endpoint, json=payload, headers=headers)
        data = self._process_response(response)
        log_success(response.status_code, (time.perf_counter() - started_at) * 1000)
        return data

    def _process_response(self, response: httpx.Response) -> dict[str, Any]:
        try:
            data = response.json()
        except (json.JSONDecodeError, ValueError):
            data = None

        meta_error = parse_meta_error(data)
        if meta_error is not None:
            log_meta_error(meta_error, response.status_code)
            raise InstagramSendError(
                meta_error.error_message,
                status_code=response.status_code,
                error_code=meta_error.error_code,
                is_retryable=meta_error.is_rate_limited,
            )

        if response.is_error:
            logger.warning(
                "instagram_http_error", extra={"status_code": response.status_code}
            )
            raise InstagramSendError(
                f"http_status_{response.status_code}",
                status_code=response.status_code,
            )

        if not isinstance(data, dict):
            raise InstagramSendError("invalid_response_json", status_code=response.status_code)
        return data


def create_instagram_http_client(
    settings: InstagramSettings | None = None,
) -> InstagramHttpClient:
    """Factory para criar cliente Instagram com config do ambiente.

    Args:
        settings: InstagramSettings opcional. Se None, carrega do ambiente.
    """
    # Import local para evitar dependência circular
    from config.settings import get_instagram_settings
    from config.settings.instagram import (
        RETRY_BACKOFF_BASE_SECONDS,
        RETRY_BACKOFF_MAX_SECONDS,
    )

    instagram = settings or get_instagram_settings()
    config = HttpClientConfig(
        timeout_seconds=instagram.request_timeout_seconds,
        max_retries=instagram.max_retries,
        backoff_base_seconds=RETRY_BACKOFF_BASE_SECONDS,
        backoff_max_seconds=RETRY_BACKOFF_MAX_SECONDS,
    )
    return InstagramHttpClient(config=config)
