"""Cliente HTTP base para chamadas à Graph API.

O envio de DM não é idempotente: uma requisição que chegou ao servidor
nunca é repetida. Só há retry quando a conexão falha antes do envio
(`ConnectError`/`ConnectTimeout`); timeouts de leitura e respostas 429/5xx
sobem direto para o chamador.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any

import httpx

logger = logging.getLogger(__name__)

# Falhas em que o request comprovadamente não saiu do cliente
UNSENT_REQUEST_ERRORS = (httpx.ConnectError, httpx.ConnectTimeout)


@dataclass
class HttpClientConfig:
    """Configuração do cliente HTTP.

    max_retries conta tentativas EXTRAS de conexão (0 = uma única tentativa).
    """

    timeout_seconds: float = 15.0
    max_retries: int = 0
    backoff_base_seconds: float = 1.0
    backoff_max_seconds: float = 10.0
    default_headers: dict[str, str] = field(default_factory=dict)
    verify_ssl: bool = True


class HttpError(Exception):
    """Erro de requisição HTTP sem dados sensíveis."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        is_retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.is_retryable = is_retryable


class HttpClient:
    """Cliente HTTP com timeout e retry restrito a falhas de conexão.

    Qualquer response (inclusive 429/5xx) é devolvido ao chamador na
    primeira tentativa para que ele leia o corpo de erro.
    """

    def __init__(
        self,
        config: HttpClientConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config or HttpClientConfig()
        self._transport = transport

    async def post(
        self,
        url: str,
        json: dict[str, Any],
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        merged_headers = {**self._config.default_headers, **(headers or {})}
        attempts = self._config.max_retries + 1
        for attempt in range(attempts):
            try:
                async with httpx.AsyncClient(
                    verify=self._config.verify_ssl,
                    transport=self._transport,
                    timeout=self._config.timeout_seconds,
                ) as client:
                    return await client.post(url, json=json, headers=merged_headers)
            except UNSENT_REQUEST_ERRORS as exc:
                if attempt == attempts - 1:
                    raise HttpError("http_connection_error", is_retryable=True) from exc
                logger.info(
                    "http_connect_failed",
                    extra={"error_type": type(exc).__name__, "attempt": attempt + 1},
                )
            except httpx.TimeoutException as exc:
                # Request pode ter chegado ao servidor: nunca repetir
                raise HttpError("http_timeout", is_retryable=False) from exc
            except httpx.TransportError as exc:
                raise HttpError("http_transport_error", is_retryable=False) from exc
            await _backoff_sleep(
                attempt,
                self._config.backoff_base_seconds,
                self._config.backoff_max_seconds,
            )
        raise HttpError("http_retry_exhausted", is_retryable=True)


async def _backoff_sleep(attempt: int, base: float, max_seconds: float) -> None:
    backoff = min((2**attempt) * base, max_seconds)
    logger.info("http_backoff", extra={"backoff_seconds": backoff})
    await asyncio.sleep(backoff)
