"""Settings específicas de Instagram.

Configurações do canal Instagram via Graph API (Meta).

As credenciais de envio (access token, business account, verify token)
NÃO ficam aqui: vivem na configuração ativa persistida e editável pelo
painel. Aqui fica apenas o que é do processo (secret do app, API, timeouts).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

# Constantes da Graph API para Instagram
INSTAGRAM_API_VERSION: str = "v21.0"
INSTAGRAM_API_BASE_URL: str = "https://graph.facebook.com"

WEBHOOK_PROCESSING_MODES = ("async", "inline", "deferred")

# Backoff entre tentativas de conexão (exponencial, com teto)
RETRY_BACKOFF_BASE_SECONDS: float = 1.0
RETRY_BACKOFF_MAX_SECONDS: float = 10.0


@dataclass(frozen=True)
class InstagramSettings:
    """Configurações do canal Instagram.

    Attributes:
        app_secret: Secret do app Meta para validação HMAC do webhook
        api_version: Versão da Graph API
        api_base_url: URL base da Graph API
        request_timeout_seconds: Timeout por requisição de envio
        max_retries: Tentativas extras em falha de conexão (envio não é idempotente)
        webhook_processing_mode: async | inline | deferred
    """

    # Credenciais do processo
    app_secret: str = ""

    # API
    api_version: str = INSTAGRAM_API_VERSION
    api_base_url: str = INSTAGRAM_API_BASE_URL

    # Timeouts e retries
    request_timeout_seconds: float = 15.0
    max_retries: int = 0

    # Webhook processing
    webhook_processing_mode: str = "async"

    @property
    def api_endpoint(self) -> str:
        """URL base completa da API com versão."""
        return f"{self.api_base_url}/{self.api_version}"

    @property
    def max_delivery_seconds(self) -> float:
        """Pior caso de duração de um envio: todas as tentativas e backoffs."""
        backoffs = sum(
            min((2**attempt) * RETRY_BACKOFF_BASE_SECONDS, RETRY_BACKOFF_MAX_SECONDS)
            for attempt in range(max(self.max_retries, 0))
        )
        return self.request_timeout_seconds * (self.max_retries + 1) + backoffs

    def get_messages_endpoint(self, business_account_id: str) -> str:
        """Retorna URL para envio de DMs.

        Args:
            business_account_id: ID da conta business Instagram.

        Returns:
            URL completa no formato: https://graph.facebook.com/v21.0/{id}/messages

        Raises:
            ValueError: Se business_account_id vazio.
        """
        if not business_account_id:
            raise ValueError("business_account_id é obrigatório")
        return f"{self.api_endpoint}/{business_account_id}/messages"

    def validate(self) -> list[str]:
        """Valida configurações mínimas de Instagram.

        Returns:
            Lista de erros de validação (vazia = tudo OK).
        """
        errors: list[str] = []

        if not self.app_secret:
            errors.append("INSTAGRAM_APP_SECRET não configurado")

        if self.request_timeout_seconds <= 0:
            errors.append("INSTAGRAM_REQUEST_TIMEOUT_SECONDS deve ser > 0")

        if self.max_retries < 0:
            errors.append("INSTAGRAM_MAX_RETRIES deve ser >= 0")

        if self.webhook_processing_mode not in WEBHOOK_PROCESSING_MODES:
            errors.append(
                "INSTAGRAM_WEBHOOK_PROCESSING_MODE deve ser 'async', 'inline' ou 'deferred'"
            )

        return errors


def _load_from_env() -> InstagramSettings:
    """Carrega InstagramSettings a partir de variáveis de ambiente."""
    environment = os.getenv("ENVIRONMENT", "").lower()
    default_processing_mode = (
        "inline" if environment in ("development", "dev", "test") else "async"
    )
    return InstagramSettings(
        app_secret=os.getenv("INSTAGRAM_APP_SECRET", ""),
        api_version=os.getenv("INSTAGRAM_API_VERSION", INSTAGRAM_API_VERSION),
        api_base_url=os.getenv("INSTAGRAM_API_BASE_URL", INSTAGRAM_API_BASE_URL),
        request_timeout_seconds=float(
            os.getenv("INSTAGRAM_REQUEST_TIMEOUT_SECONDS", "15")
        ),
        max_retries=int(os.getenv("INSTAGRAM_MAX_RETRIES", "0")),
        webhook_processing_mode=os.getenv(
            "INSTAGRAM_WEBHOOK_PROCESSING_MODE", default_processing_mode
        ).lower(),
    )


@lru_cache(maxsize=1)
def get_instagram_settings() -> InstagramSettings:
    """Retorna instância cacheada de InstagramSettings.

    A cache garante singleton para múltiplas injeções.
    """
    return _load_from_env()
