"""Recepção do webhook Instagram: assinatura antes de qualquer parse.

Nenhum byte do corpo é interpretado antes da assinatura ser validada.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from api.connectors.instagram.signature import SignatureResult, verify_meta_signature

if TYPE_CHECKING:
    from collections.abc import Mapping


class WebhookRequestError(ValueError):
    """Erro base para rejeição de webhook (sem efeitos colaterais)."""


class InvalidSignatureError(WebhookRequestError):
    """Assinatura ausente, malformada ou divergente."""


class InvalidJsonError(WebhookRequestError):
    """Corpo assinado, mas não é um objeto JSON."""


def parse_webhook_request(
    raw_body: bytes,
    headers: Mapping[str, str],
    app_secret: str | None,
) -> tuple[dict[str, Any], SignatureResult]:
    """Valida assinatura e decodifica o payload do webhook.

    Args:
        raw_body: Corpo bruto do request
        headers: Headers recebidos
        app_secret: Secret do app Meta

    Raises:
        InvalidSignatureError: Assinatura inválida (motivo na mensagem)
        InvalidJsonError: JSON inválido, corpo vazio ou raiz não-objeto

    Returns:
        (payload, SignatureResult)
    """
    signature = verify_meta_signature(raw_body, headers, app_secret)
    if not signature.valid:
        raise InvalidSignatureError(signature.error or "invalid_signature")

    if not raw_body or not raw_body.strip():
        raise InvalidJsonError("empty_body")

    try:
        payload = json.loads(raw_body)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise InvalidJsonError("invalid_json") from exc

    if not isinstance(payload, dict):
        raise InvalidJsonError("payload_not_object")

    return payload, signature
