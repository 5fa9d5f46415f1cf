"""Validação de assinatura HMAC-SHA256 dos webhooks Meta.

A Meta assina o corpo bruto com o app secret e envia o resultado em
`X-Hub-Signature-256: sha256=<hex>`. A comparação usa tempo constante.
"""

from __future__ import annotations

import hashlib
import hmac
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

SIGNATURE_HEADER = "x-hub-signature-256"
SIGNATURE_PREFIX = "sha256="


@dataclass(frozen=True, slots=True)
class SignatureResult:
    """Resultado da validação de assinatura."""

    valid: bool
    error: str | None = None


def verify_signature(raw_body: bytes, signature: str | None, secret: str | None) -> bool:
    """Verifica `sha256=<hex>` contra HMAC-SHA256(secret, raw_body).

    Nunca levanta exceção: header ausente, prefixo errado, hex inválido
    ou secret vazio retornam False.
    """
    if not signature or not secret:
        return False
    if not signature.startswith(SIGNATURE_PREFIX):
        return False

    provided = signature[len(SIGNATURE_PREFIX):].strip().lower()
    if not provided:
        return False

    expected = hmac.new(secret.encode("utf-8"), raw_body, hashlib.sha256).hexdigest()
    return hmac.compare_digest(expected.encode("ascii"), provided.encode("utf-8"))


def verify_meta_signature(
    raw_body: bytes,
    headers: Mapping[str, str],
    secret: str | None,
) -> SignatureResult:
    """Valida assinatura a partir dos headers (nome case-insensitive).

    Args:
        raw_body: Corpo bruto do request (exatamente como recebido)
        headers: Headers recebidos
        secret: App secret Meta

    Returns:
        SignatureResult com motivo em caso de falha
    """
    if not secret:
        return SignatureResult(valid=False, error="missing_app_secret")

    signature = next(
        (value for name, value in headers.items() if name.lower() == SIGNATURE_HEADER),
        None,
    )
    if not signature:
        return SignatureResult(valid=False, error="missing_signature")

    if not verify_signature(raw_body, signature, secret):
        return SignatureResult(valid=False, error="signature_mismatch")

    return SignatureResult(valid=True)
