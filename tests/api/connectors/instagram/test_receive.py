"""Testes de parse_webhook_request (Instagram)."""

from __future__ import annotations

import hashlib
import hmac

import pytest

from api.connectors.instagram.webhook import (
    InvalidJsonError,
    InvalidSignatureError,
    parse_webhook_request,
)

SECRET = "app-secret"


def _headers(body: bytes) -> dict[str, str]:
    digest = hmac.new(SECRET.encode(), body, hashlib.sha256).hexdigest()
    return {"x-hub-signature-256": f"sha256={digest}"}


def test_parses_signed_object() -> None:
    body = b'{"object": "instagram", "entry": []}'
    payload, signature = parse_webhook_request(body, _headers(body), SECRET)
    assert payload == {"object": "instagram", "entry": []}
    assert signature.valid is True


def test_signature_checked_before_json() -> None:
    """Corpo inválido com assinatura inválida é rejeitado pela assinatura."""
    with pytest.raises(InvalidSignatureError, match="signature_mismatch"):
        parse_webhook_request(b"not json", {"x-hub-signature-256": "sha256=00"}, SECRET)


def test_missing_signature() -> None:
    with pytest.raises(InvalidSignatureError, match="missing_signature"):
        parse_webhook_request(b"{}", {}, SECRET)


def test_missing_app_secret_rejects() -> None:
    body = b"{}"
    with pytest.raises(InvalidSignatureError, match="missing_app_secret"):
        parse_webhook_request(body, _headers(body), None)


@pytest.mark.parametrize(
    ("body", "reason"),
    [
        (b"{invalid", "invalid_json"),
        (b"", "empty_body"),
        (b"   ", "empty_body"),
        (b"[1, 2]", "payload_not_object"),
        (b'"text"', "payload_not_object"),
        (b"\xff\xfe", "invalid_json"),
    ],
)
def test_invalid_json(body: bytes, reason: str) -> None:
    with pytest.raises(InvalidJsonError, match=reason):
        parse_webhook_request(body, _headers(body), SECRET)
