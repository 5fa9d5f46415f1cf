"""Testes de verify_webhook_challenge (Instagram)."""

from __future__ import annotations

import pytest

from api.connectors.instagram.webhook import WebhookChallengeError, verify_webhook_challenge


def test_returns_challenge() -> None:
    assert verify_webhook_challenge("subscribe", "token", "12345", "token") == "12345"


def test_missing_challenge_returns_empty() -> None:
    assert verify_webhook_challenge("subscribe", "token", None, "token") == ""


def test_missing_expected_token() -> None:
    with pytest.raises(WebhookChallengeError, match="missing_verify_token"):
        verify_webhook_challenge("subscribe", "token", "1", None)


@pytest.mark.parametrize(
    ("mode", "token"),
    [("subscribe", "wrong"), ("unsubscribe", "token"), (None, "token"), ("subscribe", None)],
)
def test_verification_failed(mode: str | None, token: str | None) -> None:
    with pytest.raises(WebhookChallengeError, match="verification_failed"):
        verify_webhook_challenge(mode, token, "1", "token")
