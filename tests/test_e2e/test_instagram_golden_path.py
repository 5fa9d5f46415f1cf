"""Teste E2E do golden path: configuração, webhook, DM e estatísticas."""

from __future__ import annotations

import hashlib
import hmac
import json
from typing import Any

import pytest
from fastapi.testclient import TestClient

from app.app import create_app
from app.protocols.delivery import DeliveryResult
from tests.fakes.fake_instagram import FakeDeliveryClient

APP_SECRET = "test-app-secret"

SETTINGS_BODY = {
    "accessToken": "EAAB-live-token-9876",
    "businessAccountId": "17841400000000000",
    "verifyToken": "panel-verify",
    "followerMessageTemplate": "Welcome {{username}}!",
    "likeMessageTemplate": "Thanks {{username}}!",
    "followerAutomationEnabled": True,
    "likeAutomationEnabled": False,
}


def _payload() -> dict[str, Any]:
    return {
        "object": "instagram",
        "entry": [
            {
                "id": "17841400000000000",
                "time": 1704067200,
                "changes": [
                    {"field": "follows", "value": {"user_id": "1", "username": "ana"}},
                    {"field": "follows", "value": {"user_id": "2"}},
                    {
                        "field": "likes",
                        "value": {"user_id": "3", "username": "caio", "media_id": "m1"},
                    },
                ],
            }
        ],
    }


def _post_webhook(client: TestClient, payload: dict[str, Any]):
    body = json.dumps(payload).encode("utf-8")
    digest = hmac.new(APP_SECRET.encode(), body, hashlib.sha256).hexdigest()
    return client.post(
        "/webhook/instagram/",
        content=body,
        headers={"Content-Type": "application/json", "X-Hub-Signature-256": f"sha256={digest}"},
    )


@pytest.fixture
def delivery_client(monkeypatch: pytest.MonkeyPatch) -> FakeDeliveryClient:
    client = FakeDeliveryClient()
    monkeypatch.setattr("app.bootstrap.instagram_factory.get_delivery_client", lambda: client)
    return client


def test_golden_path(delivery_client: FakeDeliveryClient) -> None:
    with TestClient(create_app()) as client:
        saved = client.post("/api/settings", json=SETTINGS_BODY)
        assert saved.status_code == 200
        assert saved.json()["access_token"] == "****9876"

        challenge = client.get(
            "/webhook/instagram/",
            params={
                "hub.mode": "subscribe",
                "hub.verify_token": "panel-verify",
                "hub.challenge": "12345",
            },
        )
        assert challenge.status_code == 200
        assert challenge.text == "12345"

        received = _post_webhook(client, _payload())
        assert received.status_code == 200
        assert received.json()["inserted"] == 3

        # Reentrega da Meta não gera novo envio
        redelivered = _post_webhook(client, _payload())
        assert redelivered.json()["duplicates"] == 3

        assert delivery_client.messages == ["Welcome ana!", "Welcome there!"]
        assert client.get("/api/stats").json() == {
            "pending_events": 0,
            "sent_messages": 2,
            "failed_messages": 0,
        }

        logs = client.get("/api/messages/logs").json()["logs"]
        assert [log["recipient_id"] for log in logs] == ["2", "1"]


def test_manual_send_failure_is_reported(monkeypatch: pytest.MonkeyPatch) -> None:
    failing = FakeDeliveryClient(result=DeliveryResult.failure("Invalid OAuth access token"))
    monkeypatch.setattr("app.bootstrap.instagram_factory.get_delivery_client", lambda: failing)

    with TestClient(create_app()) as client:
        client.post("/api/settings", json=SETTINGS_BODY)

        response = client.post("/api/messages/send", json={"recipientId": "42"})

        assert response.status_code == 502
        assert response.json()["error"]["message"] == "Invalid OAuth access token"
        assert client.get("/api/stats").json()["failed_messages"] == 1


def test_unsigned_webhook_is_rejected() -> None:
    with TestClient(create_app()) as client:
        response = client.post("/webhook/instagram/", content=b"{}")

    assert response.status_code == 401
