"""Testes do adapter GraphApiDeliveryClient."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from api.connectors.instagram.http_base import HttpError
from api.connectors.instagram.http_client import InstagramSendError
from app.bootstrap.instagram_adapters import GraphApiDeliveryClient
from config.settings import InstagramSettings


def _delivery(send_message: AsyncMock) -> GraphApiDeliveryClient:
    http_client = AsyncMock()
    http_client.send_message = send_message
    return GraphApiDeliveryClient(
        http_client=http_client,
        settings=InstagramSettings(app_secret="s", api_version="v21.0"),
    )


async def _send(client: GraphApiDeliveryClient, **overrides: str):
    kwargs = {
        "access_token": "token-abc",
        "business_account_id": "178414",
        "recipient_id": "42",
        "message": "Hi bob!",
    }
    kwargs.update(overrides)
    return await client.send(**kwargs)


@pytest.mark.asyncio
async def test_success_returns_message_id() -> None:
    send_message = AsyncMock(return_value={"recipient_id": "42", "message_id": "mid.9"})

    result = await _send(_delivery(send_message))

    assert result.success is True
    assert result.message_id == "mid.9"
    send_message.assert_awaited_once_with(
        endpoint="https://graph.facebook.com/v21.0/178414/messages",
        access_token="token-abc",
        payload={"recipient": {"id": "42"}, "message": {"text": "Hi bob!"}},
    )


@pytest.mark.asyncio
async def test_meta_error_becomes_failure_with_message() -> None:
    send_message = AsyncMock(side_effect=InstagramSendError("rate limited", status_code=400))

    result = await _send(_delivery(send_message))

    assert result.success is False
    assert result.error == "rate limited"


@pytest.mark.asyncio
async def test_timeout_becomes_failure() -> None:
    send_message = AsyncMock(side_effect=HttpError("http_timeout", is_retryable=True))

    result = await _send(_delivery(send_message))

    assert result.error == "http_timeout"


@pytest.mark.asyncio
async def test_empty_message_fails_without_calling_api() -> None:
    send_message = AsyncMock()

    result = await _send(_delivery(send_message), message="")

    assert result.success is False
    send_message.assert_not_awaited()


@pytest.mark.asyncio
async def test_missing_business_account_fails() -> None:
    send_message = AsyncMock()

    result = await _send(_delivery(send_message), business_account_id="")

    assert result.success is False
    assert result.error == "business_account_id é obrigatório"
