"""Envio manual de DM e relatório de envios.

Endpoints:
- POST /api/messages/send
- GET /api/messages/logs?limit=20
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Request, Response, status

from api.routes.instagram.schemas import (
    DELIVERY_FAILED,
    ManualSendRequest,
    configuration_missing_response,
    error_response,
    validation_error_response,
)
from app.bootstrap import get_message_log_store
from app.bootstrap.instagram_factory import create_send_manual_message_use_case
from app.observability import get_correlation_id, reset_correlation_id, set_correlation_id
from app.use_cases.instagram import ConfigurationMissingError

logger = logging.getLogger(__name__)

router = APIRouter()

DEFAULT_LOGS_LIMIT = 20
MAX_LOGS_LIMIT = 100


@router.post("/messages/send", response_model=None)
async def send_message(request: Request) -> Response | dict[str, Any]:
    """Envia DM manual (ignora toggles e dedupe).

    Returns:
        `{"ok": true, "log_id"}`; 422 body inválido; 400 sem configuração;
        502 quando o envio falha (log FAILED já gravado).
    """
    token = set_correlation_id(request.headers.get("x-correlation-id"))
    try:
        try:
            body = ManualSendRequest.model_validate(await request.json())
        except ValueError as exc:  # JSON inválido ou ValidationError
            return validation_error_response(exc)

        try:
            result = await create_send_manual_message_use_case().execute(
                recipient_id=body.recipient_id,
                message_kind=body.message_kind,
                message=body.message,
                username=body.username,
                correlation_id=get_correlation_id(),
            )
        except ConfigurationMissingError:
            return configuration_missing_response()
        except ValueError as exc:
            return validation_error_response(exc)

        if not result.success:
            return error_response(
                DELIVERY_FAILED,
                result.error or "delivery_failed",
                status.HTTP_502_BAD_GATEWAY,
                log_id=result.log_id,
            )
        return {"ok": True, "log_id": result.log_id}
    finally:
        reset_correlation_id(token)


@router.get("/messages/logs")
async def list_message_logs(request: Request) -> dict[str, Any]:
    """Últimos envios, mais recentes primeiro."""
    try:
        limit = int(request.query_params.get("limit", DEFAULT_LOGS_LIMIT))
    except ValueError:
        limit = DEFAULT_LOGS_LIMIT
    limit = max(1, min(limit, MAX_LOGS_LIMIT))

    logs = await get_message_log_store().list_recent(limit)
    return {"logs": [log.model_dump(mode="json") for log in logs]}
