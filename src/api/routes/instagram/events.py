"""Gatilho manual do processador de eventos pendentes.

Endpoint:
- POST /api/events/process
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Request, Response, status

from api.routes.instagram.schemas import (
    PROCESSING_IN_PROGRESS,
    configuration_missing_response,
    error_response,
)
from app.bootstrap import get_config_provider
from app.bootstrap.instagram_factory import create_process_pending_events_use_case
from app.observability import get_correlation_id, reset_correlation_id, set_correlation_id
from app.use_cases.instagram import ProcessingInProgressError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/events/process", response_model=None)
async def process_events(request: Request) -> Response | dict[str, Any]:
    """Processa todos os eventos pendentes.

    Returns:
        `{"processed_count", "sent", "failed", "skipped"}`; 400 sem
        configuração; 409 se outra execução estiver em andamento.
    """
    token = set_correlation_id(request.headers.get("x-correlation-id"))
    try:
        if await get_config_provider().get() is None:
            return configuration_missing_response()

        try:
            result = await create_process_pending_events_use_case().execute(
                correlation_id=get_correlation_id(),
            )
        except ProcessingInProgressError as exc:
            return error_response(
                PROCESSING_IN_PROGRESS,
                str(exc),
                status.HTTP_409_CONFLICT,
            )

        return {
            "processed_count": result.visited,
            "sent": result.sent,
            "failed": result.failed,
            "skipped": result.skipped,
        }
    finally:
        reset_correlation_id(token)
