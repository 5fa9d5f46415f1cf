"""Estatísticas do painel.

Endpoint:
- GET /api/stats
"""

from __future__ import annotations

import asyncio

from fastapi import APIRouter

from app.bootstrap import get_event_store, get_message_log_store
from app.domain.message_log import MessageStatus

router = APIRouter()


@router.get("/stats")
async def get_stats() -> dict[str, int]:
    """Eventos pendentes e contagem de envios por status final."""
    message_logs = get_message_log_store()
    pending, sent, failed = await asyncio.gather(
        get_event_store().count_pending(),
        message_logs.count_by_status(MessageStatus.SENT),
        message_logs.count_by_status(MessageStatus.FAILED),
    )
    return {
        "pending_events": pending,
        "sent_messages": sent,
        "failed_messages": failed,
    }
