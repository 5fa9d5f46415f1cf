"""Helpers de logging para Graph API (sem tokens, IDs de destinatário ou texto)."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .meta_errors import InstagramApiError

logger = logging.getLogger(__name__)


def log_meta_error(meta_error: InstagramApiError, status_code: int) -> None:
    """Loga erro da Meta sem expor dados sensíveis."""
    logger.warning(
        "instagram_api_error",
        extra={
            "status_code": status_code,
            "error_type": meta_error.error_type,
            "error_code": meta_error.error_code,
            "error_subcode": meta_error.error_subcode,
            "is_rate_limited": meta_error.is_rate_limited,
        },
    )


def log_success(status_code: int, latency_ms: float) -> None:
    """Loga envio bem-sucedido."""
    logger.debug(
        "instagram_message_sent",
        extra={"status_code": status_code, "latency_ms": round(latency_ms, 2)},
    )
