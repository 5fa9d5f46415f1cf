"""Formatters de logging estruturado (JSON).

Campos obrigatórios em todo log: asctime, level, logger, message,
correlation_id, service.
"""

from __future__ import annotations

from pythonjsonlogger.json import JsonFormatter

REQUIRED_LOG_FIELDS = (
    "asctime",
    "levelname",
    "name",
    "message",
    "correlation_id",
    "service",
)

FIELD_RENAME_MAP = {
    "levelname": "level",
    "name": "logger",
}


def create_json_formatter() -> JsonFormatter:
    """Cria formatter JSON com campos padronizados.

    Exemplo de output:
        {
            "asctime": "2026-10-17 10:30:00,123",
            "level": "INFO",
            "logger": "app.use_cases.instagram.process_pending_events",
            "message": "pending_events_processed",
            "correlation_id": "abc-123",
            "service": "instagram_dm_autopilot",
            "visited": 3
        }
    """
    format_string = " ".join(f"%({field})s" for field in REQUIRED_LOG_FIELDS)
    return JsonFormatter(format_string, rename_fields=FIELD_RENAME_MAP)
