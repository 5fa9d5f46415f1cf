"""Filters de logging para injeção de contexto e mascaramento.

- CorrelationIdFilter: injeta correlation_id e service em cada record.
- SensitiveFieldFilter: mascara campos sensíveis passados via `extra`
  (tokens, secrets, usernames) antes da formatação.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

SENSITIVE_FIELDS = frozenset(
    {
        "access_token",
        "verify_token",
        "app_secret",
        "recipient_username",
        "external_username",
        "username",
        "message_text",
    }
)

MASK = "***"


class CorrelationIdFilter(logging.Filter):
    """Injeta correlation_id e service em cada record de log.

    Se correlation_id já foi passado via `extra`, preserva o valor.
    """

    def __init__(
        self,
        service_name: str,
        correlation_id_getter: Callable[[], str] | None = None,
    ) -> None:
        super().__init__()
        self._service_name = service_name
        self._get_correlation_id = correlation_id_getter or (lambda: "")

    def filter(self, record: logging.LogRecord) -> bool:
        existing = getattr(record, "correlation_id", None)
        record.correlation_id = existing if existing else self._get_correlation_id()
        record.service = self._service_name
        return True


class SensitiveFieldFilter(logging.Filter):
    """Mascara atributos sensíveis do record (nunca filtra o record)."""

    def __init__(self, fields: Iterable[str] = SENSITIVE_FIELDS) -> None:
        super().__init__()
        self._fields = frozenset(fields)

    def filter(self, record: logging.LogRecord) -> bool:
        for field_name in self._fields:
            value = getattr(record, field_name, None)
            if value:
                setattr(record, field_name, MASK)
        return True
