"""MessageLog — registro de uma tentativa de envio de DM.

Criado em PENDING antes de qualquer chamada de rede e resolvido uma única
vez para SENT ou FAILED. PENDING persistente indica crash entre criação e
resolução (não há reconciliação automática).
"""

from __future__ import annotations

from datetime import UTC, datetime
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field

from app.domain.events import EventKind


def _utcnow() -> datetime:
    return datetime.now(UTC)


class MessageStatus(StrEnum):
    """Status de entrega de uma DM."""

    PENDING = "PENDING"
    SENT = "SENT"
    FAILED = "FAILED"


class MessageLog(BaseModel):
    """Tentativa de envio e seu status resolvido."""

    id: str
    recipient_id: str
    recipient_username: str | None = None
    message_kind: EventKind
    status: MessageStatus = MessageStatus.PENDING
    error: str | None = None
    created_at: datetime = Field(default_factory=_utcnow)

    @property
    def is_resolved(self) -> bool:
        return self.status is not MessageStatus.PENDING

    def to_firestore_dict(self) -> dict[str, Any]:
        data = self.model_dump(exclude={"id"})
        data["message_kind"] = self.message_kind.value
        data["status"] = self.status.value
        return data

    @classmethod
    def from_firestore_dict(cls, log_id: str, data: dict[str, Any]) -> MessageLog:
        created_at = data.get("created_at")
        if isinstance(created_at, str):
            data = {**data, "created_at": datetime.fromisoformat(created_at)}
        return cls(id=log_id, **data)
