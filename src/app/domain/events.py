"""Eventos Instagram — tipos de gatilho e registro durável.

NormalizedEvent é a saída do extrator (ainda não persistida).
InstagramEvent é o registro persistido, deduplicado por source_event_key.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(UTC)


class EventKind(StrEnum):
    """Tipos de evento que disparam DM automática."""

    FOLLOW = "FOLLOW"
    LIKE = "LIKE"


@dataclass(frozen=True, slots=True)
class NormalizedEvent:
    """Evento extraído do webhook, pronto para ingestão."""

    kind: EventKind
    external_user_id: str
    source_event_key: str
    external_username: str | None = None


class InstagramEvent(BaseModel):
    """Evento persistido no Event Store.

    `is_processed` só transita de False para True.
    """

    id: str
    kind: EventKind
    external_user_id: str
    external_username: str | None = None
    source_event_key: str = Field(..., min_length=1)
    is_processed: bool = False
    created_at: datetime = Field(default_factory=_utcnow)

    @classmethod
    def from_normalized(cls, event_id: str, event: NormalizedEvent) -> InstagramEvent:
        """Cria registro novo (não processado) a partir do evento extraído."""
        return cls(
            id=event_id,
            kind=event.kind,
            external_user_id=event.external_user_id,
            external_username=event.external_username,
            source_event_key=event.source_event_key,
        )

    def to_firestore_dict(self) -> dict[str, Any]:
        """Converte para dict compatível com Firestore (id é o document id)."""
        data = self.model_dump(exclude={"id"})
        data["kind"] = self.kind.value
        return data

    @classmethod
    def from_firestore_dict(cls, event_id: str, data: dict[str, Any]) -> InstagramEvent:
        """Cria instância a partir de documento Firestore."""
        created_at = data.get("created_at")
        if isinstance(created_at, str):
            data = {**data, "created_at": datetime.fromisoformat(created_at)}
        return cls(id=event_id, **data)
