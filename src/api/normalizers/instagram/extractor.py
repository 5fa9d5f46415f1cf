"""Extrator de notificações Instagram (novos seguidores e curtidas).

Estrutura do webhook:
    {"entry": [{"id", "time", "changes": [{"field", "value"}]}]}

Roteamento por `field`:
    follows / followers -> FOLLOW
    likes               -> LIKE

Entradas malformadas são ignoradas (log DEBUG) sem interromper o lote.
Não faz validação de negócio - apenas extração estrutural.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from itertools import chain
from typing import Any

from api.normalizers.instagram.event_key import compute_source_event_key
from app.domain.events import EventKind, NormalizedEvent

logger = logging.getLogger(__name__)

FIELD_KINDS: dict[str, EventKind] = {
    "follows": EventKind.FOLLOW,
    "followers": EventKind.FOLLOW,
    "likes": EventKind.LIKE,
}


def _scalar(value: Any) -> str | None:
    """Converte id/timestamp (str ou int) em str não-vazia."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return str(int(value)) if float(value).is_integer() else str(value)
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def _actor_id(value: dict[str, Any]) -> str | None:
    sender = value.get("from")
    candidates = (
        value.get("user_id"),
        sender.get("id") if isinstance(sender, dict) else None,
        value.get("id"),
    )
    return next((actor for actor in map(_scalar, candidates) if actor), None)


def _username(value: dict[str, Any]) -> str | None:
    username = value.get("username")
    if not username:
        sender = value.get("from")
        username = sender.get("username") if isinstance(sender, dict) else None
    if not isinstance(username, str):
        return None
    return username.strip() or None


def _media_id(value: dict[str, Any]) -> str | None:
    media = value.get("media")
    return _scalar(value.get("media_id")) or (
        _scalar(media.get("id")) if isinstance(media, dict) else None
    )


def _iter_changes(payload: Any, kind: EventKind) -> Iterator[tuple[dict[str, Any], dict[str, Any]]]:
    """Percorre (entry, change) cujo field roteia para `kind`."""
    entries = payload.get("entry") if isinstance(payload, dict) else None
    if not isinstance(entries, list):
        logger.debug("instagram_payload_without_entries")
        return

    for entry in entries:
        if not isinstance(entry, dict):
            logger.debug("instagram_entry_skipped", extra={"reason": "entry_not_object"})
            continue
        changes = entry.get("changes")
        if not isinstance(changes, list):
            logger.debug("instagram_entry_skipped", extra={"reason": "changes_not_list"})
            continue
        for change in changes:
            if not isinstance(change, dict):
                logger.debug("instagram_change_skipped", extra={"reason": "change_not_object"})
                continue
            if FIELD_KINDS.get(str(change.get("field") or "")) is kind:
                yield entry, change


def _iter_events(payload: Any, kind: EventKind) -> Iterator[NormalizedEvent]:
    for entry, change in _iter_changes(payload, kind):
        value = change.get("value")
        if not isinstance(value, dict):
            logger.debug("instagram_change_skipped", extra={"reason": "value_not_object"})
            continue

        actor_id = _actor_id(value)
        if actor_id is None:
            logger.debug(
                "instagram_change_skipped",
                extra={"reason": "missing_actor_id", "event_kind": kind.value},
            )
            continue

        timestamp = _scalar(value.get("timestamp")) or _scalar(entry.get("time"))
        yield NormalizedEvent(
            kind=kind,
            external_user_id=actor_id,
            external_username=_username(value),
            source_event_key=compute_source_event_key(
                kind,
                actor_id,
                timestamp=timestamp,
                change=change,
                media_id=_media_id(value) if kind is EventKind.LIKE else None,
            ),
        )


def iter_follow_events(payload: Any) -> Iterator[NormalizedEvent]:
    """Eventos FOLLOW do payload, na ordem em que aparecem."""
    return _iter_events(payload, EventKind.FOLLOW)


def iter_like_events(payload: Any) -> Iterator[NormalizedEvent]:
    """Eventos LIKE do payload, na ordem em que aparecem."""
    return _iter_events(payload, EventKind.LIKE)


def extract_events(payload: Any) -> Iterator[NormalizedEvent]:
    """Todos os eventos: follows primeiro, depois likes."""
    return chain(iter_follow_events(payload), iter_like_events(payload))
