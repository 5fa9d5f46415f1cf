"""Chave de dedupe (source_event_key) para notificações Instagram.

Formatos:
    follow:<actor_id>:<timestamp>
    like:<actor_id>:<media_id>:<timestamp>   (media_id omitido se ausente)
    <kind>:payload:<sha256>                  (sem timestamp no payload)
"""

from __future__ import annotations

import hashlib
import json
from typing import Any

from app.domain.events import EventKind


def compute_source_event_key(
    kind: EventKind,
    actor_id: str,
    *,
    timestamp: str | None,
    change: dict[str, Any],
    media_id: str | None = None,
) -> str:
    """Gera chave determinística para a mesma notificação reentregue.

    Args:
        kind: Tipo do evento
        actor_id: ID de quem seguiu/curtiu
        timestamp: value.timestamp ou entry.time (já convertido para str)
        change: Objeto `change` bruto (fallback de hash)
        media_id: ID da mídia curtida (apenas LIKE)
    """
    prefix = kind.value.lower()
    if not timestamp:
        canonical = json.dumps(change, sort_keys=True, separators=(",", ":"), default=str)
        digest = hashlib.sha256(canonical.encode("utf-8")).hexdigest()
        return f"{prefix}:payload:{digest}"

    parts = [prefix, actor_id]
    if kind is EventKind.LIKE and media_id:
        parts.append(media_id)
    parts.append(timestamp)
    return ":".join(parts)
