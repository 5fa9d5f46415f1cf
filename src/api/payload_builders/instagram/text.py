"""Builder para DM de texto (Instagram Messaging API)."""

from __future__ import annotations

from typing import Any


def build_text_message_payload(recipient_id: str, text: str) -> dict[str, Any]:
    """Constrói payload `{"recipient": {"id"}, "message": {"text"}}`.

    Raises:
        ValueError: recipient_id ou texto vazios
    """
    if not recipient_id or not recipient_id.strip():
        raise ValueError("recipient_id é obrigatório")
    if not text or not text.strip():
        raise ValueError("texto da mensagem é obrigatório")
    return {
        "recipient": {"id": recipient_id.strip()},
        "message": {"text": text},
    }
