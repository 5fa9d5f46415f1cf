"""Modelos de domínio: eventos, logs de mensagem e configuração ativa."""

from app.domain.automation_config import (
    DEFAULT_FOLLOWER_TEMPLATE,
    DEFAULT_LIKE_TEMPLATE,
    KIND_BINDINGS,
    AutomationConfig,
    KindBinding,
)
from app.domain.events import EventKind, InstagramEvent, NormalizedEvent
from app.domain.message_log import MessageLog, MessageStatus

__all__ = [
    "DEFAULT_FOLLOWER_TEMPLATE",
    "DEFAULT_LIKE_TEMPLATE",
    "KIND_BINDINGS",
    "AutomationConfig",
    "EventKind",
    "InstagramEvent",
    "KindBinding",
    "MessageLog",
    "MessageStatus",
    "NormalizedEvent",
]
