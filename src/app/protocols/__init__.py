"""Protocolos e contratos do core da aplicação."""

from .config_provider import ConfigProviderProtocol
from .delivery import DeliveryClientProtocol, DeliveryResult
from .event_store import EventStoreProtocol
from .message_log_store import MessageLogStoreProtocol
from .processing_lock import ProcessingLockProtocol

__all__ = [
    "ConfigProviderProtocol",
    "DeliveryClientProtocol",
    "DeliveryResult",
    "EventStoreProtocol",
    "MessageLogStoreProtocol",
    "ProcessingLockProtocol",
]
