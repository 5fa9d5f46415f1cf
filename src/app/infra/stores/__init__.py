"""Stores — implementações concretas de persistência.

Módulos disponíveis:
    - firestore_event_store: Event Store usando Firestore (create atômico)
    - firestore_message_log_store: MessageLogs usando Firestore
    - firestore_config_store: configuração ativa usando Firestore
    - memory_stores: Stores em memória para desenvolvimento/testes
"""

from __future__ import annotations

from app.infra.stores.firestore_config_store import FirestoreConfigStore
from app.infra.stores.firestore_event_store import FirestoreEventStore
from app.infra.stores.firestore_message_log_store import FirestoreMessageLogStore
from app.infra.stores.memory_stores import (
    MemoryConfigStore,
    MemoryEventStore,
    MemoryMessageLogStore,
)

__all__ = [
    # Firestore
    "FirestoreConfigStore",
    "FirestoreEventStore",
    "FirestoreMessageLogStore",
    # Memory (dev/test)
    "MemoryConfigStore",
    "MemoryEventStore",
    "MemoryMessageLogStore",
]
