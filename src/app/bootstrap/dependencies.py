"""Factories de stores e lock — criação de implementações concretas.

Backends escolhidos por StoreSettings (STORE_BACKEND e
PROCESSING_LOCK_BACKEND). Memory fora de development gera alerta.
"""

from __future__ import annotations

import logging

from app.bootstrap.clients import create_async_redis_client, create_firestore_client
from app.infra.locks import MemoryProcessingLock, RedisProcessingLock
from app.infra.stores import (
    FirestoreConfigStore,
    FirestoreEventStore,
    FirestoreMessageLogStore,
    MemoryConfigStore,
    MemoryEventStore,
    MemoryMessageLogStore,
)
from app.protocols.config_provider import ConfigProviderProtocol
from app.protocols.event_store import EventStoreProtocol
from app.protocols.message_log_store import MessageLogStoreProtocol
from app.protocols.processing_lock import ProcessingLockProtocol
from config.settings import get_base_settings, get_firestore_settings, get_store_settings

logger = logging.getLogger(__name__)


def _warn_memory_outside_dev(component: str) -> None:
    environment = get_base_settings().environment
    if environment != "development":
        logger.warning(
            "memory_store_in_non_dev",
            extra={"component": component, "backend": "memory", "environment": environment},
        )


def _unknown_backend(variable: str, backend: str) -> ValueError:
    return ValueError(f"{variable} inválido: {backend}")


# ──────────────────────────────────────────────────────────────────────────────
# Stores
# ──────────────────────────────────────────────────────────────────────────────


def create_event_store() -> EventStoreProtocol:
    """Cria Event Store conforme STORE_BACKEND."""
    backend = get_store_settings().backend

    if backend == "firestore":
        store = FirestoreEventStore(
            create_firestore_client(),
            collection_name=get_firestore_settings().collection_events,
        )
        logger.info("event_store_created", extra={"backend": "firestore"})
        return store

    if backend == "memory":
        _warn_memory_outside_dev("event_store")
        logger.info("event_store_created", extra={"backend": "memory"})
        return MemoryEventStore()

    raise _unknown_backend("STORE_BACKEND", backend)


def create_message_log_store() -> MessageLogStoreProtocol:
    """Cria MessageLog Store conforme STORE_BACKEND."""
    backend = get_store_settings().backend

    if backend == "firestore":
        store = FirestoreMessageLogStore(
            create_firestore_client(),
            collection_name=get_firestore_settings().collection_message_logs,
        )
        logger.info("message_log_store_created", extra={"backend": "firestore"})
        return store

    if backend == "memory":
        _warn_memory_outside_dev("message_log_store")
        logger.info("message_log_store_created", extra={"backend": "memory"})
        return MemoryMessageLogStore()

    raise _unknown_backend("STORE_BACKEND", backend)


def create_config_provider() -> ConfigProviderProtocol:
    """Cria provedor da configuração ativa conforme STORE_BACKEND."""
    backend = get_store_settings().backend

    if backend == "firestore":
        provider = FirestoreConfigStore(
            create_firestore_client(),
            collection_name=get_firestore_settings().collection_config,
        )
        logger.info("config_provider_created", extra={"backend": "firestore"})
        return provider

    if backend == "memory":
        _warn_memory_outside_dev("config_provider")
        logger.info("config_provider_created", extra={"backend": "memory"})
        return MemoryConfigStore()

    raise _unknown_backend("STORE_BACKEND", backend)


# ──────────────────────────────────────────────────────────────────────────────
# Processing Lock
# ──────────────────────────────────────────────────────────────────────────────


def create_processing_lock() -> ProcessingLockProtocol:
    """Cria lock do processador conforme PROCESSING_LOCK_BACKEND."""
    backend = get_store_settings().lock_backend

    if backend == "redis":
        lock = RedisProcessingLock(create_async_redis_client())
        logger.info("processing_lock_created", extra={"backend": "redis"})
        return lock

    if backend == "memory":
        _warn_memory_outside_dev("processing_lock")
        logger.info("processing_lock_created", extra={"backend": "memory"})
        return MemoryProcessingLock()

    raise _unknown_backend("PROCESSING_LOCK_BACKEND", backend)
