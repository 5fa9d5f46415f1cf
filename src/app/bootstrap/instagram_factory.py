"""Factory de wiring para Instagram (bootstrap)."""

from __future__ import annotations

from app.bootstrap import (
    get_config_provider,
    get_delivery_client,
    get_event_store,
    get_message_log_store,
    get_processing_lock,
)
from app.use_cases.instagram import (
    IngestEventsUseCase,
    ProcessPendingEventsUseCase,
    SendManualMessageUseCase,
)
from config.settings import get_store_settings


def create_ingest_events_use_case() -> IngestEventsUseCase:
    """Cria use case de ingestão com o Event Store configurado."""
    return IngestEventsUseCase(event_store=get_event_store())


def create_process_pending_events_use_case() -> ProcessPendingEventsUseCase:
    """Cria processador de pendentes com stores, cliente e lock configurados."""
    return ProcessPendingEventsUseCase(
        config_provider=get_config_provider(),
        event_store=get_event_store(),
        message_logs=get_message_log_store(),
        delivery_client=get_delivery_client(),
        processing_lock=get_processing_lock(),
        lock_ttl_seconds=get_store_settings().lock_ttl_seconds,
    )


def create_send_manual_message_use_case() -> SendManualMessageUseCase:
    """Cria use case de envio manual."""
    return SendManualMessageUseCase(
        config_provider=get_config_provider(),
        message_logs=get_message_log_store(),
        delivery_client=get_delivery_client(),
    )
