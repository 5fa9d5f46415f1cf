"""Use cases do pipeline Instagram: ingestão, processamento e envio manual."""

from .errors import (
    ConfigurationMissingError,
    ProcessingInProgressError,
    ProcessingLockLostError,
)
from .ingest_events import IngestEventsUseCase, IngestResult
from .process_pending_events import ProcessingResult, ProcessPendingEventsUseCase
from .send_manual_message import ManualSendResult, SendManualMessageUseCase

__all__ = [
    "ConfigurationMissingError",
    "IngestEventsUseCase",
    "IngestResult",
    "ManualSendResult",
    "ProcessPendingEventsUseCase",
    "ProcessingInProgressError",
    "ProcessingLockLostError",
    "ProcessingResult",
    "SendManualMessageUseCase",
]
