"""Firestore Event Store — eventos Instagram deduplicados.

O document ID é o SHA-256 da source_event_key. A inserção usa
`document.create()`, que falha com AlreadyExists se o documento já
existe: a unicidade é garantida pelo Firestore, sem check-then-write.

Consulta de pendentes (is_processed == False ordenado por created_at)
requer índice composto na collection.
"""

from __future__ import annotations

import asyncio
import hashlib
import logging
from typing import TYPE_CHECKING

from google.api_core import exceptions as gcp_exceptions
from google.cloud.firestore_v1.base_query import FieldFilter

from app.domain.events import InstagramEvent
from app.protocols.event_store import EventStoreProtocol
from utils.errors import FirestoreUnavailableError

if TYPE_CHECKING:
    from google.cloud.firestore import Client as FirestoreClient

    from app.domain.events import NormalizedEvent

logger = logging.getLogger(__name__)

EVENTS_COLLECTION = "instagram_events"


def event_document_id(source_event_key: str) -> str:
    """Deriva document ID estável e seguro (sem '/') da chave de dedupe."""
    return hashlib.sha256(source_event_key.encode("utf-8")).hexdigest()


class FirestoreEventStore(EventStoreProtocol):
    """Event Store usando Firestore.

    Args:
        firestore_client: Cliente Firestore
        collection_name: Nome da collection (default: instagram_events)
    """

    def __init__(
        self,
        firestore_client: FirestoreClient,
        collection_name: str = EVENTS_COLLECTION,
    ) -> None:
        self._db = firestore_client
        self._collection = collection_name

    async def insert_if_absent(self, event: NormalizedEvent) -> InstagramEvent | None:
        return await asyncio.to_thread(self._insert_sync, event)

    def _insert_sync(self, event: NormalizedEvent) -> InstagramEvent | None:
        doc_id = event_document_id(event.source_event_key)
        record = InstagramEvent.from_normalized(doc_id, event)
        try:
            self._db.collection(self._collection).document(doc_id).create(
                record.to_firestore_dict()
            )
        except gcp_exceptions.AlreadyExists:
            logger.debug("event_already_exists", extra={"doc_id": doc_id[:8] + "..."})
            return None
        except gcp_exceptions.GoogleAPIError as exc:
            logger.error(
                "event_insert_failed",
                extra={"error_type": type(exc).__name__, "doc_id": doc_id[:8] + "..."},
            )
            raise FirestoreUnavailableError("Falha ao inserir evento no Firestore") from exc
        return record

    async def list_pending(self) -> list[InstagramEvent]:
        return await asyncio.to_thread(self._list_pending_sync)

    def _list_pending_sync(self) -> list[InstagramEvent]:
        try:
            docs = (
                self._db.collection(self._collection)
                .where(filter=FieldFilter("is_processed", "==", False))
                .order_by("created_at")
                .stream()
            )
            return [InstagramEvent.from_firestore_dict(doc.id, doc.to_dict() or {}) for doc in docs]
        except gcp_exceptions.GoogleAPIError as exc:
            raise FirestoreUnavailableError("Falha ao listar eventos pendentes") from exc

    async def mark_processed(self, event_id: str) -> None:
        await asyncio.to_thread(self._mark_processed_sync, event_id)

    def _mark_processed_sync(self, event_id: str) -> None:
        try:
            self._db.collection(self._collection).document(event_id).update(
                {"is_processed": True}
            )
        except gcp_exceptions.GoogleAPIError as exc:
            raise FirestoreUnavailableError("Falha ao marcar evento processado") from exc

    async def count_pending(self) -> int:
        return await asyncio.to_thread(self._count_pending_sync)

    def _count_pending_sync(self) -> int:
        try:
            results = (
                self._db.collection(self._collection)
                .where(filter=FieldFilter("is_processed", "==", False))
                .count()
                .get()
            )
        except gcp_exceptions.GoogleAPIError as exc:
            raise FirestoreUnavailableError("Falha ao contar eventos pendentes") from exc
        return int(results[0][0].value) if results else 0
