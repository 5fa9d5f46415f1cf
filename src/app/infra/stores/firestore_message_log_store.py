"""Firestore MessageLog Store — histórico de envios de DM."""

from __future__ import annotations

import asyncio
import logging
import uuid
from typing import TYPE_CHECKING, Any

from google.api_core import exceptions as gcp_exceptions
from google.cloud.firestore_v1.base_query import FieldFilter

from app.domain.message_log import MessageLog, MessageStatus
from app.protocols.message_log_store import MessageLogStoreProtocol
from utils.errors import FirestoreUnavailableError

if TYPE_CHECKING:
    from google.cloud.firestore import Client as FirestoreClient

    from app.domain.events import EventKind

logger = logging.getLogger(__name__)

MESSAGE_LOGS_COLLECTION = "message_logs"


class FirestoreMessageLogStore(MessageLogStoreProtocol):
    """Store de MessageLog usando Firestore."""

    def __init__(
        self,
        firestore_client: FirestoreClient,
        collection_name: str = MESSAGE_LOGS_COLLECTION,
    ) -> None:
        self._db = firestore_client
        self._collection = collection_name

    async def create_pending(
        self,
        recipient_id: str,
        recipient_username: str | None,
        message_kind: EventKind,
    ) -> MessageLog:
        log = MessageLog(
            id=uuid.uuid4().hex,
            recipient_id=recipient_id,
            recipient_username=recipient_username,
            message_kind=message_kind,
        )
        await asyncio.to_thread(self._set_sync, log)
        return log

    def _set_sync(self, log: MessageLog) -> None:
        try:
            self._db.collection(self._collection).document(log.id).set(log.to_firestore_dict())
        except gcp_exceptions.GoogleAPIError as exc:
            logger.error("message_log_create_failed", extra={"error_type": type(exc).__name__})
            raise FirestoreUnavailableError("Falha ao criar MessageLog") from exc

    async def mark_sent(self, log_id: str) -> None:
        await asyncio.to_thread(
            self._update_sync, log_id, {"status": MessageStatus.SENT.value, "error": None}
        )

    async def mark_failed(self, log_id: str, error: str) -> None:
        await asyncio.to_thread(
            self._update_sync, log_id, {"status": MessageStatus.FAILED.value, "error": error}
        )

    def _update_sync(self, log_id: str, fields: dict[str, Any]) -> None:
        try:
            self._db.collection(self._collection).document(log_id).update(fields)
        except gcp_exceptions.GoogleAPIError as exc:
            logger.error(
                "message_log_update_failed",
                extra={"log_id": log_id, "error_type": type(exc).__name__},
            )
            raise FirestoreUnavailableError("Falha ao atualizar MessageLog") from exc

    async def get(self, log_id: str) -> MessageLog | None:
        return await asyncio.to_thread(self._get_sync, log_id)

    def _get_sync(self, log_id: str) -> MessageLog | None:
        try:
            doc = self._db.collection(self._collection).document(log_id).get()
        except gcp_exceptions.GoogleAPIError as exc:
            raise FirestoreUnavailableError("Falha ao ler MessageLog") from exc
        if not doc.exists:
            return None
        return MessageLog.from_firestore_dict(doc.id, doc.to_dict() or {})

    async def list_recent(self, limit: int = 20) -> list[MessageLog]:
        return await asyncio.to_thread(self._list_recent_sync, limit)

    def _list_recent_sync(self, limit: int) -> list[MessageLog]:
        try:
            docs = (
                self._db.collection(self._collection)
                .order_by("created_at", direction="DESCENDING")
                .limit(limit)
                .stream()
            )
            return [MessageLog.from_firestore_dict(doc.id, doc.to_dict() or {}) for doc in docs]
        except gcp_exceptions.GoogleAPIError as exc:
            raise FirestoreUnavailableError("Falha ao listar MessageLogs") from exc

    async def count_by_status(self, status: MessageStatus) -> int:
        return await asyncio.to_thread(self._count_by_status_sync, status)

    def _count_by_status_sync(self, status: MessageStatus) -> int:
        try:
            results = (
                self._db.collection(self._collection)
                .where(filter=FieldFilter("status", "==", status.value))
                .count()
                .get()
            )
        except gcp_exceptions.GoogleAPIError as exc:
            raise FirestoreUnavailableError("Falha ao contar MessageLogs") from exc
        return int(results[0][0].value) if results else 0
