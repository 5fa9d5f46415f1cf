"""Testes dos stores Firestore com cliente mockado."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from google.api_core import exceptions as gcp_exceptions

from app.domain.events import EventKind, NormalizedEvent
from app.domain.message_log import MessageStatus
from app.infra.stores import FirestoreConfigStore, FirestoreEventStore, FirestoreMessageLogStore
from app.infra.stores.firestore_event_store import event_document_id
from tests.fakes.fake_instagram import make_config
from utils.errors import FirestoreUnavailableError

EVENT = NormalizedEvent(
    kind=EventKind.FOLLOW,
    external_user_id="123",
    source_event_key="follow:123:2024-01-01T00:00:00Z",
    external_username="alice",
)


def _doc(doc_id: str, data: dict | None, exists: bool = True) -> MagicMock:
    doc = MagicMock()
    doc.id = doc_id
    doc.exists = exists
    doc.to_dict.return_value = data
    return doc


class TestFirestoreEventStore:
    """Testes do FirestoreEventStore."""

    @pytest.mark.asyncio
    async def test_insert_uses_create_with_hashed_id(self) -> None:
        db = MagicMock()
        store = FirestoreEventStore(db, collection_name="events")

        created = await store.insert_if_absent(EVENT)

        doc_id = event_document_id(EVENT.source_event_key)
        assert created is not None and created.id == doc_id
        db.collection.assert_called_with("events")
        db.collection.return_value.document.assert_called_with(doc_id)
        payload = db.collection.return_value.document.return_value.create.call_args[0][0]
        assert payload["is_processed"] is False
        assert payload["source_event_key"] == EVENT.source_event_key

    @pytest.mark.asyncio
    async def test_already_exists_is_duplicate(self) -> None:
        db = MagicMock()
        db.collection.return_value.document.return_value.create.side_effect = (
            gcp_exceptions.AlreadyExists("exists")
        )

        assert await FirestoreEventStore(db).insert_if_absent(EVENT) is None

    @pytest.mark.asyncio
    async def test_api_error_is_wrapped(self) -> None:
        db = MagicMock()
        db.collection.return_value.document.return_value.create.side_effect = (
            gcp_exceptions.ServiceUnavailable("down")
        )

        with pytest.raises(FirestoreUnavailableError):
            await FirestoreEventStore(db).insert_if_absent(EVENT)

    @pytest.mark.asyncio
    async def test_list_pending_queries_unprocessed_by_created_at(self) -> None:
        db = MagicMock()
        query = db.collection.return_value.where.return_value.order_by.return_value
        query.stream.return_value = [
            _doc(
                "d1",
                {
                    "kind": "LIKE",
                    "external_user_id": "9",
                    "external_username": None,
                    "source_event_key": "like:9:1",
                    "is_processed": False,
                    "created_at": "2024-01-01T00:00:00+00:00",
                },
            )
        ]

        events = await FirestoreEventStore(db).list_pending()

        assert [e.id for e in events] == ["d1"]
        assert events[0].kind is EventKind.LIKE
        db.collection.return_value.where.return_value.order_by.assert_called_with("created_at")

    @pytest.mark.asyncio
    async def test_mark_processed_updates_flag(self) -> None:
        db = MagicMock()
        await FirestoreEventStore(db).mark_processed("d1")
        db.collection.return_value.document.return_value.update.assert_called_once_with(
            {"is_processed": True}
        )

    @pytest.mark.asyncio
    async def test_count_pending_uses_aggregation(self) -> None:
        db = MagicMock()
        aggregation = MagicMock()
        aggregation.value = 4
        db.collection.return_value.where.return_value.count.return_value.get.return_value = [
            [aggregation]
        ]

        assert await FirestoreEventStore(db).count_pending() == 4


class TestFirestoreMessageLogStore:
    """Testes do FirestoreMessageLogStore."""

    @pytest.mark.asyncio
    async def test_create_pending_sets_document(self) -> None:
        db = MagicMock()
        log = await FirestoreMessageLogStore(db).create_pending("42", "bob", EventKind.FOLLOW)

        db.collection.return_value.document.assert_called_with(log.id)
        data = db.collection.return_value.document.return_value.set.call_args[0][0]
        assert data["status"] == "PENDING"
        assert data["message_kind"] == "FOLLOW"

    @pytest.mark.asyncio
    async def test_resolution_updates(self) -> None:
        db = MagicMock()
        store = FirestoreMessageLogStore(db)
        update = db.collection.return_value.document.return_value.update

        await store.mark_sent("log-1")
        update.assert_called_with({"status": "SENT", "error": None})

        await store.mark_failed("log-1", "rate limited")
        update.assert_called_with({"status": "FAILED", "error": "rate limited"})

    @pytest.mark.asyncio
    async def test_get_missing_returns_none(self) -> None:
        db = MagicMock()
        db.collection.return_value.document.return_value.get.return_value = _doc(
            "x", None, exists=False
        )
        assert await FirestoreMessageLogStore(db).get("x") is None

    @pytest.mark.asyncio
    async def test_list_recent_desc_with_limit(self) -> None:
        db = MagicMock()
        ordered = db.collection.return_value.order_by.return_value
        ordered.limit.return_value.stream.return_value = []

        assert await FirestoreMessageLogStore(db).list_recent(5) == []
        db.collection.return_value.order_by.assert_called_with(
            "created_at", direction="DESCENDING"
        )
        ordered.limit.assert_called_with(5)

    @pytest.mark.asyncio
    async def test_update_error_wrapped(self) -> None:
        db = MagicMock()
        db.collection.return_value.document.return_value.update.side_effect = (
            gcp_exceptions.DeadlineExceeded("slow")
        )
        with pytest.raises(FirestoreUnavailableError):
            await FirestoreMessageLogStore(db).mark_failed("log-1", "x")

    @pytest.mark.asyncio
    async def test_count_by_status(self) -> None:
        db = MagicMock()
        aggregation = MagicMock()
        aggregation.value = 2
        db.collection.return_value.where.return_value.count.return_value.get.return_value = [
            [aggregation]
        ]
        assert await FirestoreMessageLogStore(db).count_by_status(MessageStatus.SENT) == 2


class TestFirestoreConfigStore:
    """Testes do FirestoreConfigStore."""

    @pytest.mark.asyncio
    async def test_get_absent(self) -> None:
        db = MagicMock()
        db.collection.return_value.document.return_value.get.return_value = _doc(
            "active", None, exists=False
        )
        assert await FirestoreConfigStore(db).get() is None

    @pytest.mark.asyncio
    async def test_replace_then_get(self) -> None:
        db = MagicMock()
        config = make_config()
        store = FirestoreConfigStore(db, collection_name="cfg")

        await store.replace(config)
        document = db.collection.return_value.document.return_value
        document.set.assert_called_once_with(config.to_firestore_dict())
        db.collection.assert_called_with("cfg")
        db.collection.return_value.document.assert_called_with("active")

        document.get.return_value = _doc("active", config.to_firestore_dict())
        assert await store.get() == config
