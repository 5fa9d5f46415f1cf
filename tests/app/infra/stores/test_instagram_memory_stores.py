"""Testes dos stores em memória (eventos, MessageLogs, configuração)."""

from __future__ import annotations

import asyncio
from datetime import UTC, datetime, timedelta

import pytest

from app.domain.events import EventKind, NormalizedEvent
from app.domain.message_log import MessageStatus
from app.infra.stores import MemoryConfigStore, MemoryEventStore, MemoryMessageLogStore
from tests.fakes.fake_instagram import make_config


def _event(key: str, user: str = "123", kind: EventKind = EventKind.FOLLOW) -> NormalizedEvent:
    return NormalizedEvent(kind=kind, external_user_id=user, source_event_key=key)


class TestMemoryEventStore:
    """Testes do MemoryEventStore."""

    @pytest.mark.asyncio
    async def test_duplicate_key_is_noop(self) -> None:
        store = MemoryEventStore()

        first = await store.insert_if_absent(_event("follow:123:2024-01-01T00:00:00Z"))
        second = await store.insert_if_absent(_event("follow:123:2024-01-01T00:00:00Z"))

        assert first is not None
        assert second is None
        assert len(store.all_events()) == 1
        assert await store.count_pending() == 1

    @pytest.mark.asyncio
    async def test_concurrent_inserts_create_one_event(self) -> None:
        store = MemoryEventStore()

        results = await asyncio.gather(
            *(store.insert_if_absent(_event("like:1:m:99")) for _ in range(20))
        )

        assert sum(1 for r in results if r is not None) == 1
        assert len(store.all_events()) == 1

    @pytest.mark.asyncio
    async def test_list_pending_is_fifo_and_excludes_processed(self) -> None:
        store = MemoryEventStore()
        first = await store.insert_if_absent(_event("k1"))
        second = await store.insert_if_absent(_event("k2"))
        third = await store.insert_if_absent(_event("k3"))
        assert first and second and third

        await store.mark_processed(second.id)

        pending = await store.list_pending()
        assert [e.id for e in pending] == [first.id, third.id]
        assert await store.count_pending() == 2

    @pytest.mark.asyncio
    async def test_list_pending_orders_by_created_at(self) -> None:
        store = MemoryEventStore()
        newer = await store.insert_if_absent(_event("newer"))
        older = await store.insert_if_absent(_event("older"))
        assert newer and older
        # Força created_at anterior no segundo evento
        store._events[older.id] = older.model_copy(
            update={"created_at": newer.created_at - timedelta(seconds=5)}
        )

        assert [e.source_event_key for e in await store.list_pending()] == ["older", "newer"]

    @pytest.mark.asyncio
    async def test_mark_processed_is_idempotent(self) -> None:
        store = MemoryEventStore()
        event = await store.insert_if_absent(_event("k"))
        assert event is not None

        await store.mark_processed(event.id)
        await store.mark_processed(event.id)

        stored = store.get_by_key("k")
        assert stored is not None and stored.is_processed is True

    @pytest.mark.asyncio
    async def test_mark_processed_unknown_id(self) -> None:
        with pytest.raises(KeyError):
            await MemoryEventStore().mark_processed("missing")


class TestMemoryMessageLogStore:
    """Testes do MemoryMessageLogStore."""

    @pytest.mark.asyncio
    async def test_lifecycle(self) -> None:
        store = MemoryMessageLogStore()
        log = await store.create_pending("42", "bob", EventKind.FOLLOW)
        assert log.status is MessageStatus.PENDING

        await store.mark_failed(log.id, "rate limited")
        failed = await store.get(log.id)
        assert failed is not None
        assert failed.status is MessageStatus.FAILED
        assert failed.error == "rate limited"

    @pytest.mark.asyncio
    async def test_mark_sent_clears_error(self) -> None:
        store = MemoryMessageLogStore()
        log = await store.create_pending("42", None, EventKind.LIKE)

        await store.mark_sent(log.id)

        sent = await store.get(log.id)
        assert sent is not None
        assert sent.status is MessageStatus.SENT
        assert sent.error is None

    @pytest.mark.asyncio
    async def test_counts_and_recent(self) -> None:
        store = MemoryMessageLogStore()
        logs = [await store.create_pending(str(i), None, EventKind.FOLLOW) for i in range(3)]
        for offset, log in enumerate(logs):
            store._logs[log.id] = log.model_copy(
                update={"created_at": datetime(2024, 1, 1, tzinfo=UTC) + timedelta(minutes=offset)}
            )
        await store.mark_sent(logs[0].id)
        await store.mark_failed(logs[1].id, "boom")

        assert await store.count_by_status(MessageStatus.SENT) == 1
        assert await store.count_by_status(MessageStatus.FAILED) == 1
        assert await store.count_by_status(MessageStatus.PENDING) == 1
        recent = await store.list_recent(limit=2)
        assert [log.recipient_id for log in recent] == ["2", "1"]

    @pytest.mark.asyncio
    async def test_unknown_log(self) -> None:
        store = MemoryMessageLogStore()
        assert await store.get("missing") is None
        with pytest.raises(KeyError):
            await store.mark_sent("missing")


@pytest.mark.asyncio
async def test_memory_config_store_replace() -> None:
    store = MemoryConfigStore()
    assert await store.get() is None

    config = make_config()
    await store.replace(config)

    assert await store.get() == config
