"""Testes do IngestEventsUseCase."""

from __future__ import annotations

import pytest

from app.domain.events import EventKind, NormalizedEvent
from app.infra.stores import MemoryEventStore
from app.use_cases.instagram import IngestEventsUseCase

KEY = "follow:123:2024-01-01T00:00:00Z"


def _event(key: str = KEY) -> NormalizedEvent:
    return NormalizedEvent(kind=EventKind.FOLLOW, external_user_id="123", source_event_key=key)


@pytest.mark.asyncio
async def test_two_ingests_of_same_key_create_one_event() -> None:
    store = MemoryEventStore()
    use_case = IngestEventsUseCase(event_store=store)

    first = await use_case.execute([_event()])
    second = await use_case.execute([_event()])

    assert (first.inserted, first.duplicates) == (1, 0)
    assert (second.inserted, second.duplicates) == (0, 1)
    assert len(store.all_events()) == 1
    assert store.all_events()[0].is_processed is False


@pytest.mark.asyncio
async def test_duplicates_inside_one_batch() -> None:
    store = MemoryEventStore()

    result = await IngestEventsUseCase(event_store=store).execute(
        iter([_event("a"), _event("b"), _event("a")])
    )

    assert (result.received, result.inserted, result.duplicates) == (3, 2, 1)


@pytest.mark.asyncio
async def test_empty_batch() -> None:
    result = await IngestEventsUseCase(event_store=MemoryEventStore()).execute([])
    assert (result.received, result.inserted, result.duplicates) == (0, 0, 0)
