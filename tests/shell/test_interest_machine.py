"""Tests for the interest state machine."""

import asyncio
from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest

from nearby.core.events import CatalogEvent, GeoPoint
from nearby.interest_machine import InterestStateMachine
from nearby.shell.store import KEY_INTERESTED, KEY_NOT_INTERESTED, MemoryStore


NOW = datetime(2025, 6, 3, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def sample_event():
    return CatalogEvent(
        id="cat_001",
        title="Guardians vs Athletics",
        category="sports",
        start_iso="2025-06-05T22:10:00.000Z",
        end_iso="2025-06-06T01:10:00.000Z",
        venue="Progressive Field",
        address="2401 Ontario St, Cleveland, OH 44115",
        geo=GeoPoint(lat=41.4962, lng=-81.6852),
        popularity=0.92,
    )


@pytest.fixture
def notifier():
    mock = AsyncMock()
    mock.schedule.return_value = "Q123"
    return mock


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def machine(store, notifier):
    return InterestStateMachine(store, notifier, clock=lambda: NOW)


class TestMarkInterested:
    """Tests for mark_interested()."""

    def test_schedules_and_persists(self, machine, store, notifier, sample_event):
        record = asyncio.run(machine.mark_interested(sample_event))

        assert record.catalog_event_id == "cat_001"
        assert record.interested_at == "2025-06-03T12:00:00.000Z"
        assert record.notification_scheduled is True
        assert record.notification_id == "Q123"
        notifier.schedule.assert_awaited_once_with(sample_event)
        assert asyncio.run(store.get(KEY_INTERESTED)) == [record.to_dict()]
        assert asyncio.run(store.get(KEY_NOT_INTERESTED)) == []

    def test_is_idempotent(self, machine, notifier, sample_event):
        async def run():
            first = await machine.mark_interested(sample_event)
            second = await machine.mark_interested(sample_event)
            return first, second

        first, second = asyncio.run(run())

        assert first == second
        assert len(machine.interested_events) == 1
        assert notifier.schedule.await_count == 1

    def test_concurrent_calls_schedule_once(self, machine, notifier, sample_event):
        async def run():
            return await asyncio.gather(
                machine.mark_interested(sample_event),
                machine.mark_interested(sample_event),
            )

        first, second = asyncio.run(run())

        assert first == second
        assert notifier.schedule.await_count == 1

    def test_refused_schedule_recorded(self, machine, notifier, sample_event):
        notifier.schedule.return_value = None

        record = asyncio.run(machine.mark_interested(sample_event))

        assert record.notification_scheduled is False
        assert record.notification_id is None
        assert machine.status_of("cat_001") == "interested"

    def test_schedule_error_recorded(self, machine, notifier, sample_event):
        notifier.schedule.side_effect = RuntimeError("slack down")

        record = asyncio.run(machine.mark_interested(sample_event))

        assert record.notification_scheduled is False
        assert machine.status_of("cat_001") == "interested"

    def test_clears_prior_dismissal(self, machine, sample_event):
        async def run():
            await machine.mark_not_interested("cat_001")
            await machine.mark_interested(sample_event)

        asyncio.run(run())

        assert machine.status_of("cat_001") == "interested"
        assert machine.not_interested_ids == set()

    def test_store_failure_still_updates_memory(self, notifier, sample_event):
        store = AsyncMock()
        store.set.return_value = False
        machine = InterestStateMachine(store, notifier, clock=lambda: NOW)

        asyncio.run(machine.mark_interested(sample_event))

        assert machine.status_of("cat_001") == "interested"


class TestMarkNotInterested:
    """Tests for mark_not_interested()."""

    def test_interested_then_dismissed(self, machine, store, notifier, sample_event):
        """Dismissing an interested event cancels its reminder."""
        async def run():
            await machine.mark_interested(sample_event)
            await machine.mark_not_interested("cat_001")

        asyncio.run(run())

        assert machine.status_of("cat_001") == "not_interested"
        assert machine.interested_events == []
        notifier.cancel.assert_awaited_once_with("Q123")
        assert asyncio.run(store.get(KEY_NOT_INTERESTED)) == ["cat_001"]
        assert asyncio.run(store.get(KEY_INTERESTED)) == []

    def test_neutral_event_no_cancel(self, machine, notifier):
        asyncio.run(machine.mark_not_interested("cat_004"))

        assert machine.status_of("cat_004") == "not_interested"
        notifier.cancel.assert_not_awaited()

    def test_cancel_failure_does_not_block(self, machine, notifier, sample_event):
        notifier.cancel.side_effect = RuntimeError("slack down")

        async def run():
            await machine.mark_interested(sample_event)
            await machine.mark_not_interested("cat_001")

        asyncio.run(run())

        assert machine.status_of("cat_001") == "not_interested"


class TestRemoveInterest:
    """Tests for remove_interest()."""

    def test_round_trip_cancels(self, machine, notifier, sample_event):
        async def run():
            await machine.mark_interested(sample_event)
            await machine.remove_interest("cat_001")

        asyncio.run(run())

        assert machine.status_of("cat_001") is None
        notifier.cancel.assert_awaited_once_with("Q123")

    def test_no_cancel_without_notification(self, machine, notifier, sample_event):
        notifier.schedule.return_value = None

        async def run():
            await machine.mark_interested(sample_event)
            await machine.remove_interest("cat_001")

        asyncio.run(run())

        notifier.cancel.assert_not_awaited()

    def test_clears_dismissal(self, machine):
        async def run():
            await machine.mark_not_interested("cat_002")
            await machine.remove_interest("cat_002")

        asyncio.run(run())

        assert machine.status_of("cat_002") is None


class TestLoad:
    """Tests for load()."""

    def test_restores_state(self, notifier):
        store = MemoryStore({
            KEY_INTERESTED: [{
                "catalogEventId": "cat_001",
                "interestedAt": "2025-06-01T00:00:00.000Z",
                "notificationScheduled": True,
                "notificationId": "Q9",
            }],
            KEY_NOT_INTERESTED: ["cat_002"],
        })
        machine = InterestStateMachine(store, notifier)

        asyncio.run(machine.load())

        assert machine.status_of("cat_001") == "interested"
        assert machine.status_of("cat_002") == "not_interested"
        assert machine.interested_events[0].notification_id == "Q9"

    def test_empty_store(self, machine):
        asyncio.run(machine.load())

        assert machine.interested_events == []
        assert machine.not_interested_ids == set()
