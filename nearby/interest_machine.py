"""Interest State Machine - persists per-event interest.

Wires the pure transitions in nearby.core.interest to the notifier and
the key-value store. Mutators run one at a time behind a single lock, so
notification schedule/cancel calls happen in call order.

Failure handling:
- A failed or refused schedule is recorded as notification_scheduled=False.
- A failed cancel is logged and does not block the state change.
- A failed write is logged; the in-memory state is still updated.
"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Callable

from nearby.core.events import CatalogEvent, to_iso
from nearby.core.interest import (
    InterestedEvent,
    InterestSnapshot,
    add_interest,
    clear_interest,
    dismiss,
    load_snapshot,
)
from nearby.shell.slack_notifier import Notifier
from nearby.shell.store import KEY_INTERESTED, KEY_NOT_INTERESTED, KeyValueStore


logger = logging.getLogger(__name__)


class InterestStateMachine:
    """Tracks interested / not interested / neutral per event."""

    def __init__(
        self,
        store: KeyValueStore,
        notifier: Notifier,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """Initialize the state machine.

        Args:
            store: Persistence for both collections
            notifier: Schedules and cancels reminders
            clock: Returns the current time (defaults to UTC now)
        """
        self.store = store
        self.notifier = notifier
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._lock = asyncio.Lock()
        self.snapshot = InterestSnapshot()

    @property
    def interested_events(self) -> list[InterestedEvent]:
        return list(self.snapshot.interested)

    @property
    def not_interested_ids(self) -> set[str]:
        return set(self.snapshot.not_interested)

    def status_of(self, catalog_event_id: str) -> str | None:
        """Get 'interested', 'not_interested' or None. Pure read."""
        return self.snapshot.status_of(catalog_event_id)

    async def load(self) -> InterestSnapshot:
        """Restore both collections from the store."""
        interested_data, not_interested_data = await asyncio.gather(
            self.store.get(KEY_INTERESTED),
            self.store.get(KEY_NOT_INTERESTED),
        )
        self.snapshot = load_snapshot(interested_data, not_interested_data)

        logger.info(
            "Loaded %d interested and %d not-interested events",
            len(self.snapshot.interested),
            len(self.snapshot.not_interested),
        )
        return self.snapshot

    async def _persist(self, snapshot: InterestSnapshot) -> None:
        """Write both collections, then adopt the snapshot."""
        saved_interested = await self.store.set(KEY_INTERESTED, snapshot.interested_to_list())
        saved_not_interested = await self.store.set(
            KEY_NOT_INTERESTED, snapshot.not_interested_to_list()
        )

        if not (saved_interested and saved_not_interested):
            logger.warning("Interest state not fully persisted, keeping in-memory state")

        self.snapshot = snapshot

    async def _schedule(self, event: CatalogEvent) -> str | None:
        try:
            return await self.notifier.schedule(event)
        except Exception as e:
            logger.error("Failed to schedule reminder for %s: %s", event.id, str(e))
            return None

    async def _cancel(self, record: InterestedEvent | None) -> None:
        if record is None or not record.notification_id:
            return
        try:
            await self.notifier.cancel(record.notification_id)
        except Exception as e:
            logger.error(
                "Failed to cancel reminder %s for %s: %s",
                record.notification_id,
                record.catalog_event_id,
                str(e),
            )

    async def mark_interested(self, event: CatalogEvent) -> InterestedEvent:
        """Mark an event interested and schedule its reminder.

        Idempotent: if the event is already interested the existing record
        is returned and no second reminder is scheduled.
        """
        async with self._lock:
            existing = self.snapshot.find(event.id)
            if existing is not None:
                logger.info("Event %s already marked as interested", event.id)
                return existing

            notification_id = await self._schedule(event)

            record = InterestedEvent(
                catalog_event_id=event.id,
                interested_at=to_iso(self._clock()),
                notification_scheduled=notification_id is not None,
                notification_id=notification_id,
            )

            await self._persist(add_interest(self.snapshot, record))

            logger.info("Event marked as interested: %s", event.title)
            return record

    async def mark_not_interested(self, catalog_event_id: str) -> None:
        """Mark an event not interested, cancelling any reminder."""
        async with self._lock:
            await self._cancel(self.snapshot.find(catalog_event_id))
            await self._persist(dismiss(self.snapshot, catalog_event_id))

            logger.info("Event marked as not interested: %s", catalog_event_id)

    async def remove_interest(self, catalog_event_id: str) -> None:
        """Return an event to neutral, cancelling any reminder."""
        async with self._lock:
            await self._cancel(self.snapshot.find(catalog_event_id))
            await self._persist(clear_interest(self.snapshot, catalog_event_id))

            logger.info("Event interest removed: %s", catalog_event_id)
