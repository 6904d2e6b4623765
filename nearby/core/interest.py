"""Interest state - Pure functions.

This module holds the per-event tri-state preference (interested, not
interested, neutral) as an immutable snapshot and computes the snapshot
that each user operation produces. Notification scheduling and
persistence are handled by the imperative shell (InterestStateMachine).

Invariant: an id is never both in the interested list and the
not-interested set.
"""

from dataclasses import dataclass, field
from typing import Any


INTERESTED = "interested"
NOT_INTERESTED = "not_interested"


@dataclass(frozen=True)
class InterestedEvent:
    """A user's interest in one event.

    Attributes:
        catalog_event_id: Event id
        interested_at: When interest was marked (ISO string)
        notification_scheduled: Whether the reminder was scheduled
        notification_id: Notifier handle for the reminder, if any
    """
    catalog_event_id: str
    interested_at: str
    notification_scheduled: bool
    notification_id: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "catalogEventId": self.catalog_event_id,
            "interestedAt": self.interested_at,
            "notificationScheduled": self.notification_scheduled,
        }
        if self.notification_id is not None:
            data["notificationId"] = self.notification_id
        return data


def parse_interested_event(data: Any) -> InterestedEvent | None:
    """Parse a persisted interest record, None if malformed.

    Pure function.
    """
    if not isinstance(data, dict):
        return None
    try:
        notification_id = data.get("notificationId")
        return InterestedEvent(
            catalog_event_id=str(data["catalogEventId"]),
            interested_at=str(data["interestedAt"]),
            notification_scheduled=bool(data.get("notificationScheduled", False)),
            notification_id=str(notification_id) if notification_id else None,
        )
    except KeyError:
        return None


@dataclass(frozen=True)
class InterestSnapshot:
    """Interest state for all events.

    Attributes:
        interested: Interest records in the order they were marked
        not_interested: Ids the user dismissed
    """
    interested: tuple[InterestedEvent, ...] = ()
    not_interested: frozenset[str] = field(default_factory=frozenset)

    def find(self, catalog_event_id: str) -> InterestedEvent | None:
        """Get the interest record for an event, if any."""
        for record in self.interested:
            if record.catalog_event_id == catalog_event_id:
                return record
        return None

    def status_of(self, catalog_event_id: str) -> str | None:
        """Get 'interested', 'not_interested' or None (neutral).

        Interested is checked first so a violated invariant still yields
        a single answer.
        """
        if self.find(catalog_event_id) is not None:
            return INTERESTED
        if catalog_event_id in self.not_interested:
            return NOT_INTERESTED
        return None

    def interested_to_list(self) -> list[dict[str, Any]]:
        return [r.to_dict() for r in self.interested]

    def not_interested_to_list(self) -> list[str]:
        return sorted(self.not_interested)


def load_snapshot(interested_data: Any, not_interested_data: Any) -> InterestSnapshot:
    """Build a snapshot from persisted values.

    Pure function. Malformed records are skipped, duplicate interest records
    keep the first one, and ids present in both collections stay interested.

    Args:
        interested_data: Persisted list of interest dicts (or None)
        not_interested_data: Persisted list of ids (or None)

    Returns:
        A snapshot that satisfies the disjointness invariant
    """
    records: list[InterestedEvent] = []
    seen: set[str] = set()

    if isinstance(interested_data, list):
        for item in interested_data:
            record = parse_interested_event(item)
            if record is None or record.catalog_event_id in seen:
                continue
            seen.add(record.catalog_event_id)
            records.append(record)

    dismissed: set[str] = set()
    if isinstance(not_interested_data, list):
        dismissed = {str(i) for i in not_interested_data}

    return InterestSnapshot(
        interested=tuple(records),
        not_interested=frozenset(dismissed - seen),
    )


def add_interest(snapshot: InterestSnapshot, record: InterestedEvent) -> InterestSnapshot:
    """Record interest in an event.

    Pure function. If the event already has a record the snapshot is
    returned unchanged. The id leaves the not-interested set.
    """
    if snapshot.find(record.catalog_event_id) is not None:
        return snapshot

    return InterestSnapshot(
        interested=(*snapshot.interested, record),
        not_interested=snapshot.not_interested - {record.catalog_event_id},
    )


def dismiss(snapshot: InterestSnapshot, catalog_event_id: str) -> InterestSnapshot:
    """Mark an event not interested, dropping any interest record.

    Pure function.
    """
    return InterestSnapshot(
        interested=tuple(
            r for r in snapshot.interested if r.catalog_event_id != catalog_event_id
        ),
        not_interested=snapshot.not_interested | {catalog_event_id},
    )


def clear_interest(snapshot: InterestSnapshot, catalog_event_id: str) -> InterestSnapshot:
    """Return an event to neutral.

    Pure function.
    """
    return InterestSnapshot(
        interested=tuple(
            r for r in snapshot.interested if r.catalog_event_id != catalog_event_id
        ),
        not_interested=snapshot.not_interested - {catalog_event_id},
    )
