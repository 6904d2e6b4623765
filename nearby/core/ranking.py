"""Distance ranking and surge estimation - Pure functions.

Attaches distance and an expected pricing surge to each event. The surge
figure is a presentation heuristic computed from inputs alone.
"""

from datetime import tzinfo

from nearby.core.events import CatalogEvent, EventWithDistance, parse_iso
from nearby.core.geo import UserLocation, distance_to_event


# Known venues and their typical ride pricing multiplier
VENUE_SURGE_MULTIPLIERS: dict[str, float] = {
    "Progressive Field": 1.3,
    "Rocket Mortgage FieldHouse": 1.25,
    "FirstEnergy Stadium": 1.4,
    "Jacobs Pavilion": 1.15,
    "House of Blues Cleveland": 1.1,
    "The Agora Theatre": 1.1,
}

# Evening rush window, local hours inclusive
PEAK_START_HOUR = 17
PEAK_END_HOUR = 20

PEAK_HOUR_BUMP = 0.3
EVENT_DAY_BUMP = 0.5


def get_local_hour(event_time_iso: str, tz: tzinfo | None = None) -> int:
    """Get the hour of an event in the given timezone.

    Pure function. With no timezone the timestamp's own offset is used.
    """
    event_time = parse_iso(event_time_iso)
    if tz is not None and event_time.tzinfo is not None:
        event_time = event_time.astimezone(tz)
    return event_time.hour


def expected_surge(
    venue: str,
    event_time_iso: str,
    tz: tzinfo | None = None,
) -> float:
    """Estimate the ride surge multiplier around an event.

    Pure function.

    Args:
        venue: Venue name, looked up in VENUE_SURGE_MULTIPLIERS
        event_time_iso: Event start time
        tz: Timezone used to decide the local hour

    Returns:
        Surge multiplier, always >= 1.5
    """
    venue_multiplier = VENUE_SURGE_MULTIPLIERS.get(venue, 1.0)

    hour = get_local_hour(event_time_iso, tz)
    time_of_day_bump = PEAK_HOUR_BUMP if PEAK_START_HOUR <= hour <= PEAK_END_HOUR else 0.0

    return 1 + (venue_multiplier - 1) + time_of_day_bump + EVENT_DAY_BUMP


def rank_event(
    event: CatalogEvent,
    origin: UserLocation,
    tz: tzinfo | None = None,
) -> EventWithDistance:
    """Attach distance and expected surge to one event."""
    return EventWithDistance(
        event=event,
        distance=distance_to_event(origin, event),
        expected_surge=expected_surge(event.venue, event.start_iso, tz),
    )


def with_distance(
    events: list[CatalogEvent],
    origin: UserLocation,
    tz: tzinfo | None = None,
) -> list[EventWithDistance]:
    """Attach distance and expected surge to every event.

    Pure function. Input order is preserved.

    Args:
        events: Events to rank
        origin: User location
        tz: Timezone for the surge peak-hour check

    Returns:
        Ranked events
    """
    return [rank_event(e, origin, tz) for e in events]
