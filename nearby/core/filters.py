"""Nearby filtering and sorting - Pure functions.

This module applies category, date-range, free-text and radius filters
to events and orders the result. All functions are pure with no side
effects.
"""

from dataclasses import dataclass
from datetime import tzinfo

from nearby.core.events import ALL_CATEGORIES, EVENT_CATEGORIES, CatalogEvent, EventWithDistance
from nearby.core.geo import UserLocation, is_within_radius
from nearby.core.ranking import with_distance


DISTANCE_OPTIONS = (5, 10, 25, 50)

SORT_OPTIONS = ("soonest", "nearest", "popular")

# Maximum results requested from discovery providers
DEFAULT_DISCOVERY_SIZE = 100


@dataclass(frozen=True)
class NearbyFilters:
    """Query parameters for the nearby view.

    Attributes:
        category: Event category or 'all'
        distance: Radius in miles, one of DISTANCE_OPTIONS
        start_date: Inclusive lower bound on event start (ISO string)
        end_date: Inclusive upper bound on event start (ISO string)
        sort: One of SORT_OPTIONS
        search_query: Free-text filter, empty for none
    """
    category: str = ALL_CATEGORIES
    distance: int = 25
    start_date: str = ""
    end_date: str = "9999-12-31T23:59:59.999Z"
    sort: str = "soonest"
    search_query: str = ""

    def __post_init__(self) -> None:
        if self.category != ALL_CATEGORIES and self.category not in EVENT_CATEGORIES:
            raise ValueError(f"Unknown category: {self.category}")
        if self.distance not in DISTANCE_OPTIONS:
            raise ValueError(f"Distance must be one of {DISTANCE_OPTIONS}, got {self.distance}")
        if self.sort not in SORT_OPTIONS:
            raise ValueError(f"Unknown sort option: {self.sort}")


@dataclass(frozen=True)
class DiscoveryQuery:
    """Search parameters handed to a discovery source.

    Attributes:
        latitude: Search center latitude
        longitude: Search center longitude
        radius: Search radius in miles
        category: Event category or 'all'
        keyword: Free-text keyword, None for no keyword
        start: Earliest start (ISO string), None for no bound
        end: Latest start (ISO string), None for no bound
        size: Maximum results per provider
    """
    latitude: float
    longitude: float
    radius: float
    category: str = ALL_CATEGORIES
    keyword: str | None = None
    start: str | None = None
    end: str | None = None
    size: int = DEFAULT_DISCOVERY_SIZE


def build_discovery_query(
    filters: NearbyFilters,
    origin: UserLocation,
    size: int = DEFAULT_DISCOVERY_SIZE,
) -> DiscoveryQuery:
    """Translate nearby filters into a discovery query around the user.

    Pure function.
    """
    return DiscoveryQuery(
        latitude=origin.lat,
        longitude=origin.lng,
        radius=filters.distance,
        category=filters.category,
        keyword=filters.search_query or None,
        start=filters.start_date or None,
        end=filters.end_date or None,
        size=size,
    )


def matches_category(event: CatalogEvent, category: str) -> bool:
    """Check category, where 'all' matches everything."""
    return category == ALL_CATEGORIES or event.category == category


def matches_date_range(event: CatalogEvent, start_date: str, end_date: str) -> bool:
    """Check that the event starts inside [start_date, end_date].

    Compares ISO strings lexicographically, which is chronological for
    zero-padded UTC timestamps.
    """
    return start_date <= event.start_iso <= end_date


def matches_search(event: CatalogEvent, search_query: str) -> bool:
    """Case-insensitive substring match on title, venue or description.

    An empty query matches every event.
    """
    if not search_query:
        return True

    query = search_query.lower()
    return (
        query in event.title.lower()
        or query in event.venue.lower()
        or (event.description is not None and query in event.description.lower())
    )


def matches_filters(event: CatalogEvent, filters: NearbyFilters) -> bool:
    """Apply the category, date and text filters in order."""
    return (
        matches_category(event, filters.category)
        and matches_date_range(event, filters.start_date, filters.end_date)
        and matches_search(event, filters.search_query)
    )


def sort_events(
    events: list[EventWithDistance],
    sort: str,
) -> list[EventWithDistance]:
    """Order ranked events by a sort policy.

    Pure function. sorted() is stable, so ties keep their input order.

    Args:
        events: Ranked events
        sort: 'soonest', 'nearest' or 'popular'

    Returns:
        New sorted list
    """
    if sort == "soonest":
        return sorted(events, key=lambda e: e.event.start_iso)
    if sort == "nearest":
        return sorted(events, key=lambda e: e.distance)
    if sort == "popular":
        return sorted(events, key=lambda e: e.event.popularity, reverse=True)
    return list(events)


def query_events(
    events: list[CatalogEvent],
    filters: NearbyFilters,
    origin: UserLocation,
    tz: tzinfo | None = None,
) -> list[EventWithDistance]:
    """Filter, rank and sort events for the nearby view.

    Pure function. Pipeline: category, date range, free text, distance,
    radius (inclusive), sort. An empty result is valid.

    Args:
        events: Candidate events
        filters: Query parameters
        origin: User location
        tz: Timezone for the surge estimate

    Returns:
        Matching events with distance and surge attached
    """
    filtered = [e for e in events if matches_filters(e, filters)]

    ranked = with_distance(filtered, origin, tz)

    within_radius = [e for e in ranked if is_within_radius(e.distance, filters.distance)]

    return sort_events(within_radius, filters.sort)
