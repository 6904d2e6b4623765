"""Event data models and parsing - Pure functions.

This module defines the catalog/discovered event model shared by every
source and the helpers that convert ISO-8601 timestamps. All functions are pure with no side effects.
"""

from dataclasses import dataclass
from datetime import datetime, timezone


EVENT_CATEGORIES = (
    "concert",
    "bar",
    "holiday",
    "sports",
    "general",
    "comedy",
    "theater",
    "art",
    "food",
    "family",
    "festival",
    "conference",
    "community",
    "nightlife",
)

ALL_CATEGORIES = "all"


@dataclass(frozen=True)
class GeoPoint:
    """A latitude/longitude pair."""
    lat: float
    lng: float


@dataclass(frozen=True)
class CatalogEvent:
    """Immutable event record from the catalog or a discovery provider.

    Attributes:
        id: Globally unique, stable identifier
        title: Display title
        category: One of EVENT_CATEGORIES
        start_iso: Start time as UTC ISO string
        end_iso: End time as UTC ISO string (>= start_iso)
        venue: Venue name
        address: Street address
        geo: Venue coordinates
        popularity: Relative popularity score
        description: Optional free text
    """
    id: str
    title: str
    category: str
    start_iso: str
    end_iso: str
    venue: str
    address: str
    geo: GeoPoint
    popularity: float
    description: str | None = None


@dataclass(frozen=True)
class EventWithDistance:
    """An event ranked against the user's location.

    Ephemeral: recomputed on every query and never persisted.
    """
    event: CatalogEvent
    distance: float
    expected_surge: float

    @property
    def id(self) -> str:
        return self.event.id


def to_iso(dt: datetime) -> str:
    """Format a datetime as a UTC ISO string with millisecond precision.

    Naive datetimes are assumed to already be UTC.

    Pure function.
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    utc = dt.astimezone(timezone.utc)
    return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"


def parse_iso(value: str) -> datetime:
    """Parse an ISO-8601 timestamp, accepting a trailing 'Z'.

    Pure function.

    Raises:
        ValueError: If the string is not a valid timestamp
    """
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)
