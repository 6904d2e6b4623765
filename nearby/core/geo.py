"""Geographic calculations - Pure functions.

This module provides great-circle distance and the user location model.
All functions are pure with no side effects.
"""

import math
from dataclasses import dataclass
from typing import Any

from nearby.core.events import CatalogEvent


# Earth's radius in miles
EARTH_RADIUS_MILES = 3959.0

# Cleveland, OH city centroid - used when no device fix is available
FALLBACK_LATITUDE = 41.4993
FALLBACK_LONGITUDE = -81.6944


@dataclass(frozen=True)
class UserLocation:
    """The user's position.

    Attributes:
        lat: Latitude
        lng: Longitude
        granted: True for a real device fix, False for the fallback
    """
    lat: float
    lng: float
    granted: bool

    def to_dict(self) -> dict[str, Any]:
        return {"lat": self.lat, "lng": self.lng, "granted": self.granted}


FALLBACK_LOCATION = UserLocation(
    lat=FALLBACK_LATITUDE,
    lng=FALLBACK_LONGITUDE,
    granted=False,
)


def parse_location(data: Any) -> UserLocation | None:
    """Parse a persisted location dict.

    Pure function: returns None if the value is missing or malformed.
    """
    if not isinstance(data, dict):
        return None
    try:
        return UserLocation(
            lat=float(data["lat"]),
            lng=float(data["lng"]),
            granted=bool(data.get("granted", False)),
        )
    except (KeyError, TypeError, ValueError):
        return None


def calculate_distance(
    lat1: float,
    lon1: float,
    lat2: float,
    lon2: float,
) -> float:
    """Calculate distance between two points using Haversine formula.

    Pure function.

    Args:
        lat1: Latitude of first point
        lon1: Longitude of first point
        lat2: Latitude of second point
        lon2: Longitude of second point

    Returns:
        Distance in miles
    """
    # Convert to radians
    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)
    delta_lat = math.radians(lat2 - lat1)
    delta_lon = math.radians(lon2 - lon1)

    # Haversine formula
    a = (
        math.sin(delta_lat / 2) ** 2
        + math.cos(lat1_rad) * math.cos(lat2_rad) * math.sin(delta_lon / 2) ** 2
    )
    # Rounding can push a marginally above 1 for antipodal points
    a = min(1.0, max(0.0, a))
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_MILES * c


def distance_to_event(origin: UserLocation, event: CatalogEvent) -> float:
    """Calculate distance from the user to an event venue.

    Pure function.

    Returns:
        Distance in miles
    """
    return calculate_distance(
        origin.lat,
        origin.lng,
        event.geo.lat,
        event.geo.lng,
    )


def is_within_radius(distance: float, radius: float) -> bool:
    """Check whether a distance falls inside a radius (inclusive)."""
    return distance <= radius
