"""Functional Core - Pure functions with no side effects.

This module contains all business logic as pure functions:
- Event models and provider listing parsing
- Geo/distance calculations and surge estimates
- Nearby filtering and sorting
- Catalog/discovery merging
- Interest state transitions
- Reminder formatting

All functions here are deterministic and have no I/O.
"""

from nearby.core.events import CatalogEvent, EventWithDistance, GeoPoint
from nearby.core.geo import FALLBACK_LOCATION, UserLocation, calculate_distance
from nearby.core.ranking import expected_surge, with_distance
from nearby.core.filters import DiscoveryQuery, NearbyFilters, query_events
from nearby.core.dedup import dedupe_listings, merge_by_id
from nearby.core.interest import InterestedEvent, InterestSnapshot
from nearby.core.prefs import UserPrefs

__all__ = [
    # Events
    "CatalogEvent",
    "EventWithDistance",
    "GeoPoint",
    # Geo
    "FALLBACK_LOCATION",
    "UserLocation",
    "calculate_distance",
    # Ranking
    "expected_surge",
    "with_distance",
    # Filters
    "DiscoveryQuery",
    "NearbyFilters",
    "query_events",
    # Dedup
    "dedupe_listings",
    "merge_by_id",
    # Interest
    "InterestedEvent",
    "InterestSnapshot",
    # Prefs
    "UserPrefs",
]
