"""Provider listing parsing - Pure functions.

This module maps raw Ticketmaster and Eventbrite JSON responses into
CatalogEvents, and maps our categories onto each provider's query
vocabulary. All functions are pure with no side effects.
"""

from datetime import datetime, timedelta, tzinfo
from typing import Any

from nearby.core.events import ALL_CATEGORIES, CatalogEvent, GeoPoint, to_iso
from nearby.core.filters import DiscoveryQuery


TICKETMASTER_ID_PREFIX = "tm_"
EVENTBRITE_ID_PREFIX = "eb_"

# Ticketmaster omits localTime for some listings
DEFAULT_LOCAL_TIME = "20:00:00"
TICKETMASTER_DURATION_HOURS = 3

EVENTBRITE_POPULARITY = 0.7
EVENTBRITE_DESCRIPTION_LIMIT = 200

KM_PER_MILE = 1.60934

TICKETMASTER_CLASSIFICATIONS: dict[str, str] = {
    "sports": "Sports",
    "concert": "Music",
    "comedy": "Comedy",
    "theater": "Arts & Theatre",
    "nightlife": "Nightlife",
    "bar": "Nightlife",
    "art": "Arts & Theatre",
    "family": "Family",
    "festival": "Festivals",
    "community": "Community",
}

EVENTBRITE_CATEGORIES: dict[str, str] = {
    "concert": "Music",
    "sports": "Sports & Fitness",
    "bar": "Food & Drink",
    "food": "Food & Drink",
    "comedy": "Performing & Visual Arts",
    "theater": "Performing & Visual Arts",
    "art": "Film, Media & Entertainment",
    "family": "Family & Education",
    "festival": "Music",
    "nightlife": "Food & Drink",
    "conference": "Business & Professional",
    "community": "Community & Culture",
}


def _contains_any(text: str, needles: tuple[str, ...]) -> bool:
    return any(n in text for n in needles)


def map_ticketmaster_category(classifications: list[dict[str, Any]] | None) -> str:
    """Map a Ticketmaster classification list onto an event category.

    Pure function. Only the first classification is considered.
    """
    if not classifications:
        return "general"

    first = classifications[0] or {}
    segment = ((first.get("segment") or {}).get("name") or "").lower()
    genre = ((first.get("genre") or {}).get("name") or "").lower()

    if "sports" in segment:
        return "sports"
    if "music" in segment or "concert" in genre:
        return "concert"
    if "comedy" in genre:
        return "comedy"
    if _contains_any(segment, ("arts", "theatre")) or "theater" in genre:
        return "theater"
    if _contains_any(genre, ("bar", "nightlife", "club")):
        return "nightlife"
    if "film" in segment or _contains_any(genre, ("art", "museum")):
        return "art"
    if _contains_any(genre, ("family", "children")):
        return "family"
    if _contains_any(genre, ("festival", "fair")):
        return "festival"
    if "miscellaneous" in segment or "community" in genre:
        return "community"

    return "general"


def map_eventbrite_category(category: str | None, subcategory: str | None) -> str:
    """Map Eventbrite category/subcategory names onto an event category.

    Pure function.
    """
    cat = (category or "").lower()
    sub = (subcategory or "").lower()

    if "music" in cat or _contains_any(sub, ("concert", "music")):
        return "concert"
    if "sports" in cat or "sports" in sub:
        return "sports"
    if "comedy" in cat or "comedy" in sub:
        return "comedy"
    if _contains_any(cat, ("performing", "visual arts")) or _contains_any(sub, ("theater", "theatre")):
        return "theater"
    if _contains_any(cat, ("film", "media")) or _contains_any(sub, ("art", "museum")):
        return "art"
    if "food" in cat or _contains_any(sub, ("food", "drink")):
        return "food"
    if "nightlife" in cat or _contains_any(sub, ("bar", "nightlife", "club")):
        return "nightlife"
    if "family" in cat or _contains_any(sub, ("family", "kids")):
        return "family"
    if "festival" in cat or _contains_any(sub, ("festival", "fair")):
        return "festival"
    if _contains_any(cat, ("business", "professional")) or _contains_any(sub, ("conference", "seminar")):
        return "conference"
    if _contains_any(cat, ("community", "culture")) or "community" in sub:
        return "community"
    if "holiday" in cat or "holiday" in sub:
        return "holiday"

    return "general"


def ticketmaster_popularity(event: dict[str, Any]) -> float:
    """Score a Ticketmaster listing by how complete it is.

    Pure function. Returns a value in [0.5, 1].
    """
    score = 0.5

    venues = (event.get("_embedded") or {}).get("venues") or []
    if venues:
        score += 0.2
    if event.get("images"):
        score += 0.1
    if event.get("priceRanges"):
        score += 0.1
    if event.get("url"):
        score += 0.1

    return min(score, 1.0)


def to_provider_timestamp(iso: str) -> str:
    """Drop fractional seconds from a UTC ISO string.

    Ticketmaster rejects timestamps with milliseconds.
    """
    if "." in iso and iso.endswith("Z"):
        return iso.split(".", 1)[0] + "Z"
    return iso


def build_ticketmaster_params(query: DiscoveryQuery, api_key: str) -> dict[str, str]:
    """Build Ticketmaster Discovery API query parameters.

    Pure function.
    """
    params = {
        "apikey": api_key,
        "latlong": f"{query.latitude},{query.longitude}",
        "radius": str(round(query.radius)),
        "unit": "miles",
        "size": str(query.size),
        "sort": "date,asc",
    }

    if query.keyword:
        params["keyword"] = query.keyword
    if query.start:
        params["startDateTime"] = to_provider_timestamp(query.start)
    if query.end:
        params["endDateTime"] = to_provider_timestamp(query.end)

    if query.category != ALL_CATEGORIES:
        classification = TICKETMASTER_CLASSIFICATIONS.get(query.category)
        if classification:
            params["classificationName"] = classification

    return params


def build_eventbrite_params(query: DiscoveryQuery) -> dict[str, str]:
    """Build Eventbrite event search query parameters.

    Pure function. Radius is converted to whole kilometers.
    """
    radius_km = round(query.radius * KM_PER_MILE)
    params = {
        "location.latitude": str(query.latitude),
        "location.longitude": str(query.longitude),
        "location.within": f"{radius_km}km",
        "expand": "venue,category",
        "page_size": str(query.size),
    }

    if query.keyword:
        params["q"] = query.keyword
    if query.start:
        params["start_date.range_start"] = query.start
    if query.end:
        params["start_date.range_end"] = query.end

    if query.category != ALL_CATEGORIES:
        category = EVENTBRITE_CATEGORIES.get(query.category)
        if category:
            params["categories"] = category

    return params


def _join_address(parts: list[str | None]) -> str:
    return ", ".join(p for p in parts if p) or "Address TBA"


def _parse_coordinate(value: Any, fallback: float) -> float:
    if value in (None, ""):
        return fallback
    return float(value)


def _localize(naive: datetime, tz: tzinfo) -> datetime:
    if naive.tzinfo is not None:
        return naive
    return naive.replace(tzinfo=tz)


def parse_ticketmaster_event(
    event: dict[str, Any],
    query: DiscoveryQuery,
    tz: tzinfo,
) -> CatalogEvent | None:
    """Parse one Ticketmaster event, None if malformed.

    Pure function.

    Args:
        event: Raw Ticketmaster event object
        query: The query that produced it (fallback coordinates)
        tz: Timezone for local wall-clock times

    Returns:
        CatalogEvent or None
    """
    try:
        venues = (event.get("_embedded") or {}).get("venues") or []
        venue = venues[0] if venues else {}
        location = venue.get("location") or {}

        start_info = event["dates"]["start"]
        local_date = start_info["localDate"]
        local_time = start_info.get("localTime") or DEFAULT_LOCAL_TIME
        start = _localize(datetime.fromisoformat(f"{local_date}T{local_time}"), tz)
        end = start + timedelta(hours=TICKETMASTER_DURATION_HOURS)

        classifications = event.get("classifications") or []
        genre_name = None
        if classifications:
            genre_name = ((classifications[0] or {}).get("genre") or {}).get("name")

        return CatalogEvent(
            id=f"{TICKETMASTER_ID_PREFIX}{event['id']}",
            title=str(event["name"]),
            category=map_ticketmaster_category(classifications),
            start_iso=to_iso(start),
            end_iso=to_iso(end),
            venue=venue.get("name") or "TBA",
            address=_join_address([
                (venue.get("address") or {}).get("line1"),
                (venue.get("city") or {}).get("name"),
                (venue.get("state") or {}).get("stateCode"),
                venue.get("postalCode"),
            ]),
            geo=GeoPoint(
                lat=_parse_coordinate(location.get("latitude"), query.latitude),
                lng=_parse_coordinate(location.get("longitude"), query.longitude),
            ),
            popularity=ticketmaster_popularity(event),
            description=event.get("info") or genre_name or None,
        )
    except (KeyError, TypeError, ValueError, AttributeError):
        return None


def parse_ticketmaster_response(
    data: dict[str, Any],
    query: DiscoveryQuery,
    tz: tzinfo,
) -> list[CatalogEvent]:
    """Parse a Ticketmaster response into events.

    Pure function: malformed events are skipped.
    """
    raw_events = (data.get("_embedded") or {}).get("events") or []
    events = []
    for raw in raw_events:
        event = parse_ticketmaster_event(raw, query, tz)
        if event is not None:
            events.append(event)
    return events


def parse_eventbrite_event(
    event: dict[str, Any],
    query: DiscoveryQuery,
    tz: tzinfo,
) -> CatalogEvent | None:
    """Parse one Eventbrite event, None if malformed.

    Pure function.
    """
    try:
        venue = event.get("venue") or {}
        address = venue.get("address") or {}

        start = _localize(datetime.fromisoformat(event["start"]["local"]), tz)
        end = _localize(datetime.fromisoformat(event["end"]["local"]), tz)

        description = (event.get("description") or {}).get("text")
        if description:
            description = description[:EVENTBRITE_DESCRIPTION_LIMIT]

        return CatalogEvent(
            id=f"{EVENTBRITE_ID_PREFIX}{event['id']}",
            title=str(event["name"]["text"]),
            category=map_eventbrite_category(
                (event.get("category") or {}).get("name"),
                (event.get("subcategory") or {}).get("name"),
            ),
            start_iso=to_iso(start),
            end_iso=to_iso(max(start, end)),
            venue=venue.get("name") or "TBA",
            address=_join_address([
                address.get("address_1"),
                address.get("city"),
                address.get("region"),
                address.get("postal_code"),
            ]),
            geo=GeoPoint(
                lat=_parse_coordinate(address.get("latitude"), query.latitude),
                lng=_parse_coordinate(address.get("longitude"), query.longitude),
            ),
            popularity=EVENTBRITE_POPULARITY,
            description=description or None,
        )
    except (KeyError, TypeError, ValueError, AttributeError):
        return None


def parse_eventbrite_response(
    data: dict[str, Any],
    query: DiscoveryQuery,
    tz: tzinfo,
) -> list[CatalogEvent]:
    """Parse an Eventbrite response into events.

    Pure function: malformed events are skipped.
    """
    events = []
    for raw in data.get("events") or []:
        event = parse_eventbrite_event(raw, query, tz)
        if event is not None:
            events.append(event)
    return events
