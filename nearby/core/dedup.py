"""Deduplication logic - Pure functions.

This module merges event lists from the catalog and discovery providers.
All functions are pure with no side effects.

Note: catalog and discovered events are merged by id only. Two listings
of the same happening under different ids are both kept.
"""

from nearby.core.events import CatalogEvent


def merge_by_id(
    primary: list[CatalogEvent],
    secondary: list[CatalogEvent],
) -> list[CatalogEvent]:
    """Union two event lists by id.

    Pure function. Order is primary first, then secondary; the first
    occurrence of an id wins.

    Args:
        primary: Events that take precedence (the catalog)
        secondary: Events appended after (the discovered set)

    Returns:
        Merged list with unique ids
    """
    seen: set[str] = set()
    merged = []

    for event in [*primary, *secondary]:
        if event.id in seen:
            continue
        seen.add(event.id)
        merged.append(event)

    return merged


def listing_key(event: CatalogEvent) -> str:
    """Key identifying the same listing across providers."""
    return f"{event.title}_{event.start_iso}_{event.venue}"


def dedupe_listings(events: list[CatalogEvent]) -> list[CatalogEvent]:
    """Drop repeated listings from one discovery result.

    Pure function. Events sharing title, start time and venue collapse to
    the first occurrence.

    Args:
        events: Events gathered from all providers

    Returns:
        Events with unique listing keys, in first-seen order
    """
    unique: dict[str, CatalogEvent] = {}
    for event in events:
        unique.setdefault(listing_key(event), event)
    return list(unique.values())
