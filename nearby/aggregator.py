"""Event Aggregator - merges catalog and discovered events.

The discovered set lives only in memory and is replaced wholesale by each
successful refresh. A refresh requested while another is running is
dropped.
"""

import logging

from nearby.core.dedup import merge_by_id
from nearby.core.events import CatalogEvent
from nearby.core.filters import DEFAULT_DISCOVERY_SIZE, NearbyFilters, build_discovery_query
from nearby.core.geo import UserLocation
from nearby.shell.discovery import DiscoverySource


logger = logging.getLogger(__name__)


class EventAggregator:
    """Combines the read-only catalog with the latest discovery result."""

    def __init__(
        self,
        catalog: tuple[CatalogEvent, ...],
        source: DiscoverySource,
        page_size: int = DEFAULT_DISCOVERY_SIZE,
    ) -> None:
        """Initialize aggregator.

        Args:
            catalog: Seeded events, never mutated
            source: External discovery source
            page_size: Maximum results requested per refresh
        """
        self.catalog = catalog
        self.source = source
        self.page_size = page_size
        self.discovered: list[CatalogEvent] = []
        self.is_loading = False

    def combined(self) -> list[CatalogEvent]:
        """Catalog events followed by discovered events, unique by id."""
        return merge_by_id(list(self.catalog), self.discovered)

    def get(self, event_id: str) -> CatalogEvent | None:
        """Find an event by id in the combined set."""
        for event in self.combined():
            if event.id == event_id:
                return event
        return None

    async def refresh(self, filters: NearbyFilters, origin: UserLocation) -> bool:
        """Fetch fresh events from the discovery source.

        On failure the previous discovered set is kept.

        Args:
            filters: Current nearby filters
            origin: Search center

        Returns:
            False if dropped because a refresh was already running
        """
        if self.is_loading:
            logger.info("Discovery refresh already in progress, ignoring request")
            return False

        self.is_loading = True
        try:
            query = build_discovery_query(filters, origin, self.page_size)
            logger.info(
                "Discovering events within %s mi (category=%s)",
                query.radius,
                query.category,
            )

            events = await self.source.search(query)

            self.discovered = list(events)
            logger.info("Discovered %d events", len(self.discovered))

        except Exception as e:
            logger.error("Failed to discover events: %s", str(e))

        finally:
            self.is_loading = False

        return True
