"""Event Discovery - Imperative Shell.

This module fans a discovery query out to every configured provider and
combines what comes back. Provider failures are logged and contribute no
events; they never fail the whole search.
"""

import asyncio
import logging
from datetime import tzinfo, timezone
from typing import Any, Callable, Protocol

import requests

from nearby.core.dedup import dedupe_listings
from nearby.core.events import CatalogEvent
from nearby.core.filters import DiscoveryQuery
from nearby.core.listings import parse_eventbrite_response, parse_ticketmaster_response
from nearby.shell.eventbrite_client import EventbriteClient
from nearby.shell.ticketmaster_client import TicketmasterClient


logger = logging.getLogger(__name__)


class DiscoverySource(Protocol):
    """External source of events for a query."""

    async def search(self, query: DiscoveryQuery) -> list[CatalogEvent]:
        ...


ResponseParser = Callable[[dict[str, Any], DiscoveryQuery, tzinfo], list[CatalogEvent]]


class MultiSourceDiscovery:
    """Searches Ticketmaster and Eventbrite concurrently.

    Results are combined in provider order and repeated listings
    (same title, start and venue) collapse to the first one.
    """

    def __init__(
        self,
        ticketmaster_client: TicketmasterClient | None = None,
        eventbrite_client: EventbriteClient | None = None,
        tz: tzinfo = timezone.utc,
    ) -> None:
        """Initialize discovery.

        Args:
            ticketmaster_client: Ticketmaster client (skipped if None)
            eventbrite_client: Eventbrite client (skipped if None)
            tz: Timezone for providers' local wall-clock times
        """
        self.tz = tz
        self._providers: list[tuple[Any, ResponseParser]] = []
        if ticketmaster_client is not None:
            self._providers.append((ticketmaster_client, parse_ticketmaster_response))
        if eventbrite_client is not None:
            self._providers.append((eventbrite_client, parse_eventbrite_response))

    async def _search_provider(
        self,
        client: Any,
        parser: ResponseParser,
        query: DiscoveryQuery,
    ) -> list[CatalogEvent]:
        """Query one provider, absorbing its failures."""
        try:
            data = await asyncio.to_thread(client.fetch_events, query)
        except requests.Timeout:
            logger.error("%s request timed out", client.name)
            return []
        except (requests.RequestException, ValueError) as e:
            logger.error("%s request failed: %s", client.name, str(e))
            return []

        if not data:
            return []

        try:
            events = parser(data, query, self.tz)
        except (AttributeError, TypeError) as e:
            logger.error("%s returned an unexpected response shape: %s", client.name, str(e))
            return []

        logger.info("Discovered %d events from %s", len(events), client.name)
        return events

    async def search(self, query: DiscoveryQuery) -> list[CatalogEvent]:
        """Search all providers.

        This method performs HTTP I/O.

        Args:
            query: Search parameters

        Returns:
            Combined, deduplicated events (empty if every provider failed)
        """
        results = await asyncio.gather(*(
            self._search_provider(client, parser, query)
            for client, parser in self._providers
        ))

        combined = [event for batch in results for event in batch]
        return dedupe_listings(combined)
