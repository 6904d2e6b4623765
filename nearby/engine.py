"""Nearby Engine - Wires Functional Core and Imperative Shell.

This module coordinates location, discovery, ranking and interest state
behind one object with an explicit start/close lifecycle. Callers get an
engine instance injected; nothing here is module-level state.
"""

import asyncio
import logging
from datetime import date, datetime, tzinfo
from zoneinfo import ZoneInfo

from nearby.aggregator import EventAggregator
from nearby.core.catalog import build_catalog
from nearby.core.config import Config
from nearby.core.events import CatalogEvent, EventWithDistance
from nearby.core.filters import NearbyFilters, query_events
from nearby.core.geo import UserLocation
from nearby.core.interest import InterestedEvent
from nearby.core.prefs import DEFAULT_PREFS, UserPrefs, parse_prefs
from nearby.interest_machine import InterestStateMachine
from nearby.location_service import LocationService
from nearby.shell.discovery import DiscoverySource
from nearby.shell.location import LocationProvider
from nearby.shell.slack_notifier import Notifier
from nearby.shell.store import KEY_PREFS, KeyValueStore


logger = logging.getLogger(__name__)


class NearbyEngine:
    """Nearby discovery and interest tracking for one user.

    This class wires together:
    - LocationService (device location with fallback)
    - EventAggregator (catalog + discovery source)
    - Core functions (ranking, filtering, sorting)
    - InterestStateMachine (interest state + reminders)
    - Key-value store (user preferences)
    """

    def __init__(
        self,
        config: Config,
        store: KeyValueStore,
        location_provider: LocationProvider,
        discovery_source: DiscoverySource,
        notifier: Notifier,
        today: date | None = None,
    ) -> None:
        """Initialize engine with configuration and collaborators.

        Args:
            config: Application configuration
            store: Persistence for location, interest state and prefs
            location_provider: Device location access
            discovery_source: External event source
            notifier: Reminder scheduling
            today: Reference day for the seeded catalog (defaults to today)
        """
        self.config = config
        self.store = store
        self.tz: tzinfo = ZoneInfo(config.timezone)

        catalog_day = today or datetime.now(self.tz).date()
        self.location = LocationService(
            location_provider,
            store,
            fallback=UserLocation(
                lat=config.fallback_location.latitude,
                lng=config.fallback_location.longitude,
                granted=False,
            ),
        )
        self.aggregator = EventAggregator(
            build_catalog(catalog_day, self.tz),
            discovery_source,
            page_size=config.discovery.page_size,
        )
        self.interest = InterestStateMachine(store, notifier)
        self.prefs: UserPrefs = DEFAULT_PREFS
        self.started = False

    async def __aenter__(self) -> "NearbyEngine":
        await self.start()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def start(self) -> None:
        """Load persisted location, interest state and preferences."""
        if self.started:
            return

        _, _, prefs_data = await asyncio.gather(
            self.location.load(),
            self.interest.load(),
            self.store.get(KEY_PREFS),
        )
        self.prefs = parse_prefs(prefs_data)
        self.started = True

        logger.info("Nearby engine started with %d catalog events", len(self.aggregator.catalog))

    async def close(self) -> None:
        """Release shell resources."""
        close = getattr(self.store, "close", None)
        if callable(close):
            close()
        self.started = False
        logger.info("Nearby engine closed")

    # Location

    @property
    def user_location(self) -> UserLocation | None:
        return self.location.current

    @property
    def is_locating(self) -> bool:
        return self.location.is_acquiring

    async def request_location(self) -> UserLocation:
        """Acquire the device location (or the fallback)."""
        return await self.location.acquire()

    # Discovery

    @property
    def is_loading(self) -> bool:
        return self.aggregator.is_loading

    async def refresh(self, filters: NearbyFilters) -> bool:
        """Refresh discovered events around the current location.

        Returns:
            False when skipped (no location yet, or a refresh is running)
        """
        origin = self.location.current
        if origin is None:
            logger.info("No user location yet, skipping discovery refresh")
            return False
        return await self.aggregator.refresh(filters, origin)

    def combined_events(self) -> list[CatalogEvent]:
        return self.aggregator.combined()

    def get_event(self, event_id: str) -> CatalogEvent | None:
        return self.aggregator.get(event_id)

    def nearby(self, filters: NearbyFilters) -> list[EventWithDistance]:
        """Ranked, filtered view of catalog and discovered events.

        Returns:
            Matching events, empty when there is no location yet
        """
        origin = self.location.current
        if origin is None:
            return []
        return query_events(self.aggregator.combined(), filters, origin, self.tz)

    # Interest

    @property
    def interested_events(self) -> list[InterestedEvent]:
        return self.interest.interested_events

    @property
    def not_interested_ids(self) -> set[str]:
        return self.interest.not_interested_ids

    async def mark_interested(self, event: CatalogEvent) -> InterestedEvent:
        return await self.interest.mark_interested(event)

    async def mark_not_interested(self, catalog_event_id: str) -> None:
        await self.interest.mark_not_interested(catalog_event_id)

    async def remove_interest(self, catalog_event_id: str) -> None:
        await self.interest.remove_interest(catalog_event_id)

    def status_of(self, catalog_event_id: str) -> str | None:
        return self.interest.status_of(catalog_event_id)

    # Preferences

    async def update_prefs(self, prefs: UserPrefs) -> None:
        """Replace the user's preferences."""
        if not await self.store.set(KEY_PREFS, prefs.to_dict()):
            logger.warning("Could not persist preferences, keeping them in memory only")
        self.prefs = prefs
