"""Location Service - acquires the user's position.

Fails open: a denied permission or a failed fix yields the fallback
location with granted=False instead of raising.
"""

import logging

from nearby.core.geo import FALLBACK_LOCATION, UserLocation, parse_location
from nearby.shell.location import LocationProvider
from nearby.shell.store import KEY_LOCATION, KeyValueStore


logger = logging.getLogger(__name__)


class LocationService:
    """Acquires, caches and persists the user's location."""

    def __init__(
        self,
        provider: LocationProvider,
        store: KeyValueStore,
        fallback: UserLocation = FALLBACK_LOCATION,
    ) -> None:
        """Initialize location service.

        Args:
            provider: Device location access
            store: Persistence for the last known location
            fallback: Returned when no device fix is available
        """
        self.provider = provider
        self.store = store
        self.fallback = fallback
        self.current: UserLocation | None = None
        self.is_acquiring = False

    async def load(self) -> UserLocation | None:
        """Restore the last known location. Never writes.

        Returns:
            The persisted location, or None on a fresh install
        """
        stored = parse_location(await self.store.get(KEY_LOCATION))
        if stored is not None:
            self.current = stored
            logger.info("Restored last known location (granted=%s)", stored.granted)
        return stored

    async def _fix(self) -> UserLocation:
        """Ask for permission and a position, falling back on denial or error."""
        try:
            if not await self.provider.request_permission():
                logger.info("Location permission denied, using fallback")
                return self.fallback

            lat, lng = await self.provider.current_position()
            return UserLocation(lat=lat, lng=lng, granted=True)

        except Exception as e:
            logger.error("Failed to get location: %s", str(e))
            return self.fallback

    async def acquire(self) -> UserLocation:
        """Acquire the user's location.

        Every call overwrites the persisted last known location,
        whether it got a real fix or the fallback.

        Returns:
            The live fix (granted=True) or the fallback (granted=False)
        """
        self.is_acquiring = True
        try:
            location = await self._fix()
            self.current = location

            if not await self.store.set(KEY_LOCATION, location.to_dict()):
                logger.warning("Could not persist location, keeping it in memory only")

            return location
        finally:
            self.is_acquiring = False
