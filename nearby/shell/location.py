"""Location Providers - Imperative Shell.

A LocationProvider stands in for the device location API: it is asked
for permission, then for a position fix.
"""

import logging
from typing import Protocol

from nearby.core.config import Coordinates


logger = logging.getLogger(__name__)


class LocationProvider(Protocol):
    """Source of device position fixes."""

    async def request_permission(self) -> bool:
        ...

    async def current_position(self) -> tuple[float, float]:
        ...


class StaticLocationProvider:
    """Provider backed by a configured position.

    Permission is granted only when a position is configured.
    """

    def __init__(self, position: Coordinates | None = None) -> None:
        self.position = position

    async def request_permission(self) -> bool:
        if self.position is None:
            logger.info("No device location configured, permission denied")
            return False
        return True

    async def current_position(self) -> tuple[float, float]:
        if self.position is None:
            raise LookupError("No device location configured")
        return (self.position.latitude, self.position.longitude)
