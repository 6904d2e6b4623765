"""Tests for location acquisition and the static provider."""

import asyncio
from unittest.mock import AsyncMock

import pytest

from nearby.core.config import Coordinates
from nearby.core.geo import FALLBACK_LOCATION, UserLocation
from nearby.location_service import LocationService
from nearby.shell.location import StaticLocationProvider
from nearby.shell.store import KEY_LOCATION, MemoryStore


class TestStaticLocationProvider:
    """Tests for StaticLocationProvider."""

    def test_configured_position(self):
        provider = StaticLocationProvider(Coordinates(41.5, -81.7))

        async def run():
            return await provider.request_permission(), await provider.current_position()

        assert asyncio.run(run()) == (True, (41.5, -81.7))

    def test_no_position_denies(self):
        provider = StaticLocationProvider()

        assert asyncio.run(provider.request_permission()) is False
        with pytest.raises(LookupError):
            asyncio.run(provider.current_position())


class TestLocationServiceAcquire:
    """Tests for LocationService.acquire()."""

    def test_granted_fix(self):
        store = MemoryStore()
        service = LocationService(StaticLocationProvider(Coordinates(41.5, -81.7)), store)

        location = asyncio.run(service.acquire())

        assert location == UserLocation(lat=41.5, lng=-81.7, granted=True)
        assert service.current == location
        assert asyncio.run(store.get(KEY_LOCATION)) == {"lat": 41.5, "lng": -81.7, "granted": True}

    def test_denied_uses_fallback_and_persists_it(self):
        """Denied permission yields the fallback, which is also persisted."""
        store = MemoryStore()
        service = LocationService(StaticLocationProvider(), store)

        location = asyncio.run(service.acquire())

        assert location == FALLBACK_LOCATION
        assert location.granted is False
        assert asyncio.run(store.get(KEY_LOCATION)) == FALLBACK_LOCATION.to_dict()

    def test_provider_error_uses_fallback(self):
        provider = AsyncMock()
        provider.request_permission.return_value = True
        provider.current_position.side_effect = TimeoutError("no fix")
        service = LocationService(provider, MemoryStore())

        location = asyncio.run(service.acquire())

        assert location == FALLBACK_LOCATION

    def test_store_failure_keeps_location(self):
        store = AsyncMock()
        store.set.return_value = False
        service = LocationService(StaticLocationProvider(Coordinates(41.5, -81.7)), store)

        location = asyncio.run(service.acquire())

        assert location.granted is True
        assert service.current == location

    def test_custom_fallback(self):
        fallback = UserLocation(lat=40.7128, lng=-74.006, granted=False)
        service = LocationService(StaticLocationProvider(), MemoryStore(), fallback=fallback)

        assert asyncio.run(service.acquire()) == fallback

    def test_not_acquiring_after_completion(self):
        service = LocationService(StaticLocationProvider(), MemoryStore())

        asyncio.run(service.acquire())

        assert service.is_acquiring is False


class TestLocationServiceLoad:
    """Tests for LocationService.load()."""

    def test_restores_persisted_location(self):
        store = MemoryStore({KEY_LOCATION: {"lat": 41.6, "lng": -81.4, "granted": True}})
        service = LocationService(StaticLocationProvider(), store)

        location = asyncio.run(service.load())

        assert location == UserLocation(lat=41.6, lng=-81.4, granted=True)
        assert service.current == location

    def test_fresh_install(self):
        service = LocationService(StaticLocationProvider(), MemoryStore())

        assert asyncio.run(service.load()) is None
        assert service.current is None

    def test_load_never_writes(self):
        store = AsyncMock()
        store.get.return_value = None
        service = LocationService(StaticLocationProvider(), store)

        asyncio.run(service.load())

        store.set.assert_not_called()
