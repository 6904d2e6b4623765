"""Unit tests for geographic calculations.

Pure function tests - no mocks needed, fast execution.
"""

import pytest

from nearby.core.events import CatalogEvent, GeoPoint
from nearby.core.geo import (
    FALLBACK_LOCATION,
    UserLocation,
    calculate_distance,
    distance_to_event,
    is_within_radius,
    parse_location,
)


@pytest.fixture
def sample_event():
    """Create a sample event at Progressive Field."""
    return CatalogEvent(
        id="cat_001",
        title="Guardians vs Athletics",
        category="sports",
        start_iso="2025-06-02T22:10:00.000Z",
        end_iso="2025-06-03T01:10:00.000Z",
        venue="Progressive Field",
        address="2401 Ontario St, Cleveland, OH 44115",
        geo=GeoPoint(lat=41.4962, lng=-81.6852),
        popularity=0.92,
    )


class TestCalculateDistance:
    """Tests for calculate_distance() Haversine implementation."""

    def test_same_point_returns_zero(self):
        """Distance from point to itself should be zero."""
        distance = calculate_distance(41.4993, -81.6944, 41.4993, -81.6944)
        assert distance == pytest.approx(0.0, abs=0.001)

    def test_known_distance_cleveland_to_columbus(self):
        """Cleveland to Columbus should be approximately 126 miles."""
        cle_lat, cle_lon = 41.4993, -81.6944
        cmh_lat, cmh_lon = 39.9612, -82.9988

        distance = calculate_distance(cle_lat, cle_lon, cmh_lat, cmh_lon)

        assert distance == pytest.approx(126, rel=0.03)

    def test_known_distance_nyc_to_london(self):
        """NYC to London should be approximately 3461 miles."""
        distance = calculate_distance(40.7128, -74.0060, 51.5074, -0.1278)
        assert distance == pytest.approx(3461, rel=0.02)

    @pytest.mark.parametrize("a,b", [
        ((41.4993, -81.6944), (41.1597, -81.5547)),
        ((-33.8688, 151.2093), (35.6762, 139.6503)),
        ((0.0, 179.9), (0.0, -179.9)),
        ((89.9, 0.0), (-89.9, 180.0)),
    ])
    def test_symmetric_and_non_negative(self, a, b):
        """Distance should be the same in both directions and never negative."""
        d1 = calculate_distance(a[0], a[1], b[0], b[1])
        d2 = calculate_distance(b[0], b[1], a[0], a[1])

        assert d1 == pytest.approx(d2, rel=1e-9)
        assert d1 >= 0

    def test_antipodal_points(self):
        """Antipodal points are half the circumference apart."""
        distance = calculate_distance(0.0, 0.0, 0.0, 180.0)
        assert distance == pytest.approx(3959 * 3.141592653589793, rel=1e-6)


class TestDistanceToEvent:
    """Tests for distance_to_event()."""

    def test_downtown_to_ballpark(self, sample_event):
        """Public Square to Progressive Field is well under a mile."""
        distance = distance_to_event(FALLBACK_LOCATION, sample_event)
        assert 0 < distance < 1


class TestIsWithinRadius:
    """Tests for is_within_radius() function."""

    def test_exactly_on_radius_is_included(self):
        """Boundary is inclusive."""
        assert is_within_radius(25.0, 25) is True

    def test_just_past_radius_is_excluded(self):
        """Anything beyond the radius is excluded."""
        assert is_within_radius(25.0 + 1e-9, 25) is False

    def test_zero_distance(self):
        """Zero distance is within any radius."""
        assert is_within_radius(0.0, 5) is True


class TestParseLocation:
    """Tests for parse_location()."""

    def test_round_trip(self):
        """to_dict output parses back to an equal location."""
        location = UserLocation(lat=41.5, lng=-81.7, granted=True)
        assert parse_location(location.to_dict()) == location

    def test_missing_value(self):
        """None means nothing persisted yet."""
        assert parse_location(None) is None

    def test_malformed_value(self):
        """Records without coordinates are rejected."""
        assert parse_location({"lat": "north"}) is None

    def test_fallback_is_cleveland(self):
        """Fallback is the documented Cleveland centroid, not granted."""
        assert FALLBACK_LOCATION == UserLocation(lat=41.4993, lng=-81.6944, granted=False)
