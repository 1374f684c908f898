"""
Tests for Web Mercator transforms
"""

import math

import pytest

from cogxyz.gis.bbox import BoundingBox
from cogxyz.gis.mercator import (
    MERCATOR_ORIGIN_SHIFT,
    WEB_MERCATOR,
    WGS84,
    bounds_to_mercator,
    difference_between_points,
    mercator_to_bounds,
    project_forward,
)

GEORGIA = BoundingBox(west=39.98, south=41.05, east=46.69, north=43.58)


class TestProjectForward:
    """Test project_forward"""

    def test_origin(self):
        """Test (0, 0) maps to (0, 0)"""
        projected = project_forward((0, 0, 0, 0), WGS84, WEB_MERCATOR)

        assert projected.west == pytest.approx(0.0, abs=1e-6)
        assert projected.south == pytest.approx(0.0, abs=1e-6)

    def test_one_degree(self):
        """Test one degree of longitude at the equator"""
        projected = project_forward((0, 0, 1, 1), WGS84, WEB_MERCATOR)

        assert projected.east == pytest.approx(111319.49079327357, rel=1e-9)
        assert projected.north == pytest.approx(111325.14286638486, rel=1e-6)

    def test_antimeridian(self):
        """Test 180 degrees maps to the origin shift"""
        projected = project_forward((-180, 0, 180, 0), WGS84, WEB_MERCATOR)

        assert projected.west == pytest.approx(-MERCATOR_ORIGIN_SHIFT)
        assert projected.east == pytest.approx(MERCATOR_ORIGIN_SHIFT)

    def test_keeps_orientation(self):
        """Test west < east and south < north after projection"""
        projected = project_forward(GEORGIA, WGS84, WEB_MERCATOR)

        assert projected.west < projected.east
        assert projected.south < projected.north


class TestMercatorRoundTrip:
    """Test bounds_to_mercator / mercator_to_bounds"""

    def test_floored_to_meters(self):
        """Test projected corners are whole meters"""
        projected = bounds_to_mercator(GEORGIA)

        for value in projected.as_tuple():
            assert value == math.floor(value)

    def test_round_trip(self):
        """Test geographic -> mercator -> geographic within flooring error"""
        back = mercator_to_bounds(bounds_to_mercator(GEORGIA))

        for original, restored in zip(GEORGIA.as_tuple(), back.as_tuple()):
            assert restored == pytest.approx(original, abs=1e-4)


class TestDifferenceBetweenPoints:
    """Test difference_between_points"""

    def test_offset(self):
        assert difference_between_points((-10, -5), (-5, 0)) == (5, 5)

    def test_same_point(self):
        assert difference_between_points((3.5, 2.0), (3.5, 2.0)) == (0.0, 0.0)
