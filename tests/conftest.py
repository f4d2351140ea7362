"""
Shared test fixtures for the geofactory test suite.
Provides factories for each built-in namespace and reusable test geometry.
"""
import pytest

from geofactory import Factory
from geofactory.geography import (
    cartesian_factory,
    projected_factory,
    simple_mercator_factory,
    spherical_factory,
)


class TestCoordinates:
    """Reference coordinates used across the suite (lon, lat)."""
    __test__ = False

    CHICAGO = (-87.65, 41.85)
    SYDNEY = (151.2093, -33.8688)
    UTM_16N = "EPSG:32616"  # covers 90°W to 84°W, includes Chicago


@pytest.fixture
def coords():
    return TestCoordinates()


@pytest.fixture
def spherical():
    """Geographic factory without projection support."""
    return spherical_factory()


@pytest.fixture
def mercator():
    """Geographic factory with web Mercator projection."""
    return simple_mercator_factory()


@pytest.fixture
def utm():
    """Geographic factory projecting to UTM zone 16N."""
    return projected_factory(TestCoordinates.UTM_16N)


@pytest.fixture
def cartesian():
    """Planar factory."""
    return cartesian_factory()


@pytest.fixture(params=["spherical", "simple_mercator", "cartesian"])
def any_factory(request):
    return Factory(request.param)


def make_ring(factory, coords):
    """Build a linear ring from (x, y) tuples."""
    return factory.linear_ring([factory.point(x, y) for x, y in coords])


def make_square(factory, x0=0.0, y0=0.0, size=1.0):
    """Build a square polygon with its lower-left corner at (x0, y0)."""
    ring = make_ring(factory, [
        (x0, y0), (x0 + size, y0), (x0 + size, y0 + size), (x0, y0 + size)
    ])
    return factory.polygon(ring)
