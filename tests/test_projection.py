"""
Tests for projection mediation: project/unproject, cross-factory rejection,
wrap flag and the memoized limits window.
"""
import math
import threading
from unittest.mock import patch

import pytest

from geofactory import (
    Factory,
    GeometryVariant,
    InvalidGeometry,
    ProjectedWindow,
    ProjectionError,
)
from geofactory.geography import projected_factory
from geofactory.models import GeometryCollection
from geofactory.projection import CRSProjector, SimpleMercatorProjector

from conftest import TestCoordinates, make_ring, make_square

EARTH_RADIUS = 6378137.0


def mercator_xy(lon, lat):
    """Reference spherical Mercator formula."""
    x = math.radians(lon) * EARTH_RADIUS
    y = EARTH_RADIUS * math.log(math.tan(math.pi / 4 + math.radians(lat) / 2))
    return x, y


class TestUnprojectedFactory:
    """A factory without projector: projection is a non-event."""

    def test_point_without_projection(self, spherical):
        p = spherical.point(1.0, 2.0)

        assert p.factory is spherical
        assert spherical.has_projection is False
        assert spherical.project(p) is None

    def test_projection_queries_return_none(self, spherical):
        assert spherical.projection_factory is None
        assert spherical.projection_wraps is None
        assert spherical.projection_limits_window() is None

    def test_unproject_raises(self, spherical, cartesian):
        with pytest.raises(InvalidGeometry):
            spherical.unproject(cartesian.point(1.0, 2.0))

    def test_project_foreign_geometry_raises(self, spherical):
        other = Factory("spherical")
        with pytest.raises(InvalidGeometry):
            spherical.project(other.point(1.0, 2.0))


class TestMercatorProjection:
    """Projection through the simple Mercator projector."""

    def test_scenario_round_trip(self, mercator, coords):
        p = mercator.point(*coords.CHICAGO)
        projected = mercator.project(p)

        assert mercator.has_projection
        assert projected.factory is mercator.projection_factory
        expected_x, expected_y = mercator_xy(*coords.CHICAGO)
        assert projected.x == pytest.approx(expected_x, rel=1e-9)
        assert projected.y == pytest.approx(expected_y, rel=1e-9)

        back = mercator.unproject(projected)

        assert back.factory is mercator
        assert back.equals_exact(p, mercator.projector.tolerance)

    def test_projection_factory_is_planar_3857(self, mercator):
        pf = mercator.projection_factory

        assert isinstance(pf, Factory)
        assert pf.namespace == "cartesian"
        assert pf.srid == 3857
        assert not pf.has_projection
        assert mercator.projection_factory is pf

    def test_wraps(self, mercator):
        assert mercator.projection_wraps is True

    def test_latitude_clamped_near_poles(self, mercator):
        projected = mercator.project(mercator.point(0.0, 89.9))
        window = mercator.projection_limits_window()

        assert math.isfinite(projected.y)
        assert projected.y == pytest.approx(window.y_max, rel=1e-9)

    def test_limits_window(self, mercator):
        window = mercator.projection_limits_window()

        assert isinstance(window, ProjectedWindow)
        assert window.x_max == pytest.approx(math.pi * EARTH_RADIUS, rel=1e-9)
        assert window.y_max == pytest.approx(math.pi * EARTH_RADIUS, rel=1e-7)
        assert window.x_min == -window.x_max
        assert window.y_min == -window.y_max

    def test_polygon_structure_preserved(self, mercator):
        outer = make_ring(mercator, [(-88.0, 41.0), (-87.0, 41.0), (-87.0, 42.0), (-88.0, 42.0)])
        hole = make_ring(mercator, [(-87.8, 41.2), (-87.2, 41.2), (-87.2, 41.8), (-87.8, 41.8)])
        poly = mercator.polygon(outer, [hole])

        projected = mercator.project(poly)

        assert projected.variant is poly.variant
        assert projected.num_interior_rings == 1
        assert projected.exterior_ring.num_points == poly.exterior_ring.num_points
        for original, moved in zip(poly.exterior_ring.points, projected.exterior_ring.points):
            assert (moved.x, moved.y) == pytest.approx(mercator_xy(original.x, original.y), rel=1e-9)

        back = mercator.unproject(projected)
        assert back.factory is mercator
        assert back.equals_exact(poly, 1e-9)

    def test_every_variant_round_trips(self, mercator):
        p1, p2, p3 = mercator.point(10, 10), mercator.point(11, 10), mercator.point(10, 11)
        ring = mercator.linear_ring([p1, p2, p3])
        values = [
            p1,
            mercator.line_string([p1, p2, p3]),
            mercator.line(p1, p2),
            ring,
            mercator.polygon(ring),
            mercator.collection([p1, mercator.line(p2, p3)]),
            mercator.multi_point([p1, p2]),
            mercator.multi_line_string([mercator.line(p1, p3)]),
            mercator.multi_polygon([mercator.polygon(ring), make_square(mercator, 20, 20)]),
        ]

        for value in values:
            projected = mercator.project(value)
            assert projected.variant is value.variant
            assert projected.factory is mercator.projection_factory

            back = mercator.unproject(projected)
            assert back.variant is value.variant
            assert back.factory is mercator
            assert back.equals_exact(value, 1e-9)

            if isinstance(value, GeometryCollection):
                variants = [g.variant for g in value]
                assert [g.variant for g in projected] == variants
                assert [g.variant for g in back] == variants
                assert all(g.factory is mercator.projection_factory for g in projected)

    def test_line_member_survives_projection(self, mercator):
        line = mercator.line(mercator.point(10, 10), mercator.point(11, 11))
        coll = mercator.collection([line])

        back = mercator.unproject(mercator.project(coll))

        assert mercator.project(coll).geometry_n(0).variant is GeometryVariant.LINE
        assert back.geometry_n(0).variant is GeometryVariant.LINE
        assert back.geometry_n(0).equals_exact(line, mercator.projector.tolerance)


class TestCrossFactoryRejection:
    """Mixing geometry from different factories fails loudly."""

    def test_project_geometry_from_other_projection_capable_factory(self, mercator, utm, coords):
        g2 = utm.point(*coords.CHICAGO)

        with pytest.raises(InvalidGeometry):
            mercator.project(g2)

    def test_project_requires_identity_not_equivalence(self, mercator, coords):
        twin = Factory("simple_mercator")
        assert twin.equivalent(mercator)

        with pytest.raises(InvalidGeometry):
            mercator.project(twin.point(*coords.CHICAGO))

    def test_unproject_requires_own_projection_factory(self, mercator, coords):
        twin = Factory("simple_mercator")
        projected_by_twin = twin.project(twin.point(*coords.CHICAGO))

        with pytest.raises(InvalidGeometry):
            mercator.unproject(projected_by_twin)

    def test_unproject_rejects_unprojected_geometry(self, mercator, coords):
        with pytest.raises(InvalidGeometry):
            mercator.unproject(mercator.point(*coords.CHICAGO))

    def test_project_rejects_projected_geometry(self, mercator, coords):
        projected = mercator.project(mercator.point(*coords.CHICAGO))

        with pytest.raises(InvalidGeometry):
            mercator.project(projected)

    def test_project_rejects_non_geometry(self, mercator):
        with pytest.raises(InvalidGeometry):
            mercator.project((1.0, 2.0))


class TestLimitsWindowMemoization:
    """The limits window is computed at most once per factory."""

    def test_computed_once(self):
        factory = Factory("simple_mercator")
        projector = factory.projector

        with patch.object(projector, "limits_window", wraps=projector.limits_window) as spy:
            first = factory.projection_limits_window()
            second = factory.projection_limits_window()

        assert spy.call_count == 1
        assert first == second
        assert first is second

    def test_computed_once_under_concurrency(self):
        factory = Factory("simple_mercator")
        projector = factory.projector
        results = []

        with patch.object(projector, "limits_window", wraps=projector.limits_window) as spy:
            threads = [
                threading.Thread(target=lambda: results.append(factory.projection_limits_window()))
                for _ in range(8)
            ]
            for t in threads:
                t.start()
            for t in threads:
                t.join()

        assert spy.call_count == 1
        assert len(results) == 8
        assert all(r is results[0] for r in results)

    def test_failed_computation_not_memoized(self):
        factory = Factory("simple_mercator")
        projector = factory.projector
        window = ProjectedWindow(x_min=-1, y_min=-1, x_max=1, y_max=1)

        with patch.object(projector, "limits_window",
                          side_effect=[ProjectionError("transient"), window]) as mocked:
            with pytest.raises(ProjectionError):
                factory.projection_limits_window()
            assert factory.projection_limits_window() is window
            assert factory.projection_limits_window() is window

        assert mocked.call_count == 2

    def test_each_factory_has_its_own_cache(self):
        a = Factory("simple_mercator")
        b = Factory("simple_mercator")

        assert a.projection_limits_window() == b.projection_limits_window()
        with patch.object(b.projector, "limits_window", wraps=b.projector.limits_window) as spy:
            b.projection_limits_window()
        assert spy.call_count == 0


class TestCRSProjection:
    """Projection to an explicit projected CRS (UTM zone 16N)."""

    def test_projected_point(self, utm, coords):
        projected = utm.project(utm.point(*coords.CHICAGO))

        assert projected.factory is utm.projection_factory
        assert utm.projection_factory.srid == 32616
        assert 400000.0 < projected.x < 500000.0
        assert 4600000.0 < projected.y < 4700000.0

    def test_round_trip(self, utm, coords):
        p = utm.point(*coords.CHICAGO)
        back = utm.unproject(utm.project(p))

        assert back.factory is utm
        assert back.equals_exact(p, utm.projector.tolerance)

    def test_does_not_wrap(self, utm):
        assert utm.projection_wraps is False

    def test_limits_window_covers_zone(self, utm, coords):
        window = utm.projection_limits_window()
        projected = utm.project(utm.point(*coords.CHICAGO))

        assert window.width > 0
        assert window.height > 0
        assert window.contains_point(projected.x, projected.y)

    def test_missing_crs_leaves_factory_unprojected(self):
        factory = Factory("projected")

        assert not factory.has_projection
        assert factory.project(factory.point(1.0, 2.0)) is None

    def test_invalid_crs_leaves_factory_unprojected(self):
        factory = projected_factory("EPSG:999999")
        assert not factory.has_projection

    def test_geographic_crs_is_not_a_projection(self):
        factory = projected_factory("EPSG:4326")
        assert not factory.has_projection

    def test_projector_class(self, utm, mercator):
        assert isinstance(utm.projector, CRSProjector)
        assert isinstance(mercator.projector, SimpleMercatorProjector)
        assert utm.projector.crs.to_epsg() == 32616

    def test_factories_with_different_crs_not_equivalent(self, utm):
        other = projected_factory("EPSG:32617")
        assert not utm.equivalent(other)
        assert utm.equivalent(projected_factory(TestCoordinates.UTM_16N))


class TestProjectionErrors:
    """Failures while rebuilding projected geometry."""

    def test_ring_collapsed_by_latitude_clamp(self, mercator):
        ring = make_ring(mercator, [(0, 86), (1, 86), (0, 88)])
        assert ring is not None

        with pytest.raises(ProjectionError, match="distinct points") as exc_info:
            mercator.project(ring)
        assert exc_info.value.factory is mercator.projection_factory

        with pytest.raises(ProjectionError):
            mercator.project(mercator.polygon(ring))

    def test_polar_line_string_still_projects(self, mercator):
        ls = mercator.line_string([mercator.point(0, 86), mercator.point(0, 88), mercator.point(1, 80)])
        projected = mercator.project(ls)
        window = mercator.projection_limits_window()

        assert projected.num_points == 3
        assert projected.point_n(0).y == pytest.approx(window.y_max, rel=1e-9)
        assert projected.point_n(1).y == pytest.approx(window.y_max, rel=1e-9)

    def test_rejected_rebuild_raises_projection_error(self, mercator):
        ring = make_ring(mercator, [(0, 0), (1, 0), (1, 1)])
        poly = mercator.polygon(ring)

        with patch.object(mercator.projection_factory, "construct") as construct:
            construct.return_value.__bool__.return_value = False
            construct.return_value.message = "rejected"
            with pytest.raises(ProjectionError):
                mercator.project(poly)
