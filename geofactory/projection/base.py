"""
Projector contract

A projector belongs to exactly one geographic factory and owns the planar
factory its projected geometries live in. Concrete projectors only supply
coordinate math and domain metadata; rebuilding geometry structure (rings,
members, point order) is shared here and always goes through the target
factory's constructors so ownership stays correct.
"""
import logging
from abc import ABC, abstractmethod
from typing import Callable, List, Sequence, Tuple

from ..exceptions import ProjectionError
from ..models.geometry import Geometry, GeometryVariant
from ..models.options import FactoryOptions
from ..models.window import ProjectedWindow

logger = logging.getLogger(__name__)

CoordinateFn = Callable[[Sequence[float], Sequence[float]], Tuple[Sequence[float], Sequence[float]]]

PROJECTION_NAMESPACE = "cartesian"


class Projector(ABC):
    """
    Abstract interface for geographic ↔ projected coordinate mediation.

    Attributes:
        factory: The geographic factory this projector serves
        projection_factory: Planar factory owning projected geometries
        tolerance: Round-trip precision in degrees
    """

    tolerance: float = 1e-9

    def __init__(self, factory, options: FactoryOptions):
        self._factory = factory
        self._options = options
        self._projection_factory = type(factory)(
            PROJECTION_NAMESPACE,
            FactoryOptions(
                srid=self.projection_srid(),
                lenient_assertions=options.lenient_assertions,
            ),
        )

    @property
    def factory(self):
        return self._factory

    @property
    def projection_factory(self):
        return self._projection_factory

    @abstractmethod
    def projection_srid(self) -> int:
        """SRID of the projected coordinate space"""

    @abstractmethod
    def project_coordinates(self, xs: Sequence[float], ys: Sequence[float]):
        """Map longitude/latitude sequences to projected x/y sequences"""

    @abstractmethod
    def unproject_coordinates(self, xs: Sequence[float], ys: Sequence[float]):
        """Map projected x/y sequences back to longitude/latitude sequences"""

    @abstractmethod
    def wraps(self) -> bool:
        """True if the projected x axis wraps (e.g. at the antimeridian)"""

    @abstractmethod
    def limits_window(self) -> ProjectedWindow:
        """Compute the window of valid projected coordinates"""

    def project(self, geometry: Geometry) -> Geometry:
        return self._transform(geometry, self._projection_factory, self.project_coordinates)

    def unproject(self, geometry: Geometry) -> Geometry:
        return self._transform(geometry, self._factory, self.unproject_coordinates)

    def _transform_points(self, points, target, fn: CoordinateFn) -> List[Geometry]:
        if not points:
            return []
        xs, ys = fn([p.x for p in points], [p.y for p in points])
        return [self._build(target, GeometryVariant.POINT, x, y) for x, y in zip(xs, ys)]

    def _transform(self, geometry: Geometry, target, fn: CoordinateFn) -> Geometry:
        variant = geometry.variant
        if variant is GeometryVariant.POINT:
            return self._transform_points([geometry], target, fn)[0]
        if variant is GeometryVariant.LINE:
            return self._build(target, variant, *self._transform_points(geometry.points, target, fn))
        if variant in (GeometryVariant.LINE_STRING, GeometryVariant.LINEAR_RING):
            return self._build(target, variant, self._transform_points(geometry.points, target, fn))
        if variant is GeometryVariant.POLYGON:
            outer = self._transform(geometry.exterior_ring, target, fn)
            inner = [self._transform(ring, target, fn) for ring in geometry.interior_rings]
            return self._build(target, variant, outer, inner)
        # collections of every kind
        return self._build(target, variant, [self._transform(g, target, fn) for g in geometry])

    @staticmethod
    def _build(target, variant: GeometryVariant, *args) -> Geometry:
        result = target.construct(variant, *args)
        if not result:
            logger.debug(f"Rebuilding {variant.value} in {target!r} failed: {result.message}")
            raise ProjectionError(
                f"Transformed {variant.value} is not valid in {target.namespace}: {result.message}",
                factory=target,
            )
        return result.value
