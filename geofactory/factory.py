"""
Geometry factory

The Factory is the single authority for one coordinate-space configuration:
every geometry value is built by, and forever belongs to, exactly one
factory instance. It also mediates between its geographic space and the
planar space of its (optional) projector.
"""
import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional, Sequence, Union

from . import serialization
from .exceptions import GeometryConstructionError, InvalidGeometry, ProjectorConfigurationError
from .models.geometry import Geometry, GeometryVariant
from .models.options import FactoryOptions
from .models.window import ProjectedWindow
from .namespaces import get_namespace

logger = logging.getLogger(__name__)


class FailureReason(Enum):
    UNSUPPORTED_VARIANT = "unsupported_variant"
    INVALID_ARGUMENTS = "invalid_arguments"


@dataclass(frozen=True)
class ConstructionResult:
    """Outcome of a construction attempt: a value, or why there is none"""
    value: Optional[Geometry] = None
    reason: Optional[FailureReason] = None
    message: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.reason is None

    def __bool__(self) -> bool:
        return self.ok

    def unwrap(self) -> Geometry:
        """Return the value or raise GeometryConstructionError"""
        if not self.ok:
            raise GeometryConstructionError("geometry", f"{self.reason.value}: {self.message}")
        return self.value


class Factory:
    """Construction and projection authority for one coordinate space

    Two factories are *equivalent* (see ``equivalent``) when they share a
    namespace and equal options; ``==`` stays identity, which is what the
    project/unproject ownership checks rely on.
    """

    def __init__(self, namespace: str, options: Union[FactoryOptions, Mapping[str, Any], None] = None):
        self._namespace = get_namespace(namespace)
        self._options = FactoryOptions.coerce(options)
        self._constructors = dict(self._namespace.constructors)
        self._limits_lock = threading.Lock()
        self._projection_limits_window: Optional[ProjectedWindow] = None
        self._projector = self._create_projector()
        logger.debug(f"Created {self!r} (projection={'yes' if self._projector else 'no'})")

    def _create_projector(self):
        projector_class = self._namespace.projector_class
        if projector_class is None:
            return None
        try:
            return projector_class(self, self._options)
        except ProjectorConfigurationError as e:
            logger.warning(
                f"Projection unavailable for namespace '{self._namespace.name}': {e.message}"
            )
            return None

    def __repr__(self) -> str:
        return f"Factory(namespace={self._namespace.name!r}, srid={self.srid})"

    @property
    def namespace(self) -> str:
        return self._namespace.name

    @property
    def options(self) -> FactoryOptions:
        return self._options

    @property
    def srid(self) -> int:
        if self._options.srid is not None:
            return self._options.srid
        return self._namespace.default_srid

    @property
    def is_geographic(self) -> bool:
        return self._namespace.geographic

    @property
    def lenient_assertions(self) -> bool:
        return self._options.lenient_assertions

    # Equivalence

    def equivalent(self, other: Any) -> bool:
        """True if other denotes the same coordinate-space configuration"""
        return (
            type(other) is type(self)
            and self._namespace.name == other._namespace.name
            and self._options == other._options
        )

    # Projection

    @property
    def has_projection(self) -> bool:
        return self._projector is not None

    @property
    def projection_factory(self) -> Optional["Factory"]:
        return self._projector.projection_factory if self._projector else None

    @property
    def projector(self):
        return self._projector

    def project(self, geometry: Geometry) -> Optional[Geometry]:
        """Project a geometry of this factory into the projected space

        Returns:
            A geometry owned by projection_factory, or None if this factory
            has no projection

        Raises:
            InvalidGeometry: If the geometry is not owned by this factory
        """
        if getattr(geometry, "factory", None) is not self:
            raise InvalidGeometry(
                "You can project only geometries owned by this factory.",
                geometry=geometry, factory=self,
            )
        if self._projector is None:
            return None
        return self._projector.project(geometry)

    def unproject(self, geometry: Geometry) -> Geometry:
        """Reverse-project a geometry from the projected space into this factory

        Raises:
            InvalidGeometry: If this factory has no projection or the geometry
                is not owned by its projection factory
        """
        if self._projector is None or getattr(geometry, "factory", None) is not self._projector.projection_factory:
            raise InvalidGeometry(
                "You can unproject only geometries that are in the projected coordinate space.",
                geometry=geometry, factory=self,
            )
        return self._projector.unproject(geometry)

    @property
    def projection_wraps(self) -> Optional[bool]:
        """Whether the projected x axis wraps; None without a projection"""
        return self._projector.wraps() if self._projector else None

    def projection_limits_window(self) -> Optional[ProjectedWindow]:
        """Domain of the projected space, computed once per factory; None without a projection"""
        if self._projector is None:
            return None
        if self._projection_limits_window is None:
            with self._limits_lock:
                if self._projection_limits_window is None:
                    logger.debug(f"Computing projection limits for {self!r}")
                    self._projection_limits_window = self._projector.limits_window()
        return self._projection_limits_window

    # Serialization

    def parse_wkt(self, text: str) -> Geometry:
        return serialization.parse_wkt(text, self)

    def parse_wkb(self, data: Union[bytes, str]) -> Geometry:
        return serialization.parse_wkb(data, self)

    # Construction

    def supports(self, variant: Union[GeometryVariant, str]) -> bool:
        return GeometryVariant(variant) in self._constructors

    def construct(self, variant: Union[GeometryVariant, str], *args, **kwargs) -> ConstructionResult:
        """Build a geometry of the given variant, reporting failure explicitly

        Only GeometryConstructionError counts as an expected failure; any
        other exception raised by a variant implementation propagates.
        """
        variant = GeometryVariant(variant)
        constructor = self._constructors.get(variant)
        if constructor is None:
            message = f"namespace '{self.namespace}' does not support {variant.value}"
            logger.debug(message)
            return ConstructionResult(reason=FailureReason.UNSUPPORTED_VARIANT, message=message)
        try:
            value = constructor(self, *args, **kwargs)
        except GeometryConstructionError as e:
            logger.debug(f"Construction failed in {self!r}: {e.message}")
            return ConstructionResult(reason=FailureReason.INVALID_ARGUMENTS, message=e.message)
        return ConstructionResult(value=value)

    def point(self, x: float, y: float):
        return self.construct(GeometryVariant.POINT, x, y).value

    def line_string(self, points: Sequence[Geometry]):
        return self.construct(GeometryVariant.LINE_STRING, points).value

    def line(self, start: Geometry, end: Geometry):
        return self.construct(GeometryVariant.LINE, start, end).value

    def linear_ring(self, points: Sequence[Geometry]):
        return self.construct(GeometryVariant.LINEAR_RING, points).value

    def polygon(self, outer_ring: Geometry, inner_rings: Optional[Sequence[Geometry]] = None):
        return self.construct(GeometryVariant.POLYGON, outer_ring, inner_rings).value

    def collection(self, elems: Sequence[Geometry]):
        return self.construct(GeometryVariant.COLLECTION, elems).value

    def multi_point(self, elems: Sequence[Geometry]):
        return self.construct(GeometryVariant.MULTI_POINT, elems).value

    def multi_line_string(self, elems: Sequence[Geometry]):
        return self.construct(GeometryVariant.MULTI_LINE_STRING, elems).value

    def multi_polygon(self, elems: Sequence[Geometry]):
        return self.construct(GeometryVariant.MULTI_POLYGON, elems).value


def equivalent(a: Any, b: Any) -> bool:
    """Module-level form of Factory.equivalent"""
    return isinstance(a, Factory) and a.equivalent(b)
