"""
Geometry variant implementations

Each variant wraps a shapely geometry and carries an immutable reference to
the factory that built it. Constructors take the owning factory as their
first argument and raise GeometryConstructionError when the arguments cannot
form the variant; the factory turns that into a non-result. Child accessors
(points, rings, members) hand out wrappers owned by the same factory.
"""
import math
from enum import Enum
from typing import Iterator, List, Optional, Sequence, Tuple

from shapely import geometry as sg
from shapely.errors import ShapelyError
from shapely.validation import explain_validity

from ..exceptions import GeometryConstructionError


class GeometryVariant(str, Enum):
    POINT = "point"
    LINE_STRING = "line_string"
    LINE = "line"
    LINEAR_RING = "linear_ring"
    POLYGON = "polygon"
    COLLECTION = "collection"
    MULTI_POINT = "multi_point"
    MULTI_LINE_STRING = "multi_line_string"
    MULTI_POLYGON = "multi_polygon"


def _shapely(variant: GeometryVariant, builder, *args, factory=None):
    """Call a shapely constructor, reporting its errors as construction failures"""
    try:
        return builder(*args)
    except (ShapelyError, ValueError, TypeError) as e:
        raise GeometryConstructionError(variant.value, str(e), factory=factory) from e


def _coordinate(value, axis: str, variant: GeometryVariant, factory) -> float:
    if isinstance(value, bool):
        raise GeometryConstructionError(variant.value, f"{axis} must be a number, got bool", factory=factory)
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        raise GeometryConstructionError(
            variant.value, f"{axis} must be a number, got {type(value).__name__}", factory=factory
        ) from None
    if not math.isfinite(number):
        raise GeometryConstructionError(variant.value, f"{axis} must be finite, got {number}", factory=factory)
    return number


def _as_list(items, variant: GeometryVariant, factory) -> list:
    if isinstance(items, (str, bytes)):
        raise GeometryConstructionError(variant.value, "expected a sequence of geometries", factory=factory)
    try:
        return list(items)
    except TypeError:
        raise GeometryConstructionError(
            variant.value, f"expected a sequence of geometries, got {type(items).__name__}", factory=factory
        ) from None


def _check_member(factory, item, expected: tuple, variant: GeometryVariant) -> None:
    if not isinstance(item, expected):
        names = "/".join(t.__name__ for t in expected)
        raise GeometryConstructionError(
            variant.value, f"expected {names}, got {type(item).__name__}", factory=factory
        )
    if item.factory is not factory and not factory.equivalent(item.factory):
        raise GeometryConstructionError(
            variant.value, "element belongs to a non-equivalent factory", factory=factory
        )


def _point_coordinates(factory, points, variant: GeometryVariant) -> List[Tuple[float, float]]:
    coords = []
    for point in _as_list(points, variant, factory):
        _check_member(factory, point, (Point,), variant)
        coords.append((point.x, point.y))
    return coords


class Geometry:
    """Base for all variants: a shapely shape plus its owning factory"""
    __slots__ = ("_factory", "_shape")

    variant: Optional[GeometryVariant] = None
    geometry_type = "Geometry"

    def __init__(self, factory, shape):
        self._factory = factory
        self._shape = shape

    @classmethod
    def _from_shape(cls, factory, shape):
        """Wrap an existing shapely geometry without re-validating it"""
        obj = cls.__new__(cls)
        Geometry.__init__(obj, factory, shape)
        return obj

    def _with_factory(self, factory):
        """Same value and variant, owned by factory"""
        if self._factory is factory:
            return self
        return type(self)._from_shape(factory, self._shape)

    @property
    def factory(self):
        return self._factory

    @property
    def shape(self):
        return self._shape

    @property
    def srid(self) -> int:
        return self._factory.srid

    @property
    def is_empty(self) -> bool:
        return self._shape.is_empty

    @property
    def bounds(self) -> Tuple[float, float, float, float]:
        return self._shape.bounds

    def as_text(self) -> str:
        return self._shape.wkt

    def as_binary(self, hex: bool = False):
        return self._shape.wkb_hex if hex else self._shape.wkb

    def equals_exact(self, other: "Geometry", tolerance: float = 0.0) -> bool:
        """Same variant and coordinates equal within tolerance (factory not compared)"""
        if not isinstance(other, Geometry) or self.variant is not other.variant:
            return False
        return self._shape.equals_exact(other._shape, tolerance)

    def __repr__(self) -> str:
        return f"<{self.geometry_type} {self.as_text()} srid={self.srid}>"


class Point(Geometry):
    __slots__ = ()
    variant = GeometryVariant.POINT
    geometry_type = "Point"

    def __init__(self, factory, x, y):
        x = _coordinate(x, "x", self.variant, factory)
        y = _coordinate(y, "y", self.variant, factory)
        if factory.is_geographic and not -90.0 <= y <= 90.0:
            raise GeometryConstructionError(
                self.variant.value, f"latitude {y} outside [-90, 90]", factory=factory
            )
        super().__init__(factory, sg.Point(x, y))

    @property
    def x(self) -> float:
        return self._shape.x

    @property
    def y(self) -> float:
        return self._shape.y

    @property
    def coordinates(self) -> Tuple[float, float]:
        return (self._shape.x, self._shape.y)


class LineString(Geometry):
    __slots__ = ()
    variant = GeometryVariant.LINE_STRING
    geometry_type = "LineString"

    def __init__(self, factory, points):
        coords = _point_coordinates(factory, points, self.variant)
        if len(coords) == 1:
            raise GeometryConstructionError(
                self.variant.value, "needs zero or at least 2 points", factory=factory
            )
        super().__init__(factory, self._line(coords, factory))

    def _line(self, coords, factory):
        if not coords:
            return sg.LineString()
        return _shapely(self.variant, sg.LineString, coords, factory=factory)

    @property
    def num_points(self) -> int:
        return len(self._shape.coords)

    def point_n(self, n: int) -> Point:
        return Point._from_shape(self._factory, sg.Point(self._shape.coords[n]))

    @property
    def points(self) -> List[Point]:
        return [Point._from_shape(self._factory, sg.Point(c)) for c in self._shape.coords]

    @property
    def start_point(self) -> Optional[Point]:
        return None if self.is_empty else self.point_n(0)

    @property
    def end_point(self) -> Optional[Point]:
        return None if self.is_empty else self.point_n(-1)

    @property
    def is_closed(self) -> bool:
        return not self.is_empty and self._shape.coords[0] == self._shape.coords[-1]

    @property
    def coordinates(self) -> List[Tuple[float, float]]:
        return [tuple(c) for c in self._shape.coords]


class Line(LineString):
    """A line string of exactly two points"""
    __slots__ = ()
    variant = GeometryVariant.LINE
    geometry_type = "Line"

    def __init__(self, factory, start, end):
        coords = _point_coordinates(factory, [start, end], self.variant)
        Geometry.__init__(self, factory, self._line(coords, factory))


class LinearRing(LineString):
    """Closed, simple line string; closed automatically when the last point is open"""
    __slots__ = ()
    variant = GeometryVariant.LINEAR_RING
    geometry_type = "LinearRing"

    def __init__(self, factory, points):
        coords = _point_coordinates(factory, points, self.variant)
        if not coords:
            Geometry.__init__(self, factory, sg.LinearRing())
            return
        if coords[0] != coords[-1]:
            coords.append(coords[0])
        if len(set(coords)) < 3:
            raise GeometryConstructionError(
                self.variant.value, "needs at least 3 distinct points", factory=factory
            )
        ring = _shapely(self.variant, sg.LinearRing, coords, factory=factory)
        if not factory.lenient_assertions and not ring.is_simple:
            raise GeometryConstructionError(self.variant.value, "ring is not simple", factory=factory)
        Geometry.__init__(self, factory, ring)


class Polygon(Geometry):
    __slots__ = ()
    variant = GeometryVariant.POLYGON
    geometry_type = "Polygon"

    def __init__(self, factory, outer_ring, inner_rings=None):
        _check_member(factory, outer_ring, (LinearRing,), self.variant)
        inner = _as_list(inner_rings or [], self.variant, factory)
        for ring in inner:
            _check_member(factory, ring, (LinearRing,), self.variant)
            if ring.is_empty:
                raise GeometryConstructionError(self.variant.value, "inner ring is empty", factory=factory)

        if outer_ring.is_empty:
            if inner:
                raise GeometryConstructionError(
                    self.variant.value, "empty outer ring cannot have inner rings", factory=factory
                )
            super().__init__(factory, sg.Polygon())
            return

        shape = _shapely(
            self.variant, sg.Polygon,
            list(outer_ring.shape.coords), [list(r.shape.coords) for r in inner],
            factory=factory
        )
        if not factory.lenient_assertions and not shape.is_valid:
            raise GeometryConstructionError(self.variant.value, explain_validity(shape), factory=factory)
        super().__init__(factory, shape)

    @property
    def exterior_ring(self) -> LinearRing:
        return LinearRing._from_shape(self._factory, self._shape.exterior)

    @property
    def num_interior_rings(self) -> int:
        return len(self._shape.interiors)

    def interior_ring_n(self, n: int) -> LinearRing:
        return LinearRing._from_shape(self._factory, self._shape.interiors[n])

    @property
    def interior_rings(self) -> List[LinearRing]:
        return [LinearRing._from_shape(self._factory, r) for r in self._shape.interiors]


class GeometryCollection(Geometry):
    """Ordered members; each keeps the variant it was built as (a Line stays a Line)"""
    __slots__ = ("_members",)
    variant = GeometryVariant.COLLECTION
    geometry_type = "GeometryCollection"
    member_types: tuple = (Geometry,)
    shapely_type = sg.GeometryCollection

    def __init__(self, factory, elements):
        members = _as_list(elements, self.variant, factory)
        for member in members:
            _check_member(factory, member, self.member_types, self.variant)
        if members:
            shape = _shapely(self.variant, self._assemble, members, factory=factory)
        else:
            shape = self.shapely_type()
        self._validate(factory, shape)
        super().__init__(factory, shape)
        self._members = tuple(m._with_factory(factory) for m in members)

    @classmethod
    def _from_shape(cls, factory, shape, members=None):
        obj = super()._from_shape(factory, shape)
        # None: members are re-derived from the shapely parts
        obj._members = members
        return obj

    def _with_factory(self, factory):
        if self._factory is factory:
            return self
        members = None
        if self._members is not None:
            members = tuple(m._with_factory(factory) for m in self._members)
        return type(self)._from_shape(factory, self._shape, members)

    def _assemble(self, members: Sequence[Geometry]):
        return self.shapely_type([m.shape for m in members])

    def _validate(self, factory, shape) -> None:
        pass

    @property
    def num_geometries(self) -> int:
        return len(self._shape.geoms)

    def geometry_n(self, n: int) -> Geometry:
        if self._members is None:
            return wrap_shape(self._factory, self._shape.geoms[n])
        return self._members[n]

    def __len__(self) -> int:
        return self.num_geometries

    def __iter__(self) -> Iterator[Geometry]:
        for n in range(self.num_geometries):
            yield self.geometry_n(n)


class MultiPoint(GeometryCollection):
    __slots__ = ()
    variant = GeometryVariant.MULTI_POINT
    geometry_type = "MultiPoint"
    member_types = (Point,)
    shapely_type = sg.MultiPoint


class MultiLineString(GeometryCollection):
    __slots__ = ()
    variant = GeometryVariant.MULTI_LINE_STRING
    geometry_type = "MultiLineString"
    member_types = (LineString,)
    shapely_type = sg.MultiLineString

    def _assemble(self, members):
        # rings are stored as plain line strings
        return sg.MultiLineString([list(m.shape.coords) for m in members])


class MultiPolygon(GeometryCollection):
    __slots__ = ()
    variant = GeometryVariant.MULTI_POLYGON
    geometry_type = "MultiPolygon"
    member_types = (Polygon,)
    shapely_type = sg.MultiPolygon

    def _validate(self, factory, shape) -> None:
        if not factory.lenient_assertions and not shape.is_valid:
            raise GeometryConstructionError(self.variant.value, explain_validity(shape), factory=factory)


# Order matters: LinearRing before LineString, multi types before the collection
_SHAPE_WRAPPERS = (
    (sg.Point, Point),
    (sg.LinearRing, LinearRing),
    (sg.LineString, LineString),
    (sg.Polygon, Polygon),
    (sg.MultiPoint, MultiPoint),
    (sg.MultiLineString, MultiLineString),
    (sg.MultiPolygon, MultiPolygon),
    (sg.GeometryCollection, GeometryCollection),
)


def wrap_shape(factory, shape) -> Geometry:
    """Wrap a shapely geometry in the matching variant owned by factory"""
    for shapely_cls, wrapper in _SHAPE_WRAPPERS:
        if isinstance(shape, shapely_cls):
            return wrapper._from_shape(factory, shape)
    raise TypeError(f"Unsupported shapely geometry type: {type(shape).__name__}")
