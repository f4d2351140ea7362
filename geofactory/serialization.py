"""
WKT / WKB entry points

shapely does the grammar work; the resulting shape is then rebuilt through
the supplied factory's variant constructors so that every value produced
(children included) is owned by, and validated against, that factory.
"""
import binascii
import logging
from typing import Union

import shapely.wkb
import shapely.wkt
from shapely import geometry as sg
from shapely.errors import ShapelyError

from .exceptions import ParseError
from .models.geometry import Geometry, GeometryVariant

logger = logging.getLogger(__name__)


def parse_wkt(text: str, factory) -> Geometry:
    """Parse well-known text into a geometry owned by factory

    Raises:
        ParseError: If the text is malformed or describes a geometry the
            factory cannot construct
    """
    if not isinstance(text, str):
        raise ParseError("WKT", f"expected str, got {type(text).__name__}", factory=factory)
    try:
        shape = shapely.wkt.loads(text)
    except (ShapelyError, ValueError) as e:
        raise ParseError("WKT", str(e), factory=factory) from e
    return _rebuild(shape, factory, "WKT")


def parse_wkb(data: Union[bytes, bytearray, str], factory) -> Geometry:
    """Parse well-known binary (raw bytes or a hex string) into a geometry owned by factory

    Raises:
        ParseError: If the input is malformed or describes a geometry the
            factory cannot construct
    """
    if isinstance(data, str):
        kwargs = {"hex": True}
    elif isinstance(data, (bytes, bytearray, memoryview)):
        data, kwargs = bytes(data), {}
    else:
        raise ParseError("WKB", f"expected bytes or hex str, got {type(data).__name__}", factory=factory)
    try:
        shape = shapely.wkb.loads(data, **kwargs)
    except (ShapelyError, ValueError, binascii.Error) as e:
        raise ParseError("WKB", str(e), factory=factory) from e
    return _rebuild(shape, factory, "WKB")


def _rebuild(shape, factory, format_name: str) -> Geometry:
    if shape.has_z:
        raise ParseError(format_name, "Z coordinates are not supported", factory=factory)
    return _Builder(factory, format_name).build(shape)


class _Builder:
    """Recursively maps a shapely geometry onto factory constructors"""

    def __init__(self, factory, format_name: str):
        self.factory = factory
        self.format_name = format_name

    def _construct(self, variant: GeometryVariant, *args) -> Geometry:
        result = self.factory.construct(variant, *args)
        if not result:
            raise ParseError(self.format_name, result.message, factory=self.factory)
        return result.value

    def _points(self, coords):
        return [self._construct(GeometryVariant.POINT, x, y) for x, y in coords]

    def _ring(self, ring) -> Geometry:
        return self._construct(GeometryVariant.LINEAR_RING, self._points(ring.coords))

    def build(self, shape) -> Geometry:
        if isinstance(shape, sg.Point):
            if shape.is_empty:
                raise ParseError(self.format_name, "empty points are not supported", factory=self.factory)
            return self._construct(GeometryVariant.POINT, shape.x, shape.y)
        if isinstance(shape, sg.LinearRing):
            return self._ring(shape)
        if isinstance(shape, sg.LineString):
            return self._construct(GeometryVariant.LINE_STRING, self._points(shape.coords))
        if isinstance(shape, sg.Polygon):
            if shape.is_empty:
                return self._construct(GeometryVariant.POLYGON, self._construct(GeometryVariant.LINEAR_RING, []))
            outer = self._ring(shape.exterior)
            inner = [self._ring(r) for r in shape.interiors]
            return self._construct(GeometryVariant.POLYGON, outer, inner)
        if isinstance(shape, sg.MultiPoint):
            return self._construct(GeometryVariant.MULTI_POINT, [self.build(g) for g in shape.geoms])
        if isinstance(shape, sg.MultiLineString):
            return self._construct(GeometryVariant.MULTI_LINE_STRING, [self.build(g) for g in shape.geoms])
        if isinstance(shape, sg.MultiPolygon):
            return self._construct(GeometryVariant.MULTI_POLYGON, [self.build(g) for g in shape.geoms])
        if isinstance(shape, sg.GeometryCollection):
            return self._construct(GeometryVariant.COLLECTION, [self.build(g) for g in shape.geoms])
        raise ParseError(self.format_name, f"unsupported geometry type {shape.geom_type}", factory=self.factory)
