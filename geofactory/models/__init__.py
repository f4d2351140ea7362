"""Models package for geofactory."""

from .geometry import (
    Geometry,
    GeometryCollection,
    GeometryVariant,
    Line,
    LinearRing,
    LineString,
    MultiLineString,
    MultiPoint,
    MultiPolygon,
    Point,
    Polygon,
    wrap_shape,
)
from .options import FactoryOptions
from .window import ProjectedWindow

__all__ = [
    'Geometry', 'GeometryVariant', 'wrap_shape',
    'Point', 'LineString', 'Line', 'LinearRing', 'Polygon',
    'GeometryCollection', 'MultiPoint', 'MultiLineString', 'MultiPolygon',
    'FactoryOptions', 'ProjectedWindow',
]
