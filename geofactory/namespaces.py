"""
Namespace registry

A namespace is the configuration tag a Factory is created with. It fixes the
constructor table for every geometry variant and the projector class (if
any) once, at factory creation; unknown tags are rejected immediately.
"""
import logging
import threading
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Callable, Dict, List, Mapping, Optional

from .exceptions import ConfigurationError, UnknownNamespaceError
from .models.geometry import (
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
)
from .projection import CRSProjector, SimpleMercatorProjector

logger = logging.getLogger(__name__)

STANDARD_CONSTRUCTORS: Mapping[GeometryVariant, Callable] = MappingProxyType({
    GeometryVariant.POINT: Point,
    GeometryVariant.LINE_STRING: LineString,
    GeometryVariant.LINE: Line,
    GeometryVariant.LINEAR_RING: LinearRing,
    GeometryVariant.POLYGON: Polygon,
    GeometryVariant.COLLECTION: GeometryCollection,
    GeometryVariant.MULTI_POINT: MultiPoint,
    GeometryVariant.MULTI_LINE_STRING: MultiLineString,
    GeometryVariant.MULTI_POLYGON: MultiPolygon,
})


@dataclass(frozen=True)
class Namespace:
    """Constructor table and projector selection for one configuration tag"""
    name: str
    constructors: Mapping[GeometryVariant, Callable] = field(default_factory=lambda: STANDARD_CONSTRUCTORS)
    geographic: bool = True
    default_srid: int = 4326
    projector_class: Optional[type] = None
    description: str = ""

    def constructor_for(self, variant: GeometryVariant) -> Optional[Callable]:
        return self.constructors.get(variant)


_registry: Dict[str, Namespace] = {}
_registry_lock = threading.Lock()


def register_namespace(namespace: Namespace, replace: bool = False) -> Namespace:
    """Add a namespace to the registry

    Raises:
        ConfigurationError: If the name is taken and replace is False
    """
    with _registry_lock:
        if namespace.name in _registry and not replace:
            raise ConfigurationError("namespace", f"namespace '{namespace.name}' is already registered")
        _registry[namespace.name] = namespace
    logger.debug(f"Registered namespace '{namespace.name}'")
    return namespace


def unregister_namespace(name: str) -> None:
    with _registry_lock:
        _registry.pop(name, None)


def get_namespace(name: str) -> Namespace:
    """Look up a registered namespace

    Raises:
        UnknownNamespaceError: If no namespace is registered under name
    """
    with _registry_lock:
        namespace = _registry.get(name)
        if namespace is None:
            raise UnknownNamespaceError(name, list(_registry))
        return namespace


def available_namespaces() -> List[str]:
    with _registry_lock:
        return sorted(_registry)


SPHERICAL = register_namespace(Namespace(
    name="spherical",
    description="Geographic longitude/latitude without a projection",
))
SIMPLE_MERCATOR = register_namespace(Namespace(
    name="simple_mercator",
    projector_class=SimpleMercatorProjector,
    description="Geographic longitude/latitude with a web Mercator (EPSG:3857) projection",
))
PROJECTED = register_namespace(Namespace(
    name="projected",
    projector_class=CRSProjector,
    description="Geographic longitude/latitude projected to the CRS given by 'projection_crs'",
))
CARTESIAN = register_namespace(Namespace(
    name="cartesian",
    geographic=False,
    default_srid=0,
    description="Planar coordinates; the target space of every projection",
))
