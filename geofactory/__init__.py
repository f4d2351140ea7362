"""
geofactory

Geometry construction and coordinate-space mediation: factories build every
geometry value and move it between geographic and projected spaces.
"""

__version__ = "0.1.0"

from .exceptions import (
    ConfigurationError,
    GeometryConstructionError,
    GeometryError,
    InvalidGeometry,
    ParseError,
    ProjectionError,
    ProjectorConfigurationError,
    UnknownNamespaceError,
)
from .factory import ConstructionResult, Factory, FailureReason, equivalent
from .geography import (
    cartesian_factory,
    default_factory,
    projected_factory,
    simple_mercator_factory,
    spherical_factory,
)
from .models import FactoryOptions, GeometryVariant, ProjectedWindow
from .namespaces import Namespace, available_namespaces, get_namespace, register_namespace

__all__ = [
    'Factory', 'ConstructionResult', 'FailureReason', 'equivalent',
    'FactoryOptions', 'GeometryVariant', 'ProjectedWindow',
    'Namespace', 'register_namespace', 'get_namespace', 'available_namespaces',
    'spherical_factory', 'simple_mercator_factory', 'projected_factory',
    'cartesian_factory', 'default_factory',
    'GeometryError', 'InvalidGeometry', 'GeometryConstructionError',
    'ProjectionError', 'ParseError', 'ConfigurationError',
    'UnknownNamespaceError', 'ProjectorConfigurationError',
]
