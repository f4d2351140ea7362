"""
Projection package for geofactory.

Provides the abstract Projector contract and the concrete projectors the
built-in namespaces attach to their factories.
"""

from .base import Projector, PROJECTION_NAMESPACE
from .crs_projector import CRSProjector
from .simple_mercator import SimpleMercatorProjector

__all__ = [
    'Projector',
    'PROJECTION_NAMESPACE',
    'CRSProjector',
    'SimpleMercatorProjector',
]
