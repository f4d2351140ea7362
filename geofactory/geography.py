"""
Convenience constructors for the built-in namespaces.

    >>> from geofactory.geography import simple_mercator_factory
    >>> factory = simple_mercator_factory()
    >>> projected = factory.project(factory.point(-87.65, 41.85))
"""
from typing import Optional

from .config import Settings, get_settings
from .factory import Factory


def spherical_factory(**options) -> Factory:
    """Geographic factory without projection support"""
    return Factory("spherical", options)


def simple_mercator_factory(**options) -> Factory:
    """Geographic factory projecting to web Mercator (EPSG:3857)"""
    return Factory("simple_mercator", options)


def projected_factory(projection_crs: str, **options) -> Factory:
    """Geographic factory projecting to an arbitrary projected CRS

    If projection_crs cannot be used (unknown, or not a projected CRS) the
    factory is still returned, without projection support.
    """
    return Factory("projected", dict(options, projection_crs=projection_crs))


def cartesian_factory(**options) -> Factory:
    """Planar factory without projection support"""
    return Factory("cartesian", options)


def default_factory(settings: Optional[Settings] = None) -> Factory:
    """Factory described by GEOFACTORY_* settings"""
    if settings is None:
        settings = get_settings()
    options = {"lenient_assertions": settings.LENIENT_ASSERTIONS}
    if settings.DEFAULT_PROJECTION_CRS:
        options["projection_crs"] = settings.DEFAULT_PROJECTION_CRS
    return Factory(settings.DEFAULT_NAMESPACE, options)
