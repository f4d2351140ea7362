"""
Simple (spherical / web) Mercator projector.

Projects WGS84 longitude/latitude onto EPSG:3857. The projected space is
square: latitudes are clamped to the parallel where northing equals the
half-circumference, and the x axis wraps at the antimeridian.
"""

import logging
import math
from typing import Sequence

from ..models.window import ProjectedWindow
from ..services.crs_service import crs_service
from .base import Projector

logger = logging.getLogger(__name__)


class SimpleMercatorProjector(Projector):
    """
    EPSG:4326 ↔ EPSG:3857 projector.

    Attributes:
        GEOGRAPHIC_CRS: Source CRS of the owning factory
        PROJECTED_CRS: Target CRS of the projection factory
        MAX_LATITUDE: Latitude (degrees) at which the projection is square
    """

    GEOGRAPHIC_CRS = "EPSG:4326"
    PROJECTED_CRS = "EPSG:3857"
    PROJECTED_SRID = 3857

    EQUATORIAL_RADIUS = 6378137.0  # meters
    MAX_LATITUDE = math.degrees(2 * math.atan(math.exp(math.pi)) - math.pi / 2)  # ~85.0511

    tolerance = 1e-9

    def __init__(self, factory, options):
        self._forward = crs_service.get_transformer(self.GEOGRAPHIC_CRS, self.PROJECTED_CRS)
        self._inverse = crs_service.get_transformer(self.PROJECTED_CRS, self.GEOGRAPHIC_CRS)
        super().__init__(factory, options)

    def projection_srid(self) -> int:
        return self.PROJECTED_SRID

    def project_coordinates(self, xs: Sequence[float], ys: Sequence[float]):
        # 3857 is undefined at the poles
        limit = self.MAX_LATITUDE
        clamped = [min(max(y, -limit), limit) for y in ys]
        return self._forward.transform(list(xs), clamped)

    def unproject_coordinates(self, xs: Sequence[float], ys: Sequence[float]):
        return self._inverse.transform(list(xs), list(ys))

    def wraps(self) -> bool:
        return True

    def limits_window(self) -> ProjectedWindow:
        x_max, y_max = self._forward.transform(180.0, self.MAX_LATITUDE)
        logger.debug(f"Mercator limits computed: ±{x_max:.3f}, ±{y_max:.3f}")
        return ProjectedWindow(x_min=-x_max, y_min=-y_max, x_max=x_max, y_max=y_max)
