"""
Projector for an arbitrary projected CRS (UTM zones, national grids, ...).

The target CRS comes from the factory's ``projection_crs`` option and is
resolved through pyproj. Such projections are local: their x axis does not
wrap, and their valid domain is the CRS's published area of use.
"""

import logging
from typing import Sequence

from pyproj.exceptions import CRSError

from ..exceptions import ProjectionError, ProjectorConfigurationError
from ..models.window import ProjectedWindow
from ..services.crs_service import crs_service
from .base import Projector

logger = logging.getLogger(__name__)


class CRSProjector(Projector):
    """WGS84 ↔ projected CRS projector backed by pyproj"""

    GEOGRAPHIC_CRS = "EPSG:4326"

    tolerance = 1e-8

    def __init__(self, factory, options):
        if not options.projection_crs:
            raise ProjectorConfigurationError("projection_crs", "option is required for a CRS projection")
        try:
            self._crs = crs_service.get_crs(options.projection_crs)
        except CRSError as e:
            raise ProjectorConfigurationError("projection_crs", f"invalid CRS {options.projection_crs!r}: {e}") from e
        if not self._crs.is_projected:
            raise ProjectorConfigurationError(
                "projection_crs", f"{options.projection_crs!r} is not a projected CRS"
            )
        self._forward = crs_service.get_transformer(self.GEOGRAPHIC_CRS, self._crs)
        self._inverse = crs_service.get_transformer(self._crs, self.GEOGRAPHIC_CRS)
        super().__init__(factory, options)

    @property
    def crs(self):
        return self._crs

    def projection_srid(self) -> int:
        return self._crs.to_epsg() or 0

    def project_coordinates(self, xs: Sequence[float], ys: Sequence[float]):
        return self._forward.transform(list(xs), list(ys))

    def unproject_coordinates(self, xs: Sequence[float], ys: Sequence[float]):
        return self._inverse.transform(list(xs), list(ys))

    def wraps(self) -> bool:
        return False

    def limits_window(self) -> ProjectedWindow:
        area = self._crs.area_of_use
        if area is None:
            raise ProjectionError(f"CRS {self._crs.name!r} does not define an area of use", factory=self._factory)
        x_min, y_min, x_max, y_max = self._forward.transform_bounds(
            area.west, area.south, area.east, area.north, densify_pts=21
        )
        logger.debug(f"Limits for {self._crs.name}: ({x_min:.1f}, {y_min:.1f}) - ({x_max:.1f}, {y_max:.1f})")
        return ProjectedWindow(x_min=x_min, y_min=y_min, x_max=x_max, y_max=y_max)
