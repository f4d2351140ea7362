"""Coordinate Reference System lookup and transformer caching service"""
from pyproj import CRS, Transformer
from pyproj.exceptions import CRSError
import logging
import threading
from typing import Dict, Tuple, Union

logger = logging.getLogger(__name__)

CRSInput = Union[str, int, CRS]


class CRSTransformationService:
    """Service for CRS lookups and coordinate transformers with caching

    pyproj objects are comparatively expensive to build, and every projector
    of a given configuration needs the same ones, so they are created once
    per (source, target) pair and shared.

    Key Features:
    - Transformer caching keyed on normalized CRS strings
    - Specific CRSError handling
    - Thread-safe cache population
    """

    def __init__(self):
        self._transformer_cache: Dict[Tuple[str, str], Transformer] = {}
        self._crs_cache: Dict[str, CRS] = {}
        self._lock = threading.Lock()
        logger.debug("CRSTransformationService initialized")

    @staticmethod
    def _key(crs: CRSInput) -> str:
        if isinstance(crs, CRS):
            return crs.to_string()
        if isinstance(crs, int):
            return f"EPSG:{crs}"
        return str(crs).strip()

    def get_crs(self, crs: CRSInput) -> CRS:
        """Get cached CRS object for any input pyproj accepts

        Args:
            crs: EPSG code, authority string ("EPSG:3857"), proj string or CRS

        Returns:
            Cached CRS instance

        Raises:
            CRSError: If the input does not describe a CRS
        """
        key = self._key(crs)
        with self._lock:
            if key not in self._crs_cache:
                try:
                    self._crs_cache[key] = CRS.from_user_input(crs)
                    logger.debug(f"Created CRS for {key}")
                except CRSError as e:
                    logger.error(f"Failed to create CRS for {key}: {e}")
                    raise
            return self._crs_cache[key]

    def get_transformer(self, source_crs: CRSInput, target_crs: CRSInput) -> Transformer:
        """Get cached transformer for source CRS → target CRS

        Args:
            source_crs: Source CRS (e.g., "EPSG:4326")
            target_crs: Target CRS (e.g., "EPSG:3857")

        Returns:
            Cached Transformer instance using (x, y) / (lon, lat) axis order

        Raises:
            CRSError: If either CRS is invalid
        """
        key = (self._key(source_crs), self._key(target_crs))
        with self._lock:
            if key not in self._transformer_cache:
                try:
                    self._transformer_cache[key] = Transformer.from_crs(
                        source_crs, target_crs, always_xy=True
                    )
                    logger.debug(f"Created transformer for {key[0]} → {key[1]}")
                except CRSError as e:
                    logger.error(f"Failed to create transformer for {key[0]} → {key[1]}: {e}")
                    raise
            return self._transformer_cache[key]

    def get_cache_stats(self) -> Dict[str, object]:
        """Get cache statistics for monitoring"""
        with self._lock:
            return {
                "cached_transformers": len(self._transformer_cache),
                "cached_crs": len(self._crs_cache),
                "transformer_pairs": [f"{s} → {t}" for s, t in self._transformer_cache],
            }

    def clear(self) -> None:
        with self._lock:
            self._transformer_cache.clear()
            self._crs_cache.clear()


# Shared instance used by the projectors
crs_service = CRSTransformationService()
