"""Shared services for geofactory."""

from .crs_service import CRSTransformationService, crs_service

__all__ = ['CRSTransformationService', 'crs_service']
