"""Projection domain window"""
from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ProjectedWindow(BaseModel):
    """Rectangular bounds of a projection's valid domain (projected units)"""
    model_config = ConfigDict(frozen=True)

    x_min: float = Field(..., description="Minimum easting")
    y_min: float = Field(..., description="Minimum northing")
    x_max: float = Field(..., description="Maximum easting")
    y_max: float = Field(..., description="Maximum northing")

    @field_validator('x_max')
    @classmethod
    def validate_x_order(cls, v, info):
        if 'x_min' in info.data and v < info.data['x_min']:
            raise ValueError('x_max must be >= x_min')
        return v

    @field_validator('y_max')
    @classmethod
    def validate_y_order(cls, v, info):
        if 'y_min' in info.data and v < info.data['y_min']:
            raise ValueError('y_max must be >= y_min')
        return v

    @property
    def width(self) -> float:
        return self.x_max - self.x_min

    @property
    def height(self) -> float:
        return self.y_max - self.y_min

    @property
    def center_xy(self) -> Tuple[float, float]:
        return ((self.x_min + self.x_max) / 2, (self.y_min + self.y_max) / 2)

    @property
    def bounds(self) -> Tuple[float, float, float, float]:
        """(x_min, y_min, x_max, y_max), the order shapely uses"""
        return (self.x_min, self.y_min, self.x_max, self.y_max)

    def contains_point(self, x: float, y: float) -> bool:
        """Inclusive containment test"""
        return self.x_min <= x <= self.x_max and self.y_min <= y <= self.y_max
