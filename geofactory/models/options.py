"""Factory options record"""
from typing import Any, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..exceptions import ConfigurationError


class FactoryOptions(BaseModel):
    """Configuration snapshot fixed at factory creation, compared by value

    Unrecognized keys are kept as extra fields so collaborator-defined
    options travel with the factory and take part in equivalence.
    """
    model_config = ConfigDict(frozen=True, extra="allow")

    srid: Optional[int] = Field(default=None, ge=0, description="Spatial reference id override")
    projection_crs: Optional[str] = Field(
        default=None,
        description="Target CRS for the 'projected' namespace (e.g. 'EPSG:32616')"
    )
    lenient_assertions: bool = Field(
        default=False,
        description="Skip ring simplicity and polygon validity checks"
    )

    @classmethod
    def coerce(cls, value: Union["FactoryOptions", Mapping[str, Any], None]) -> "FactoryOptions":
        """Build an options record from a mapping (or pass one through)"""
        if value is None:
            return cls()
        if isinstance(value, cls):
            return value
        try:
            data = dict(value)
        except (TypeError, ValueError) as e:
            raise ConfigurationError("options", f"expected a mapping, got {type(value).__name__}") from e
        try:
            return cls(**data)
        except ValidationError as e:
            raise ConfigurationError("options", str(e)) from e
