from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Literal, Optional
import logging

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    # Factory defaults used by geography.default_factory()
    DEFAULT_NAMESPACE: str = Field(
        default="spherical",
        description="Namespace for the default factory: spherical, simple_mercator, projected, cartesian"
    )
    DEFAULT_PROJECTION_CRS: Optional[str] = Field(
        default=None,
        description="Target CRS for the default factory when DEFAULT_NAMESPACE is 'projected'"
    )
    LENIENT_ASSERTIONS: bool = Field(
        default=False,
        description="Skip ring simplicity and polygon validity checks in the default factory"
    )

    # Logging
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Root logging level"
    )
    LOG_FORMAT: Literal["development", "json"] = Field(
        default="development",
        description="Log output format: development (human readable) or json (structured)"
    )

    model_config = SettingsConfigDict(
        env_prefix="GEOFACTORY_",
        env_file=".env",
        env_file_encoding='utf-8',
        extra="ignore"
    )

    @field_validator('LENIENT_ASSERTIONS', mode='before')
    @classmethod
    def parse_boolean(cls, v):
        """Handle string boolean values from environment variables."""
        if isinstance(v, bool):
            return v
        if isinstance(v, str):
            return v.lower() in ('true', '1', 'yes', 'on', 't', 'y')
        return bool(v)

    @field_validator('LOG_LEVEL', mode='before')
    @classmethod
    def normalize_level(cls, v):
        return v.upper() if isinstance(v, str) else v


def validate_settings(settings: Settings) -> None:
    """Check settings that depend on the namespace registry"""
    from .exceptions import ConfigurationError
    from .namespaces import available_namespaces

    if settings.DEFAULT_NAMESPACE not in available_namespaces():
        raise ConfigurationError(
            "DEFAULT_NAMESPACE",
            f"unknown namespace '{settings.DEFAULT_NAMESPACE}' (available: {', '.join(available_namespaces())})"
        )
    if settings.DEFAULT_NAMESPACE == "projected" and not settings.DEFAULT_PROJECTION_CRS:
        raise ConfigurationError(
            "DEFAULT_PROJECTION_CRS",
            "required when DEFAULT_NAMESPACE is 'projected'"
        )


def get_settings() -> Settings:
    """Load settings from the environment and validate them."""
    from pydantic import ValidationError
    from .exceptions import ConfigurationError

    try:
        settings = Settings()
    except ValidationError as e:
        raise ConfigurationError("settings", str(e)) from e

    validate_settings(settings)
    logger.debug(f"Settings loaded: namespace={settings.DEFAULT_NAMESPACE}, log_level={settings.LOG_LEVEL}")
    return settings
