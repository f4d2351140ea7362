"""
Log formatting for geofactory

Records may carry geometry context through ``extra=``; the JSON formatter
lifts ``namespace``, ``srid`` and ``variant`` to top-level keys and collects
everything else the caller attached under ``extra``.
"""
import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

CONTEXT_FIELDS = ("namespace", "srid", "variant")

# Attributes every LogRecord has, plus those Formatter.format() adds
_RECORD_ATTRS = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", (), None).__dict__
) | {"message", "asctime"}

_QUIET_LOGGERS = ("pyproj", "shapely")


class StructuredJSONFormatter(logging.Formatter):
    """One JSON object per record"""

    def __init__(self, service_name: str = "geofactory"):
        super().__init__()
        self.service_name = service_name

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc)
            .isoformat()
            .replace("+00:00", "Z"),
            "level": record.levelname,
            "service": self.service_name,
            "logger": record.name,
            "message": record.getMessage(),
        }

        extra = {}
        for key, value in record.__dict__.items():
            if key in CONTEXT_FIELDS:
                entry[key] = value
            elif key not in _RECORD_ATTRS and not key.startswith("_"):
                extra[key] = value
        if extra:
            entry["extra"] = extra

        if record.exc_info:
            exc_type, exc, _ = record.exc_info
            entry["exception"] = {
                "type": exc_type.__name__,
                "message": str(exc),
                "traceback": self.formatException(record.exc_info),
            }

        return json.dumps(entry, default=str, separators=(",", ":"))


class DevelopmentFormatter(logging.Formatter):
    """Human-readable single-line format"""

    def __init__(self):
        super().__init__(
            fmt="%(asctime)s | %(levelname)8s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )


def setup_logging(
    level: str = "INFO",
    use_json: Optional[bool] = None,
    service_name: str = "geofactory",
) -> None:
    """Install a single stdout handler on the root logger

    When use_json is None the format follows GEOFACTORY_LOG_FORMAT.
    """
    if use_json is None:
        use_json = os.environ.get("GEOFACTORY_LOG_FORMAT", "").lower() == "json"

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(StructuredJSONFormatter(service_name) if use_json else DevelopmentFormatter())

    root = logging.getLogger()
    for existing in root.handlers[:]:
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(level.upper())

    configure_geofactory_loggers(level)
    logging.getLogger(__name__).debug(
        "Logging configured", extra={"log_format": "json" if use_json else "development"}
    )


def setup_logging_from_settings(settings=None) -> None:
    """Setup logging from GEOFACTORY_LOG_LEVEL / GEOFACTORY_LOG_FORMAT"""
    if settings is None:
        from .config import get_settings
        settings = get_settings()
    setup_logging(level=settings.LOG_LEVEL, use_json=settings.LOG_FORMAT == "json")


def configure_geofactory_loggers(level: str) -> None:
    """Set the package logger level and quiet the geometry libraries"""
    logging.getLogger("geofactory").setLevel(level.upper())
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
