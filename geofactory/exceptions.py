"""
Exception hierarchy for geofactory

Structured errors carrying enough context (factory, variant, field) for
callers and log records to tell failure categories apart.
"""


class GeometryError(Exception):
    """Base exception for all geometry factory errors"""

    def __init__(self, message: str, factory=None):
        super().__init__(message)
        self.message = message
        self.factory = factory


class InvalidGeometry(GeometryError):
    """Raised when a geometry is handed to a factory that does not own it"""

    def __init__(self, message: str, geometry=None, factory=None):
        super().__init__(message, factory=factory)
        self.geometry = geometry


class GeometryConstructionError(GeometryError):
    """Raised by variant implementations when arguments cannot form the variant"""

    def __init__(self, variant: str, reason: str, factory=None):
        message = f"Cannot construct {variant}: {reason}"
        super().__init__(message, factory=factory)
        self.variant = variant
        self.reason = reason


class ProjectionError(GeometryError):
    """Raised when a projector cannot produce a result for a valid input"""
    pass


class ParseError(GeometryError):
    """Raised when WKT/WKB input cannot be turned into a geometry"""

    def __init__(self, format_name: str, reason: str, factory=None):
        message = f"{format_name} parse error: {reason}"
        super().__init__(message, factory=factory)
        self.format_name = format_name
        self.reason = reason


class ConfigurationError(GeometryError):
    """Raised when factory or settings configuration is invalid"""

    def __init__(self, config_field: str, reason: str):
        message = f"Configuration error in {config_field}: {reason}"
        super().__init__(message)
        self.config_field = config_field
        self.reason = reason


class UnknownNamespaceError(ConfigurationError):
    """Raised when a factory is requested for an unregistered namespace"""

    def __init__(self, namespace: str, available=None):
        available = sorted(available or [])
        reason = f"unknown namespace '{namespace}'"
        if available:
            reason += f" (available: {', '.join(available)})"
        super().__init__("namespace", reason)
        self.namespace = namespace
        self.available = available


class ProjectorConfigurationError(ConfigurationError):
    """Raised when a projector cannot be set up from the factory options"""

    def __init__(self, projector: str, reason: str):
        super().__init__(projector, reason)
        self.projector = projector
