"""Error Taxonomy for the TripIt Client

Exception hierarchy shared by credentials, the request pipeline and
configuration loading.
"""

from enum import Enum
from typing import Optional


class ErrorSeverity(Enum):
    """Error severity levels."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class TripItError(Exception):
    """Base exception class for the TripIt client."""
    
    def __init__(self, message: str, severity: ErrorSeverity = ErrorSeverity.MEDIUM):
        self.message = message
        self.severity = severity
        super().__init__(self.message)


class ConfigurationError(TripItError):
    """Error raised when configuration or credential state is invalid."""
    pass


class TransportError(TripItError):
    """Error raised when the HTTP round trip itself fails."""
    
    def __init__(self, message: str, cause: Optional[Exception] = None):
        super().__init__(message, severity=ErrorSeverity.HIGH)
        self.cause = cause


class ResponseParseError(TripItError):
    """Error raised when a response body does not match its declared format."""
    
    def __init__(self, message: str, fmt: str):
        super().__init__(message)
        self.fmt = fmt


class EndpointError(TripItError):
    """Error raised for operations an entity does not support."""
    pass
