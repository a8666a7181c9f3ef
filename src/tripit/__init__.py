"""TripIt - Python client for the TripIt travel API

OAuth 1.0a or Basic authenticated access to trips, travel objects and
profiles, with responses decoded from XML or JSON.
"""

__version__ = "1.0.0"
__description__ = "Client library for the TripIt travel API"

from .api import (
    TripIt,
    HTTPClient,
    OAuthConsumerCredential,
    OAuthToken,
    RequestorId,
    WebAuthCredential,
    TokenGranted,
    TokenRejected
)
from .core import (
    ClientConfig,
    ConfigManager,
    ConfigurationError,
    EndpointError,
    ResponseParseError,
    TransportError,
    TripItError
)

__all__ = [
    "TripIt",
    "HTTPClient",
    "OAuthConsumerCredential",
    "OAuthToken",
    "RequestorId",
    "WebAuthCredential",
    "TokenGranted",
    "TokenRejected",
    "ClientConfig",
    "ConfigManager",
    "ConfigurationError",
    "EndpointError",
    "ResponseParseError",
    "TransportError",
    "TripItError"
]
