"""Core modules for the TripIt client.

Configuration, error taxonomy and logging shared by the API package.
"""

from .config_manager import APIConfig, AuthConfig, ClientConfig, ConfigManager, LoggingConfig
from .error_handler import (
    TripItError,
    ConfigurationError,
    TransportError,
    ResponseParseError,
    EndpointError,
    ErrorSeverity
)
from .logging_manager import LoggingManager

__all__ = [
    "APIConfig",
    "AuthConfig",
    "ClientConfig",
    "ConfigManager",
    "LoggingConfig",
    "TripItError",
    "ConfigurationError",
    "TransportError",
    "ResponseParseError",
    "EndpointError",
    "ErrorSeverity",
    "LoggingManager"
]
