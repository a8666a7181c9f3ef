"""
TripIt API Client Package

OAuth 1.0a and Basic credentials, request building, transport, response
decoding and the entity endpoints of the TripIt REST API.
"""

from .tripit import TripIt
from .client import HTTPClient, TransportResponse
from .authentication import (
    Credential,
    OAuthConsumerCredential,
    OAuthToken,
    RequestorId,
    WebAuthCredential,
    create_credential
)
from .request_builder import Command, RequestBuilder, parse_command
from .response_handler import ResponseHandler, TokenGranted, TokenRejected, TokenResponse
from .endpoints.base_endpoint import EntityEndpoint

__all__ = [
    'TripIt',
    'HTTPClient',
    'TransportResponse',
    'Credential',
    'OAuthConsumerCredential',
    'OAuthToken',
    'RequestorId',
    'WebAuthCredential',
    'create_credential',
    'Command',
    'RequestBuilder',
    'parse_command',
    'ResponseHandler',
    'TokenGranted',
    'TokenRejected',
    'TokenResponse',
    'EntityEndpoint'
]
