"""
Pytest configuration and shared fixtures for TripIt client testing.

Provides credentials and a mocked transport for the client and
credential tests.
"""

from unittest.mock import Mock

import pytest

from tripit.api.authentication import OAuthConsumerCredential, WebAuthCredential
from tripit.api.client import HTTPClient, TransportResponse
from tripit.api.tripit import TripIt

from .fixtures.sample_data import SAMPLE_TRIP_XML


API_URL = "https://api.tripit.com"


# Credential Fixtures
@pytest.fixture
def consumer_credential():
    """OAuth credential with no token (consumer-only signing)"""
    return OAuthConsumerCredential("ck", "cs")


@pytest.fixture
def token_credential():
    """OAuth credential holding an access token pair"""
    return OAuthConsumerCredential.with_token("ck", "cs", "access-token", "access-secret")


@pytest.fixture
def requestor_credential():
    """OAuth credential in requestor id mode"""
    return OAuthConsumerCredential.with_requestor_id("ck", "cs", "user@example.com")


@pytest.fixture
def basic_credential():
    """HTTP Basic credential"""
    return WebAuthCredential("traveler@example.com", "hunter2")


# Transport Fixtures
@pytest.fixture
def mock_http_client():
    """Transport returning a sample trip unless reconfigured"""
    http_client = Mock(spec=HTTPClient)
    http_client.send.return_value = TransportResponse(status_code=200, content=SAMPLE_TRIP_XML)
    return http_client


@pytest.fixture
def tripit_client(token_credential, mock_http_client):
    """TripIt client wired to the mocked transport"""
    return TripIt(token_credential, api_url=API_URL, http_client=mock_http_client)
