"""
Integration tests for the full request pipeline.

Wires a real credential, TripIt client and HTTPClient together with only
the requests session stubbed, and checks what goes over the wire.
"""

from unittest.mock import patch

import pytest
import requests
import yaml
from requests.auth import HTTPBasicAuth

from tripit import ConfigManager, OAuthConsumerCredential, TokenGranted, TripIt, WebAuthCredential
from tripit.api.client import HTTPClient
from tests.fixtures.helpers import parse_authorization_header
from tests.fixtures.sample_data import (
    SAMPLE_CONFIGURATIONS,
    SAMPLE_ERROR_XML,
    SAMPLE_REQUEST_TOKEN_BODY,
    SAMPLE_TRIP_LIST_XML
)


def make_response(status_code: int, content: bytes) -> requests.Response:
    response = requests.Response()
    response.status_code = status_code
    response._content = content
    return response


@pytest.fixture
def session_request():
    """Patch the requests session so no network access happens"""
    with patch.object(requests.Session, "request") as mock_request:
        mock_request.return_value = make_response(200, SAMPLE_TRIP_LIST_XML)
        yield mock_request


class TestRequestPipeline:
    """End-to-end tests through HTTPClient"""

    @pytest.mark.integration
    def test_signed_list_request(self, session_request):
        """Test a signed GET with pinned nonce and timestamp"""
        credential = OAuthConsumerCredential.with_token("ck", "cs", "tok", "tok-secret")

        with patch("tripit.api.oauth_util.generate_nonce", return_value="n"), \
                patch("tripit.api.oauth_util.generate_timestamp", return_value=1000):
            with TripIt(credential, http_client=HTTPClient(timeout=5)) as client:
                result = client.list_trip({"past": "true"})

        assert [trip.findtext("id") for trip in result.findall("Trip")] == ["42", "43"]

        kwargs = session_request.call_args.kwargs
        assert kwargs["method"] == "GET"
        assert kwargs["url"] == "https://api.tripit.com/v1/list/trip?past=true"
        assert kwargs["timeout"] == 5

        expected_header = credential.generate_authorization_header(
            "GET", "https://api.tripit.com", "https://api.tripit.com/v1/list/trip",
            {"past": "true"}, nonce="n", timestamp=1000
        )
        assert kwargs["headers"]["Authorization"] == expected_header

        header = parse_authorization_header(expected_header)
        assert header["oauth_nonce"] == "n"
        assert header["oauth_timestamp"] == "1000"

    @pytest.mark.integration
    def test_error_response_is_decoded(self, session_request):
        """Test that error documents are decoded like any other body"""
        session_request.return_value = make_response(404, SAMPLE_ERROR_XML)

        with TripIt(WebAuthCredential("u", "p")) as client:
            result = client.get_trip(999)

        assert result.findtext("Error/description") == "Trip not found"
        assert session_request.call_args.kwargs["auth"] == HTTPBasicAuth("u", "p")

    @pytest.mark.integration
    def test_three_legged_token_flow(self, session_request):
        """Test request token, then access token with the request token pair"""
        session_request.return_value = make_response(200, SAMPLE_REQUEST_TOKEN_BODY)

        with TripIt(OAuthConsumerCredential("ck", "cs")) as client:
            request_token = client.get_request_token()

        assert isinstance(request_token, TokenGranted)

        session_request.return_value = make_response(200, b"oauth_token=acc&oauth_token_secret=acc-secret")
        authorized = OAuthConsumerCredential.with_token(
            "ck", "cs",
            request_token.values["oauth_token"],
            request_token.values["oauth_token_secret"]
        )
        with TripIt(authorized) as client:
            access_token = client.get_access_token()

        assert access_token.values == {"oauth_token": "acc", "oauth_token_secret": "acc-secret"}
        assert session_request.call_args.kwargs["url"] == "https://api.tripit.com/oauth/access_token"
        assert 'oauth_token="req-token-123"' in session_request.call_args.kwargs["headers"]["Authorization"]

    @pytest.mark.integration
    def test_client_from_configuration_files(self, session_request, tmp_path, monkeypatch):
        """Test configuration files through to a signed request"""
        monkeypatch.delenv("TRIPIT_ENV", raising=False)
        with open(tmp_path / "default_config.yaml", "w") as f:
            yaml.dump(SAMPLE_CONFIGURATIONS["oauth"], f)

        config = ConfigManager(config_path=tmp_path, environment="test").load_config()
        with TripIt.from_config(config) as client:
            client.list_object()

        kwargs = session_request.call_args.kwargs
        assert kwargs["url"] == "https://api.tripit.com/v1/list/object"
        assert kwargs["timeout"] == 15
        assert 'oauth_consumer_key="consumer-key"' in kwargs["headers"]["Authorization"]
        assert 'oauth_token="access-token"' in kwargs["headers"]["Authorization"]
