"""
TripIt API Client

Request pipeline tying a credential to outbound calls: command names map
to URLs, the credential authorizes the call, the transport performs it and
the body is decoded as XML or JSON.
"""

import logging
from typing import Dict, Any, Optional

from ..core.error_handler import EndpointError
from ..core.logging_manager import LoggingManager
from .authentication import Credential, create_credential
from .client import HTTPClient
from .endpoints.base_endpoint import EntityEndpoint, serialize_payload
from .endpoints.entities import supports
from .request_builder import OAUTH_TOKEN_PATHS, RequestBuilder, parse_command
from .response_handler import ResponseHandler, TokenResponse, resolve_format


class TripIt:
    """
    Client for the TripIt REST API.
    
    Entity operations are available three ways, all going through
    execute_command:
    - ``client.execute_command('get_trip', url_args={'id': 42})``
    - ``client.trip.get(42)``
    - ``client.get_trip(42)``
    """
    
    def __init__(
        self,
        credential: Credential,
        api_url: str = 'https://api.tripit.com',
        api_version: str = 'v1',
        http_client: Optional[HTTPClient] = None,
        timeout: int = 30
    ):
        """
        Initialize client
        
        Args:
            credential: Credential authorizing every call
            api_url: API root, also used as the OAuth realm
            api_version: Version path segment
            http_client: Transport; a new HTTPClient when omitted
            timeout: Transport timeout for the default HTTPClient
        """
        self.credential = credential
        self.api_url = api_url.rstrip('/')
        self.api_version = api_version
        self.http_client = http_client or HTTPClient(timeout=timeout)
        self.request_builder = RequestBuilder(self.api_url, api_version)
        self.response_handler = ResponseHandler()
        self.logger = logging.getLogger(__name__)
    
    @classmethod
    def from_config(cls, config) -> 'TripIt':
        """Build a client from a ClientConfig, applying its logging section"""
        LoggingManager().configure_from(config.logging)
        api = config.api
        proxies = {'http': api.proxy_url, 'https': api.proxy_url} if api.proxy_url else None
        
        http_client = HTTPClient(
            timeout=api.timeout,
            verify_ssl=api.verify_ssl,
            proxies=proxies,
            user_agent=api.user_agent
        )
        return cls(
            create_credential(config.authentication),
            api_url=api.api_url,
            api_version=api.api_version,
            http_client=http_client
        )
    
    def _send(self, command_name: str, url_args: Optional[Dict[str, Any]] = None,
              post_args: Optional[Dict[str, Any]] = None):
        """Build, authorize and send one call"""
        command = parse_command(command_name)
        call = self.request_builder.build_request(command, url_args, post_args)
        
        request_config = self.credential.authorize(
            call.request_config,
            call.method,
            self.api_url,
            call.base_url,
            call.signable_args
        )
        self.logger.debug(
            f"Request config for {command_name}: {self.request_builder.sanitize_for_logging(request_config)}"
        )
        
        return self.http_client.send(call.method, call.url, **request_config)
    
    def execute_command(
        self,
        command_name: str,
        url_args: Optional[Dict[str, Any]] = None,
        post_args: Optional[Dict[str, Any]] = None
    ) -> Any:
        """
        Run a command such as ``get_trip`` or ``list_object``
        
        Args:
            command_name: ``{verb}_{entity}`` or a bare verb
            url_args: Query arguments; also signed
            post_args: Form body arguments; makes the call a POST
            
        Returns:
            lxml element for XML responses, decoded JSON otherwise
            
        Raises:
            ConfigurationError: Malformed command name
            TransportError: The round trip failed
            ResponseParseError: The body does not match the format
        """
        response = self._send(command_name, url_args, post_args)
        fmt = resolve_format(url_args, post_args)
        
        if response.status_code >= 400:
            self.logger.warning(f"{command_name} returned HTTP {response.status_code}")
        
        return self.response_handler.decode(response.content, fmt)
    
    def get_request_token(self) -> TokenResponse:
        """Request an unauthorized request token"""
        return self._token_request(OAUTH_TOKEN_PATHS[0])
    
    def get_access_token(self) -> TokenResponse:
        """Exchange the authorized request token held by the credential"""
        return self._token_request(OAUTH_TOKEN_PATHS[1])
    
    def _token_request(self, path: str) -> TokenResponse:
        response = self._send(path)
        return self.response_handler.token_result(response)
    
    def endpoint(self, entity: str) -> EntityEndpoint:
        """Endpoint object for one entity"""
        return EntityEndpoint(self, entity)
    
    def create(self, data: Any, fmt: str = 'xml') -> Any:
        """
        Create objects from a document
        
        Args:
            data: Document, see serialize_payload
            fmt: Payload and response format, 'xml' or 'json'
        """
        post_args = {'format': fmt, fmt: serialize_payload(data, fmt)}
        return self.execute_command('create', post_args=post_args)
    
    def __getattr__(self, name: str):
        # Only called for attributes not found normally
        if name.startswith('_'):
            raise AttributeError(name)
        
        verb, _, entity = name.partition('_')
        if entity and supports(verb, entity):
            return getattr(EntityEndpoint(self, entity), verb)
        
        try:
            return EntityEndpoint(self, name)
        except EndpointError:
            raise AttributeError(f"{type(self).__name__!r} object has no attribute {name!r}") from None
    
    def close(self):
        self.http_client.close()
    
    def __enter__(self) -> 'TripIt':
        return self
    
    def __exit__(self, exc_type, exc_value, traceback):
        self.close()
