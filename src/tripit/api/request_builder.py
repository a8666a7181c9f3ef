"""
Request Builder for the TripIt API Client

Turns a command name such as ``get_trip`` plus optional URL and POST
arguments into the URL, HTTP method and transport keyword arguments of a
single call.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Any, Optional
from urllib.parse import urlencode

from ..core.error_handler import ConfigurationError


OAUTH_TOKEN_PATHS = ('/oauth/request_token', '/oauth/access_token')


@dataclass(frozen=True)
class Command:
    """HTTP verb and optional entity parsed from a command name"""
    verb: str
    entity: Optional[str] = None


@dataclass
class PreparedCall:
    """Everything needed to authorize and send one request"""
    command: Command
    method: str
    base_url: str
    url: str
    signable_args: Optional[Dict[str, Any]]
    request_config: Dict[str, Any] = field(default_factory=dict)


def parse_command(command_name: str) -> Command:
    """
    Split a command name at the first underscore
    
    ``get_points_program`` becomes verb ``get`` and entity ``points_program``.
    The OAuth token paths are passed through as verbs.
    
    Raises:
        ConfigurationError: If the name or its verb is empty
    """
    if not command_name:
        raise ConfigurationError("Command name must not be empty")
    
    if command_name in OAUTH_TOKEN_PATHS:
        return Command(verb=command_name)
    
    verb, _, entity = command_name.partition('_')
    if not verb:
        raise ConfigurationError(f"Malformed command name: {command_name!r}")
    
    return Command(verb=verb, entity=entity or None)


class RequestBuilder:
    """
    Builds request URLs and transport configuration for TripIt API calls.
    
    Endpoint shapes:
    - ``{root}/{version}/{verb}/{entity}`` for entity operations
    - ``{root}/{version}/{verb}`` when there is no entity
    - ``{root}{path}`` for the OAuth token paths
    """
    
    def __init__(self, api_url: str, api_version: str):
        self.api_url = api_url.rstrip('/')
        self.api_version = api_version
        self.logger = logging.getLogger(__name__)
        self.default_headers = {
            'Accept': 'application/xml, application/json'
        }
    
    def build_base_url(self, command: Command) -> str:
        """Build the request URL without query string"""
        if command.verb in OAUTH_TOKEN_PATHS:
            return self.api_url + command.verb
        
        parts = [self.api_url, self.api_version, command.verb]
        if command.entity:
            parts.append(command.entity)
        return '/'.join(parts)
    
    @staticmethod
    def clean_args(args: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
        """Remove None values; an empty result becomes None"""
        if not args:
            return None
        cleaned = {k: v for k, v in args.items() if v is not None}
        return cleaned or None
    
    @staticmethod
    def build_url(base_url: str, url_args: Optional[Dict[str, Any]] = None) -> str:
        """Append URL arguments as a query string"""
        if not url_args:
            return base_url
        return f"{base_url}?{urlencode(url_args, doseq=True)}"
    
    def build_request(
        self,
        command: Command,
        url_args: Optional[Dict[str, Any]] = None,
        post_args: Optional[Dict[str, Any]] = None
    ) -> PreparedCall:
        """
        Prepare one call
        
        Args:
            command: Parsed command
            url_args: Query string arguments, also signed
            post_args: Form body arguments; their presence makes the call a POST
            
        Returns:
            PreparedCall with method, URLs, signable args and transport config
        """
        url_args = self.clean_args(url_args)
        post_args = self.clean_args(post_args)
        
        base_url = self.build_base_url(command)
        url = self.build_url(base_url, url_args)
        
        request_config: Dict[str, Any] = {'headers': self.default_headers.copy()}
        signable_args = url_args
        
        if post_args:
            method = 'POST'
            signable_args = post_args
            request_config['data'] = post_args
        else:
            method = 'GET'
        
        self.logger.debug(f"Built {method} {url}")
        
        return PreparedCall(
            command=command,
            method=method,
            base_url=base_url,
            url=url,
            signable_args=signable_args,
            request_config=request_config
        )
    
    def sanitize_for_logging(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """Sanitize request config for logging (remove sensitive data)"""
        sanitized = config.copy()
        
        if 'headers' in sanitized:
            headers = dict(sanitized['headers'])
            sensitive_headers = ['authorization', 'cookie']
            
            for key in list(headers.keys()):
                if key.lower() in sensitive_headers:
                    headers[key] = '[MASKED]'
            
            sanitized['headers'] = headers
        
        if 'auth' in sanitized:
            sanitized['auth'] = '[MASKED]'
        
        if 'data' in sanitized and isinstance(sanitized['data'], dict):
            sanitized['data'] = {
                k: (v[:200] + '... [TRUNCATED]' if isinstance(v, str) and len(v) > 200 else v)
                for k, v in sanitized['data'].items()
            }
        
        return sanitized
