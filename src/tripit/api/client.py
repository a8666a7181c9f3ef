"""
HTTP Transport for the TripIt API Client

Thin wrapper over a requests session: one blocking round trip per call,
no retries. HTTP error statuses are returned, not raised.
"""

import time
import logging
from dataclasses import dataclass, field
from typing import Dict, Optional

import requests
from requests.exceptions import RequestException

from ..core.error_handler import TransportError


@dataclass
class TransportResponse:
    """Status code and raw body of a completed round trip"""
    status_code: int
    content: bytes
    headers: Dict[str, str] = field(default_factory=dict)
    
    @property
    def text(self) -> str:
        return self.content.decode('utf-8', errors='replace')


class HTTPClient:
    """
    HTTP transport for TripIt API calls.
    
    Features:
    - Session reuse across calls
    - Configurable timeout, SSL verification and proxies
    - Transport failures surfaced as TransportError
    """
    
    def __init__(
        self,
        timeout: int = 30,
        verify_ssl: bool = True,
        proxies: Optional[Dict[str, str]] = None,
        user_agent: str = "tripit-client/1.0.0",
        session: Optional[requests.Session] = None
    ):
        """
        Initialize HTTP client with configuration
        
        Args:
            timeout: Request timeout in seconds
            verify_ssl: Whether to verify SSL certificates
            proxies: Proxy configuration
            user_agent: User agent string for requests
            session: Pre-built session to use instead of a new one
        """
        self.timeout = timeout
        self.verify_ssl = verify_ssl
        self.proxies = proxies or {}
        self.user_agent = user_agent
        
        self.session = session or requests.Session()
        self.logger = logging.getLogger(__name__)
        
        self._configure_session()
    
    def _configure_session(self):
        """Configure the requests session with headers, SSL and proxies"""
        self.session.headers.update({
            'User-Agent': self.user_agent
        })
        
        self.session.verify = self.verify_ssl
        if self.proxies:
            self.session.proxies.update(self.proxies)
    
    def send(self, method: str, url: str, **request_config) -> TransportResponse:
        """
        Perform one HTTP round trip
        
        Args:
            method: HTTP method (GET or POST)
            url: Full request URL including query string
            **request_config: headers, auth, data and other requests arguments
            
        Returns:
            TransportResponse with status code and body
            
        Raises:
            TransportError: On connection, timeout, SSL or other request failures
        """
        request_config.setdefault('timeout', self.timeout)
        start_time = time.time()
        
        try:
            self.logger.info(f"Making {method} request to {url.split('?', 1)[0]}")
            response = self.session.request(method=method, url=url, **request_config)
        except RequestException as e:
            self.logger.error(f"Request failed: {e}")
            raise TransportError(f"{method} {url} failed: {e}", cause=e) from e
        
        self.logger.info(
            f"Request completed with HTTP {response.status_code} in {time.time() - start_time:.2f}s"
        )
        
        return TransportResponse(
            status_code=response.status_code,
            content=response.content,
            headers=dict(response.headers)
        )
    
    def close(self):
        """Close the HTTP client and cleanup resources"""
        if self.session:
            self.session.close()
            self.logger.info("HTTP client session closed")
    
    def __enter__(self) -> 'HTTPClient':
        return self
    
    def __exit__(self, exc_type, exc_value, traceback):
        self.close()
