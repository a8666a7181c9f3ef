"""
Authentication for the TripIt API Client

Pluggable credentials that authorize outbound requests: OAuth 1.0a
HMAC-SHA1 request signing and HTTP Basic authentication.
"""

import json
import hmac
import base64
import hashlib
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, Any, Optional, Union

from requests.auth import HTTPBasicAuth

from ..core.error_handler import ConfigurationError
from . import oauth_util


@dataclass(frozen=True)
class OAuthToken:
    """Access (or request) token and its secret"""
    token: str
    token_secret: str


@dataclass(frozen=True)
class RequestorId:
    """Identity for the xoauth_requestor_id flow"""
    requestor_id: str


OAuthIdentity = Union[OAuthToken, RequestorId]


class Credential(ABC):
    """Abstract base class for credentials"""
    
    @abstractmethod
    def authorize(
        self,
        request_config: Dict[str, Any],
        http_method: str,
        realm: str,
        base_url: str,
        args: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """Attach authorization material to the transport keyword arguments"""
        pass


class OAuthConsumerCredential(Credential):
    """
    OAuth 1.0a consumer credential signing every request with HMAC-SHA1.
    
    The credential carries the consumer key and secret plus at most one
    identity: a token pair, or a requestor id. Its fields never change after
    construction, so one instance may sign concurrent requests.
    """
    
    OAUTH_SIGNATURE_METHOD = 'HMAC-SHA1'
    OAUTH_VERSION = '1.0'
    
    def __init__(self, consumer_key: str, consumer_secret: str, identity: Optional[OAuthIdentity] = None):
        if identity is not None and not isinstance(identity, (OAuthToken, RequestorId)):
            raise ConfigurationError(f"Unsupported OAuth identity: {type(identity).__name__}")
        
        self._consumer_key = consumer_key
        self._consumer_secret = consumer_secret
        self._identity = identity
        self.logger = logging.getLogger(__name__)
    
    @classmethod
    def with_token(cls, consumer_key: str, consumer_secret: str, token: str, token_secret: str) -> 'OAuthConsumerCredential':
        return cls(consumer_key, consumer_secret, OAuthToken(token, token_secret))
    
    @classmethod
    def with_requestor_id(cls, consumer_key: str, consumer_secret: str, requestor_id: str) -> 'OAuthConsumerCredential':
        return cls(consumer_key, consumer_secret, RequestorId(requestor_id))
    
    @classmethod
    def from_values(
        cls,
        consumer_key: str,
        consumer_secret: str,
        token: Optional[str] = None,
        token_secret: Optional[str] = None,
        requestor_id: Optional[str] = None
    ) -> 'OAuthConsumerCredential':
        """
        Build a credential from optional loose values
        
        Raises:
            ConfigurationError: If both a token and a requestor id are given,
                or only one half of the token pair is given
        """
        if (token or token_secret) and requestor_id:
            raise ConfigurationError("OAuth credential accepts a token pair or a requestor id, not both")
        if bool(token) != bool(token_secret):
            raise ConfigurationError("OAuth token and token secret must be supplied together")
        
        if token:
            return cls.with_token(consumer_key, consumer_secret, token, token_secret)
        if requestor_id:
            return cls.with_requestor_id(consumer_key, consumer_secret, requestor_id)
        return cls(consumer_key, consumer_secret)
    
    @property
    def consumer_key(self) -> str:
        return self._consumer_key
    
    @property
    def consumer_secret(self) -> str:
        return self._consumer_secret
    
    @property
    def identity(self) -> Optional[OAuthIdentity]:
        return self._identity
    
    @property
    def token(self) -> str:
        return self._identity.token if isinstance(self._identity, OAuthToken) else ''
    
    @property
    def token_secret(self) -> str:
        return self._identity.token_secret if isinstance(self._identity, OAuthToken) else ''
    
    @property
    def requestor_id(self) -> str:
        return self._identity.requestor_id if isinstance(self._identity, RequestorId) else ''
    
    def authorize(
        self,
        request_config: Dict[str, Any],
        http_method: str,
        realm: str,
        base_url: str,
        args: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """Set the OAuth Authorization header on the request configuration"""
        headers = dict(request_config.get('headers') or {})
        headers['Authorization'] = self.generate_authorization_header(http_method, realm, base_url, args)
        request_config['headers'] = headers
        return request_config
    
    def generate_authorization_header(
        self,
        http_method: str,
        realm: str,
        base_url: str,
        args: Optional[Dict[str, Any]] = None,
        nonce: Optional[str] = None,
        timestamp: Optional[int] = None
    ) -> str:
        """
        Build the ``OAuth realm="...",oauth_...="..."`` header value
        
        Caller arguments take part in the signature only; any key without an
        ``oauth``/``xoauth`` prefix is left out of the header.
        """
        parameters = self.build_oauth_parameters(http_method, base_url, args, nonce=nonce, timestamp=timestamp)
        
        pairs = []
        for key, value in parameters.items():
            if key.startswith('oauth') or key.startswith('xoauth'):
                pairs.append(f'{oauth_util.urlencode_rfc3986(key)}="{oauth_util.urlencode_rfc3986(value)}"')
        
        return f'OAuth realm="{realm}",' + ','.join(pairs)
    
    def build_oauth_parameters(
        self,
        http_method: str,
        base_url: str,
        args: Optional[Dict[str, Any]] = None,
        nonce: Optional[str] = None,
        timestamp: Optional[int] = None
    ) -> Dict[str, Any]:
        """
        Build the signed OAuth parameter set for one request
        
        Args:
            http_method: HTTP method, any case
            base_url: Request URL without query string
            args: Request parameters merged into the signed copy only
            nonce: Fixed nonce, generated when omitted
            timestamp: Fixed timestamp, current time when omitted
            
        Returns:
            Ordered mapping ending with ``oauth_signature``
        """
        http_method = http_method.upper()
        
        parameters: Dict[str, Any] = {
            'oauth_consumer_key': self._consumer_key,
            'oauth_nonce': nonce if nonce is not None else oauth_util.generate_nonce(),
            'oauth_timestamp': timestamp if timestamp is not None else oauth_util.generate_timestamp(),
            'oauth_signature_method': self.OAUTH_SIGNATURE_METHOD,
            'oauth_version': self.OAUTH_VERSION
        }
        
        if self.token:
            parameters['oauth_token'] = self.token
        
        if self.requestor_id:
            parameters['xoauth_requestor_id'] = self.requestor_id
        
        parameters_for_base_string = dict(parameters)
        if args:
            parameters_for_base_string.update(args)
        
        parameters['oauth_signature'] = self.generate_signature(http_method, base_url, parameters_for_base_string)
        
        self.logger.debug(f"Signed {http_method} request for {base_url}")
        return parameters
    
    def generate_signature(self, http_method: str, base_url: str, params: Dict[str, Any]) -> str:
        """Compute base64(HMAC-SHA1(base string, signing key))"""
        base_string = self.get_base_string(http_method, base_url, params)
        
        key = '&'.join([
            oauth_util.urlencode_rfc3986(self._consumer_secret or ''),
            oauth_util.urlencode_rfc3986(self.token_secret)
        ])
        
        digest = hmac.new(key.encode('utf-8'), base_string.encode('utf-8'), hashlib.sha1).digest()
        return base64.b64encode(digest).decode('ascii')
    
    def get_base_string(self, http_method: str, base_url: str, params: Dict[str, Any]) -> str:
        """Build ``METHOD&encoded_url&encoded_params``"""
        normalized_parameters = oauth_util.urlencode_rfc3986(self.get_signable_parameters(params))
        normalized_url = oauth_util.urlencode_rfc3986(base_url)
        
        base_string = f"{http_method.upper()}&{normalized_url}"
        if normalized_parameters:
            base_string += f"&{normalized_parameters}"
        return base_string
    
    @staticmethod
    def get_signable_parameters(params: Dict[str, Any]) -> str:
        """Encode, naturally sort and join parameters as ``k=v&k=v``"""
        encoded = {}
        for key, value in params.items():
            if key == 'oauth_signature':
                continue
            encoded[oauth_util.urlencode_rfc3986(key)] = oauth_util.urlencode_rfc3986(value)
        
        pairs = []
        for key in sorted(encoded, key=oauth_util.natural_sort_key):
            value = encoded[key]
            if isinstance(value, list):
                # Repeated keys: each value becomes its own pair
                for item in sorted(value, key=oauth_util.natural_sort_key):
                    pairs.append(f"{key}={item}")
            else:
                pairs.append(f"{key}={value}")
        
        return '&'.join(pairs)
    
    def get_session_parameters(self, redirect_url: str, action: str) -> str:
        """
        Signed parameters for a web-redirect login flow, serialized as JSON
        
        The parameters are signed as a GET against ``action`` with
        ``redirect_url`` included in the signature. Forward slashes are
        written unescaped, where some JSON encoders emit a backslash before
        each one; both forms decode to the same values.
        """
        parameters = self.build_oauth_parameters('GET', action, {'redirect_url': redirect_url})
        parameters['redirect_url'] = redirect_url
        parameters['action'] = action
        
        return json.dumps(parameters)
    
    def __repr__(self) -> str:
        mode = type(self._identity).__name__ if self._identity else 'consumer-only'
        return f"OAuthConsumerCredential(consumer_key={self._consumer_key!r}, mode={mode})"


class WebAuthCredential(Credential):
    """HTTP Basic Authentication"""
    
    def __init__(self, username: str, password: str):
        self._username = username
        self._password = password
    
    @property
    def username(self) -> str:
        return self._username
    
    @property
    def password(self) -> str:
        return self._password
    
    def authorize(
        self,
        request_config: Dict[str, Any],
        http_method: str,
        realm: str,
        base_url: str,
        args: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """Attach basic auth; method, realm, URL and args are not used"""
        request_config['auth'] = HTTPBasicAuth(self._username, self._password)
        return request_config
    
    def __repr__(self) -> str:
        return f"WebAuthCredential(username={self._username!r})"


CREDENTIAL_TYPES = {
    'oauth': OAuthConsumerCredential,
    'basic': WebAuthCredential
}


def create_credential(auth_config) -> Credential:
    """
    Build a credential from an ``AuthConfig`` section
    
    Raises:
        ConfigurationError: For unknown types or an invalid OAuth identity
    """
    logger = logging.getLogger(__name__)
    
    if auth_config.type not in CREDENTIAL_TYPES:
        raise ConfigurationError(f"Unsupported authentication type: {auth_config.type}")
    
    def _secret(value) -> Optional[str]:
        return value.get_secret_value() if value is not None else None
    
    if auth_config.type == 'basic':
        credential = WebAuthCredential(auth_config.username, _secret(auth_config.password) or '')
    else:
        credential = OAuthConsumerCredential.from_values(
            auth_config.consumer_key,
            _secret(auth_config.consumer_secret),
            token=auth_config.token,
            token_secret=_secret(auth_config.token_secret),
            requestor_id=auth_config.requestor_id
        )
    
    logger.info(f"Authentication configured for type: {auth_config.type}")
    return credential
