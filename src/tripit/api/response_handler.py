"""
Response Handler for the TripIt API Client

Decodes response bodies as XML, JSON or form-encoded data, and turns the
OAuth token endpoint responses into explicit result objects.
"""

import json
import logging
from dataclasses import dataclass
from typing import Dict, Any, Optional, Union
from urllib.parse import parse_qsl

from lxml import etree

from ..core.error_handler import ResponseParseError
from .client import TransportResponse


DEFAULT_FORMAT = 'xml'


@dataclass(frozen=True)
class TokenResponse:
    """Result of a token endpoint call"""
    
    @property
    def ok(self) -> bool:
        raise NotImplementedError


@dataclass(frozen=True)
class TokenGranted(TokenResponse):
    """HTTP 200: the form-encoded body decoded into a mapping"""
    values: Dict[str, str]
    
    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class TokenRejected(TokenResponse):
    """Any other status: the raw body, undecoded"""
    status_code: int
    body: str
    
    @property
    def ok(self) -> bool:
        return False


def resolve_format(url_args: Optional[Dict[str, Any]] = None,
                   post_args: Optional[Dict[str, Any]] = None) -> str:
    """Pick the response format from URL args, then POST args, else xml"""
    if url_args and isinstance(url_args.get('format'), str):
        return url_args['format']
    if post_args and isinstance(post_args.get('format'), str):
        return post_args['format']
    return DEFAULT_FORMAT


class ResponseParser:
    """Parses response bodies into generic trees"""
    
    @staticmethod
    def parse_json(content: Union[bytes, str]) -> Any:
        """Parse JSON body"""
        try:
            return json.loads(content)
        except (ValueError, TypeError) as e:
            raise ResponseParseError(f"Invalid JSON response: {e}", fmt='json')
    
    @staticmethod
    def parse_xml(content: Union[bytes, str]) -> etree._Element:
        """Parse XML body with entity expansion and network access disabled"""
        if isinstance(content, str):
            content = content.encode('utf-8')
        
        parser = etree.XMLParser(resolve_entities=False, no_network=True)
        try:
            return etree.fromstring(content, parser=parser)
        except etree.XMLSyntaxError as e:
            raise ResponseParseError(f"Invalid XML response: {e}", fmt='xml')
    
    @staticmethod
    def parse_form(content: Union[bytes, str]) -> Dict[str, str]:
        """Parse a form-encoded body; later duplicates win
        
        Undecodable bytes become U+FFFD rather than failing the parse.
        """
        if isinstance(content, bytes):
            content = content.decode('utf-8', errors='replace')
        return dict(parse_qsl(content, keep_blank_values=True))


class ResponseHandler:
    """
    Decodes API responses by format.
    
    Format names are compared case-insensitively; anything other than
    ``json`` is decoded as XML.
    """
    
    def __init__(self):
        self.parser = ResponseParser()
        self.logger = logging.getLogger(__name__)
    
    def decode(self, content: Union[bytes, str], fmt: str = DEFAULT_FORMAT) -> Any:
        """
        Decode a response body
        
        Raises:
            ResponseParseError: If the body is malformed for the format
        """
        try:
            if fmt.lower() == 'json':
                return self.parser.parse_json(content)
            return self.parser.parse_xml(content)
        except ResponseParseError as e:
            self.logger.error(f"Failed to decode {e.fmt} response: {e}")
            raise
    
    def token_result(self, response: TransportResponse) -> TokenResponse:
        """Map a token endpoint response to TokenGranted or TokenRejected"""
        if response.status_code == 200:
            return TokenGranted(values=self.parser.parse_form(response.content))
        
        self.logger.warning(f"Token request returned HTTP {response.status_code}")
        return TokenRejected(status_code=response.status_code, body=response.text)
