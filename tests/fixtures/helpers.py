"""Helpers shared by the TripIt client tests."""

from typing import Dict
from urllib.parse import unquote


def parse_authorization_header(header: str) -> Dict[str, str]:
    """Split an ``OAuth k="v",...`` header into decoded key/value pairs"""
    assert header.startswith("OAuth ")
    pairs = {}
    for item in header[len("OAuth "):].split(","):
        key, _, value = item.partition("=")
        pairs[key] = unquote(value.strip('"'))
    return pairs
