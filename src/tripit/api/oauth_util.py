"""
OAuth utility functions for the TripIt API client

RFC 3986 percent-encoding, nonce and timestamp generation, and the natural
ordering used to normalize signature parameters.
"""

import re
import time
import random
import hashlib
from typing import Any, List, Tuple, Union
from urllib.parse import quote_plus


_DIGIT_RUNS = re.compile(r'(\d+)')


def urlencode_rfc3986(value: Union[str, int, List[Any], Tuple[Any, ...]]) -> Union[str, List[str]]:
    """
    Percent-encode a value per RFC 3986.

    Lists and tuples are encoded element by element, preserving order.
    """
    if isinstance(value, (list, tuple)):
        return [urlencode_rfc3986(item) for item in value]

    encoded = quote_plus(str(value), safe='')
    # Tilde first, then the form-style space
    return encoded.replace('%7E', '~').replace('+', '%20')


def generate_nonce() -> str:
    """Return a per-request nonce"""
    seed = f"{time.perf_counter_ns()}{time.time_ns()}{random.getrandbits(64)}"
    return hashlib.md5(seed.encode('utf-8')).hexdigest()


def generate_timestamp() -> int:
    """Return the current Unix time in seconds"""
    return int(time.time())


def natural_sort_key(value: str) -> Tuple[List[Union[str, int]], str]:
    """
    Sort key comparing digit runs numerically, so ``a2`` sorts before ``a10``.

    ``re.split`` with a capture group alternates text and digit runs, so the
    same positions always hold the same type. The raw string breaks ties such
    as ``a1`` and ``a01``.
    """
    parts = _DIGIT_RUNS.split(value)
    return [int(part) if index % 2 else part for index, part in enumerate(parts)], value
