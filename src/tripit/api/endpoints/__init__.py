"""
API Endpoints Package for the TripIt Client

A single parameterized endpoint plus the table of supported
(verb, entity) pairs.
"""

from .base_endpoint import EntityEndpoint, serialize_payload
from .entities import ENTITY_OPERATIONS, OBJECT_ENTITIES, supports

__all__ = [
    'EntityEndpoint',
    'serialize_payload',
    'ENTITY_OPERATIONS',
    'OBJECT_ENTITIES',
    'supports'
]
