"""
Entity lookup table for the TripIt API

Which verbs each entity supports. Every (verb, entity) pair maps onto the
command ``{verb}_{entity}`` and the endpoint ``/{version}/{verb}/{entity}``.
"""

from typing import Dict, FrozenSet


OBJECT_ENTITIES = (
    'trip', 'air', 'lodging', 'car', 'rail', 'transport', 'cruise',
    'restaurant', 'activity', 'note', 'map', 'directions'
)

ENTITY_OPERATIONS: Dict[str, FrozenSet[str]] = {
    'get': frozenset(OBJECT_ENTITIES + ('points_program', 'profile')),
    'delete': frozenset(OBJECT_ENTITIES),
    'replace': frozenset(OBJECT_ENTITIES),
    'list': frozenset(('trip', 'object', 'points_program')),
}

# get_profile addresses the authenticated user, not an object id
ID_OPTIONAL = frozenset({('get', 'profile')})


def supports(verb: str, entity: str) -> bool:
    return entity in ENTITY_OPERATIONS.get(verb, frozenset())


def known_entities() -> FrozenSet[str]:
    return frozenset().union(*ENTITY_OPERATIONS.values())
