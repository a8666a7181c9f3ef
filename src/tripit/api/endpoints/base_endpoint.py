"""
Entity Endpoint for the TripIt API

One parameterized endpoint class covers every entity: get, delete,
replace and list are forwarded to the request pipeline as
``{verb}_{entity}`` commands.
"""

import json
from typing import Dict, Any, Optional, TYPE_CHECKING

from lxml import etree

from ...core.error_handler import ConfigurationError, EndpointError
from .entities import ENTITY_OPERATIONS, ID_OPTIONAL, known_entities, supports

if TYPE_CHECKING:
    from ..tripit import TripIt


def serialize_payload(data: Any, fmt: str) -> str:
    """
    Serialize a replace/create payload for the form body
    
    Strings and bytes are sent as-is. JSON payloads may be mappings or
    lists; XML payloads may be lxml elements.
    
    Raises:
        ConfigurationError: If the payload cannot be sent in the format
    """
    if isinstance(data, bytes):
        return data.decode('utf-8')
    if isinstance(data, str):
        return data
    
    if fmt.lower() == 'json':
        if isinstance(data, (dict, list)):
            return json.dumps(data, separators=(',', ':'), ensure_ascii=False)
    elif isinstance(data, etree._Element):
        return etree.tostring(data, encoding='unicode')
    
    raise ConfigurationError(
        f"Cannot send {type(data).__name__} payload as {fmt}; pass a string or a supported object"
    )


class EntityEndpoint:
    """
    Operations on one TripIt entity (trip, air, lodging, ...).
    
    Only the verbs listed for the entity in ENTITY_OPERATIONS are allowed;
    anything else raises EndpointError before a request is made.
    """
    
    def __init__(self, pipeline: 'TripIt', entity: str):
        """
        Initialize endpoint for an entity
        
        Args:
            pipeline: Client whose execute_command performs the call
            entity: Entity name, e.g. 'trip' or 'points_program'
        """
        if entity not in known_entities():
            raise EndpointError(f"Unknown entity: {entity!r}")
        
        self.pipeline = pipeline
        self.entity = entity
    
    @property
    def operations(self):
        return sorted(verb for verb in ENTITY_OPERATIONS if supports(verb, self.entity))
    
    def _require(self, verb: str):
        if not supports(verb, self.entity):
            raise EndpointError(f"Entity {self.entity!r} does not support {verb!r}")
    
    def _command(self, verb: str) -> str:
        return f"{verb}_{self.entity}"
    
    def get(self, id: Optional[Any] = None, filters: Optional[Dict[str, Any]] = None) -> Any:
        """
        Fetch one object
        
        Args:
            id: Object id; optional only for the profile entity
            filters: Extra query arguments (e.g. ``format``, ``include_objects``)
            
        Returns:
            Parsed XML element or JSON data
        """
        self._require('get')
        
        url_args = dict(filters or {})
        if id is not None:
            url_args['id'] = id
        elif ('get', self.entity) not in ID_OPTIONAL:
            raise EndpointError(f"get_{self.entity} requires an id")
        
        return self.pipeline.execute_command(self._command('get'), url_args=url_args or None)
    
    def delete(self, id: Any, filters: Optional[Dict[str, Any]] = None) -> Any:
        """Delete one object by id"""
        self._require('delete')
        
        url_args = dict(filters or {})
        url_args['id'] = id
        return self.pipeline.execute_command(self._command('delete'), url_args=url_args)
    
    def replace(self, id: Any, data: Any, fmt: str = 'xml') -> Any:
        """
        Replace one object
        
        Args:
            id: Object id
            data: Replacement document, see serialize_payload
            fmt: Payload and response format, 'xml' or 'json'
        """
        self._require('replace')
        
        post_args = {'id': id, 'format': fmt, fmt: serialize_payload(data, fmt)}
        return self.pipeline.execute_command(self._command('replace'), post_args=post_args)
    
    def list(self, filters: Optional[Dict[str, Any]] = None) -> Any:
        """List objects matching optional filters"""
        self._require('list')
        return self.pipeline.execute_command(self._command('list'), url_args=filters)
    
    def __repr__(self) -> str:
        return f"EntityEndpoint({self.entity!r})"
