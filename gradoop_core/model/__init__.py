"""
Gradoop Core Model

Typed EPGM domain objects: identifiers, properties, graph heads, vertices,
edges, their temporal variants and the factories that build them.
"""

from .identifiers import (
    GradoopId,
    GradoopIdGenerator,
    GradoopIdSet,
    to_id_set,
)

from .properties import (
    PropertyType,
    PropertyValue,
    Property,
    Properties,
)

from .base import (
    Element,
    ElementType,
    GraphElement,
    ValidationError,
    validate_id,
    validate_label,
    epgm_equals,
)

from .graph_head import GraphHead, is_graph_head
from .vertices import Vertex, is_vertex
from .edges import Edge, is_edge

from .temporal import (
    TemporalElement,
    TemporalGraphHead,
    TemporalVertex,
    TemporalEdge,
    DEFAULT_TIME_FROM,
    DEFAULT_TIME_TO,
    current_time_millis,
    to_millis,
    validate_time_interval,
    is_temporal,
)

from .factories import (
    ElementFactory,
    GraphHeadFactory,
    VertexFactory,
    EdgeFactory,
    TemporalGraphHeadFactory,
    TemporalVertexFactory,
    TemporalEdgeFactory,
)

from .serialization import (
    encode_element,
    decode_element,
    encode_elements,
    decode_elements,
)

from .graph_collection import (
    LogicalGraph,
    GraphCollection,
    filter_by_graph_ids,
)

__all__ = [
    # Identifiers
    'GradoopId',
    'GradoopIdGenerator',
    'GradoopIdSet',
    'to_id_set',

    # Properties
    'PropertyType',
    'PropertyValue',
    'Property',
    'Properties',

    # Base
    'Element',
    'ElementType',
    'GraphElement',
    'ValidationError',
    'validate_id',
    'validate_label',
    'epgm_equals',

    # Elements
    'GraphHead',
    'Vertex',
    'Edge',
    'is_graph_head',
    'is_vertex',
    'is_edge',

    # Temporal
    'TemporalElement',
    'TemporalGraphHead',
    'TemporalVertex',
    'TemporalEdge',
    'DEFAULT_TIME_FROM',
    'DEFAULT_TIME_TO',
    'current_time_millis',
    'to_millis',
    'validate_time_interval',
    'is_temporal',

    # Factories
    'ElementFactory',
    'GraphHeadFactory',
    'VertexFactory',
    'EdgeFactory',
    'TemporalGraphHeadFactory',
    'TemporalVertexFactory',
    'TemporalEdgeFactory',

    # Serialization
    'encode_element',
    'decode_element',
    'encode_elements',
    'decode_elements',

    # Collections
    'LogicalGraph',
    'GraphCollection',
    'filter_by_graph_ids',
]
