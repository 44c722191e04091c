"""
Gradoop Core Model - Factories

Factories are the sanctioned way to build elements. They assign ids and
fill defaults for omitted fields:

- label       -> the factory's default label (also for "")
- properties  -> empty Properties
- graph_ids   -> empty GradoopIdSet

create_*() mints a fresh id, init_*() takes an existing one.
"""

from typing import Any, Dict, Optional, Type, Union

from gradoop_core.utils.config import SETTINGS
from .base import Element, GraphElement, validate_id
from .edges import Edge
from .graph_head import GraphHead
from .identifiers import GradoopId, GradoopIdGenerator, IdLike, to_id_set
from .properties import Properties
from .temporal import (
    TemporalEdge, TemporalElement, TemporalGraphHead, TemporalVertex, TimeInterval,
)
from .vertices import Vertex

PropertiesLike = Union[Properties, Dict[str, Any]]


def to_properties(properties: Optional[PropertiesLike]) -> Properties:
    """Normalize optional properties into a Properties instance."""
    if properties is None:
        return Properties()
    if isinstance(properties, Properties):
        return properties
    return Properties.create_from_map(properties)


# =============================================================================
# Base Factory
# =============================================================================

class ElementFactory:
    """Shared label defaulting and id minting."""

    element_class: Type[Element] = Element

    def __init__(self, default_label: str = "", id_generator: Optional[GradoopIdGenerator] = None):
        self.default_label = default_label
        self.id_generator = id_generator

    def get_type(self) -> Type[Element]:
        return self.element_class

    def new_id(self) -> GradoopId:
        return GradoopId.get(self.id_generator)

    def _label(self, label: Optional[str]) -> str:
        return label if label else self.default_label


# =============================================================================
# GraphHead Factory
# =============================================================================

class GraphHeadFactory(ElementFactory):
    """
    Factory for graph heads.

    Example:
        factory = GraphHeadFactory()
        head = factory.create_graph_head("Community", {"interest": "Databases"})
    """

    element_class = GraphHead

    def __init__(self, default_label: Optional[str] = None,
                 id_generator: Optional[GradoopIdGenerator] = None):
        if default_label is None:
            default_label = SETTINGS.default_graph_label
        super().__init__(default_label, id_generator)

    def create_graph_head(self, label: Optional[str] = None,
                          properties: Optional[PropertiesLike] = None) -> GraphHead:
        return self.init_graph_head(self.new_id(), label, properties)

    def init_graph_head(self, id: GradoopId, label: Optional[str] = None,
                        properties: Optional[PropertiesLike] = None) -> GraphHead:
        validate_id(id)
        return self.element_class(
            id=id,
            label=self._label(label),
            properties=to_properties(properties),
        )


# =============================================================================
# Vertex Factory
# =============================================================================

class VertexFactory(ElementFactory):
    """
    Factory for vertices.

    Example:
        factory = VertexFactory()
        alice = factory.create_vertex("Person", {"name": "Alice"}, [community.id])
    """

    element_class = Vertex

    def __init__(self, default_label: Optional[str] = None,
                 id_generator: Optional[GradoopIdGenerator] = None):
        if default_label is None:
            default_label = SETTINGS.default_vertex_label
        super().__init__(default_label, id_generator)

    def create_vertex(self, label: Optional[str] = None,
                      properties: Optional[PropertiesLike] = None,
                      graph_ids: Optional[IdLike] = None) -> Vertex:
        return self.init_vertex(self.new_id(), label, properties, graph_ids)

    def init_vertex(self, id: GradoopId, label: Optional[str] = None,
                    properties: Optional[PropertiesLike] = None,
                    graph_ids: Optional[IdLike] = None) -> Vertex:
        validate_id(id)
        return self.element_class(
            id=id,
            label=self._label(label),
            properties=to_properties(properties),
            graph_ids=to_id_set(graph_ids),
        )


# =============================================================================
# Edge Factory
# =============================================================================

class EdgeFactory(ElementFactory):
    """
    Factory for edges.

    Example:
        factory = EdgeFactory()
        knows = factory.create_edge(alice.id, bob.id, "knows", {"since": 2014})
    """

    element_class = Edge

    def __init__(self, default_label: Optional[str] = None,
                 id_generator: Optional[GradoopIdGenerator] = None):
        if default_label is None:
            default_label = SETTINGS.default_edge_label
        super().__init__(default_label, id_generator)

    def create_edge(self, source_id: GradoopId, target_id: GradoopId,
                    label: Optional[str] = None,
                    properties: Optional[PropertiesLike] = None,
                    graph_ids: Optional[IdLike] = None) -> Edge:
        return self.init_edge(self.new_id(), source_id, target_id, label, properties, graph_ids)

    def init_edge(self, id: GradoopId, source_id: GradoopId, target_id: GradoopId,
                  label: Optional[str] = None,
                  properties: Optional[PropertiesLike] = None,
                  graph_ids: Optional[IdLike] = None) -> Edge:
        validate_id(id)
        validate_id(source_id, "source_id")
        validate_id(target_id, "target_id")
        return self.element_class(
            id=id,
            label=self._label(label),
            properties=to_properties(properties),
            graph_ids=to_id_set(graph_ids),
            source_id=source_id,
            target_id=target_id,
        )


# =============================================================================
# Temporal Factories
# =============================================================================

def _apply_times(element: TemporalElement,
                 valid_time: Optional[TimeInterval],
                 transaction_time: Optional[TimeInterval]) -> None:
    if valid_time is not None:
        element.set_valid_time(*valid_time)
    if transaction_time is not None:
        element.set_transaction_time(*transaction_time)


def _copy_graph_element(element: GraphElement) -> dict:
    return {
        'label': element.label,
        'properties': element.properties.copy(),
        'graph_ids': element.graph_ids.copy(),
    }


class TemporalGraphHeadFactory(GraphHeadFactory):
    """Factory for temporal graph heads (valid forever, recorded now by default)."""

    element_class = TemporalGraphHead

    def init_graph_head(self, id: GradoopId, label: Optional[str] = None,
                        properties: Optional[PropertiesLike] = None,
                        valid_time: Optional[TimeInterval] = None,
                        transaction_time: Optional[TimeInterval] = None) -> TemporalGraphHead:
        head = super().init_graph_head(id, label, properties)
        _apply_times(head, valid_time, transaction_time)
        return head

    def create_graph_head(self, label: Optional[str] = None,
                          properties: Optional[PropertiesLike] = None,
                          valid_time: Optional[TimeInterval] = None,
                          transaction_time: Optional[TimeInterval] = None) -> TemporalGraphHead:
        return self.init_graph_head(self.new_id(), label, properties, valid_time, transaction_time)

    def from_non_temporal_graph_head(self, graph_head: GraphHead) -> TemporalGraphHead:
        """Copy id, label and properties into a temporal graph head with default times."""
        return self.element_class(
            id=graph_head.id,
            label=graph_head.label,
            properties=graph_head.properties.copy(),
        )


class TemporalVertexFactory(VertexFactory):
    """Factory for temporal vertices."""

    element_class = TemporalVertex

    def init_vertex(self, id: GradoopId, label: Optional[str] = None,
                    properties: Optional[PropertiesLike] = None,
                    graph_ids: Optional[IdLike] = None,
                    valid_time: Optional[TimeInterval] = None,
                    transaction_time: Optional[TimeInterval] = None) -> TemporalVertex:
        vertex = super().init_vertex(id, label, properties, graph_ids)
        _apply_times(vertex, valid_time, transaction_time)
        return vertex

    def create_vertex(self, label: Optional[str] = None,
                      properties: Optional[PropertiesLike] = None,
                      graph_ids: Optional[IdLike] = None,
                      valid_time: Optional[TimeInterval] = None,
                      transaction_time: Optional[TimeInterval] = None) -> TemporalVertex:
        return self.init_vertex(self.new_id(), label, properties, graph_ids,
                                valid_time, transaction_time)

    def from_non_temporal_vertex(self, vertex: Vertex) -> TemporalVertex:
        """Copy id, label, properties and membership into a temporal vertex."""
        return self.element_class(id=vertex.id, **_copy_graph_element(vertex))


class TemporalEdgeFactory(EdgeFactory):
    """Factory for temporal edges."""

    element_class = TemporalEdge

    def init_edge(self, id: GradoopId, source_id: GradoopId, target_id: GradoopId,
                  label: Optional[str] = None,
                  properties: Optional[PropertiesLike] = None,
                  graph_ids: Optional[IdLike] = None,
                  valid_time: Optional[TimeInterval] = None,
                  transaction_time: Optional[TimeInterval] = None) -> TemporalEdge:
        edge = super().init_edge(id, source_id, target_id, label, properties, graph_ids)
        _apply_times(edge, valid_time, transaction_time)
        return edge

    def create_edge(self, source_id: GradoopId, target_id: GradoopId,
                    label: Optional[str] = None,
                    properties: Optional[PropertiesLike] = None,
                    graph_ids: Optional[IdLike] = None,
                    valid_time: Optional[TimeInterval] = None,
                    transaction_time: Optional[TimeInterval] = None) -> TemporalEdge:
        return self.init_edge(self.new_id(), source_id, target_id, label, properties,
                              graph_ids, valid_time, transaction_time)

    def from_non_temporal_edge(self, edge: Edge) -> TemporalEdge:
        """Copy id, label, properties, membership and endpoints into a temporal edge."""
        return self.element_class(
            id=edge.id,
            source_id=edge.source_id,
            target_id=edge.target_id,
            **_copy_graph_element(edge),
        )
