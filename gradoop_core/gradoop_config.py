"""
Factory bundles used to build elements.

A config is what the loader (and any other producer of elements) receives;
swapping the config swaps the element kinds it creates.
"""

from dataclasses import dataclass, field

from gradoop_core.model.factories import (
    EdgeFactory,
    GraphHeadFactory,
    TemporalEdgeFactory,
    TemporalGraphHeadFactory,
    TemporalVertexFactory,
    VertexFactory,
)


@dataclass
class GradoopConfig:
    """
    Graph head, vertex and edge factories.

    Example:
        config = GradoopConfig.get_default_config()
        vertex = config.vertex_factory.create_vertex("Person")
    """

    graph_head_factory: GraphHeadFactory = field(default_factory=GraphHeadFactory)
    vertex_factory: VertexFactory = field(default_factory=VertexFactory)
    edge_factory: EdgeFactory = field(default_factory=EdgeFactory)

    @classmethod
    def get_default_config(cls) -> 'GradoopConfig':
        """Config with default labels taken from SETTINGS."""
        return cls()


@dataclass
class TemporalGradoopConfig(GradoopConfig):
    """Config producing temporal graph heads, vertices and edges."""

    graph_head_factory: TemporalGraphHeadFactory = field(default_factory=TemporalGraphHeadFactory)
    vertex_factory: TemporalVertexFactory = field(default_factory=TemporalVertexFactory)
    edge_factory: TemporalEdgeFactory = field(default_factory=TemporalEdgeFactory)

    @classmethod
    def create_config(cls) -> 'TemporalGradoopConfig':
        return cls()
