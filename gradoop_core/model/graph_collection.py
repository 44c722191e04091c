"""
Gradoop Core Model - Logical Graphs and Graph Collections

In-memory views over graph heads, vertices and edges. Membership is always
computed from the elements' graph_ids; heads hold no member lists.

Both views export to a NetworkX MultiDiGraph for analysis.
"""

from dataclasses import dataclass, field
from typing import Iterable, List, Optional

import networkx as nx

from .base import GraphElement
from .edges import Edge
from .graph_head import GraphHead
from .identifiers import GradoopId, GradoopIdSet, IdLike, to_id_set
from .vertices import Vertex


def filter_by_graph_ids(elements: Iterable[GraphElement], graph_ids: IdLike) -> list:
    """Elements contained in at least one of the given graphs."""
    graph_ids = to_id_set(graph_ids)
    return [element for element in elements if element.is_in_any_of(graph_ids)]


def _to_networkx(graph: nx.MultiDiGraph, vertices: Iterable[Vertex], edges: Iterable[Edge]) -> nx.MultiDiGraph:
    for vertex in vertices:
        graph.add_node(
            str(vertex.id),
            data=vertex,
            label=vertex.label,
            properties=vertex.properties.to_dict(),
            graph_ids=sorted(str(g) for g in vertex.graph_ids),
        )

    # Endpoints outside the vertex set become attribute-less nodes.
    for edge in edges:
        graph.add_edge(
            str(edge.source_id),
            str(edge.target_id),
            key=str(edge.id),
            data=edge,
            label=edge.label,
            properties=edge.properties.to_dict(),
            graph_ids=sorted(str(g) for g in edge.graph_ids),
        )
    return graph


# =============================================================================
# LogicalGraph
# =============================================================================

@dataclass
class LogicalGraph:
    """
    One graph head plus the vertices and edges contained in it.

    Example:
        graph = loader.get_logical_graph_by_variable("g")
        graph.vertex_count, graph.edge_count
    """

    graph_head: GraphHead
    vertices: List[Vertex] = field(default_factory=list)
    edges: List[Edge] = field(default_factory=list)

    @property
    def id(self) -> GradoopId:
        return self.graph_head.id

    @property
    def vertex_count(self) -> int:
        return len(self.vertices)

    @property
    def edge_count(self) -> int:
        return len(self.edges)

    def get_vertex_by_id(self, vertex_id: GradoopId) -> Optional[Vertex]:
        for vertex in self.vertices:
            if vertex.id == vertex_id:
                return vertex
        return None

    def to_networkx(self) -> nx.MultiDiGraph:
        graph = nx.MultiDiGraph(
            id=str(self.graph_head.id),
            label=self.graph_head.label,
            properties=self.graph_head.properties.to_dict(),
        )
        return _to_networkx(graph, self.vertices, self.edges)

    def __repr__(self) -> str:
        return (f"LogicalGraph(id={self.graph_head.id}, label={self.graph_head.label}, "
                f"{self.vertex_count} vertices, {self.edge_count} edges)")


# =============================================================================
# GraphCollection
# =============================================================================

@dataclass
class GraphCollection:
    """
    Several graph heads plus the union of their elements.

    A vertex shared by two graphs appears once.
    """

    graph_heads: List[GraphHead] = field(default_factory=list)
    vertices: List[Vertex] = field(default_factory=list)
    edges: List[Edge] = field(default_factory=list)

    @property
    def graph_ids(self) -> GradoopIdSet:
        return GradoopIdSet(head.id for head in self.graph_heads)

    def get_graph_head(self, graph_id: GradoopId) -> Optional[GraphHead]:
        for head in self.graph_heads:
            if head.id == graph_id:
                return head
        return None

    def get_graph(self, graph_id: GradoopId) -> Optional[LogicalGraph]:
        """Logical graph for one head of this collection, or None."""
        head = self.get_graph_head(graph_id)
        if head is None:
            return None
        return LogicalGraph(
            graph_head=head,
            vertices=[v for v in self.vertices if v.is_in_graph(graph_id)],
            edges=[e for e in self.edges if e.is_in_graph(graph_id)],
        )

    def get_graphs(self, *graph_ids: GradoopId) -> 'GraphCollection':
        """Sub-collection of the given graphs (unknown ids are ignored)."""
        wanted = GradoopIdSet.from_existing(*graph_ids)
        return GraphCollection(
            graph_heads=[h for h in self.graph_heads if h.id in wanted],
            vertices=filter_by_graph_ids(self.vertices, wanted),
            edges=filter_by_graph_ids(self.edges, wanted),
        )

    def to_networkx(self) -> nx.MultiDiGraph:
        graph = nx.MultiDiGraph(graph_ids=sorted(str(h.id) for h in self.graph_heads))
        return _to_networkx(graph, self.vertices, self.edges)

    def __len__(self) -> int:
        return len(self.graph_heads)

    def __repr__(self) -> str:
        return (f"GraphCollection({len(self.graph_heads)} graphs, "
                f"{len(self.vertices)} vertices, {len(self.edges)} edges)")
