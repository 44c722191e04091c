"""
Gradoop Core Model - Vertices
"""

from dataclasses import dataclass
from typing import Dict, Any

from .base import Element, ElementType, GraphElement
from .identifiers import GradoopId, GradoopIdSet
from .properties import Properties


@dataclass(eq=False)
class Vertex(GraphElement):
    """
    EPGM vertex.

    Example:
        vertex = VertexFactory().create_vertex("Person", {"name": "Alice"})
        vertex.add_graph_id(community.id)
    """

    def entity_type(self) -> ElementType:
        return ElementType.VERTEX

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Vertex':
        return cls(
            id=GradoopId.from_string(data['id']),
            label=data.get('label', ''),
            properties=Properties.create_from_typed_map(data.get('properties')),
            graph_ids=GradoopIdSet(GradoopId.from_string(g) for g in data.get('graph_ids', [])),
        )

    # -------------------------------------------------------------------------
    # String Representation
    # -------------------------------------------------------------------------

    def __str__(self) -> str:
        lines = [
            f"Vertex: {self.id}",
            f"  Label: {self.label}",
            f"  Graphs: {self.graph_count}",
        ]
        if len(self.properties):
            lines.append("  Properties:")
            for prop in list(self.properties)[:5]:
                lines.append(f"    {prop.key}: {prop.value}")
            if len(self.properties) > 5:
                lines.append(f"    ... ({len(self.properties) - 5} more)")
        return '\n'.join(lines)

    def __repr__(self) -> str:
        return f"Vertex(id={self.id}, label={self.label})"


def is_vertex(element: Element) -> bool:
    """Check if element is a Vertex"""
    return isinstance(element, Vertex)
