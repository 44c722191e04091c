"""
Gradoop Core Model - Graph Heads

A graph head carries the id, label and properties of a logical graph.
"""

from dataclasses import dataclass
from typing import Dict, Any

from .base import Element, ElementType
from .identifiers import GradoopId
from .properties import Properties


@dataclass(eq=False)
class GraphHead(Element):
    """
    Head of a logical graph.

    The members of the graph are the vertices and edges whose graph_ids
    contain this head's id; the head itself stores no member list.
    """

    def entity_type(self) -> ElementType:
        return ElementType.GRAPH_HEAD

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'GraphHead':
        return cls(
            id=GradoopId.from_string(data['id']),
            label=data.get('label', ''),
            properties=Properties.create_from_typed_map(data.get('properties')),
        )

    def __repr__(self) -> str:
        return f"GraphHead(id={self.id}, label={self.label})"


def is_graph_head(element: Element) -> bool:
    """Check if element is a GraphHead"""
    return isinstance(element, GraphHead)
