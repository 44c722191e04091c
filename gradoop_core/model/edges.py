"""
Gradoop Core Model - Edges
"""

from dataclasses import dataclass
from typing import Dict, Any, Optional

from .base import Element, ElementType, GraphElement, validate_id
from .identifiers import GradoopId, GradoopIdSet
from .properties import Properties


@dataclass(eq=False)
class Edge(GraphElement):
    """
    Directed EPGM edge.

    source_id and target_id are opaque vertex references; they need not
    resolve within the same in-memory collection. Self-loops are allowed.
    """

    source_id: Optional[GradoopId] = None
    target_id: Optional[GradoopId] = None

    def __post_init__(self):
        super().__post_init__()
        validate_id(self.source_id, "source_id")
        validate_id(self.target_id, "target_id")

    def entity_type(self) -> ElementType:
        return ElementType.EDGE

    def is_self_loop(self) -> bool:
        """Check if edge is a self-loop"""
        return self.source_id == self.target_id

    # -------------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result['source_id'] = str(self.source_id)
        result['target_id'] = str(self.target_id)
        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Edge':
        return cls(
            id=GradoopId.from_string(data['id']),
            label=data.get('label', ''),
            properties=Properties.create_from_typed_map(data.get('properties')),
            graph_ids=GradoopIdSet(GradoopId.from_string(g) for g in data.get('graph_ids', [])),
            source_id=GradoopId.from_string(data['source_id']),
            target_id=GradoopId.from_string(data['target_id']),
        )

    def __repr__(self) -> str:
        return f"Edge(id={self.id}, {self.source_id}-[{self.label}]->{self.target_id})"


def is_edge(element: Element) -> bool:
    """Check if element is an Edge"""
    return isinstance(element, Edge)
