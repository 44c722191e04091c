"""
Gradoop Core Model - Base Classes

Typed base classes shared by graph heads, vertices and edges.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Any, Optional, Set

from gradoop_core.exceptions import GradoopError
from gradoop_core.model.identifiers import GradoopId, GradoopIdSet, IdLike, to_id_set
from gradoop_core.model.properties import Properties, PropertyValue

# =============================================================================
# Enums
# =============================================================================

class ElementType(Enum):
    """Kind of EPGM element"""
    GRAPH_HEAD = "GraphHead"
    VERTEX = "Vertex"
    EDGE = "Edge"


# =============================================================================
# Validation
# =============================================================================

class ValidationError(GradoopError, ValueError):
    """Raised when element validation fails"""
    pass


def validate_id(gradoop_id: Any, what: str = "id") -> None:
    """
    Validate an element identifier.

    Raises:
        ValidationError: If the value is missing or not a GradoopId
    """
    if gradoop_id is None:
        raise ValidationError(f"{what} must not be None")
    if not isinstance(gradoop_id, GradoopId):
        raise ValidationError(f"Invalid {what}: {gradoop_id!r}")


def validate_label(label: Any) -> None:
    """
    Validate element label.

    Raises:
        ValidationError: If label is not a string
    """
    if not isinstance(label, str):
        raise ValidationError(f"Invalid label: {label!r}")


# =============================================================================
# Base Element
# =============================================================================

@dataclass(eq=False)
class Element(ABC):
    """
    Base class for all EPGM elements.

    All elements have:
    - Unique identifier (id)
    - Label
    - Typed properties

    Python equality is identity by id; use epgm_equals() to compare
    label and properties.
    """

    id: Optional[GradoopId] = None
    label: str = ""
    properties: Properties = field(default_factory=Properties)

    def __post_init__(self):
        validate_id(self.id)
        validate_label(self.label)
        if self.properties is None:
            self.properties = Properties()

    @abstractmethod
    def entity_type(self) -> ElementType:
        """Return the kind of this element"""
        pass

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    def set_property(self, key: str, value: Any) -> None:
        """Add or update a property."""
        self.properties.set(key, value)

    def get_property_value(self, key: str) -> Optional[PropertyValue]:
        return self.properties.get(key)

    def has_property(self, key: str) -> bool:
        return key in self.properties

    def remove_property(self, key: str) -> Optional[PropertyValue]:
        return self.properties.remove(key)

    @property
    def property_keys(self) -> Set[str]:
        return self.properties.keys()

    @property
    def property_count(self) -> int:
        return len(self.properties)

    # -------------------------------------------------------------------------
    # Comparison
    # -------------------------------------------------------------------------

    def epgm_equals(self, other: 'Element') -> bool:
        """Data equality: same label and same properties, ids ignored."""
        return (
            isinstance(other, Element)
            and self.label == other.label
            and self.properties == other.properties
        )

    def __hash__(self) -> int:
        return hash(self.id)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Element):
            return False
        return self.entity_type() is other.entity_type() and self.id == other.id

    # -------------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': str(self.id),
            'type': self.entity_type().value,
            'label': self.label,
            'properties': self.properties.to_typed_dict(),
        }


# =============================================================================
# Graph Element (Vertex, Edge)
# =============================================================================

@dataclass(eq=False)
class GraphElement(Element):
    """
    Element that can be contained in logical graphs.

    Membership lives on the element: a graph head never lists its members.
    """

    graph_ids: GradoopIdSet = field(default_factory=GradoopIdSet)

    def __post_init__(self):
        super().__post_init__()
        if not isinstance(self.graph_ids, GradoopIdSet):
            self.graph_ids = to_id_set(self.graph_ids)

    def add_graph_id(self, graph_id: GradoopId) -> None:
        self.graph_ids.add(graph_id)

    def remove_graph_id(self, graph_id: GradoopId) -> None:
        self.graph_ids.remove(graph_id)

    def set_graph_ids(self, graph_ids: Optional[IdLike]) -> None:
        self.graph_ids = to_id_set(graph_ids)

    @property
    def graph_count(self) -> int:
        return len(self.graph_ids)

    # -------------------------------------------------------------------------
    # Membership predicates
    # -------------------------------------------------------------------------

    def is_in_graph(self, graph_id: GradoopId) -> bool:
        return graph_id in self.graph_ids

    def is_in_any_of(self, graph_ids: IdLike) -> bool:
        return self.graph_ids.contains_any(graph_ids)

    def is_in_all_of(self, graph_ids: IdLike) -> bool:
        return self.graph_ids.contains_all(graph_ids)

    def is_in_none_of(self, graph_ids: IdLike) -> bool:
        return not self.graph_ids.contains_any(graph_ids)

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result['graph_ids'] = sorted(str(graph_id) for graph_id in self.graph_ids)
        return result


# =============================================================================
# Utility Functions
# =============================================================================

def epgm_equals(first: Element, second: Element) -> bool:
    """Compare two elements by label and properties."""
    return first.epgm_equals(second)
