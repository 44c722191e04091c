"""
Gradoop Core Model - Binary Serialization

Element layout (big-endian):

    kind byte            0 graph head, 1 vertex, 2 edge (+0x10 when temporal)
    id                   12 bytes
    label                4-byte length + UTF-8
    properties           4-byte count + (key, PropertyValue) pairs
    graph ids            4-byte count + 12 bytes each       (vertex, edge)
    source, target       12 bytes each                      (edge)
    valid/tx bounds      4 x signed 64-bit                  (temporal)
"""

from typing import Dict, Iterable, List, Type

from gradoop_core.exceptions import CorruptEncodingError, UnsupportedTypeError
from .base import Element, ElementType, GraphElement, ValidationError
from .binary import BinaryReader, BinaryWriter
from .edges import Edge
from .graph_head import GraphHead
from .identifiers import GradoopId, GradoopIdSet
from .properties import Properties
from .temporal import TemporalEdge, TemporalElement, TemporalGraphHead, TemporalVertex
from .vertices import Vertex

TEMPORAL_FLAG = 0x10

_KIND_CODES: Dict[ElementType, int] = {
    ElementType.GRAPH_HEAD: 0,
    ElementType.VERTEX: 1,
    ElementType.EDGE: 2,
}

_CLASSES: Dict[int, Type[Element]] = {
    0: GraphHead,
    1: Vertex,
    2: Edge,
    TEMPORAL_FLAG | 0: TemporalGraphHead,
    TEMPORAL_FLAG | 1: TemporalVertex,
    TEMPORAL_FLAG | 2: TemporalEdge,
}


def write_element(writer: BinaryWriter, element: Element) -> None:
    code = _KIND_CODES[element.entity_type()]
    if isinstance(element, TemporalElement):
        code |= TEMPORAL_FLAG
    writer.write_byte(code)
    element.id.write_to(writer)
    writer.write_string(element.label)
    element.properties.write_to(writer)

    if isinstance(element, GraphElement):
        element.graph_ids.write_to(writer)
    if isinstance(element, Edge):
        element.source_id.write_to(writer)
        element.target_id.write_to(writer)
    if isinstance(element, TemporalElement):
        writer.write_long(element.valid_from)
        writer.write_long(element.valid_to)
        writer.write_long(element.tx_from)
        writer.write_long(element.tx_to)


def read_element(reader: BinaryReader) -> Element:
    code = reader.read_byte()
    cls = _CLASSES.get(code)
    if cls is None:
        raise UnsupportedTypeError(f"Unknown element kind code: {code:#x}")

    fields = {
        'id': GradoopId.read_from(reader),
        'label': reader.read_string(),
        'properties': Properties.read_from(reader),
    }
    if issubclass(cls, GraphElement):
        fields['graph_ids'] = GradoopIdSet.read_from(reader)
    if issubclass(cls, Edge):
        fields['source_id'] = GradoopId.read_from(reader)
        fields['target_id'] = GradoopId.read_from(reader)
    if issubclass(cls, TemporalElement):
        fields['_valid_from'] = reader.read_long()
        fields['_valid_to'] = reader.read_long()
        fields['_tx_from'] = reader.read_long()
        fields['_tx_to'] = reader.read_long()
    try:
        return cls(**fields)
    except ValidationError as e:
        raise CorruptEncodingError(f"Invalid {cls.__name__} payload: {e}") from e


def encode_element(element: Element) -> bytes:
    """Encode a single element."""
    writer = BinaryWriter()
    write_element(writer, element)
    return writer.getvalue()


def decode_element(data: bytes) -> Element:
    """
    Decode a single element.

    Raises:
        CorruptEncodingError: truncated or trailing bytes
        UnsupportedTypeError: unknown element kind or property tag
    """
    reader = BinaryReader(data)
    element = read_element(reader)
    reader.expect_end()
    return element


def encode_elements(elements: Iterable[Element]) -> bytes:
    """Encode a count-prefixed sequence of elements."""
    elements = list(elements)
    writer = BinaryWriter()
    writer.write_length(len(elements))
    for element in elements:
        write_element(writer, element)
    return writer.getvalue()


def decode_elements(data: bytes) -> List[Element]:
    reader = BinaryReader(data)
    elements = [read_element(reader) for _ in range(reader.read_length())]
    reader.expect_end()
    return elements
