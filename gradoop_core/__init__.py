"""
Gradoop Core

EPGM property graph model: identifiers, typed properties, graph heads,
vertices and edges (with a bitemporal variant), factories and a GDL loader.
"""

from gradoop_core.exceptions import (
    GradoopError,
    FormatError,
    UnsupportedTypeError,
    TypeMismatchError,
    CorruptEncodingError,
    ParseError,
    ResourceError,
)
from gradoop_core.utils.config import SETTINGS, Settings
from gradoop_core.utils.logging_config import setup_logging
from gradoop_core.model import (
    GradoopId,
    GradoopIdSet,
    PropertyType,
    PropertyValue,
    Properties,
    GraphHead,
    Vertex,
    Edge,
    TemporalGraphHead,
    TemporalVertex,
    TemporalEdge,
    ValidationError,
    LogicalGraph,
    GraphCollection,
)
from gradoop_core.gradoop_config import GradoopConfig, TemporalGradoopConfig
from gradoop_core.ingest import AsciiGraphLoader, parse_gdl

__version__ = "0.1.0"

__all__ = [
    # Errors
    'GradoopError',
    'FormatError',
    'UnsupportedTypeError',
    'TypeMismatchError',
    'CorruptEncodingError',
    'ParseError',
    'ResourceError',
    'ValidationError',

    # Configuration
    'SETTINGS',
    'Settings',
    'setup_logging',
    'GradoopConfig',
    'TemporalGradoopConfig',

    # Model
    'GradoopId',
    'GradoopIdSet',
    'PropertyType',
    'PropertyValue',
    'Properties',
    'GraphHead',
    'Vertex',
    'Edge',
    'TemporalGraphHead',
    'TemporalVertex',
    'TemporalEdge',
    'LogicalGraph',
    'GraphCollection',

    # Loading
    'AsciiGraphLoader',
    'parse_gdl',
]
