"""
Gradoop Core Ingestion Module

Core functions:
- parse_gdl: Parse GDL text into graph and path statements
- AsciiGraphLoader: Build graph heads, vertices and edges from GDL

Direct usage:
    from gradoop_core.ingest import AsciiGraphLoader

    loader = AsciiGraphLoader.from_string("g[(a)-[e:knows]->(b)]")
    loader.get_edges_by_graph_variables("g")
"""

from .gdl_parser import GDLDatabase, GDLParser, parse_gdl, tokenize
from .ascii_graph_loader import AsciiGraphLoader

__all__ = [
    'AsciiGraphLoader',
    'GDLDatabase',
    'GDLParser',
    'parse_gdl',
    'tokenize',
]
