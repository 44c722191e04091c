"""
Build graph heads, vertices and edges from GDL text.

    loader = AsciiGraphLoader.from_string(
        'g:Community[(alice:Person {name: "Alice"})-[:knows]->(bob:Person)]'
    )
    alice = loader.get_vertex_by_variable("alice")
    members = loader.get_vertices_by_graph_variables("g")

Named elements are cached by variable: a later occurrence of the same name
reuses the first instance and only adds graph membership. Unnamed elements
are always fresh.
"""

import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional, TextIO, Union

from gradoop_core.exceptions import ResourceError
from gradoop_core.gradoop_config import GradoopConfig
from gradoop_core.ingest.gdl_parser import (
    EdgeDecl, GDLDatabase, GraphDecl, PathDecl, VertexDecl, parse_gdl,
)
from gradoop_core.model.base import Element
from gradoop_core.model.edges import Edge
from gradoop_core.model.graph_collection import GraphCollection, LogicalGraph, filter_by_graph_ids
from gradoop_core.model.graph_head import GraphHead
from gradoop_core.model.identifiers import GradoopId, GradoopIdSet, IdLike
from gradoop_core.model.properties import Properties
from gradoop_core.model.vertices import Vertex

logger = logging.getLogger(__name__)


def _properties(literals: Optional[Dict]) -> Properties:
    properties = Properties()
    for key, value in (literals or {}).items():
        properties.set(key, value)
    return properties


class AsciiGraphLoader:
    """
    Loader for GDL text.

    Construct through from_string(), from_file() or from_stream(). Every
    loader owns its caches; nothing is shared between loaders.
    """

    def __init__(self, database: GDLDatabase, config: Optional[GradoopConfig] = None):
        self.config = config if config is not None else GradoopConfig.get_default_config()

        self._graph_head_cache: Dict[str, GraphHead] = {}
        self._vertex_cache: Dict[str, Vertex] = {}
        self._edge_cache: Dict[str, Edge] = {}

        # Insertion-ordered, keyed by id
        self._graph_heads: Dict[GradoopId, GraphHead] = {}
        self._vertices: Dict[GradoopId, Vertex] = {}
        self._edges: Dict[GradoopId, Edge] = {}

        for statement in database.statements:
            if isinstance(statement, GraphDecl):
                self._load_graph(statement)
            else:
                self._load_path(statement, None)

    # =========================================================================
    # Constructors
    # =========================================================================

    @classmethod
    def from_string(cls, text: str, config: Optional[GradoopConfig] = None) -> 'AsciiGraphLoader':
        """
        Load GDL text.

        Raises:
            ParseError: if the text is malformed
        """
        loader = cls(parse_gdl(text), config)
        logger.info(f"Loaded GDL: {loader.stats()}")
        return loader

    @classmethod
    def from_file(cls, path: Union[str, Path], config: Optional[GradoopConfig] = None) -> 'AsciiGraphLoader':
        """
        Load a UTF-8 encoded GDL file.

        Raises:
            ResourceError: if the file cannot be read
            ParseError: if its content is malformed
        """
        path = Path(path)
        logger.debug(f"Reading GDL file {path}")
        try:
            text = path.read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError) as e:
            raise ResourceError(f"Cannot read GDL file {path}: {e}", path=str(path)) from e
        return cls.from_string(text, config)

    @classmethod
    def from_stream(cls, stream: TextIO, config: Optional[GradoopConfig] = None) -> 'AsciiGraphLoader':
        """
        Load GDL from an open text or binary stream (binary is decoded as UTF-8).

        Raises:
            ResourceError: if the stream cannot be read
            ParseError: if its content is malformed
        """
        try:
            text = stream.read()
            if isinstance(text, bytes):
                text = text.decode('utf-8')
        except (OSError, ValueError) as e:
            # ValueError covers closed streams and UnicodeDecodeError
            raise ResourceError(f"Cannot read GDL stream: {e}") from e
        return cls.from_string(text, config)

    # =========================================================================
    # Construction
    # =========================================================================

    def _load_graph(self, decl: GraphDecl) -> None:
        graph_head = self._graph_head_cache.get(decl.variable) if decl.variable else None
        if graph_head is None:
            graph_head = self.config.graph_head_factory.create_graph_head(
                decl.label, _properties(decl.properties)
            )
            if decl.variable:
                self._graph_head_cache[decl.variable] = graph_head
            self._graph_heads[graph_head.id] = graph_head
        else:
            self._check_reuse(graph_head, decl, decl.variable)

        for path in decl.paths:
            self._load_path(path, graph_head.id)

    def _load_path(self, path: PathDecl, graph_id: Optional[GradoopId]) -> None:
        vertices = [self._load_vertex(decl, graph_id) for decl in path.vertices]
        for i, decl in enumerate(path.edges):
            left, right = vertices[i], vertices[i + 1]
            if decl.outgoing:
                self._load_edge(decl, left, right, graph_id)
            else:
                self._load_edge(decl, right, left, graph_id)

    def _load_vertex(self, decl: VertexDecl, graph_id: Optional[GradoopId]) -> Vertex:
        vertex = self._vertex_cache.get(decl.variable) if decl.variable else None
        if vertex is None:
            vertex = self.config.vertex_factory.create_vertex(
                decl.label, _properties(decl.properties)
            )
            if decl.variable:
                self._vertex_cache[decl.variable] = vertex
            self._vertices[vertex.id] = vertex
        else:
            self._check_reuse(vertex, decl, decl.variable)

        if graph_id is not None:
            vertex.add_graph_id(graph_id)
        return vertex

    def _load_edge(self, decl: EdgeDecl, source: Vertex, target: Vertex,
                   graph_id: Optional[GradoopId]) -> Edge:
        edge = self._edge_cache.get(decl.variable) if decl.variable else None
        if edge is None:
            edge = self.config.edge_factory.create_edge(
                source.id, target.id, decl.label, _properties(decl.properties)
            )
            if decl.variable:
                self._edge_cache[decl.variable] = edge
            self._edges[edge.id] = edge
        else:
            self._check_reuse(edge, decl, decl.variable)
            if (edge.source_id, edge.target_id) != (source.id, target.id):
                logger.debug(f"Edge '{decl.variable}' reused between other vertices; "
                             f"keeping {edge.source_id}->{edge.target_id}")

        if graph_id is not None:
            edge.add_graph_id(graph_id)
        return edge

    @staticmethod
    def _check_reuse(element: Element, decl, variable: str) -> None:
        # First declaration wins; later label/properties are ignored.
        if decl.label is not None and decl.label != element.label:
            logger.debug(f"Variable '{variable}' redeclared with label '{decl.label}'; "
                         f"keeping '{element.label}'")
        if decl.properties is not None and _properties(decl.properties) != element.properties:
            logger.debug(f"Variable '{variable}' redeclared with other properties; "
                         f"keeping {element.properties}")

    # =========================================================================
    # Graph heads
    # =========================================================================

    def get_graph_heads(self) -> List[GraphHead]:
        return list(self._graph_heads.values())

    def get_graph_head_by_variable(self, variable: str) -> Optional[GraphHead]:
        return self._graph_head_cache.get(variable)

    def get_graph_heads_by_variables(self, *variables: str) -> List[GraphHead]:
        """Graph heads bound to the given names; unknown names are skipped."""
        return _lookup(self._graph_head_cache, variables)

    def get_graph_head_cache(self) -> Dict[str, GraphHead]:
        return dict(self._graph_head_cache)

    # =========================================================================
    # Vertices
    # =========================================================================

    def get_vertices(self) -> List[Vertex]:
        return list(self._vertices.values())

    def get_vertex_by_variable(self, variable: str) -> Optional[Vertex]:
        return self._vertex_cache.get(variable)

    def get_vertices_by_variables(self, *variables: str) -> List[Vertex]:
        return _lookup(self._vertex_cache, variables)

    def get_vertices_by_graph_ids(self, graph_ids: IdLike) -> List[Vertex]:
        """Vertices contained in at least one of the given graphs."""
        return filter_by_graph_ids(self._vertices.values(), graph_ids)

    def get_vertices_by_graph_variables(self, *variables: str) -> List[Vertex]:
        return self.get_vertices_by_graph_ids(self._graph_ids_of(variables))

    def get_vertex_cache(self) -> Dict[str, Vertex]:
        return dict(self._vertex_cache)

    # =========================================================================
    # Edges
    # =========================================================================

    def get_edges(self) -> List[Edge]:
        return list(self._edges.values())

    def get_edge_by_variable(self, variable: str) -> Optional[Edge]:
        return self._edge_cache.get(variable)

    def get_edges_by_variables(self, *variables: str) -> List[Edge]:
        return _lookup(self._edge_cache, variables)

    def get_edges_by_graph_ids(self, graph_ids: IdLike) -> List[Edge]:
        """Edges contained in at least one of the given graphs."""
        return filter_by_graph_ids(self._edges.values(), graph_ids)

    def get_edges_by_graph_variables(self, *variables: str) -> List[Edge]:
        return self.get_edges_by_graph_ids(self._graph_ids_of(variables))

    def get_edge_cache(self) -> Dict[str, Edge]:
        return dict(self._edge_cache)

    # =========================================================================
    # Graph views
    # =========================================================================

    def get_logical_graph_by_variable(self, variable: str) -> Optional[LogicalGraph]:
        graph_head = self.get_graph_head_by_variable(variable)
        if graph_head is None:
            return None
        return LogicalGraph(
            graph_head=graph_head,
            vertices=self.get_vertices_by_graph_ids([graph_head.id]),
            edges=self.get_edges_by_graph_ids([graph_head.id]),
        )

    def get_graph_collection(self) -> GraphCollection:
        """Everything loaded, including elements outside every graph."""
        return GraphCollection(self.get_graph_heads(), self.get_vertices(), self.get_edges())

    def get_graph_collection_by_variables(self, *variables: str) -> GraphCollection:
        graph_ids = self._graph_ids_of(variables)
        return GraphCollection(
            graph_heads=self.get_graph_heads_by_variables(*variables),
            vertices=self.get_vertices_by_graph_ids(graph_ids),
            edges=self.get_edges_by_graph_ids(graph_ids),
        )

    # =========================================================================
    # Helpers
    # =========================================================================

    def _graph_ids_of(self, variables: Iterable[str]) -> GradoopIdSet:
        return GradoopIdSet(head.id for head in self.get_graph_heads_by_variables(*variables))

    def stats(self) -> Dict[str, int]:
        return {
            'graph_heads': len(self._graph_heads),
            'vertices': len(self._vertices),
            'edges': len(self._edges),
        }

    def __repr__(self) -> str:
        stats = self.stats()
        return (f"AsciiGraphLoader({stats['graph_heads']} graph heads, "
                f"{stats['vertices']} vertices, {stats['edges']} edges)")


def _lookup(cache: Dict[str, Element], variables: Iterable[str]) -> list:
    found = {}
    for variable in variables:
        element = cache.get(variable)
        if element is not None:
            found[element.id] = element
    return list(found.values())
