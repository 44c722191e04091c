"""
GDL (Graph Definition Language) Parser

Turns GDL text into a small statement tree that the AsciiGraphLoader turns
into graph heads, vertices and edges.

Supported GDL:
- (a:Person {name: "Alice"})          vertex with variable, label, properties
- (a)-->(b), (a)<--(b)                anonymous directed edges
- (a)-[e:knows {since: 2014}]->(b)    edge with variable, label, properties
- (a)<-[e]-(b)                        incoming edge
- g:Community {area: "DB"}[ ... ]     graph with variable, label, properties
- // line and /* block */ comments

Statements and paths may be separated by ';' or ',' (both optional).
"""

import re
from dataclasses import dataclass, field
from typing import Dict, List, NamedTuple, Optional, Union

from gradoop_core.exceptions import ParseError
from gradoop_core.model.properties import INT_MAX, INT_MIN, LONG_MAX, LONG_MIN, PropertyValue

# =============================================================================
# Statement Tree
# =============================================================================

@dataclass
class VertexDecl:
    """One (...) occurrence. label / properties are None when omitted."""
    variable: Optional[str] = None
    label: Optional[str] = None
    properties: Optional[Dict[str, PropertyValue]] = None
    position: int = 0


@dataclass
class EdgeDecl:
    """One edge occurrence; outgoing is True for --> and -[...]->."""
    variable: Optional[str] = None
    label: Optional[str] = None
    properties: Optional[Dict[str, PropertyValue]] = None
    outgoing: bool = True
    position: int = 0


@dataclass
class PathDecl:
    """
    Alternating chain of vertices and edges.

    edges[i] connects vertices[i] and vertices[i + 1].
    """
    vertices: List[VertexDecl] = field(default_factory=list)
    edges: List[EdgeDecl] = field(default_factory=list)
    position: int = 0


@dataclass
class GraphDecl:
    variable: Optional[str] = None
    label: Optional[str] = None
    properties: Optional[Dict[str, PropertyValue]] = None
    paths: List[PathDecl] = field(default_factory=list)
    position: int = 0


Statement = Union[GraphDecl, PathDecl]


@dataclass
class GDLDatabase:
    """Parsed GDL text: top-level statements in source order."""
    statements: List[Statement] = field(default_factory=list)


# =============================================================================
# Tokenizer
# =============================================================================

class Token(NamedTuple):
    kind: str
    text: str
    position: int


# Order matters: compound arrows before single characters.
_TOKEN_SPEC = [
    ('WS', r'\s+'),
    ('LINE_COMMENT', r'//[^\n]*'),
    ('BLOCK_COMMENT', r'/\*.*?\*/'),
    ('STRING', r'"(?:[^"\\\n]|\\.)*"|\'(?:[^\'\\\n]|\\.)*\''),
    ('IN_EDGE_OPEN', r'<-\['),
    ('IN_ARROW', r'<--'),
    ('OUT_ARROW', r'-->'),
    ('OUT_EDGE_OPEN', r'-\['),
    ('OUT_EDGE_CLOSE', r'\]->'),
    ('IN_EDGE_CLOSE', r'\]-'),
    ('NUMBER', r'-?(?:\d+\.\d*|\.\d+|\d+)(?:[eE][+-]?\d+)?[lLfFdD]?'),
    ('IDENT', r'[A-Za-z_][A-Za-z0-9_]*'),
    ('PUNCT', r'[()\[\]{}:;,]'),
]

_TOKEN_RE = re.compile('|'.join(f'(?P<{name}>{pattern})' for name, pattern in _TOKEN_SPEC), re.DOTALL)

_NUMBER_RE = re.compile(r'(?P<body>-?(?:\d+\.\d*|\.\d+|\d+)(?P<exp>[eE][+-]?\d+)?)(?P<suffix>[lLfFdD]?)')

_ESCAPES = {'n': '\n', 't': '\t', 'r': '\r', '\\': '\\', '"': '"', "'": "'"}

_EDGE_STARTS = ('OUT_ARROW', 'IN_ARROW', 'OUT_EDGE_OPEN', 'IN_EDGE_OPEN')

_SKIPPED = ('WS', 'LINE_COMMENT', 'BLOCK_COMMENT')


def line_and_column(text: str, position: int) -> tuple:
    """One-based (line, column) of a character offset."""
    line = text.count('\n', 0, position) + 1
    column = position - (text.rfind('\n', 0, position) + 1) + 1
    return line, column


def _error(text: str, message: str, position: int) -> ParseError:
    line, column = line_and_column(text, position)
    return ParseError(message, position, line, column)


def tokenize(text: str) -> List[Token]:
    """
    Split GDL text into tokens, dropping whitespace and comments.

    Punctuation tokens use the character itself as kind. The list always
    ends with an EOF token.

    Raises:
        ParseError: unknown character, unterminated string or comment
    """
    tokens = []
    position = 0
    while position < len(text):
        match = _TOKEN_RE.match(text, position)
        if match is None:
            char = text[position]
            if char in '"\'':
                raise _error(text, "Unterminated string literal", position)
            if text.startswith('/*', position):
                raise _error(text, "Unterminated block comment", position)
            raise _error(text, f"Unexpected character {char!r}", position)

        kind = match.lastgroup
        if kind not in _SKIPPED:
            value = match.group()
            tokens.append(Token(value if kind == 'PUNCT' else kind, value, position))
        position = match.end()

    tokens.append(Token('EOF', '', len(text)))
    return tokens


# =============================================================================
# Parser
# =============================================================================

class GDLParser:
    """
    Recursive-descent parser for GDL.

    Example:
        database = GDLParser("g[(a)-[e:knows]->(b)]").parse()
        graph = database.statements[0]
        graph.variable, len(graph.paths)    # ('g', 1)
    """

    def __init__(self, text: str):
        self.text = text
        self.tokens = tokenize(text)
        self.index = 0

    # -------------------------------------------------------------------------
    # Token helpers
    # -------------------------------------------------------------------------

    def _peek(self) -> Token:
        return self.tokens[self.index]

    def _advance(self) -> Token:
        token = self.tokens[self.index]
        if token.kind != 'EOF':
            self.index += 1
        return token

    def _accept(self, kind: str) -> Optional[Token]:
        if self._peek().kind == kind:
            return self._advance()
        return None

    def _expect(self, kind: str, what: str) -> Token:
        token = self._peek()
        if token.kind != kind:
            raise self._unexpected(token, what)
        return self._advance()

    def _unexpected(self, token: Token, what: str) -> ParseError:
        found = "end of input" if token.kind == 'EOF' else repr(token.text)
        return _error(self.text, f"Expected {what}, found {found}", token.position)

    def _opens_graph(self) -> bool:
        token = self._peek()
        if token.kind == '[':
            return True
        return token.kind == 'IDENT' and self.tokens[self.index + 1].kind in ('[', ':')

    def _skip_separator(self) -> None:
        if self._peek().kind in (';', ','):
            self._advance()

    # -------------------------------------------------------------------------
    # Grammar
    # -------------------------------------------------------------------------

    def parse(self) -> GDLDatabase:
        """
        Parse the whole text.

        Raises:
            ParseError: on the first malformed construct
        """
        database = GDLDatabase()
        while self._peek().kind != 'EOF':
            database.statements.append(self._statement())
            self._skip_separator()
        return database

    def _statement(self) -> Statement:
        kind = self._peek().kind
        if kind == '(':
            return self._path()
        if kind in ('IDENT', ':', '{', '['):
            return self._graph()
        raise self._unexpected(self._peek(), "a graph or a path")

    def _graph(self) -> GraphDecl:
        start = self._peek().position
        variable, label, properties = self._element_body()
        self._expect('[', "'[' to open a graph")

        graph = GraphDecl(variable, label, properties, position=start)
        while self._peek().kind == '(':
            graph.paths.append(self._path())
            self._skip_separator()

        if self._opens_graph():
            raise _error(self.text, "Graphs cannot be nested", self._peek().position)
        self._expect(']', "'(' or ']' to close the graph")
        return graph

    def _path(self) -> PathDecl:
        path = PathDecl(position=self._peek().position)
        path.vertices.append(self._vertex())
        while self._peek().kind in _EDGE_STARTS:
            path.edges.append(self._edge())
            path.vertices.append(self._vertex())
        return path

    def _vertex(self) -> VertexDecl:
        start = self._expect('(', "'(' to open a vertex").position
        variable, label, properties = self._element_body()
        self._expect(')', "')' to close the vertex")
        return VertexDecl(variable, label, properties, start)

    def _edge(self) -> EdgeDecl:
        token = self._advance()
        if token.kind == 'OUT_ARROW':
            return EdgeDecl(outgoing=True, position=token.position)
        if token.kind == 'IN_ARROW':
            return EdgeDecl(outgoing=False, position=token.position)

        variable, label, properties = self._element_body()
        if token.kind == 'OUT_EDGE_OPEN':
            self._expect('OUT_EDGE_CLOSE', "']->' to close the edge")
            outgoing = True
        else:
            self._expect('IN_EDGE_CLOSE', "']-' to close the edge")
            outgoing = False
        return EdgeDecl(variable, label, properties, outgoing, token.position)

    def _element_body(self) -> tuple:
        """[variable] [':' label] [properties]"""
        variable = label = properties = None
        token = self._accept('IDENT')
        if token:
            variable = token.text
        if self._accept(':'):
            label = self._expect('IDENT', "a label after ':'").text
        if self._peek().kind == '{':
            properties = self._properties()
        return variable, label, properties

    def _properties(self) -> Dict[str, PropertyValue]:
        self._expect('{', "'{'")
        properties: Dict[str, PropertyValue] = {}
        if self._accept('}'):
            return properties

        while True:
            key = self._expect('IDENT', "a property key").text
            self._expect(':', "':' after the property key")
            properties[key] = self._literal()
            if self._accept('}'):
                return properties
            self._expect(',', "',' or '}' in the property list")

    # -------------------------------------------------------------------------
    # Literals
    # -------------------------------------------------------------------------

    def _literal(self) -> PropertyValue:
        token = self._peek()
        if token.kind == 'STRING':
            self._advance()
            return PropertyValue.of_string(self._unquote(token))
        if token.kind == 'NUMBER':
            self._advance()
            return self._number(token)
        if token.kind == 'IDENT':
            if token.text == 'true':
                self._advance()
                return PropertyValue.of_boolean(True)
            if token.text == 'false':
                self._advance()
                return PropertyValue.of_boolean(False)
            if token.text in ('null', 'NULL'):
                self._advance()
                return PropertyValue.null()
        raise self._unexpected(token, "a literal")

    def _unquote(self, token: Token) -> str:
        body = token.text[1:-1]
        chars = []
        i = 0
        while i < len(body):
            char = body[i]
            if char == '\\':
                escaped = body[i + 1]
                if escaped not in _ESCAPES:
                    raise _error(self.text, f"Invalid escape sequence '\\{escaped}'",
                                 token.position + 1 + i)
                chars.append(_ESCAPES[escaped])
                i += 2
            else:
                chars.append(char)
                i += 1
        return ''.join(chars)

    def _number(self, token: Token) -> PropertyValue:
        """
        Numeric literal typing:

        12      INTEGER (LONG when outside 32 bits)
        12L     LONG
        1.5     DOUBLE   (also 1e3, 1.5d)
        1.5f    FLOAT
        """
        match = _NUMBER_RE.fullmatch(token.text)
        body, suffix = match.group('body'), match.group('suffix').lower()
        is_integral = '.' not in body and match.group('exp') is None

        if suffix == 'l' and not is_integral:
            raise _error(self.text, f"Invalid long literal {token.text}", token.position)
        if suffix == 'f':
            try:
                return PropertyValue.of_float(float(body))
            except ValueError as e:
                raise _error(self.text, str(e), token.position) from e
        if suffix == 'd' or not is_integral:
            return PropertyValue.of_double(float(body))

        value = int(body)
        if suffix == 'l' or not INT_MIN <= value <= INT_MAX:
            if not LONG_MIN <= value <= LONG_MAX:
                raise _error(self.text, f"Integer literal {token.text} exceeds 64 bits",
                             token.position)
            return PropertyValue.of_long(value)
        return PropertyValue.of_int(value)


def parse_gdl(text: str) -> GDLDatabase:
    """Parse GDL text into a GDLDatabase."""
    return GDLParser(text).parse()
