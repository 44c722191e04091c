# tests/test_gdl_parser.py
"""
Tests for the GDL tokenizer and parser.
"""

import math

import pytest

from gradoop_core.exceptions import ParseError
from gradoop_core.ingest.gdl_parser import GraphDecl, PathDecl, parse_gdl, tokenize
from gradoop_core.model.properties import PropertyType, PropertyValue


def _vertex_properties(text: str) -> dict:
    statement = parse_gdl(f"(v {text})").statements[0]
    return statement.vertices[0].properties


# =============================================================================
# Tokenizer
# =============================================================================

class TestTokenizer:

    def test_compound_arrows(self):
        kinds = [t.kind for t in tokenize("()-->()<--()-[e]->()<-[f]-()")]
        assert kinds == [
            '(', ')', 'OUT_ARROW', '(', ')', 'IN_ARROW', '(', ')',
            'OUT_EDGE_OPEN', 'IDENT', 'OUT_EDGE_CLOSE', '(', ')',
            'IN_EDGE_OPEN', 'IDENT', 'IN_EDGE_CLOSE', '(', ')', 'EOF',
        ]

    def test_comments_and_whitespace_dropped(self):
        tokens = tokenize("// heading\n(a) /* inline\ncomment */ (b)")
        assert [t.text for t in tokens] == ['(', 'a', ')', '(', 'b', ')', '']

    def test_positions(self):
        tokens = tokenize("  (a)")
        assert tokens[0].position == 2
        assert tokens[1].position == 3

    def test_unexpected_character(self):
        with pytest.raises(ParseError) as info:
            tokenize("(a)\n  #")
        assert (info.value.line, info.value.column, info.value.position) == (2, 3, 6)

    def test_unterminated_string(self):
        with pytest.raises(ParseError, match="Unterminated string"):
            tokenize('(a {name: "Alice})')

    def test_unterminated_comment(self):
        with pytest.raises(ParseError, match="Unterminated block comment"):
            tokenize("(a) /* never closed")


# =============================================================================
# Structure
# =============================================================================

class TestParserStructure:

    def test_graph_with_path(self):
        database = parse_gdl('g:Community {area: "DB"}[(a:Person)-[e:knows]->(b)]')
        graph = database.statements[0]
        assert isinstance(graph, GraphDecl)
        assert (graph.variable, graph.label) == ("g", "Community")
        assert graph.properties == {"area": PropertyValue.of_string("DB")}

        path = graph.paths[0]
        assert [v.variable for v in path.vertices] == ["a", "b"]
        assert path.vertices[0].label == "Person"
        assert path.vertices[1].label is None
        assert path.edges[0].variable == "e" and path.edges[0].outgoing

    def test_anonymous_graph(self):
        graph = parse_gdl("[()]").statements[0]
        assert graph.variable is None and graph.label is None and graph.properties is None
        assert len(graph.paths) == 1

    def test_label_only_graph(self):
        graph = parse_gdl(":Community[]").statements[0]
        assert graph.label == "Community"
        assert graph.paths == []

    def test_top_level_path(self):
        path = parse_gdl("(a)<--(b)").statements[0]
        assert isinstance(path, PathDecl)
        assert not path.edges[0].outgoing

    def test_incoming_edge_with_body(self):
        edge = parse_gdl("(a)<-[e:knows {since: 2014}]-(b)").statements[0].edges[0]
        assert (edge.variable, edge.label, edge.outgoing) == ("e", "knows", False)
        assert edge.properties["since"] == PropertyValue.of_int(2014)

    @pytest.mark.parametrize("text, count", [
        ("g[()];h[()]", 2),
        ("g[()],h[()]", 2),
        ("g[()] h[()]", 2),
        ("(a);(b);()", 3),
        ("(a)(b)", 2),
        ("", 0),
        ("// nothing here", 0),
    ])
    def test_separators_are_optional(self, text, count):
        assert len(parse_gdl(text).statements) == count

    def test_paths_inside_graph(self):
        graph = parse_gdl("g[(a);(b),(c) (d)]").statements[0]
        assert len(graph.paths) == 4

    def test_empty_property_block(self):
        assert _vertex_properties("{}") == {}
        assert parse_gdl("(v)").statements[0].vertices[0].properties is None


# =============================================================================
# Literals
# =============================================================================

class TestLiterals:

    @pytest.mark.parametrize("literal, kind, value", [
        ("23", PropertyType.INTEGER, 23),
        ("-23", PropertyType.INTEGER, -23),
        ("2147483648", PropertyType.LONG, 2147483648),
        ("23L", PropertyType.LONG, 23),
        ("23l", PropertyType.LONG, 23),
        ("2.5", PropertyType.DOUBLE, 2.5),
        ("1e3", PropertyType.DOUBLE, 1000.0),
        ("2.5d", PropertyType.DOUBLE, 2.5),
        ("2.5f", PropertyType.FLOAT, 2.5),
        ("true", PropertyType.BOOLEAN, True),
        ("false", PropertyType.BOOLEAN, False),
        ("NULL", PropertyType.NULL, None),
        ("null", PropertyType.NULL, None),
        ('"23"', PropertyType.STRING, "23"),
        ("'single'", PropertyType.STRING, "single"),
    ])
    def test_literal_kinds(self, literal, kind, value):
        parsed = _vertex_properties(f"{{key: {literal}}}")["key"]
        assert parsed.kind is kind
        assert parsed.value == value

    def test_string_escapes(self):
        parsed = _vertex_properties(r'{s: "a\"b\\c\nd\te", t: ' + r"'it\'s'}")
        assert parsed["s"].get_string() == 'a"b\\c\nd\te'
        assert parsed["t"].get_string() == "it's"

    def test_float_rounding(self):
        parsed = _vertex_properties("{f: 2.3f}")["f"]
        assert parsed == PropertyValue.of_float(2.3)
        assert not math.isclose(parsed.get_float(), 2.3, rel_tol=0, abs_tol=1e-12)

    def test_multiple_properties(self):
        parsed = _vertex_properties('{name: "Alice", age: 23, active: true}')
        assert list(parsed) == ["name", "age", "active"]

    @pytest.mark.parametrize("text", [
        "(v {n: 99999999999999999999})",
        "(v {n: 1.5L})",
        "(v {n: 1e50f})",
        r'(v {s: "bad \q escape"})',
        "(v {n: True})",
        "(v {n: })",
    ])
    def test_invalid_literals(self, text):
        with pytest.raises(ParseError):
            parse_gdl(text)


# =============================================================================
# Errors
# =============================================================================

class TestParseErrors:

    @pytest.mark.parametrize("text", [
        "(a",
        "(a)--(b)",
        "(a)-[e]-(b)",
        "(a)<-[e]->(b)",
        "(a)-->",
        "g[(a)",
        "g[[()]]",
        "g",
        "(a:)",
        "(a {name \"x\"})",
        "(a {name: 1,})",
        ")",
    ])
    def test_malformed(self, text):
        with pytest.raises(ParseError):
            parse_gdl(text)

    def test_error_position(self):
        with pytest.raises(ParseError) as info:
            parse_gdl("g[(a)-->(b)]\nh[(c)-->]")
        error = info.value
        assert error.line == 2
        assert error.column == 9
        assert error.position == len("g[(a)-->(b)]\n") + 8
        assert "line 2, column 9" in str(error)

    def test_nested_graph_message(self):
        with pytest.raises(ParseError, match="nested"):
            parse_gdl("g[h[()]]")

    def test_parse_error_is_value_error(self):
        with pytest.raises(ValueError):
            parse_gdl("(")
