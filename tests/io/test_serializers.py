"""Tests for graph serialization."""

import io

import networkx as nx

from convergraph.core.graph import build_graph
from convergraph.core.substitutions import Substitution
from convergraph.io.serializers import (
    OutputFormat,
    to_dot,
    to_graphml,
    write_graph,
    write_graphml,
)

V2 = Substitution(1, "A", "V")
E3 = Substitution(2, "D", "E")
F5 = Substitution(4, "L", "F")


def test_dot_nodes_and_weighted_edges():
    graph = build_graph([[V2, E3], [V2, E3], [V2, E3, F5]])
    dot = to_dot(graph)

    assert dot.startswith("graph {\n")
    assert dot.endswith("}\n")
    assert '    0 [ label = "A2V" ]' in dot
    assert '    1 [ label = "D3E" ]' in dot
    assert '    2 [ label = "L5F" ]' in dot
    assert '    0 -- 1 [ label = "3", weight = 3 ]' in dot
    assert '    0 -- 2 [ label = "1", weight = 1 ]' in dot
    assert '    1 -- 2 [ label = "1", weight = 1 ]' in dot


def test_dot_empty_graph():
    assert to_dot(build_graph([])) == "graph {\n}\n"


def test_dot_escapes_quotes_in_labels():
    graph = build_graph([[Substitution(0, '"', "A")]])
    assert r'label = "\"1A"' in to_dot(graph)


def test_graphml_weight_attribute(tmp_path):
    graph = build_graph([[V2, E3], [V2, E3]])
    path = tmp_path / "graph.graphml"
    write_graphml(graph, path)

    loaded = nx.read_graphml(path)
    assert set(loaded.nodes) == {"A2V", "D3E"}
    assert int(loaded["A2V"]["D3E"]["weight"]) == 2
    assert "weight" in to_graphml(graph)


def test_write_graph_formats():
    graph = build_graph([[V2, E3]])
    stream = io.StringIO()
    write_graph(graph, stream)
    assert stream.getvalue() == to_dot(graph)

    stream = io.StringIO()
    write_graph(graph, stream, OutputFormat.GRAPHML)
    assert "<graphml" in stream.getvalue()
