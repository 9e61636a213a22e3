"""
Text renderings of a pruned co-occurrence graph.

Edge weight is carried as its own attribute in every format, next to the
display label.
"""

from enum import Enum
from pathlib import Path
from typing import IO, Union

import networkx as nx

from convergraph.core.graph import CooccurrenceGraph


class OutputFormat(Enum):
    """Supported graph description formats."""

    DOT = "dot"
    """Graphviz DOT, readable by Gephi and Graphviz."""

    GRAPHML = "graphml"
    """GraphML with typed node and edge attributes."""


def _quote(text: str) -> str:
    return '"' + text.replace("\\", "\\\\").replace('"', '\\"') + '"'


def to_dot(graph: CooccurrenceGraph) -> str:
    """
    Render as an undirected Graphviz DOT document.

    Nodes get integer ids in sorted substitution order and a label such as
    ``D614G``; edges carry the co-occurrence count both as ``label`` and as
    a numeric ``weight``.

    Examples:
        graph {
            0 [ label = "D3E" ]
            1 [ label = "K5R" ]
            0 -- 1 [ label = "7", weight = 7 ]
        }
    """
    node_ids = {node: i for i, node in enumerate(graph.nodes())}
    lines = ["graph {"]
    for node, node_id in node_ids.items():
        lines.append(f"    {node_id} [ label = {_quote(node.label)} ]")
    for a, b, weight in graph.edges():
        lines.append(
            f"    {node_ids[a]} -- {node_ids[b]} [ label = \"{weight}\", weight = {weight} ]"
        )
    lines.append("}")
    return "\n".join(lines) + "\n"


def to_graphml(graph: CooccurrenceGraph) -> str:
    """Render as a GraphML document."""
    return "\n".join(nx.generate_graphml(graph.to_networkx())) + "\n"


def write_graphml(graph: CooccurrenceGraph, path: Union[str, Path]) -> None:
    """Write GraphML to ``path``."""
    nx.write_graphml(graph.to_networkx(), str(path))


def write_graph(
    graph: CooccurrenceGraph,
    stream: IO[str],
    output_format: OutputFormat = OutputFormat.DOT,
) -> None:
    """Write the graph to a text stream in the requested format."""
    if output_format is OutputFormat.DOT:
        stream.write(to_dot(graph))
    elif output_format is OutputFormat.GRAPHML:
        stream.write(to_graphml(graph))
    else:
        raise ValueError(f"Unsupported output format: {output_format}")
