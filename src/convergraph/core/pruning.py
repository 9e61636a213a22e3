"""
Two-stage pruning of the co-occurrence graph.

Edge pruning drops pairs lacking absolute support or frequency; node
pruning then drops substitutions left without any edge. Node pruning
must run after edge pruning has finished, since it reads the resulting
degrees.
"""

import logging
from dataclasses import dataclass

from convergraph.core.graph import CooccurrenceGraph

logger = logging.getLogger(__name__)


@dataclass
class PruningResult:
    """
    Summary of a pruning run.

    Attributes:
        edges_before: Edge count before edge pruning
        edges_removed: Edges failing support or frequency
        nodes_before: Node count before node pruning
        nodes_removed: Nodes left isolated after edge pruning
    """

    edges_before: int = 0
    edges_removed: int = 0
    nodes_before: int = 0
    nodes_removed: int = 0

    @property
    def edges_kept(self) -> int:
        return self.edges_before - self.edges_removed

    @property
    def nodes_kept(self) -> int:
        return self.nodes_before - self.nodes_removed


def edge_passes(
    weight: int,
    n_sequences: int,
    minimum_support: int = 4,
    minimum_frequency: float = 0.10,
) -> bool:
    """Whether an edge of ``weight`` survives both thresholds."""
    if weight < minimum_support:
        return False
    return weight / n_sequences >= minimum_frequency


def prune_edges(
    graph: CooccurrenceGraph,
    n_sequences: int,
    minimum_support: int = 4,
    minimum_frequency: float = 0.10,
) -> int:
    """
    Remove edges with ``weight < minimum_support`` or
    ``weight / n_sequences < minimum_frequency``.

    Nodes are never removed here, even when they end up isolated.

    Args:
        graph: Graph to prune in place
        n_sequences: Total number of input sequences
        minimum_support: Minimum co-occurrence count
        minimum_frequency: Minimum co-occurrence frequency

    Returns:
        Number of edges removed

    Raises:
        ValueError: If the graph has edges but n_sequences is not positive
    """
    if n_sequences <= 0 and graph.n_edges:
        raise ValueError(f"Cannot compute edge frequency with {n_sequences} sequences")
    # Materialise first: removal mutates the adjacency being iterated
    failing = [
        (a, b)
        for a, b, weight in graph.edges()
        if not edge_passes(weight, n_sequences, minimum_support, minimum_frequency)
    ]
    for a, b in failing:
        graph.remove_edge(a, b)
    logger.debug("Removed %d edges below support/frequency thresholds", len(failing))
    return len(failing)


def prune_isolated_nodes(graph: CooccurrenceGraph) -> int:
    """
    Remove nodes with no remaining edges.

    Idempotent: a second call removes nothing.

    Returns:
        Number of nodes removed
    """
    isolated = [node for node in graph.nodes() if graph.degree(node) == 0]
    for node in isolated:
        graph.remove_node(node)
    logger.debug("Removed %d isolated nodes", len(isolated))
    return len(isolated)


def prune_graph(
    graph: CooccurrenceGraph,
    n_sequences: int,
    minimum_support: int = 4,
    minimum_frequency: float = 0.10,
) -> PruningResult:
    """Run edge pruning to completion, then node pruning."""
    result = PruningResult(edges_before=graph.n_edges)
    result.edges_removed = prune_edges(graph, n_sequences, minimum_support, minimum_frequency)
    result.nodes_before = graph.n_nodes
    result.nodes_removed = prune_isolated_nodes(graph)
    logger.info(
        "Pruning kept %d/%d edges and %d/%d nodes",
        result.edges_kept, result.edges_before, result.nodes_kept, result.nodes_before,
    )
    return result
