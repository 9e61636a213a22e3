"""
Undirected weighted co-occurrence graph of substitutions.

Nodes are :class:`Substitution` values; the weight of edge {A, B} is the
number of sequences in which both A and B were observed.
"""

import logging
from concurrent.futures import ProcessPoolExecutor, as_completed
from dataclasses import dataclass, field
from itertools import combinations
from typing import Dict, Iterable, Iterator, List, Sequence, Tuple

import networkx as nx

from convergraph.core.substitutions import Substitution, extract_substitutions

logger = logging.getLogger(__name__)

Edge = Tuple[Substitution, Substitution, int]


@dataclass
class CooccurrenceGraph:
    """
    Simple undirected graph keyed by substitution.

    Stored as a symmetric adjacency map, so weight(A, B) and weight(B, A)
    always read the same counter. Self-loops are rejected.
    """

    _adjacency: Dict[Substitution, Dict[Substitution, int]] = field(
        default_factory=dict, repr=False
    )

    # Construction

    def add_node(self, node: Substitution) -> None:
        """Insert a node; existing nodes are left untouched."""
        self._adjacency.setdefault(node, {})

    def add_edge_weight(self, a: Substitution, b: Substitution, weight: int = 1) -> int:
        """
        Add ``weight`` to edge {a, b}, creating nodes and edge as needed.

        Returns:
            The updated edge weight

        Raises:
            ValueError: For self-loops or non-positive weights
        """
        if a == b:
            raise ValueError(f"Self-loop on {a.label} is not allowed")
        if weight <= 0:
            raise ValueError(f"Edge weight increment must be positive, got {weight}")
        self.add_node(a)
        self.add_node(b)
        updated = self._adjacency[a].get(b, 0) + weight
        self._adjacency[a][b] = updated
        self._adjacency[b][a] = updated
        return updated

    def add_sequence(self, substitutions: Iterable[Substitution]) -> None:
        """
        Accumulate one sequence's substitutions.

        Every substitution becomes a node and every unordered pair of
        distinct substitutions gains one unit of weight. Repeats within the
        list are collapsed, so a pair counts at most once per sequence.
        """
        unique = sorted(set(substitutions))
        for node in unique:
            self.add_node(node)
        for a, b in combinations(unique, 2):
            self.add_edge_weight(a, b)

    def merge(self, other: "CooccurrenceGraph") -> "CooccurrenceGraph":
        """
        Fold another partial graph into this one.

        Nodes are unioned and weights of shared edges are summed, which is
        the reduction step for graphs accumulated over disjoint sequence
        subsets.

        Returns:
            self, for chaining
        """
        for node in other._adjacency:
            self.add_node(node)
        for a, b, weight in other.edges():
            self.add_edge_weight(a, b, weight)
        return self

    # Mutation used by pruning

    def remove_edge(self, a: Substitution, b: Substitution) -> None:
        """Remove edge {a, b}; nodes stay.

        Raises:
            KeyError: If the edge does not exist
        """
        if not self.has_edge(a, b):
            raise KeyError(f"No edge between {a.label} and {b.label}")
        del self._adjacency[a][b]
        del self._adjacency[b][a]

    def remove_node(self, node: Substitution) -> None:
        """Remove a node together with its incident edges."""
        for neighbor in self._adjacency.pop(node):
            del self._adjacency[neighbor][node]

    # Queries

    def has_node(self, node: Substitution) -> bool:
        return node in self._adjacency

    def has_edge(self, a: Substitution, b: Substitution) -> bool:
        return b in self._adjacency.get(a, {})

    def weight(self, a: Substitution, b: Substitution) -> int:
        """Co-occurrence count of a and b (0 when there is no edge)."""
        return self._adjacency.get(a, {}).get(b, 0)

    def degree(self, node: Substitution) -> int:
        return len(self._adjacency[node])

    def neighbors(self, node: Substitution) -> List[Substitution]:
        return sorted(self._adjacency[node])

    def nodes(self) -> List[Substitution]:
        """All nodes, sorted by (position, ancestral, derived)."""
        return sorted(self._adjacency)

    def edges(self) -> Iterator[Edge]:
        """
        Iterate edges once each as (a, b, weight) with a < b.

        Ordering is deterministic: by a, then by b.
        """
        for a in self.nodes():
            for b in sorted(self._adjacency[a]):
                if a < b:
                    yield a, b, self._adjacency[a][b]

    @property
    def n_nodes(self) -> int:
        return len(self._adjacency)

    @property
    def n_edges(self) -> int:
        return sum(len(neighbors) for neighbors in self._adjacency.values()) // 2

    def __len__(self) -> int:
        return self.n_nodes

    def __contains__(self, node: object) -> bool:
        return node in self._adjacency

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CooccurrenceGraph):
            return NotImplemented
        return self._adjacency == other._adjacency

    def to_networkx(self) -> nx.Graph:
        """
        Convert to an undirected NetworkX graph.

        Node keys are substitution labels; each node also carries
        ``position`` (1-based), ``ancestral`` and ``derived`` attributes,
        and every edge carries an integer ``weight``.
        """
        graph = nx.Graph()
        for node in self.nodes():
            graph.add_node(
                node.label,
                position=node.position + 1,
                ancestral=node.ancestral,
                derived=node.derived,
            )
        for a, b, weight in self.edges():
            graph.add_edge(a.label, b.label, weight=weight)
        return graph

    def __repr__(self) -> str:
        return f"CooccurrenceGraph(nodes={self.n_nodes}, edges={self.n_edges})"


def build_graph(substitution_lists: Iterable[Iterable[Substitution]]) -> CooccurrenceGraph:
    """
    Accumulate a graph from per-sequence substitution lists.

    Args:
        substitution_lists: One iterable of substitutions per sequence

    Returns:
        CooccurrenceGraph with raw co-occurrence weights
    """
    graph = CooccurrenceGraph()
    n_sequences = 0
    for substitutions in substitution_lists:
        graph.add_sequence(substitutions)
        n_sequences += 1
    logger.debug("Accumulated %d sequences into %r", n_sequences, graph)
    return graph


def accumulate_sequences(
    sequences: Sequence[bytes],
    reference: bytes,
    variable_positions: Sequence[int],
) -> CooccurrenceGraph:
    """Extract substitutions from each sequence and accumulate them."""
    return build_graph(
        extract_substitutions(sequence, reference, variable_positions)
        for sequence in sequences
    )


def build_graph_parallel(
    sequences: Sequence[bytes],
    reference: bytes,
    variable_positions: Sequence[int],
    max_workers: int = 2,
    chunk_size: int = 1000,
) -> CooccurrenceGraph:
    """
    Build the graph over chunks of sequences in worker processes.

    Each worker accumulates a partial graph for its chunk; partial graphs
    are merged by summing edge weights. The result equals
    :func:`accumulate_sequences` over the same input.

    Args:
        sequences: Aligned sequences
        reference: Reference sequence
        variable_positions: Ascending variable positions
        max_workers: Worker process count
        chunk_size: Sequences per submitted task

    Returns:
        Merged CooccurrenceGraph
    """
    if chunk_size < 1:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")
    chunks = [
        list(sequences[start:start + chunk_size])
        for start in range(0, len(sequences), chunk_size)
    ]
    if max_workers <= 1 or len(chunks) <= 1:
        return accumulate_sequences(sequences, reference, variable_positions)

    graph = CooccurrenceGraph()
    positions = tuple(variable_positions)
    with ProcessPoolExecutor(max_workers=min(max_workers, len(chunks))) as executor:
        futures = [
            executor.submit(accumulate_sequences, chunk, reference, positions)
            for chunk in chunks
        ]
        for completed, future in enumerate(as_completed(futures), start=1):
            graph.merge(future.result())
            logger.debug("Merged partial graph %d/%d", completed, len(chunks))
    return graph
