"""Core algorithms: alphabet, conservation, substitutions, graph, pruning."""

from convergraph.core.alphabet import (
    ALPHABET_SIZE,
    GAP_BIN,
    STOP_BIN,
    OTHER_BIN,
    symbol_to_bin,
    bin_to_symbol,
    encode,
)
from convergraph.core.conservation import (
    ConservationProfile,
    PositionStats,
    analyze_conservation,
    classify_positions,
    count_residues,
)
from convergraph.core.substitutions import Substitution, extract_substitutions
from convergraph.core.graph import (
    CooccurrenceGraph,
    accumulate_sequences,
    build_graph,
    build_graph_parallel,
)
from convergraph.core.pruning import (
    PruningResult,
    edge_passes,
    prune_edges,
    prune_graph,
    prune_isolated_nodes,
)

__all__ = [
    "ALPHABET_SIZE",
    "GAP_BIN",
    "STOP_BIN",
    "OTHER_BIN",
    "symbol_to_bin",
    "bin_to_symbol",
    "encode",
    "ConservationProfile",
    "PositionStats",
    "analyze_conservation",
    "classify_positions",
    "count_residues",
    "Substitution",
    "extract_substitutions",
    "CooccurrenceGraph",
    "accumulate_sequences",
    "build_graph",
    "build_graph_parallel",
    "PruningResult",
    "edge_passes",
    "prune_edges",
    "prune_graph",
    "prune_isolated_nodes",
]
