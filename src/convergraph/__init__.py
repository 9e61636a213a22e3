"""
CONVERGRAPH: amino-acid substitution co-occurrence graphs.

Builds an undirected graph of substitutions (relative to a reference) that
co-occur across aligned protein sequences, pruned to pairs with enough
support. Intended for finding convergently evolved shared mutations.
"""

__version__ = "0.1.0"

from convergraph.config import GraphConfig
from convergraph.exceptions import ConfigurationError, ConvergraphError, RecordParseError
from convergraph.core.substitutions import Substitution
from convergraph.core.graph import CooccurrenceGraph
from convergraph.pipeline import PipelineResult, build_cooccurrence_graph, run

__all__ = [
    "GraphConfig",
    "ConvergraphError",
    "ConfigurationError",
    "RecordParseError",
    "Substitution",
    "CooccurrenceGraph",
    "PipelineResult",
    "build_cooccurrence_graph",
    "run",
    "__version__",
]
