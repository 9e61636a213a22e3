"""
End-to-end co-occurrence graph construction.

Phases run strictly in order: conservation over all sequences, then
per-sequence substitution extraction and accumulation, then edge pruning
followed by node pruning.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import IO, Sequence, Union

from convergraph.config import GraphConfig
from convergraph.core.conservation import ConservationProfile, analyze_conservation
from convergraph.core.graph import CooccurrenceGraph, build_graph_parallel
from convergraph.core.pruning import PruningResult, prune_graph
from convergraph.io.records import read_records, read_reference

logger = logging.getLogger(__name__)


@dataclass
class PipelineResult:
    """
    Output of a pipeline run.

    Attributes:
        graph: Pruned co-occurrence graph
        profile: Conservation profile of the input alignment
        pruning: Pruning summary
        n_sequences: Number of input sequences
    """

    graph: CooccurrenceGraph
    profile: ConservationProfile
    pruning: PruningResult
    n_sequences: int

    @property
    def seq_len(self) -> int:
        return self.profile.seq_len

    def summary_rows(self) -> list[tuple[str, str]]:
        """Key figures as (name, value) pairs for display."""
        return [
            ("Sequences", str(self.n_sequences)),
            ("Alignment length", str(self.seq_len)),
            ("Variable positions", str(len(self.profile.variable_positions))),
            ("Edges kept", f"{self.pruning.edges_kept}/{self.pruning.edges_before}"),
            ("Nodes kept", f"{self.pruning.nodes_kept}/{self.pruning.nodes_before}"),
        ]


def build_cooccurrence_graph(
    sequences: Sequence[bytes],
    reference: bytes,
    *,
    minimum_support: int = 4,
    minimum_frequency: float = 0.10,
    conservation_threshold: float = 0.97,
    jobs: int = 1,
    chunk_size: int = 1000,
) -> PipelineResult:
    """
    Build and prune the substitution co-occurrence graph.

    Args:
        sequences: Aligned amino-acid sequences
        reference: Reference sequence in alignment coordinates
        minimum_support: Minimum co-occurrence count per edge
        minimum_frequency: Minimum co-occurrence frequency per edge
        conservation_threshold: Majority frequency below which a position is variable
        jobs: Worker processes for substitution extraction and accumulation
        chunk_size: Sequences per worker task; inputs of at most one chunk
            are processed in this process regardless of ``jobs``

    Returns:
        PipelineResult
    """
    profile = analyze_conservation(sequences, conservation_threshold)
    graph = build_graph_parallel(
        sequences,
        reference,
        profile.variable_positions,
        max_workers=jobs,
        chunk_size=chunk_size,
    )
    logger.info("Built %r from %d sequences", graph, len(sequences))
    pruning = prune_graph(graph, len(sequences), minimum_support, minimum_frequency)
    return PipelineResult(
        graph=graph,
        profile=profile,
        pruning=pruning,
        n_sequences=len(sequences),
    )


def run(
    config: GraphConfig,
    source: Union[str, Path, IO[str]],
    jobs: int = 1,
) -> PipelineResult:
    """
    Run the pipeline for a configuration and record source.

    The reference is loaded before any records are read, so a bad
    reference fails before input is consumed.
    """
    reference = read_reference(config.reference_file)
    sequences = read_records(source, has_header=config.has_header)
    return build_cooccurrence_graph(
        sequences,
        reference,
        minimum_support=config.minimum_coocurrence_support,
        minimum_frequency=config.minimum_cooccurrence_frequency,
        conservation_threshold=config.conservation_threshold,
        jobs=jobs,
    )
