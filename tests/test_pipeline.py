"""End-to-end tests for graph construction."""

import pytest

from convergraph.config import GraphConfig
from convergraph.core.substitutions import Substitution
from convergraph.exceptions import ConfigurationError
from convergraph.pipeline import build_cooccurrence_graph, run

REFERENCE = b"MADKLSTRGY"
MUTANT = b"MAEKLPTRVY"
OUTLIER = b"IADKLSTRGH"


def _population():
    """50 sequences: 6 carry three linked substitutions, 1 carries an unlinked pair."""
    return [MUTANT] * 6 + [OUTLIER] + [REFERENCE] * 43


def test_mad_scenario_yields_empty_graph():
    """A single substitution per sequence gives a node with no edges, which is pruned."""
    result = build_cooccurrence_graph(
        [b"MAD", b"MAE", b"MAE", b"MAD"],
        b"MAD",
        minimum_support=1,
        conservation_threshold=0.97,
    )

    assert result.profile.variable_positions == (2,)
    assert result.pruning.nodes_before == 1
    assert result.pruning.edges_before == 0
    assert result.graph.n_nodes == 0
    assert result.graph.n_edges == 0


def test_linked_substitutions_survive_and_rare_pair_is_removed():
    sequences = _population()
    result = build_cooccurrence_graph(
        sequences,
        REFERENCE,
        minimum_support=1,
        minimum_frequency=0.10,
        conservation_threshold=0.99,
    )

    assert result.n_sequences == 50
    assert result.profile.variable_positions == (0, 2, 5, 8, 9)

    e3 = Substitution(2, "D", "E")
    p6 = Substitution(5, "S", "P")
    v9 = Substitution(8, "G", "V")
    assert result.graph.nodes() == [e3, p6, v9]
    assert list(result.graph.edges()) == [(e3, p6, 6), (e3, v9, 6), (p6, v9, 6)]
    assert result.pruning.edges_removed == 1
    assert result.pruning.nodes_removed == 2


def test_default_thresholds_keep_frequent_pairs():
    result = build_cooccurrence_graph(_population(), REFERENCE)
    # Outlier positions are 98% conserved, so only the linked triple is variable
    assert result.profile.variable_positions == (2, 5, 8)
    assert [n.label for n in result.graph.nodes()] == ["D3E", "S6P", "G9V"]


def test_support_threshold_prunes_everything():
    result = build_cooccurrence_graph(_population(), REFERENCE, minimum_support=7)
    assert result.graph.n_nodes == 0


def test_truncated_sequences_are_tolerated():
    sequences = [MUTANT] * 6 + [b"MAEKL"] * 2 + [REFERENCE] * 12
    result = build_cooccurrence_graph(sequences, REFERENCE, minimum_frequency=0.0)

    e3 = Substitution(2, "D", "E")
    p6 = Substitution(5, "S", "P")
    assert result.seq_len == len(REFERENCE)
    assert result.graph.weight(e3, p6) == 6


def test_parallel_pipeline_matches_sequential():
    """Small chunks force the worker pool even for 50 sequences."""
    sequences = _population()
    sequential = build_cooccurrence_graph(sequences, REFERENCE, conservation_threshold=0.99, minimum_support=1)
    parallel = build_cooccurrence_graph(
        sequences,
        REFERENCE,
        conservation_threshold=0.99,
        minimum_support=1,
        jobs=2,
        chunk_size=10,
    )
    assert parallel.graph == sequential.graph


def test_run_reads_reference_and_records(tmp_path):
    reference = tmp_path / "ref.txt"
    reference.write_bytes(REFERENCE + b"\n")
    records = tmp_path / "records.tsv"
    rows = [
        "\t".join([str(i), "ACC", "2020-01-01", "1", "USA", seq.decode(), "ATG"])
        for i, seq in enumerate(_population())
    ]
    records.write_text("\n".join(rows) + "\n")

    result = run(GraphConfig(reference_file=reference), records)

    assert result.n_sequences == 50
    assert [n.label for n in result.graph.nodes()] == ["D3E", "S6P", "G9V"]


def test_run_fails_on_bad_reference_before_reading(tmp_path):
    config = GraphConfig(reference_file=tmp_path / "missing.txt")
    with pytest.raises(ConfigurationError):
        run(config, tmp_path / "also_missing.tsv")
