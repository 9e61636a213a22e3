"""
Per-position conservation statistics.

Builds the position count table over the whole alignment and classifies
each covered position as conserved or variable against a threshold.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterator, List, Sequence, Tuple

import numpy as np

from convergraph.core.alphabet import ALPHABET_SIZE, bin_to_symbol, encode

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PositionStats:
    """
    Majority-residue summary for one alignment position.

    Attributes:
        position: 0-based alignment position
        majority_bin: Bin holding the greatest count (first one on ties)
        majority_count: Count in the majority bin
        total: Number of sequences covering this position
        variable: Whether the position fell below the conservation threshold
    """

    position: int
    majority_bin: int
    majority_count: int
    total: int
    variable: bool

    @property
    def frequency(self) -> float:
        """Majority residue frequency."""
        return self.majority_count / self.total

    @property
    def majority_symbol(self) -> str:
        return bin_to_symbol(self.majority_bin)

    def format_diagnostic(self) -> str:
        """Render as ``0003 / D: 0.5000 (4)`` with a 1-based position."""
        return (
            f"{self.position + 1:04d} / {self.majority_symbol}: "
            f"{self.frequency:.4f} ({self.total})"
        )


@dataclass
class ConservationProfile:
    """
    Result of the conservation pass.

    Attributes:
        counts: (seq_len, ALPHABET_SIZE) residue count table
        positions: Stats for every position covered by at least one sequence
        variable_positions: Ascending positions below the threshold
        threshold: Conservation threshold used
    """

    counts: np.ndarray
    positions: List[PositionStats] = field(default_factory=list)
    variable_positions: Tuple[int, ...] = ()
    threshold: float = 0.97

    @property
    def seq_len(self) -> int:
        return self.counts.shape[0]

    def iter_variable(self) -> Iterator[PositionStats]:
        """Stats for variable positions in ascending order."""
        for stats in self.positions:
            if stats.variable:
                yield stats

    def __repr__(self) -> str:
        return (
            f"ConservationProfile(seq_len={self.seq_len}, "
            f"variable={len(self.variable_positions)})"
        )


def count_residues(sequences: Sequence[bytes]) -> np.ndarray:
    """
    Build the position count table.

    Sequences shorter than the longest one only contribute to the
    positions they actually cover.

    Args:
        sequences: Aligned sequences

    Returns:
        Integer array of shape (max_length, ALPHABET_SIZE)
    """
    seq_len = max((len(s) for s in sequences), default=0)
    counts = np.zeros((seq_len, ALPHABET_SIZE), dtype=np.int64)
    for sequence in sequences:
        bins = encode(sequence)
        # One increment per row, so fancy-index assignment is safe here
        counts[np.arange(len(bins)), bins] += 1
    return counts


def classify_positions(
    counts: np.ndarray,
    conservation_threshold: float = 0.97,
) -> ConservationProfile:
    """
    Classify positions of a count table as conserved or variable.

    A position is variable when its majority frequency is strictly below
    ``conservation_threshold``. Positions nobody covers are skipped.

    Args:
        counts: Position count table from :func:`count_residues`
        conservation_threshold: Threshold in (0, 1]

    Returns:
        ConservationProfile
    """
    totals = counts.sum(axis=1)
    # argmax returns the first maximal bin, which is the tie-break rule
    majority_bins = counts.argmax(axis=1) if counts.size else np.zeros(0, dtype=np.intp)

    positions = []
    variable = []
    for i in range(counts.shape[0]):
        total = int(totals[i])
        if total == 0:
            continue
        majority_bin = int(majority_bins[i])
        majority_count = int(counts[i, majority_bin])
        is_variable = majority_count / total < conservation_threshold
        positions.append(
            PositionStats(
                position=i,
                majority_bin=majority_bin,
                majority_count=majority_count,
                total=total,
                variable=is_variable,
            )
        )
        if is_variable:
            variable.append(i)

    logger.debug(
        "Classified %d covered positions, %d variable at threshold %.4f",
        len(positions), len(variable), conservation_threshold,
    )
    return ConservationProfile(
        counts=counts,
        positions=positions,
        variable_positions=tuple(variable),
        threshold=conservation_threshold,
    )


def analyze_conservation(
    sequences: Sequence[bytes],
    conservation_threshold: float = 0.97,
) -> ConservationProfile:
    """Count residues and classify positions in one pass."""
    counts = count_residues(sequences)
    logger.debug("Counted %d sequences over %d positions", len(sequences), counts.shape[0])
    return classify_positions(counts, conservation_threshold)
