"""Substitution events relative to the reference sequence."""

from dataclasses import dataclass
from typing import Sequence, Tuple


@dataclass(frozen=True, order=True)
class Substitution:
    """
    A residue change at one alignment position.

    Used directly as a graph node key: equality, hashing and ordering are
    structural over (position, ancestral, derived).

    Attributes:
        position: 0-based alignment position
        ancestral: Reference residue
        derived: Observed residue

    Examples:
        >>> Substitution(2, "D", "E").label
        'D3E'
    """

    position: int
    ancestral: str
    derived: str

    def __post_init__(self):
        if self.position < 0:
            raise ValueError(f"Position must be non-negative, got {self.position}")
        if len(self.ancestral) != 1 or len(self.derived) != 1:
            raise ValueError(
                f"Residues must be single symbols, got {self.ancestral!r} -> {self.derived!r}"
            )

    @classmethod
    def from_bytes(cls, position: int, ancestral: int, derived: int) -> "Substitution":
        """Create from raw byte values as read from an alignment."""
        return cls(position, chr(ancestral), chr(derived))

    @property
    def label(self) -> str:
        """Display label with a 1-based position, e.g. ``D614G``."""
        return f"{self.ancestral}{self.position + 1}{self.derived}"

    def __str__(self) -> str:
        return self.label


def extract_substitutions(
    sequence: bytes,
    reference: bytes,
    variable_positions: Sequence[int],
) -> Tuple[Substitution, ...]:
    """
    Substitutions of one sequence at the variable positions.

    Positions past the end of either the sequence or the reference are
    skipped. Residues are compared byte for byte.

    Args:
        sequence: Aligned query sequence
        reference: Reference sequence in the same coordinates
        variable_positions: Ascending variable positions

    Returns:
        Substitutions in ascending position order
    """
    limit = min(len(sequence), len(reference))
    return tuple(
        Substitution.from_bytes(i, reference[i], sequence[i])
        for i in variable_positions
        if i < limit and reference[i] != sequence[i]
    )
