"""Run configuration."""

from dataclasses import dataclass
from pathlib import Path

from convergraph.exceptions import ConfigurationError


@dataclass
class GraphConfig:
    """Options controlling a co-occurrence graph run."""

    reference_file: Path
    """Plain-text file holding the reference sequence."""

    minimum_coocurrence_support: int = 4
    """Minimum number of sequences an edge must be observed in."""

    minimum_cooccurrence_frequency: float = 0.10
    """Minimum fraction of all sequences an edge must be observed in."""

    conservation_threshold: float = 0.97
    """Positions with majority frequency below this are variable."""

    has_header: bool = False
    """Whether the record stream starts with a header row."""

    def __post_init__(self):
        """Validate option ranges."""
        self.reference_file = Path(self.reference_file)
        if self.minimum_coocurrence_support < 1:
            raise ConfigurationError(
                f"Minimum co-occurrence support must be at least 1, "
                f"got {self.minimum_coocurrence_support}"
            )
        if not 0.0 <= self.minimum_cooccurrence_frequency <= 1.0:
            raise ConfigurationError(
                f"Minimum co-occurrence frequency must be in [0, 1], "
                f"got {self.minimum_cooccurrence_frequency}"
            )
        if not 0.0 < self.conservation_threshold <= 1.0:
            raise ConfigurationError(
                f"Conservation threshold must be in (0, 1], "
                f"got {self.conservation_threshold}"
            )
