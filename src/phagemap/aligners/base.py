"""Abstract base class for aligners producing hit tables."""

from abc import ABC, abstractmethod
from collections.abc import Iterator
from pathlib import Path

from phagemap.errors import ConfigurationError
from phagemap.io.hits import iter_hits
from phagemap.models.hits import HitRecord


class Aligner(ABC):
    """Searches nucleotide contigs against a protein database.

    Implementations write a tab-separated table with columns
    query_id, query_start, query_end, subject_id, percent_identity.
    """

    name: str = "aligner"

    @abstractmethod
    def run(self, query_fasta: Path, output_file: Path) -> Path:
        """Align query_fasta and write the hit table to output_file."""
        ...

    @abstractmethod
    def required_tools(self) -> list[str]:
        """Executables this aligner needs on PATH."""
        ...

    def align(self, query_fasta: Path, output_file: Path) -> Iterator[HitRecord]:
        """Run the alignment and stream the resulting hits."""
        hits_path = self.run(Path(query_fasta), Path(output_file))
        with open(hits_path) as f:
            yield from iter_hits(f)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


def get_aligner(name: str, **kwargs) -> Aligner:
    """Factory function to get an aligner by name."""
    if name == "diamond":
        from phagemap.aligners.diamond import DiamondAligner
        return DiamondAligner(**kwargs)
    elif name == "mmseqs":
        from phagemap.aligners.mmseqs import MMseqsAligner
        return MMseqsAligner(**kwargs)
    else:
        raise ConfigurationError(f"Unknown aligner: {name}. Choose from: diamond, mmseqs")
