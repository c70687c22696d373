"""Abstract base class for genome format converters."""

from abc import ABC, abstractmethod
from pathlib import Path

from phagemap.errors import ConfigurationError


class FormatConverter(ABC):
    """Turns an input genome (FASTA, GenBank, EMBL, ...) into plain FASTA."""

    name: str = "converter"

    @abstractmethod
    def convert(self, input_file: Path, output_fasta: Path) -> Path:
        """Write input_file as FASTA to output_fasta and return its path."""
        ...

    def required_tools(self) -> list[str]:
        """Executables this converter needs on PATH."""
        return []

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


def get_converter(name: str, **kwargs) -> FormatConverter:
    """Factory function to get a format converter by name."""
    if name == "seqio":
        from phagemap.converters.seqio import SeqIOConverter
        return SeqIOConverter(**kwargs)
    elif name == "any2fasta":
        from phagemap.converters.any2fasta import Any2FastaConverter
        return Any2FastaConverter(**kwargs)
    else:
        raise ConfigurationError(f"Unknown converter: {name}. Choose from: seqio, any2fasta")
