"""In-process conversion with Biopython SeqIO."""

from pathlib import Path

from loguru import logger

from phagemap.converters.base import FormatConverter
from phagemap.io.fasta import read_sequences, write_fasta


class SeqIOConverter(FormatConverter):
    """Reads FASTA/GenBank/EMBL with Biopython and rewrites it as FASTA."""

    name = "seqio"

    def __init__(self, fmt: str | None = None):
        self.fmt = fmt

    def convert(self, input_file: Path, output_fasta: Path) -> Path:
        sequences = read_sequences(input_file, fmt=self.fmt)
        if not sequences:
            logger.warning(f"No sequences found in {input_file}")
        return write_fasta(sequences, output_fasta)
