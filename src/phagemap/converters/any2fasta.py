"""Conversion with the external any2fasta tool."""

from pathlib import Path

from loguru import logger

from phagemap.converters.base import FormatConverter
from phagemap.utils.command import run_command


class Any2FastaConverter(FormatConverter):
    """Runs `any2fasta` and writes its stdout to the output FASTA.

    any2fasta also reads compressed input and GFF3 with embedded
    sequence, which SeqIO does not.
    """

    name = "any2fasta"

    def __init__(self, uppercase: bool = True):
        self.uppercase = uppercase

    def required_tools(self) -> list[str]:
        return ["any2fasta"]

    def convert(self, input_file: Path, output_fasta: Path) -> Path:
        cmd = ["any2fasta", "-q"]
        if self.uppercase:
            cmd.append("-u")
        cmd.append(input_file)

        result = run_command(cmd, log_stdout=False)
        output_fasta.parent.mkdir(parents=True, exist_ok=True)
        output_fasta.write_text(result.stdout)

        n_records = sum(1 for line in result.stdout.splitlines() if line.startswith(">"))
        logger.info(f"Converted {n_records} sequences from {input_file} to {output_fasta}")
        return output_fasta
