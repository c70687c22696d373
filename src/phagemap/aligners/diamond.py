"""DIAMOND blastx aligner."""

from pathlib import Path

from loguru import logger

from phagemap.aligners.base import Aligner
from phagemap.utils.command import run_command
from phagemap.utils.constants import DEFAULT_EVALUE, DEFAULT_THREADS

OUTFMT = ["6", "qseqid", "qstart", "qend", "sseqid", "pident"]

# Protein FASTA extensions that need `diamond makedb` before searching
PROTEIN_FASTA_SUFFIXES = {".faa", ".fa", ".fasta", ".pep"}


class DiamondAligner(Aligner):
    """Translated search of contigs with `diamond blastx`.

    The database may be a prebuilt .dmnd file or a protein FASTA, which
    is formatted with `diamond makedb` next to the hit table first.
    """

    name = "diamond"

    def __init__(
        self,
        database: str | Path,
        threads: int = DEFAULT_THREADS,
        evalue: float = DEFAULT_EVALUE,
        sensitivity: str | None = None,
    ):
        self.database = Path(database)
        self.threads = threads
        self.evalue = evalue
        self.sensitivity = sensitivity

    def required_tools(self) -> list[str]:
        return ["diamond"]

    def prepare_database(self, workdir: Path) -> Path:
        """Return a .dmnd database, building it from FASTA if needed."""
        if self.database.suffix.lower() not in PROTEIN_FASTA_SUFFIXES:
            return self.database

        db_prefix = workdir / self.database.stem
        logger.info(f"Building DIAMOND database from {self.database}")
        run_command([
            "diamond", "makedb",
            "--in", self.database,
            "--db", db_prefix,
            "--threads", self.threads,
        ])
        return workdir / f"{self.database.stem}.dmnd"

    def build_command(self, query_fasta: Path, database: Path, output_file: Path) -> list:
        cmd = [
            "diamond", "blastx",
            "--query", query_fasta,
            "--db", database,
            "--out", output_file,
            "--outfmt", *OUTFMT,
            "--evalue", self.evalue,
            "--threads", self.threads,
        ]
        if self.sensitivity:
            cmd.append(f"--{self.sensitivity}")
        return cmd

    def run(self, query_fasta: Path, output_file: Path) -> Path:
        output_file.parent.mkdir(parents=True, exist_ok=True)
        database = self.prepare_database(output_file.parent)
        run_command(self.build_command(query_fasta, database, output_file))
        return output_file

    def __repr__(self) -> str:
        return f"DiamondAligner(database={str(self.database)!r}, threads={self.threads})"
