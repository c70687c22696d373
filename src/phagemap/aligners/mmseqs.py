"""MMseqs2 easy-search aligner."""

import tempfile
from pathlib import Path

from phagemap.aligners.base import Aligner
from phagemap.utils.command import run_command
from phagemap.utils.constants import DEFAULT_EVALUE, DEFAULT_THREADS

FORMAT_OUTPUT = "query,qstart,qend,target,pident"


class MMseqsAligner(Aligner):
    """Translated search of contigs with `mmseqs easy-search`.

    Nucleotide queries are translated against the protein target
    (--search-type 2). The target may be a protein FASTA or an MMseqs2
    database.
    """

    name = "mmseqs"

    def __init__(
        self,
        database: str | Path,
        threads: int = DEFAULT_THREADS,
        evalue: float = DEFAULT_EVALUE,
        sensitivity: float | None = None,
    ):
        self.database = Path(database)
        self.threads = threads
        self.evalue = evalue
        self.sensitivity = sensitivity

    def required_tools(self) -> list[str]:
        return ["mmseqs"]

    def build_command(self, query_fasta: Path, output_file: Path, tmp_dir: Path) -> list:
        cmd = [
            "mmseqs", "easy-search",
            query_fasta,
            self.database,
            output_file,
            tmp_dir,
            "--search-type", "2",
            "--format-output", FORMAT_OUTPUT,
            "-e", self.evalue,
            "--threads", self.threads,
        ]
        if self.sensitivity is not None:
            cmd.extend(["-s", self.sensitivity])
        return cmd

    def run(self, query_fasta: Path, output_file: Path) -> Path:
        output_file.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.TemporaryDirectory(
            prefix="phagemap_mmseqs_", dir=output_file.parent
        ) as tmp_dir:
            run_command(self.build_command(query_fasta, output_file, Path(tmp_dir)))
        return output_file

    def __repr__(self) -> str:
        return f"MMseqsAligner(database={str(self.database)!r}, threads={self.threads})"
