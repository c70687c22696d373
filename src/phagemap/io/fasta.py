"""DNA sequence I/O utilities."""

from pathlib import Path

from loguru import logger

from phagemap.errors import MalformedRecordError

# Biopython SeqIO format names by file extension
SEQIO_FORMATS = {
    ".fa": "fasta",
    ".fna": "fasta",
    ".fasta": "fasta",
    ".fas": "fasta",
    ".gb": "genbank",
    ".gbk": "genbank",
    ".gbff": "genbank",
    ".genbank": "genbank",
    ".embl": "embl",
    ".emb": "embl",
}


def guess_format(path: str | Path) -> str:
    """Guess the SeqIO format of a sequence file.

    Uses the file extension, falling back to sniffing the first
    non-blank line (">" for FASTA, "LOCUS" for GenBank, "ID" for EMBL).
    """
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix in SEQIO_FORMATS:
        return SEQIO_FORMATS[suffix]

    with open(path) as f:
        first_line = ""
        for line in f:
            if line.strip():
                first_line = line
                break

    if first_line.startswith(">"):
        return "fasta"
    if first_line.startswith("LOCUS"):
        return "genbank"
    if first_line.startswith("ID "):
        return "embl"

    raise MalformedRecordError(
        f"Cannot detect sequence format for {path}. "
        "Supported: FASTA, GenBank, EMBL"
    )


def read_sequences(path: str | Path, fmt: str | None = None) -> dict[str, str]:
    """Read a sequence file into a dict of id -> sequence.

    Args:
        path: Path to a FASTA, GenBank or EMBL file.
        fmt: SeqIO format name; guessed from the file when omitted.

    Returns:
        Dict mapping sequence ID to upper-case DNA sequence.

    Raises:
        MalformedRecordError: If the format cannot be detected, Biopython
            cannot parse the file, or a sequence ID repeats.
    """
    from Bio import SeqIO

    fmt = fmt or guess_format(path)
    try:
        records = list(SeqIO.parse(str(path), fmt))
    except ValueError as e:
        raise MalformedRecordError(f"Cannot parse {path} as {fmt}: {e}") from e

    sequences = {}
    for record in records:
        if record.id in sequences:
            raise MalformedRecordError(f"Duplicate sequence ID {record.id!r} in {path}")
        sequences[record.id] = str(record.seq).upper()

    logger.info(f"Read {len(sequences)} sequences ({fmt}) from {path}")
    return sequences


def write_fasta(sequences: dict[str, str], path: str | Path, line_width: int = 60) -> Path:
    """Write sequences to a FASTA file with wrapped lines."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w") as f:
        for seq_id, seq in sequences.items():
            f.write(f">{seq_id}\n")
            for i in range(0, len(seq), line_width):
                f.write(seq[i:i + line_width] + "\n")

    logger.info(f"Wrote {len(sequences)} sequences to {path}")
    return path
