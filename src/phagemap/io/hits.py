"""Tabular alignment hit parsing.

Hit tables are tab-separated with the columns

    query_id  query_start  query_end  subject_id  percent_identity

which matches BLAST/DIAMOND ``--outfmt 6 qseqid qstart qend sseqid pident``
and MMseqs2 ``--format-output query,qstart,qend,target,pident``. Extra
trailing columns are ignored.
"""

from collections.abc import Iterable, Iterator
from pathlib import Path

from loguru import logger

from phagemap.errors import MalformedRecordError
from phagemap.models.hits import HitRecord

HIT_COLUMNS = [
    "query_id",
    "query_start",
    "query_end",
    "subject_id",
    "percent_identity",
]


def parse_hit_line(line: str, line_number: int | None = None) -> HitRecord:
    """Parse a single tab-separated hit line.

    Raises:
        MalformedRecordError: If fields are missing or a value is invalid.
            The error carries the offending line.
    """
    raw = line.rstrip("\r\n")
    parts = raw.split("\t")
    if len(parts) < len(HIT_COLUMNS):
        raise MalformedRecordError(
            f"Expected at least {len(HIT_COLUMNS)} tab-separated fields, "
            f"got {len(parts)}",
            line=raw, line_number=line_number,
        )

    query_id = parts[0].strip()
    if not query_id:
        raise MalformedRecordError(
            "Empty query_id", line=raw, line_number=line_number
        )

    coords = []
    for name, value in zip(("query_start", "query_end"), parts[1:3]):
        try:
            coord = int(value.strip())
        except ValueError:
            raise MalformedRecordError(
                f"{name} is not an integer: {value!r}",
                line=raw, line_number=line_number,
            ) from None
        if coord <= 0:
            raise MalformedRecordError(
                f"{name} must be positive, got {coord}",
                line=raw, line_number=line_number,
            )
        coords.append(coord)

    try:
        identity = float(parts[4].strip())
    except ValueError:
        raise MalformedRecordError(
            f"percent_identity is not a number: {parts[4]!r}",
            line=raw, line_number=line_number,
        ) from None
    if not 0.0 <= identity <= 100.0:
        raise MalformedRecordError(
            f"percent_identity outside [0, 100]: {identity}",
            line=raw, line_number=line_number,
        )

    return HitRecord(
        query_id=query_id,
        query_start=coords[0],
        query_end=coords[1],
        subject_id=parts[3].strip(),
        percent_identity=identity,
    )


def iter_hits(lines: Iterable[str]) -> Iterator[HitRecord]:
    """Yield HitRecords from lines of a hit table.

    Blank lines and lines starting with '#' are skipped. Any other line
    that cannot be parsed aborts iteration with MalformedRecordError.
    """
    for line_number, line in enumerate(lines, start=1):
        if not line.strip() or line.startswith("#"):
            continue
        yield parse_hit_line(line, line_number)


def read_hits(path: str | Path) -> list[HitRecord]:
    """Read a hit table from disk.

    Args:
        path: Path to a tab-separated hit table.

    Returns:
        List of HitRecord in file order.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Hit table not found: {path}")

    with open(path) as f:
        hits = list(iter_hits(f))

    logger.info(f"Read {len(hits)} hits from {path}")
    return hits


def filter_by_identity(
    hits: list[HitRecord], min_identity: float = 0.0
) -> list[HitRecord]:
    """Keep hits with percent identity >= min_identity."""
    filtered = [h for h in hits if h.percent_identity >= min_identity]
    n_removed = len(hits) - len(filtered)
    if n_removed:
        logger.info(f"Filtered {n_removed} hits below {min_identity}% identity")
    return filtered
