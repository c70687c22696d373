"""Alignment hit records and their conversion to genomic intervals."""

from dataclasses import dataclass
from numbers import Integral

from phagemap.errors import MalformedRecordError


@dataclass(frozen=True)
class HitRecord:
    """One row of aligner output.

    Coordinates are 1-based inclusive as reported by the aligner.
    query_start > query_end marks a hit on the reverse strand.
    """

    query_id: str
    query_start: int
    query_end: int
    subject_id: str
    percent_identity: float


@dataclass(frozen=True)
class NormalizedInterval:
    """A hit expressed as a 0-based half-open interval [start0, end0)."""

    chrom: str
    start0: int
    end0: int
    strand: str  # "+" or "-"
    subject_id: str
    percent_identity: float

    @property
    def length(self) -> int:
        return self.end0 - self.start0


@dataclass
class MergedRegion:
    """A cluster of nearby intervals treated as one candidate prophage locus."""

    chrom: str
    start0: int
    end0: int
    hit_count: int
    mean_identity: float = 0.0
    max_identity: float = 0.0

    @property
    def length(self) -> int:
        return self.end0 - self.start0


def _coordinate(value, name: str) -> int:
    # bool is an int subclass but never a valid coordinate
    if isinstance(value, bool) or not isinstance(value, Integral):
        raise MalformedRecordError(
            f"{name} must be an integer, got {value!r}"
        )
    if value <= 0:
        raise MalformedRecordError(
            f"{name} must be a positive 1-based coordinate, got {value}"
        )
    return int(value)


def normalize_hit(hit: HitRecord) -> NormalizedInterval:
    """Convert a hit to a strand-annotated 0-based half-open interval.

    Reverse-strand hits (query_start > query_end) are swapped and marked
    with strand "-". The ordered start is decremented by one; the end is
    kept, so start0 = min(qs, qe) - 1 and end0 = max(qs, qe).

    Args:
        hit: Raw alignment hit.

    Returns:
        The normalized interval.

    Raises:
        MalformedRecordError: If a coordinate is non-positive or not an integer.
    """
    qs = _coordinate(hit.query_start, "query_start")
    qe = _coordinate(hit.query_end, "query_end")

    if qs > qe:
        qs, qe = qe, qs
        strand = "-"
    else:
        strand = "+"

    return NormalizedInterval(
        chrom=hit.query_id,
        start0=qs - 1,
        end0=qe,
        strand=strand,
        subject_id=hit.subject_id,
        percent_identity=hit.percent_identity,
    )


def normalize_hits(hits) -> list[NormalizedInterval]:
    """Normalize every hit in an iterable of HitRecord."""
    return [normalize_hit(h) for h in hits]


def sort_intervals(intervals) -> list[NormalizedInterval]:
    """Order intervals by chromosome name, then start coordinate.

    The sort is stable: intervals sharing (chrom, start0) keep their
    input order, so sorting an already sorted list returns it unchanged.
    """
    return sorted(intervals, key=lambda iv: (iv.chrom, iv.start0))
