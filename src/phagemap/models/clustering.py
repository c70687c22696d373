"""Merge sorted hit intervals into candidate prophage regions."""

import numpy as np
from loguru import logger

from phagemap.errors import PreconditionError
from phagemap.models.hits import MergedRegion, NormalizedInterval


def _check_step(previous: NormalizedInterval | None, iv: NormalizedInterval) -> None:
    """Raise if iv is empty or may not follow previous in sorted order."""
    if iv.start0 >= iv.end0:
        raise PreconditionError(
            f"Empty interval on {iv.chrom}: [{iv.start0}, {iv.end0})"
        )
    if previous is None:
        return
    if iv.chrom != previous.chrom:
        if iv.chrom < previous.chrom:
            raise PreconditionError(
                f"Intervals not grouped by chromosome: {iv.chrom!r} "
                f"follows {previous.chrom!r}"
            )
    elif iv.start0 < previous.start0:
        raise PreconditionError(
            f"Intervals on {iv.chrom!r} not sorted by start: "
            f"{iv.start0} follows {previous.start0}"
        )


def check_sorted(intervals: list[NormalizedInterval]) -> None:
    """Verify intervals are non-empty and ordered as sort_intervals() leaves them.

    Raises:
        PreconditionError: On the first interval that is empty or out of
            order.
    """
    previous = None
    for iv in intervals:
        _check_step(previous, iv)
        previous = iv


def cluster_intervals(
    intervals: list[NormalizedInterval],
    gap_tolerance: int = 2000,
) -> list[MergedRegion]:
    """Merge consecutive intervals whose gap is at most gap_tolerance.

    Expects input ordered by sort_intervals(). A single forward sweep
    keeps one open region per chromosome; an interval is folded into it
    when interval.start0 <= region.end0 + gap_tolerance, so overlapping
    and abutting intervals always merge and gaps of exactly
    gap_tolerance bp still merge. Chromosomes are never merged together.
    Ordering is checked during the same sweep, with the rules of
    check_sorted().

    Args:
        intervals: Normalized intervals sorted by (chrom, start0).
        gap_tolerance: Maximum distance in bp between a region's end and
            the next interval's start for the two to be merged.

    Returns:
        Merged regions in chromosome then start order.

    Raises:
        PreconditionError: If the input is not sorted, a chromosome group
            is split, an interval is empty, or gap_tolerance is negative.
    """
    if gap_tolerance < 0:
        raise PreconditionError(
            f"gap_tolerance must be non-negative, got {gap_tolerance}"
        )

    regions: list[MergedRegion] = []
    current: list[NormalizedInterval] = []
    current_end = -1
    previous: NormalizedInterval | None = None

    for iv in intervals:
        _check_step(previous, iv)

        if previous is not None and iv.chrom != previous.chrom:
            # New chromosome - close the last region of the previous one
            regions.append(_finalize_region(current, current_end))
            current = []

        if not current:
            current = [iv]
            current_end = iv.end0
        elif iv.start0 <= current_end + gap_tolerance:
            current.append(iv)
            current_end = max(current_end, iv.end0)
        else:
            regions.append(_finalize_region(current, current_end))
            current = [iv]
            current_end = iv.end0

        previous = iv

    if current:
        regions.append(_finalize_region(current, current_end))

    logger.debug(
        f"Clustered {len(intervals)} interval(s) into {len(regions)} "
        f"region(s) (gap_tolerance={gap_tolerance})"
    )
    return regions


def _finalize_region(
    intervals: list[NormalizedInterval], end0: int
) -> MergedRegion:
    """Create a MergedRegion from the intervals folded into it."""
    identities = np.array([iv.percent_identity for iv in intervals], dtype=float)

    return MergedRegion(
        chrom=intervals[0].chrom,
        start0=intervals[0].start0,
        end0=end0,
        hit_count=len(intervals),
        mean_identity=round(float(np.mean(identities)), 2),
        max_identity=round(float(np.max(identities)), 2),
    )


def filter_regions(
    regions: list[MergedRegion], min_hits: int = 1
) -> list[MergedRegion]:
    """Drop regions supported by fewer than min_hits hits."""
    kept = [r for r in regions if r.hit_count >= min_hits]
    n_removed = len(regions) - len(kept)
    if n_removed:
        logger.info(f"Filtered {n_removed} region(s) with fewer than {min_hits} hits")
    return kept
