"""Tests for hit normalization and interval sorting."""

import numpy as np
import pytest

from phagemap.errors import MalformedRecordError
from phagemap.models.hits import (
    HitRecord,
    NormalizedInterval,
    normalize_hit,
    normalize_hits,
    sort_intervals,
)


# ---------------------------------------------------------------------------
# Coordinate normalization tests
# ---------------------------------------------------------------------------


class TestNormalizeHit:
    """Tests for converting aligner coordinates to half-open intervals."""

    def test_forward_hit(self):
        iv = normalize_hit(HitRecord("ctg1", 101, 200, "p1", 45.0))
        assert iv.chrom == "ctg1"
        assert iv.start0 == 100
        assert iv.end0 == 200
        assert iv.strand == "+"

    def test_reverse_hit(self):
        """query_start=50, query_end=10 -> [9, 50) on the minus strand."""
        iv = normalize_hit(HitRecord("ctg1", 50, 10, "p1", 80.0))
        assert iv.start0 == 9
        assert iv.end0 == 50
        assert iv.strand == "-"

    def test_single_base_hit(self):
        """query_start == query_end is a valid 1 bp interval."""
        iv = normalize_hit(HitRecord("ctg1", 7, 7, "p1", 100.0))
        assert (iv.start0, iv.end0, iv.strand) == (6, 7, "+")
        assert iv.length == 1

    def test_first_base(self):
        iv = normalize_hit(HitRecord("ctg1", 1, 3, "p1", 100.0))
        assert iv.start0 == 0

    def test_carries_subject_and_identity(self):
        iv = normalize_hit(HitRecord("ctg1", 1, 30, "phrog_7|portal", 63.5))
        assert iv.subject_id == "phrog_7|portal"
        assert iv.percent_identity == 63.5

    @pytest.mark.parametrize("start,end", [(0, 10), (10, 0), (-5, 10), (10, -1)])
    def test_non_positive_coordinate(self, start, end):
        with pytest.raises(MalformedRecordError, match="positive"):
            normalize_hit(HitRecord("ctg1", start, end, "p1", 50.0))

    @pytest.mark.parametrize("start,end", [("10", 20), (10, 20.0), (True, 20)])
    def test_non_integer_coordinate(self, start, end):
        with pytest.raises(MalformedRecordError, match="integer"):
            normalize_hit(HitRecord("ctg1", start, end, "p1", 50.0))

    def test_normalization_invariant_random(self):
        """start0 = min - 1, end0 = max, strand reflects which was larger."""
        rng = np.random.default_rng(7)
        for _ in range(200):
            qs, qe = (int(x) for x in rng.integers(1, 100_000, size=2))
            if qs == qe:
                continue
            iv = normalize_hit(HitRecord("c", qs, qe, "p", 50.0))
            assert iv.start0 == min(qs, qe) - 1
            assert iv.end0 == max(qs, qe)
            assert iv.strand == ("+" if qs < qe else "-")
            assert iv.start0 < iv.end0

    def test_normalize_hits(self, sample_hits):
        intervals = normalize_hits(sample_hits)
        assert len(intervals) == len(sample_hits)
        assert all(isinstance(iv, NormalizedInterval) for iv in intervals)
        assert [iv.strand for iv in intervals] == ["+", "+", "-", "+", "+", "-"]


# ---------------------------------------------------------------------------
# Sorting tests
# ---------------------------------------------------------------------------


class TestSortIntervals:
    """Tests for ordering intervals by chromosome and start."""

    def test_orders_by_chrom_then_start(self, make_interval):
        intervals = [
            make_interval("ctg2", 10, 20),
            make_interval("ctg1", 500, 600),
            make_interval("ctg1", 5, 50),
        ]
        result = sort_intervals(intervals)
        assert [(iv.chrom, iv.start0) for iv in result] == [
            ("ctg1", 5), ("ctg1", 500), ("ctg2", 10),
        ]

    def test_lexicographic_chrom_order(self, make_interval):
        """Chromosome names compare as strings: ctg10 sorts before ctg2."""
        result = sort_intervals([
            make_interval("ctg2", 0, 10),
            make_interval("ctg10", 0, 10),
        ])
        assert [iv.chrom for iv in result] == ["ctg10", "ctg2"]

    def test_numeric_start_order(self, make_interval):
        result = sort_intervals([
            make_interval("ctg1", 1000, 1100),
            make_interval("ctg1", 200, 300),
        ])
        assert [iv.start0 for iv in result] == [200, 1000]

    def test_ties_keep_input_order(self, make_interval):
        a = make_interval("ctg1", 100, 200, subject_id="a")
        b = make_interval("ctg1", 100, 150, subject_id="b")
        c = make_interval("ctg1", 100, 900, subject_id="c")
        result = sort_intervals([a, b, c])
        assert [iv.subject_id for iv in result] == ["a", "b", "c"]

    def test_idempotent(self, sample_hits):
        once = sort_intervals(normalize_hits(sample_hits))
        twice = sort_intervals(once)
        assert twice == once

    def test_does_not_modify_input(self, make_interval):
        intervals = [make_interval("ctg2", 0, 10), make_interval("ctg1", 0, 10)]
        sort_intervals(intervals)
        assert intervals[0].chrom == "ctg2"

    def test_empty(self):
        assert sort_intervals([]) == []
