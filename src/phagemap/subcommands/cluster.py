"""Cluster an existing hit table into candidate prophage regions."""

from pathlib import Path

from loguru import logger

from phagemap.models.hits import HitRecord, MergedRegion, NormalizedInterval
from phagemap.utils.config import ClusterConfig


def cluster_hits(
    hits: list[HitRecord],
    config: ClusterConfig,
) -> tuple[list[NormalizedInterval], list[MergedRegion]]:
    """Normalize, sort and merge hits into regions.

    Returns:
        Tuple of (sorted_intervals, regions).
    """
    from phagemap.io.hits import filter_by_identity
    from phagemap.models.clustering import cluster_intervals, filter_regions
    from phagemap.models.hits import normalize_hits, sort_intervals

    hits = filter_by_identity(hits, config.min_identity)
    intervals = sort_intervals(normalize_hits(hits))
    regions = cluster_intervals(intervals, gap_tolerance=config.gap_tolerance)
    regions = filter_regions(regions, min_hits=config.min_hits)

    n_chroms = len({iv.chrom for iv in intervals})
    logger.info(
        f"Merged {len(intervals)} hits on {n_chroms} sequence(s) into "
        f"{len(regions)} region(s) (gap={config.gap_tolerance}, "
        f"min_hits={config.min_hits})"
    )
    return intervals, regions


def write_cluster_results(
    intervals: list[NormalizedInterval],
    regions: list[MergedRegion],
    config: ClusterConfig,
    output_path: Path,
    extra_summary: dict | None = None,
) -> dict:
    """Write intervals, regions (BED + TSV) and the JSON summary."""
    from phagemap.io.results import write_bed, write_json, write_region_tsv, write_tsv
    from phagemap.utils.constants import (
        INTERVALS_TSV,
        REGIONS_BED,
        REGIONS_TSV,
        SUMMARY_JSON,
    )

    write_tsv(
        intervals, output_path, INTERVALS_TSV,
        columns=["chrom", "start0", "end0", "strand", "subject_id", "percent_identity"],
    )
    write_bed(regions, output_path, REGIONS_BED)
    write_region_tsv(regions, output_path, REGIONS_TSV)

    summary = {
        "n_hits": len(intervals),
        "n_sequences_with_hits": len({iv.chrom for iv in intervals}),
        "n_regions": len(regions),
        "n_hits_in_regions": sum(r.hit_count for r in regions),
        "total_region_bp": sum(r.length for r in regions),
        "parameters": {
            "gap_tolerance": config.gap_tolerance,
            "min_hits": config.min_hits,
            "min_identity": config.min_identity,
        },
    }
    if extra_summary:
        summary.update(extra_summary)

    write_json(summary, output_path, SUMMARY_JSON)
    return summary


def run_cluster(
    hits_file: str,
    output_dir: str,
    gap_tolerance: int = 2000,
    min_hits: int = 1,
    min_identity: float = 0.0,
    force: bool = False,
) -> list[MergedRegion]:
    """Run the clustering step on a precomputed hit table.

    1. Validate configuration
    2. Read and parse the hit table
    3. Normalize, sort and merge hits
    4. Write regions (BED/TSV), intervals and summary
    """
    from phagemap.io.hits import read_hits
    from phagemap.utils.config import check_output_dir
    from phagemap.utils.constants import RUN_LOG
    from phagemap.utils.logging import add_log_file

    config = ClusterConfig(
        gap_tolerance=gap_tolerance,
        min_hits=min_hits,
        min_identity=min_identity,
    )
    config.validate()

    output_path = Path(output_dir)
    check_output_dir(output_path, force)
    output_path.mkdir(parents=True, exist_ok=True)
    log_handler = add_log_file(output_path / RUN_LOG)

    try:
        logger.info(f"Clustering hits from {hits_file}")

        hits = read_hits(hits_file)
        if not hits:
            logger.warning("No hits found in input table.")

        intervals, regions = cluster_hits(hits, config)
        write_cluster_results(
            intervals, regions, config, output_path,
            extra_summary={"input": str(hits_file)},
        )

        logger.info(
            f"Clustering complete: {len(regions)} region(s) found. "
            f"Results written to {output_path}"
        )
    finally:
        logger.remove(log_handler)

    return regions
