"""Result output utilities (BED/TSV/JSON)."""

import json
from dataclasses import asdict
from pathlib import Path

import pandas as pd
from loguru import logger

from phagemap.models.hits import MergedRegion

REGION_COLUMNS = [
    "region_id",
    "chrom",
    "start0",
    "end0",
    "length",
    "hit_count",
    "mean_identity",
    "max_identity",
]


def write_tsv(
    results: list,
    output_path: Path,
    filename: str = "results.tsv",
    columns: list[str] | None = None,
) -> Path:
    """Write a list of dataclass results to TSV.

    Args:
        results: List of dataclass instances.
        output_path: Output directory.
        filename: Output filename.
        columns: Column order; also used as the header when results is empty.

    Returns:
        Path to the written file.
    """
    output_path.mkdir(parents=True, exist_ok=True)
    filepath = output_path / filename

    records = [asdict(r) for r in results]
    df = pd.DataFrame(records, columns=columns)
    df.to_csv(filepath, sep="\t", index=False)

    logger.info(f"Wrote {len(results)} results to {filepath}")
    return filepath


def region_table(regions: list[MergedRegion]) -> pd.DataFrame:
    """Build the region report table.

    Region IDs are <chrom>_region_<n>, with n counting from 1 on each
    chromosome in output order.
    """
    rows = []
    per_chrom: dict[str, int] = {}
    for r in regions:
        per_chrom[r.chrom] = per_chrom.get(r.chrom, 0) + 1
        rows.append({
            "region_id": f"{r.chrom}_region_{per_chrom[r.chrom]}",
            "chrom": r.chrom,
            "start0": r.start0,
            "end0": r.end0,
            "length": r.length,
            "hit_count": r.hit_count,
            "mean_identity": r.mean_identity,
            "max_identity": r.max_identity,
        })
    return pd.DataFrame(rows, columns=REGION_COLUMNS)


def write_region_tsv(
    regions: list[MergedRegion],
    output_path: Path,
    filename: str = "regions.tsv",
) -> Path:
    """Write the region report table with IDs, lengths and identity stats."""
    output_path.mkdir(parents=True, exist_ok=True)
    filepath = output_path / filename

    region_table(regions).to_csv(filepath, sep="\t", index=False)

    logger.info(f"Wrote {len(regions)} regions to {filepath}")
    return filepath


def write_json(data: dict, output_path: Path, filename: str = "summary.json") -> Path:
    """Write a run summary as JSON with sorted keys.

    Keys are sorted at every level; paths and other non-JSON values are
    written as strings.
    """
    output_path.mkdir(parents=True, exist_ok=True)
    filepath = output_path / filename

    with open(filepath, "w") as f:
        json.dump(data, f, indent=2, sort_keys=True, default=str)
        f.write("\n")

    logger.info(f"Wrote run summary to {filepath}")
    return filepath


def write_bed(
    regions: list[MergedRegion], output_path: Path, filename: str = "regions.bed"
) -> Path:
    """Write merged regions as a BED-like table.

    Columns: chrom, start0, end0, hit_count. Coordinates are 0-based
    half-open, so the file can be fed straight to bedtools.

    Args:
        regions: Merged regions in output order.
        output_path: Output directory.
        filename: Output filename.

    Returns:
        Path to the written file.
    """
    output_path.mkdir(parents=True, exist_ok=True)
    filepath = output_path / filename

    with open(filepath, "w") as f:
        for r in regions:
            f.write(f"{r.chrom}\t{r.start0}\t{r.end0}\t{r.hit_count}\n")

    logger.info(f"Wrote {len(regions)} regions to {filepath}")
    return filepath
