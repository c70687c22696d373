"""Scan a bacterial genome for candidate prophage regions."""

from pathlib import Path

from loguru import logger

from phagemap.aligners.base import Aligner
from phagemap.converters.base import FormatConverter
from phagemap.models.hits import MergedRegion


def run_scan(
    input_file: str,
    output_dir: str,
    database: str | None = None,
    aligner: str | Aligner = "diamond",
    converter: str | FormatConverter = "seqio",
    gap_tolerance: int = 2000,
    min_hits: int = 1,
    min_identity: float = 0.0,
    evalue: float = 1e-5,
    threads: int | None = None,
    force: bool = False,
    check_tools: bool = True,
) -> list[MergedRegion]:
    """Run the prophage scan pipeline.

    1. Validate configuration and external tools
    2. Convert the input genome to FASTA
    3. Align contigs against the phage protein database
    4. Normalize, sort and merge hits into regions
    5. Write regions (BED/TSV), intervals and summary

    The aligner and converter may be given by name or as ready-made
    instances; instances are used as-is. The database and thread count
    fall back to the PHAGEMAP_DB and PHAGEMAP_THREADS environment
    variables.
    """
    from phagemap.aligners.base import get_aligner
    from phagemap.converters.base import get_converter
    from phagemap.io.fasta import read_sequences
    from phagemap.subcommands.cluster import cluster_hits, write_cluster_results
    from phagemap.utils.config import AlignerConfig, ClusterConfig, ScanConfig
    from phagemap.utils.constants import (
        GENOME_FASTA,
        HITS_TSV,
        RUN_LOG,
        get_default_database,
        get_default_threads,
    )
    from phagemap.utils.dependencies import check_dependencies
    from phagemap.utils.logging import add_log_file

    if database is None:
        database = get_default_database()
    if threads is None:
        threads = get_default_threads()

    config = ScanConfig(
        cluster=ClusterConfig(
            gap_tolerance=gap_tolerance,
            min_hits=min_hits,
            min_identity=min_identity,
        ),
        aligner=AlignerConfig(
            name=aligner if isinstance(aligner, str) else aligner.name,
            database=Path(database) if database else None,
            threads=threads,
            evalue=evalue,
        ),
        converter=converter if isinstance(converter, str) else converter.name,
        output_dir=Path(output_dir),
        force=force,
    )
    config.validate(
        validate_aligner=isinstance(aligner, str),
        validate_converter=isinstance(converter, str),
    )

    if isinstance(aligner, str):
        aligner = get_aligner(
            aligner,
            database=config.aligner.database,
            threads=config.aligner.threads,
            evalue=config.aligner.evalue,
        )
    if isinstance(converter, str):
        converter = get_converter(converter)

    if check_tools:
        tools = aligner.required_tools() + converter.required_tools()
        check_dependencies(tools)

    output_path = config.output_dir
    output_path.mkdir(parents=True, exist_ok=True)
    log_handler = add_log_file(output_path / RUN_LOG)

    try:
        logger.info(f"Scanning {input_file} for prophage regions")
        logger.info(f"Aligner: {aligner!r}, Converter: {converter!r}")
        logger.info(
            f"Gap tolerance: {gap_tolerance} bp, Min hits: {min_hits}, "
            f"Min identity: {min_identity}%"
        )

        # 1. Normalize genome to FASTA
        genome_fasta = converter.convert(Path(input_file), output_path / GENOME_FASTA)
        sequences = read_sequences(genome_fasta, fmt="fasta")
        total_bp = sum(len(s) for s in sequences.values())
        logger.info(f"Loaded {len(sequences)} sequence(s), {total_bp:,} bp total")

        # 2. Align
        if sequences:
            hits = list(aligner.align(genome_fasta, output_path / HITS_TSV))
        else:
            logger.warning("No sequences found in input file, skipping alignment.")
            hits = []
        logger.info(f"Aligner reported {len(hits)} hits")

        # 3. Cluster
        intervals, regions = cluster_hits(hits, config.cluster)

        unknown = {iv.chrom for iv in intervals} - set(sequences)
        if unknown:
            logger.warning(
                f"{len(unknown)} hit query ID(s) not present in the genome: "
                f"{', '.join(sorted(unknown)[:5])}"
            )

        # 4. Write results
        write_cluster_results(
            intervals, regions, config.cluster, output_path,
            extra_summary={
                "input": str(input_file),
                "n_sequences": len(sequences),
                "total_bp": total_bp,
                "aligner": aligner.name,
                "converter": converter.name,
                "database": str(database) if database else None,
                "evalue": evalue,
            },
        )

        logger.info(
            f"Prophage scan complete: {len(regions)} region(s) found. "
            f"Results written to {output_path}"
        )
    finally:
        logger.remove(log_handler)

    return regions
