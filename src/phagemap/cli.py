"""Command-line interface for phagemap."""

import click
from loguru import logger

from phagemap import __version__
from phagemap.errors import (
    CommandError,
    ConfigurationError,
    MalformedRecordError,
    PreconditionError,
)
from phagemap.utils.constants import (
    ALIGNERS,
    CONVERTERS,
    DEFAULT_EVALUE,
    DEFAULT_GAP_TOLERANCE,
    DEFAULT_MIN_HITS,
    DEFAULT_MIN_IDENTITY,
    DEFAULT_THREADS,
    ENV_PHAGEMAP_DB,
    ENV_PHAGEMAP_THREADS,
)

RUN_ERRORS = (
    MalformedRecordError,
    PreconditionError,
    ConfigurationError,
    CommandError,
    FileNotFoundError,
)


def _run(func, **kwargs):
    """Call a pipeline entry point, turning run errors into a clean exit."""
    try:
        return func(**kwargs)
    except RUN_ERRORS as e:
        logger.error(f"{type(e).__name__}: {e}")
        raise click.ClickException(str(e)) from e


def _cluster_options(f):
    f = click.option("--force", is_flag=True, default=False,
                     help="Overwrite results in an existing output directory")(f)
    f = click.option("--min-identity", default=DEFAULT_MIN_IDENTITY, type=float,
                     help=f"Drop hits below this percent identity "
                          f"(default: {DEFAULT_MIN_IDENTITY})")(f)
    f = click.option("--min-hits", default=DEFAULT_MIN_HITS, type=int,
                     help=f"Minimum hits per reported region "
                          f"(default: {DEFAULT_MIN_HITS})")(f)
    f = click.option("-g", "--gap", default=DEFAULT_GAP_TOLERANCE, type=int,
                     help=f"Maximum gap in bp between hits merged into one region "
                          f"(default: {DEFAULT_GAP_TOLERANCE})")(f)
    return f


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="phagemap")
@click.option("-v", "--verbose", is_flag=True, default=False,
              help="Show debug messages, including external tool output")
def main(verbose):
    """phagemap - Prophage region discovery from phage-protein hits.

    Aligns bacterial contigs against a phage protein database and
    clusters nearby hits into candidate prophage regions (BED).
    """
    from phagemap.utils.logging import setup_logging
    setup_logging("DEBUG" if verbose else "INFO")


@main.command()
@click.option("-i", "--input", "input_file", required=True,
              type=click.Path(exists=True, dir_okay=False),
              help="Input genome (FASTA, GenBank or EMBL)")
@click.option("-d", "--database", default=None, type=click.Path(exists=True),
              help=f"Phage protein database, FASTA or aligner database "
                   f"(env: {ENV_PHAGEMAP_DB})")
@click.option("-o", "--output", required=True, type=click.Path(file_okay=False),
              help="Output directory")
@click.option("--aligner", type=click.Choice(ALIGNERS), default="diamond",
              help="Protein aligner (default: diamond)")
@click.option("--converter", type=click.Choice(CONVERTERS), default="seqio",
              help="Genome format converter (default: seqio)")
@click.option("--evalue", default=DEFAULT_EVALUE, type=float,
              help=f"Aligner e-value cutoff (default: {DEFAULT_EVALUE})")
@click.option("-t", "--threads", default=None, type=int,
              help=f"Aligner threads "
                   f"(default: ${ENV_PHAGEMAP_THREADS} or {DEFAULT_THREADS})")
@_cluster_options
def scan(input_file, database, output, aligner, converter, evalue, threads,
         gap, min_hits, min_identity, force):
    """Scan a genome for candidate prophage regions.

    Converts the genome to FASTA, aligns it against the phage protein
    database and merges hits lying within --gap bp of each other.
    """
    from phagemap.subcommands.scan import run_scan
    _run(
        run_scan,
        input_file=input_file,
        output_dir=output,
        database=database,
        aligner=aligner,
        converter=converter,
        gap_tolerance=gap,
        min_hits=min_hits,
        min_identity=min_identity,
        evalue=evalue,
        threads=threads,
        force=force,
    )


@main.command()
@click.option("-i", "--input", "input_file", required=True,
              type=click.Path(exists=True, dir_okay=False),
              help="Tab-separated hits: query_id, qstart, qend, subject_id, pident")
@click.option("-o", "--output", required=True, type=click.Path(file_okay=False),
              help="Output directory")
@_cluster_options
def cluster(input_file, output, gap, min_hits, min_identity, force):
    """Merge an existing hit table into candidate prophage regions."""
    from phagemap.subcommands.cluster import run_cluster
    _run(
        run_cluster,
        hits_file=input_file,
        output_dir=output,
        gap_tolerance=gap,
        min_hits=min_hits,
        min_identity=min_identity,
        force=force,
    )


@main.command()
@click.option("--aligner", type=click.Choice(ALIGNERS), default=None,
              help="Only check this aligner (default: all)")
@click.option("--converter", type=click.Choice(CONVERTERS), default=None,
              help="Only check this converter (default: all)")
def check(aligner, converter):
    """Report availability and versions of external tools."""
    from phagemap.utils.dependencies import check_tool

    tools = [aligner] if aligner else list(ALIGNERS)
    converters = [converter] if converter else list(CONVERTERS)
    # seqio runs in-process
    tools += [c for c in converters if c != "seqio"]

    missing = False
    for name in tools:
        status = check_tool(name)
        if not status.found:
            state = "missing"
            missing = True
        elif not status.ok:
            state = f"outdated (need >= {status.min_version})"
            missing = True
        else:
            state = "ok"
        click.echo(f"{name}\t{status.version or '-'}\t{state}\t{status.path or '-'}")

    if missing:
        raise click.ClickException("Some external tools are missing or outdated")
