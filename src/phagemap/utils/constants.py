"""Constants and defaults for phagemap."""

import os

from phagemap.errors import ConfigurationError

# Environment variable names
ENV_PHAGEMAP_DB = "PHAGEMAP_DB"
ENV_PHAGEMAP_THREADS = "PHAGEMAP_THREADS"

# Clustering
DEFAULT_GAP_TOLERANCE = 2000  # bp, intergenic fuzz factor
DEFAULT_MIN_HITS = 1
DEFAULT_MIN_IDENTITY = 0.0

# Alignment
DEFAULT_ALIGNER = "diamond"
DEFAULT_CONVERTER = "seqio"
DEFAULT_EVALUE = 1e-5
DEFAULT_THREADS = 4
ALIGNERS = ["diamond", "mmseqs"]
CONVERTERS = ["seqio", "any2fasta"]

# Minimum versions of external tools
MIN_TOOL_VERSIONS = {
    "diamond": "2.0.0",
    "mmseqs": "13.0",
    "any2fasta": "0.4.2",
}

# Output file names
GENOME_FASTA = "genome.fasta"
HITS_TSV = "hits.tsv"
INTERVALS_TSV = "intervals.tsv"
REGIONS_BED = "regions.bed"
REGIONS_TSV = "regions.tsv"
SUMMARY_JSON = "summary.json"
RUN_LOG = "phagemap.log"
RESULT_FILES = [REGIONS_BED, REGIONS_TSV, SUMMARY_JSON]


def get_default_database() -> str | None:
    """Get the phage protein database path from environment."""
    return os.environ.get(ENV_PHAGEMAP_DB)


def get_default_threads() -> int:
    """Get the default aligner thread count from environment."""
    env_threads = os.environ.get(ENV_PHAGEMAP_THREADS)
    if env_threads:
        try:
            return int(env_threads)
        except ValueError:
            raise ConfigurationError(
                f"{ENV_PHAGEMAP_THREADS} must be an integer, got {env_threads!r}"
            ) from None
    return DEFAULT_THREADS
