"""Configuration dataclasses for phagemap runs."""

from dataclasses import dataclass, field
from pathlib import Path

from phagemap.errors import ConfigurationError
from phagemap.utils.constants import (
    ALIGNERS,
    CONVERTERS,
    DEFAULT_ALIGNER,
    DEFAULT_CONVERTER,
    DEFAULT_EVALUE,
    DEFAULT_GAP_TOLERANCE,
    DEFAULT_MIN_HITS,
    DEFAULT_MIN_IDENTITY,
    DEFAULT_THREADS,
    RESULT_FILES,
)


@dataclass
class ClusterConfig:
    """Configuration for turning hits into merged regions."""
    gap_tolerance: int = DEFAULT_GAP_TOLERANCE
    min_hits: int = DEFAULT_MIN_HITS
    min_identity: float = DEFAULT_MIN_IDENTITY

    def validate(self) -> None:
        if self.gap_tolerance < 0:
            raise ConfigurationError(
                f"Gap tolerance must be non-negative, got {self.gap_tolerance}"
            )
        if self.min_hits < 1:
            raise ConfigurationError(
                f"Minimum hits per region must be at least 1, got {self.min_hits}"
            )
        if not 0.0 <= self.min_identity <= 100.0:
            raise ConfigurationError(
                f"Minimum identity must be within [0, 100], got {self.min_identity}"
            )


@dataclass
class AlignerConfig:
    """Configuration for the external aligner."""
    name: str = DEFAULT_ALIGNER
    database: Path | None = None
    threads: int = DEFAULT_THREADS
    evalue: float = DEFAULT_EVALUE

    def validate(self) -> None:
        if self.name not in ALIGNERS:
            raise ConfigurationError(
                f"Unknown aligner: {self.name}. Choose from: {', '.join(ALIGNERS)}"
            )
        if self.database is None:
            raise ConfigurationError("A phage protein database is required")
        if not Path(self.database).exists():
            raise ConfigurationError(f"Database not found: {self.database}")
        if self.threads < 1:
            raise ConfigurationError(f"Threads must be at least 1, got {self.threads}")
        if self.evalue <= 0:
            raise ConfigurationError(f"E-value must be positive, got {self.evalue}")


@dataclass
class ScanConfig:
    """Full pipeline configuration."""
    cluster: ClusterConfig = field(default_factory=ClusterConfig)
    aligner: AlignerConfig = field(default_factory=AlignerConfig)
    converter: str = DEFAULT_CONVERTER
    output_dir: Path = field(default_factory=lambda: Path("output"))
    force: bool = False

    def validate(
        self, validate_aligner: bool = True, validate_converter: bool = True
    ) -> None:
        """Check every section.

        Aligner and converter settings are skipped when ready-made
        instances are handed to the pipeline instead of names.
        """
        self.cluster.validate()
        if validate_aligner:
            self.aligner.validate()
        if validate_converter and self.converter not in CONVERTERS:
            raise ConfigurationError(
                f"Unknown converter: {self.converter}. "
                f"Choose from: {', '.join(CONVERTERS)}"
            )
        check_output_dir(self.output_dir, self.force)


def check_output_dir(output_dir: Path, force: bool = False) -> None:
    """Refuse to overwrite a previous run's results unless forced."""
    output_dir = Path(output_dir)
    existing = [name for name in RESULT_FILES if (output_dir / name).exists()]
    if existing and not force:
        raise ConfigurationError(
            f"Output directory {output_dir} already contains results "
            f"({', '.join(existing)}). Use --force to overwrite."
        )
