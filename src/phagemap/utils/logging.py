"""Logging configuration for phagemap using loguru."""

import sys
from pathlib import Path

from loguru import logger


def setup_logging(level: str = "INFO", log_file: str | Path | None = None) -> None:
    """Configure loguru logging.

    Args:
        level: Minimum level for the stderr sink.
        log_file: Optional per-run log file; receives DEBUG and above,
            including captured output of external commands.
    """
    logger.remove()
    logger.add(
        sys.stderr,
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | {message}",
        level=level,
        colorize=True,
    )
    if log_file is not None:
        add_log_file(log_file)


def add_log_file(log_file: str | Path) -> int:
    """Attach a plain-text file sink and return its handler id."""
    log_file = Path(log_file)
    log_file.parent.mkdir(parents=True, exist_ok=True)
    return logger.add(
        str(log_file),
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {message}",
        level="DEBUG",
        colorize=False,
    )
