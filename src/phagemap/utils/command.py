"""Run external tools with captured output."""

import subprocess
from pathlib import Path

from loguru import logger

from phagemap.errors import CommandError, ConfigurationError


def run_command(
    cmd: list[str],
    cwd: str | Path | None = None,
    timeout: float | None = None,
    check: bool = True,
    log_stdout: bool = True,
) -> subprocess.CompletedProcess:
    """Run an external command and send its output to the log.

    stdout and stderr are captured and written line by line to the
    DEBUG log, so they end up in the run log file rather than the
    terminal.

    Args:
        cmd: Command and arguments.
        cwd: Working directory for the command.
        timeout: Seconds before the command is killed.
        check: Raise CommandError on a non-zero exit status.
        log_stdout: Send stdout to the log; disable when stdout is data.

    Returns:
        The completed process with text stdout/stderr.

    Raises:
        ConfigurationError: If the executable cannot be found.
        CommandError: If the command fails (when check is set) or times out.
    """
    cmd = [str(c) for c in cmd]
    logger.info(f"Running: {' '.join(cmd)}")

    try:
        result = subprocess.run(
            cmd,
            cwd=str(cwd) if cwd is not None else None,
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except FileNotFoundError:
        raise ConfigurationError(
            f"Executable {cmd[0]!r} not found. Is it installed and on PATH?"
        ) from None
    except subprocess.TimeoutExpired:
        raise CommandError(cmd, -1, f"timed out after {timeout} s") from None

    if log_stdout:
        _log_stream(cmd[0], "stdout", result.stdout)
    _log_stream(cmd[0], "stderr", result.stderr)

    if check and result.returncode != 0:
        raise CommandError(cmd, result.returncode, result.stderr or "")
    return result


def _log_stream(program: str, name: str, text: str | None) -> None:
    if not text:
        return
    for line in text.splitlines():
        if line.strip():
            logger.debug(f"[{program} {name}] {line}")
