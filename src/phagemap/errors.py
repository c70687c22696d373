"""Exception types raised by phagemap."""


class MalformedRecordError(ValueError):
    """A hit record is missing fields or carries invalid values."""

    def __init__(self, message: str, line: str | None = None, line_number: int | None = None):
        self.line = line
        self.line_number = line_number
        if line is not None:
            where = f"line {line_number}: " if line_number is not None else ""
            message = f"{message} ({where}{line!r})"
        super().__init__(message)


class PreconditionError(RuntimeError):
    """An internal contract was violated by the caller."""


class ConfigurationError(ValueError):
    """Invalid run configuration, detected before any processing."""


class CommandError(RuntimeError):
    """An external command exited with a non-zero status."""

    def __init__(self, cmd: list[str], returncode: int, stderr: str = ""):
        self.cmd = cmd
        self.returncode = returncode
        self.stderr = stderr
        detail = stderr.strip()[:500]
        message = f"Command {cmd[0]!r} failed with exit code {returncode}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
