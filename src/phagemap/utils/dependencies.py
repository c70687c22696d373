"""External tool availability and version checks."""

import re
import shutil
from dataclasses import dataclass

from loguru import logger

from phagemap.errors import CommandError, ConfigurationError
from phagemap.utils.command import run_command
from phagemap.utils.constants import MIN_TOOL_VERSIONS

# Arguments that make each tool print its version
VERSION_ARGS = {
    "diamond": ["version"],
    "mmseqs": ["version"],
    "any2fasta": ["-v"],
}

_VERSION_RE = re.compile(r"(\d+(?:\.\d+)+)")


@dataclass
class ToolStatus:
    """Result of checking one external tool."""

    name: str
    path: str | None
    version: str | None
    min_version: str | None

    @property
    def found(self) -> bool:
        return self.path is not None

    @property
    def ok(self) -> bool:
        if not self.found:
            return False
        if self.min_version is None or self.version is None:
            return True
        return parse_version(self.version) >= parse_version(self.min_version)


def parse_version(text: str) -> tuple[int, ...]:
    """Extract a dotted version from text as a tuple of ints.

    MMseqs2 reports release tags such as "15.6f452"; only the leading
    numeric part of each component is used.
    """
    match = _VERSION_RE.search(text)
    if match:
        return tuple(int(p) for p in match.group(1).split("."))
    leading = re.match(r"(\d+)", text.strip())
    if leading:
        return (int(leading.group(1)),)
    raise ValueError(f"No version number found in {text!r}")


def check_tool(name: str, min_version: str | None = None) -> ToolStatus:
    """Locate a tool on PATH and read its version."""
    if min_version is None:
        min_version = MIN_TOOL_VERSIONS.get(name)

    path = shutil.which(name)
    if path is None:
        return ToolStatus(name=name, path=None, version=None, min_version=min_version)

    version = None
    args = VERSION_ARGS.get(name, ["--version"])
    try:
        result = run_command([path, *args], check=False, timeout=60)
        output = f"{result.stdout}\n{result.stderr}"
        version = ".".join(str(p) for p in parse_version(output))
    except (CommandError, ValueError) as e:
        logger.warning(f"Could not determine {name} version: {e}")

    return ToolStatus(name=name, path=path, version=version, min_version=min_version)


def check_dependencies(tools: list[str]) -> list[ToolStatus]:
    """Check that every tool is installed and recent enough.

    Raises:
        ConfigurationError: Listing every missing or outdated tool.
    """
    statuses = [check_tool(t) for t in tools]
    problems = []
    for s in statuses:
        if not s.found:
            problems.append(f"{s.name} not found on PATH")
        elif not s.ok:
            problems.append(
                f"{s.name} {s.version} is older than required {s.min_version}"
            )
        else:
            logger.info(f"Found {s.name} {s.version or '(unknown version)'} at {s.path}")

    if problems:
        raise ConfigurationError("Missing dependencies: " + "; ".join(problems))
    return statuses
