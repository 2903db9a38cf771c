"""Declarative external-tool invocations and the runner that executes them."""

from __future__ import annotations

import os
import shlex
import shutil
import subprocess
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping

from .errors import BuildError
from .trace import get_logger

logger = get_logger("commands")

# Exit status a POSIX shell reports for an unknown command
COMMAND_NOT_FOUND = 127

# Shells report death by signal N as 128 + N
SIGNAL_EXIT_BASE = 128


@dataclass(frozen=True)
class CommandSpec:
    """A single external invocation.

    ``args`` are ``str.format`` templates filled in at run time, ``cwd`` is
    relative to the project root (``None`` means the root itself) and
    ``env`` holds overrides applied on top of the inherited environment.
    """

    program: str
    args: tuple[str, ...] = ()
    cwd: Path | None = None
    env: Mapping[str, str] = field(default_factory=dict)

    def command(self, *extra: str, **values: str) -> list[str]:
        """Build the argv list, appending ``extra`` verbatim."""
        return [self.program, *(arg.format(**values) for arg in self.args), *extra]

    def working_dir(self, root: Path) -> Path:
        return root if self.cwd is None else root / self.cwd


def literal(value: object) -> str:
    """Escape a fixed value so argument formatting leaves it untouched."""
    return str(value).replace("{", "{{").replace("}", "}}")


def exit_status(returncode: int) -> int:
    """Map a subprocess return code to the status a shell would report."""
    return SIGNAL_EXIT_BASE - returncode if returncode < 0 else returncode


def format_command(command: list[str], env: Mapping[str, str] | None = None) -> str:
    """Render a command line the way a shell trace would show it."""
    prefix = [f"{key}={shlex.quote(value)}" for key, value in (env or {}).items()]
    return " ".join(prefix + [shlex.quote(str(c)) for c in command])


def run_command(
    spec: CommandSpec,
    root: Path,
    *extra: str,
    **values: str,
) -> subprocess.CompletedProcess:
    """Run ``spec`` synchronously from ``root``, raising on failure.

    Raises:
        BuildError: With the tool's exit status if it fails, or 127 if the
            program cannot be found.
    """
    command = spec.command(*extra, **values)
    logger.info("$ %s", format_command(command, spec.env))

    # On Windows, resolve the executable path to handle .cmd/.bat files
    resolved_cmd = list(command)
    if sys.platform == "win32":
        resolved = shutil.which(command[0])
        if resolved:
            resolved_cmd[0] = resolved

    try:
        return subprocess.run(
            resolved_cmd,
            cwd=spec.working_dir(root),
            env={**os.environ, **spec.env},
            check=True,
        )
    except subprocess.CalledProcessError as e:
        status = exit_status(e.returncode)
        raise BuildError(
            f"Command failed with exit status {status}: {format_command(command)}",
            status,
        ) from e
    except FileNotFoundError as e:
        raise BuildError(
            f"Command not found: {e.filename or command[0]}",
            COMMAND_NOT_FOUND,
        ) from e
