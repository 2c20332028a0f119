"""Shell command execution.

Runs fully substituted CLI command strings and captures their output.
Failures surface as CommandFailure so the retry executor can classify them.
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from .errors import CommandFailure

logger = logging.getLogger(__name__)


@dataclass
class CommandResult:
    """Captured output of a successful command."""

    command: str
    stdout: str
    stderr: str = ""
    returncode: int = 0


class CommandRunner(Protocol):
    """Anything that can execute a command string."""

    def run(self, command: str) -> CommandResult:
        """Run command, raising CommandFailure on failure."""
        ...


class ShellCommandRunner:
    """Execute commands through the shell with captured output.

    There is no timeout: a command that never exits blocks the caller.
    """

    def __init__(self, cwd: Path | None = None, env: dict[str, str] | None = None):
        self.cwd = cwd
        self.env = env

    def run(self, command: str) -> CommandResult:
        logger.debug(f"Running: {command}")

        try:
            result = subprocess.run(
                command,
                shell=True,
                cwd=self.cwd,
                env=self.env,
                capture_output=True,
                text=True,
            )
        except OSError as e:
            raise CommandFailure(command, message=f"Failed to start command: {e}") from e

        stdout = result.stdout or ""
        stderr = result.stderr or ""

        if result.returncode != 0:
            logger.debug(f"Exit code {result.returncode}: {stderr.strip()}")
            raise CommandFailure(
                command,
                returncode=result.returncode,
                stdout=stdout,
                stderr=stderr,
            )

        return CommandResult(command=command, stdout=stdout, stderr=stderr)
