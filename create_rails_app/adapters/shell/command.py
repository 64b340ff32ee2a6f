"""
Shell command runner — execute (or print) the generated commands.

``rails new`` and ``gem install`` are interactive, long-running and
chatty, so the child process inherits the terminal instead of having
its output captured. In dry-run mode the shell-quoted command is
printed and nothing is executed.
"""

from __future__ import annotations

import logging
import shlex
import subprocess
import time
from collections.abc import Callable
from dataclasses import dataclass

import click

from create_rails_app.core.errors import CommandFailedError

logger = logging.getLogger(__name__)

SystemRunner = Callable[[list[str]], int]


@dataclass
class RunReceipt:
    """Outcome of one command."""

    command: list[str]
    return_code: int = 0
    duration_ms: int = 0
    dry_run: bool = False

    @property
    def ok(self) -> bool:
        return self.return_code == 0

    def to_dict(self) -> dict:
        return {
            "command": self.command,
            "return_code": self.return_code,
            "duration_ms": self.duration_ms,
            "dry_run": self.dry_run,
        }


def _subprocess_system(command: list[str]) -> int:
    return subprocess.run(command, check=False).returncode


class CommandRunner:
    """Run argument lists, raising on failure.

    Args:
        echo: Callable used to print dry-run commands (default: click.echo).
        system_runner: Callable that executes an argument list and
            returns its exit code (default: subprocess.run).
    """

    def __init__(
        self,
        echo: Callable[[str], None] | None = None,
        system_runner: SystemRunner | None = None,
    ):
        self.echo = echo or click.echo
        self.system_runner = system_runner or _subprocess_system

    def run(self, command: list[str], dry_run: bool = False) -> RunReceipt:
        """Execute ``command`` or print it in dry-run mode.

        Raises:
            CommandFailedError: If the executable is missing or the
                command exits non-zero.
        """
        rendered = shlex.join(command)

        if dry_run:
            self.echo(rendered)
            return RunReceipt(command=list(command), dry_run=True)

        logger.info("Executing: %s", rendered)
        start = time.monotonic()

        try:
            return_code = self.system_runner(list(command))
        except FileNotFoundError as e:
            raise CommandFailedError(
                f"Command not found: {command[0]}", command=command
            ) from e
        except OSError as e:
            raise CommandFailedError(
                f"Command execution error: {rendered}: {e}", command=command
            ) from e

        elapsed_ms = int((time.monotonic() - start) * 1000)
        logger.debug("%s exited with %d after %dms", command[0], return_code, elapsed_ms)

        if return_code != 0:
            raise CommandFailedError(
                f"Command failed: {rendered}", command=command, return_code=return_code
            )

        return RunReceipt(
            command=list(command), return_code=return_code, duration_ms=elapsed_ms
        )
