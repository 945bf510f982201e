"""
cloudhatch.executor - External Command Execution
================================================

Every external process cloudhatch starts (``git``, ``yarn``) goes through a
``CommandExecutor``. The pipeline only cares about exit status, so the
protocol is deliberately small, and tests swap in a fake that records
invocations instead of spawning processes.

Commands block until they exit. There is no timeout and no retry.
"""

from __future__ import annotations

import shlex
import subprocess
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from rich.console import Console
from rich.markup import escape


if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path


# Exit status reported when the executable cannot be found, as a shell would.
COMMAND_NOT_FOUND = 127


@dataclass(frozen=True)
class CommandResult:
    """
    Outcome of one external command.

    Attributes
    ----------
    args : tuple[str, ...]
        The command line that was run.

    returncode : int
        Process exit status.
    """

    args: tuple[str, ...]
    returncode: int

    @property
    def ok(self) -> bool:
        """True when the command exited with status 0."""
        return self.returncode == 0


class CommandExecutor(Protocol):
    """Runs an external command in a working directory."""

    def run(self, args: Sequence[str], cwd: Path) -> CommandResult: ...


class SubprocessExecutor:
    """
    ``CommandExecutor`` backed by ``subprocess.run``.

    Output is not captured: git and yarn write straight to the operator's
    terminal. Each command is echoed to the console first.

    Parameters
    ----------
    console : Console | None
        Rich console used for the command echo.

    echo : bool, default=True
        If False, commands are not echoed.
    """

    def __init__(self, console: Console | None = None, *, echo: bool = True) -> None:
        self.console = console or Console()
        self.echo = echo

    def run(self, args: Sequence[str], cwd: Path) -> CommandResult:
        command = tuple(args)
        if self.echo:
            self.console.print(f"[dim]$ {escape(shlex.join(command))}[/]", highlight=False)

        try:
            completed = subprocess.run(command, cwd=cwd, check=False)
        except FileNotFoundError:
            self.console.print(f"[red]Error:[/] command not found: {command[0]}")
            return CommandResult(args=command, returncode=COMMAND_NOT_FOUND)

        return CommandResult(args=command, returncode=completed.returncode)
