"""
cloudhatch.installer - Dependency Installation and Upgrade
==========================================================

Thin wrappers around the package manager. Each step is one blocking
command; a non-zero exit raises ``DependencyInstallError`` and nothing
after it runs.

    install_dependencies       yarn
    install_peer_dependencies  yarn run react-scripts peerDeps, then yarn
    upgrade_dependencies       yarn run upgradevht
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from cloudhatch.errors import DependencyInstallError


if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from cloudhatch.executor import CommandExecutor
    from cloudhatch.models import ScaffoldSettings


def _run_step(step: str, args: Sequence[str], cwd: Path, executor: CommandExecutor) -> None:
    result = executor.run(args, cwd=cwd)
    if not result.ok:
        raise DependencyInstallError(step, result.returncode)


def install_dependencies(settings: ScaffoldSettings, cwd: Path, executor: CommandExecutor) -> None:
    """
    Run the package manager's plain install.

    Raises
    ------
    DependencyInstallError
        If the install command exits non-zero.
    """
    _run_step("Dependency install", settings.install_command, cwd, executor)


def install_peer_dependencies(
    settings: ScaffoldSettings,
    cwd: Path,
    executor: CommandExecutor,
) -> None:
    """
    Add the shared tooling's peer dependencies, then install again.

    The peer command only edits the manifest; the second plain install
    is what puts the new packages on disk.

    Raises
    ------
    DependencyInstallError
        If either command exits non-zero.
    """
    _run_step("Adding peer dependencies", settings.peer_install_command, cwd, executor)
    install_dependencies(settings, cwd, executor)


def upgrade_dependencies(settings: ScaffoldSettings, cwd: Path, executor: CommandExecutor) -> None:
    """
    Run the shared tooling's upgrade command.

    Raises
    ------
    DependencyInstallError
        If the upgrade command exits non-zero.
    """
    _run_step("Dependency upgrade", settings.upgrade_command, cwd, executor)
