"""
Tests for cloudhatch.installer and cloudhatch.executor
======================================================

Test Organization
-----------------
- TestInstallSteps: Tests for the package-manager steps
- TestSubprocessExecutor: Tests for the subprocess-backed executor
"""

import subprocess
import pytest
from pathlib import Path
from unittest.mock import patch

from rich.console import Console

from cloudhatch.errors import DependencyInstallError
from cloudhatch.executor import COMMAND_NOT_FOUND, CommandResult, SubprocessExecutor
from cloudhatch.installer import (
    install_dependencies,
    install_peer_dependencies,
    upgrade_dependencies,
)
from cloudhatch.models import ScaffoldSettings


# =============================================================================
# Package-Manager Step Tests
# =============================================================================

class TestInstallSteps:
    """Tests for install, peer install and upgrade."""

    def test_install_runs_yarn(self, project_dir: Path, executor) -> None:
        install_dependencies(ScaffoldSettings(), project_dir, executor)

        assert executor.commands == ["yarn"]
        assert executor.calls[0][1] == project_dir

    def test_peer_install_reinstalls(self, project_dir: Path, executor) -> None:
        install_peer_dependencies(ScaffoldSettings(), project_dir, executor)

        assert executor.commands == ["yarn run react-scripts peerDeps", "yarn"]

    def test_upgrade_runs_upgrade_script(self, project_dir: Path, executor) -> None:
        upgrade_dependencies(ScaffoldSettings(), project_dir, executor)

        assert executor.commands == ["yarn run upgradevht"]

    def test_install_failure_raises(self, project_dir: Path, executor) -> None:
        executor.failures["yarn"] = 1

        with pytest.raises(DependencyInstallError) as exc_info:
            install_dependencies(ScaffoldSettings(), project_dir, executor)

        assert exc_info.value.returncode == 1
        assert "Dependency install failed" in str(exc_info.value)

    def test_peer_failure_skips_reinstall(self, project_dir: Path, executor) -> None:
        executor.failures["yarn run react-scripts peerDeps"] = 2

        with pytest.raises(DependencyInstallError, match="peer dependencies"):
            install_peer_dependencies(ScaffoldSettings(), project_dir, executor)

        assert executor.commands == ["yarn run react-scripts peerDeps"]

    def test_custom_commands(self, project_dir: Path, executor) -> None:
        settings = ScaffoldSettings(install_command=["npm", "install"])

        install_dependencies(settings, project_dir, executor)

        assert executor.commands == ["npm install"]


# =============================================================================
# Subprocess Executor Tests
# =============================================================================

class TestSubprocessExecutor:
    """Tests for SubprocessExecutor."""

    def test_returns_exit_status(self, tmp_path: Path) -> None:
        executor = SubprocessExecutor(Console(quiet=True))

        with patch("cloudhatch.executor.subprocess.run") as mock_run:
            mock_run.return_value = subprocess.CompletedProcess(["yarn"], 3)
            result = executor.run(["yarn"], cwd=tmp_path)

        assert result == CommandResult(args=("yarn",), returncode=3)
        assert result.ok is False
        mock_run.assert_called_once_with(("yarn",), cwd=tmp_path, check=False)

    def test_success_is_ok(self, tmp_path: Path) -> None:
        executor = SubprocessExecutor(Console(quiet=True))

        with patch("cloudhatch.executor.subprocess.run") as mock_run:
            mock_run.return_value = subprocess.CompletedProcess(["git"], 0)
            result = executor.run(["git", "--version"], cwd=tmp_path)

        assert result.ok is True

    def test_missing_binary_maps_to_127(self, tmp_path: Path) -> None:
        executor = SubprocessExecutor(Console(quiet=True))

        with patch("cloudhatch.executor.subprocess.run") as mock_run:
            mock_run.side_effect = FileNotFoundError()
            result = executor.run(["yarn"], cwd=tmp_path)

        assert result.returncode == COMMAND_NOT_FOUND

    def test_echoes_command(self, tmp_path: Path) -> None:
        console = Console(record=True, width=120)
        executor = SubprocessExecutor(console)

        with patch("cloudhatch.executor.subprocess.run") as mock_run:
            mock_run.return_value = subprocess.CompletedProcess(["yarn"], 0)
            executor.run(["yarn", "run", "react-scripts", "peerDeps"], cwd=tmp_path)

        assert "$ yarn run react-scripts peerDeps" in console.export_text()

    def test_echo_can_be_disabled(self, tmp_path: Path) -> None:
        console = Console(record=True, width=120)
        executor = SubprocessExecutor(console, echo=False)

        with patch("cloudhatch.executor.subprocess.run") as mock_run:
            mock_run.return_value = subprocess.CompletedProcess(["yarn"], 0)
            executor.run(["yarn"], cwd=tmp_path)

        assert console.export_text() == ""
