"""
pytest configuration and shared fixtures for cloudhatch tests.

This module provides fixtures and configuration used across all test modules.
Fixtures defined here are automatically available to all tests.

Fixtures
--------
template_source : Path
    A small front-end template tree containing placeholder tokens.

project_dir : Path
    An empty directory to create a project in.

executor : FakeExecutor
    A command executor that records calls and emulates git.
"""

import json
import re
import shutil
import tarfile
from pathlib import Path

import pytest

from cloudhatch.executor import CommandResult
from cloudhatch.models import ProjectConfig


class FakeExecutor:
    """
    Records commands instead of spawning processes.

    ``git clone`` copies ``template_dir`` into a clone directory named after
    the repository, and ``git archive`` writes ``template_dir`` to the
    requested tar file. Every other command just succeeds, unless its
    command line is listed in ``failures``.
    """

    def __init__(self, template_dir: Path) -> None:
        self.template_dir = template_dir
        self.calls: list[tuple[tuple[str, ...], Path]] = []
        self.failures: dict[str, int] = {}

    @property
    def commands(self) -> list[str]:
        return [" ".join(args) for args, _ in self.calls]

    def run(self, args, cwd: Path) -> CommandResult:
        command = tuple(args)
        self.calls.append((command, cwd))

        returncode = self.failures.get(" ".join(command), 0)
        if returncode:
            return CommandResult(args=command, returncode=returncode)

        if command[:2] == ("git", "clone"):
            name = re.split(r"[/:]", command[2])[-1].removesuffix(".git")
            clone_dir = cwd / name
            shutil.copytree(self.template_dir, clone_dir)
            (clone_dir / ".git").mkdir()
            (clone_dir / ".git" / "HEAD").write_text("ref: refs/heads/main\n")
        elif command[:2] == ("git", "archive"):
            output = cwd / command[command.index("--output") + 1]
            with tarfile.open(output, "w") as tar:
                for child in sorted(self.template_dir.iterdir()):
                    tar.add(child, arcname=child.name)

        return CommandResult(args=command, returncode=0)


@pytest.fixture
def template_source(tmp_path: Path) -> Path:
    """
    Create a template tree like the shared UI template.

    Contains tokens in file contents, a file name, nested directory names,
    the extended-variant tokens, and a binary asset.

    Returns
    -------
    Path
        Root of the template tree.
    """
    root = tmp_path / "template-source"
    root.mkdir()

    manifest = {
        "name": "{{application-name}}",
        "version": "0.1.0",
        "description": "",
        "private": True,
        "dependencies": {"react": "^18.2.0"},
        "scripts": {"start": "react-scripts start"},
    }
    (root / "package.json").write_text(json.dumps(manifest, indent=2))
    (root / "README.md").write_text("# {{application-name}}\n\nHello {{application-name}}   \n\n\n")

    src = root / "src" / "{{application-name}}-src"
    src.mkdir(parents=True)
    (src / "index.js").write_text("export const app = '{{application-name}}';\n")

    nested = src / "{{application-name}}"
    nested.mkdir()
    (nested / "{{application-name}}.config.js").write_text("module.exports = {};\n")

    config_dir = root / "config"
    config_dir.mkdir()
    (config_dir / "app.txt").write_text("{{repo-name}} {{application-name-camel}}\n")

    public = root / "public"
    public.mkdir()
    (public / "logo.png").write_bytes(b"\x89PNG\r\n\x1a\n\x00\xff\xfe")

    return root


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """Create an empty directory named like a new project."""
    path = tmp_path / "workspace" / "my-app"
    path.mkdir(parents=True)
    return path


@pytest.fixture
def executor(template_source: Path) -> FakeExecutor:
    """Provide a fake executor serving ``template_source``."""
    return FakeExecutor(template_source)


@pytest.fixture
def sample_config() -> ProjectConfig:
    """Project metadata used across tests."""
    return ProjectConfig(name="sample", description="demo")


# =============================================================================
# pytest Configuration
# =============================================================================

def pytest_configure(config: pytest.Config) -> None:
    """
    Configure pytest with custom markers.

    This function is called by pytest during startup to register
    custom markers used in our test suite.
    """
    config.addinivalue_line(
        "markers", "integration: marks tests requiring external resources"
    )
