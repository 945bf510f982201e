"""
cloudhatch.errors - Exception Hierarchy
=======================================

Every failure the scaffolding pipeline knows about derives from
``ScaffoldError``. Library code raises these; the CLI maps them to a
printed diagnostic and exit status 1.

    ScaffoldError
    ├── PreconditionError
    │   └── DirectoryNotEmptyError
    ├── TemplateFetchError
    ├── TemplateError
    ├── ManifestError
    └── DependencyInstallError
"""

from __future__ import annotations

from pathlib import Path


class ScaffoldError(Exception):
    """Base class for all scaffolding failures."""


class PreconditionError(ScaffoldError):
    """The target location cannot host a new project."""


class DirectoryNotEmptyError(PreconditionError):
    """
    The target directory already contains entries.

    Attributes
    ----------
    path : Path
        The directory that was checked.
    """

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(
            f"Directory '{path}' is not empty. "
            "Run this command from a new empty directory where the project will be created."
        )


class TemplateFetchError(ScaffoldError):
    """Cloning, archiving or extracting the template failed."""


class TemplateError(ScaffoldError):
    """The fetched template tree could not be instantiated."""


class ManifestError(ScaffoldError):
    """The project manifest is missing or malformed."""


class DependencyInstallError(ScaffoldError):
    """
    A package-manager step exited with a non-zero status.

    Attributes
    ----------
    step : str
        Human-readable name of the failed step.

    returncode : int
        Exit status of the failed command.
    """

    def __init__(self, step: str, returncode: int) -> None:
        self.step = step
        self.returncode = returncode
        super().__init__(f"{step} failed (exit status {returncode})")
