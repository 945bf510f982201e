"""
cloudhatch.fetcher - Precondition Check and Template Fetch
==========================================================

Before anything is written, the target directory must be empty. The
template is then fetched in three steps:

    1. ``git clone <repository>``              (inside the target)
    2. ``git archive --format tar HEAD``       (inside the clone)
    3. extract the archive into the target, remove the clone

Archiving HEAD rather than copying the clone leaves out the ``.git``
directory and anything untracked, so only the template's committed files
land in the new project.

A failed clone leaves whatever git managed to write behind; nothing is
cleaned up automatically.
"""

from __future__ import annotations

import shutil
import tarfile
from typing import TYPE_CHECKING

from cloudhatch.errors import DirectoryNotEmptyError, PreconditionError, TemplateFetchError


if TYPE_CHECKING:
    from pathlib import Path

    from cloudhatch.executor import CommandExecutor
    from cloudhatch.models import ScaffoldSettings


def check_directory_empty(path: Path) -> None:
    """
    Fail unless ``path`` is an existing, empty directory.

    Parameters
    ----------
    path : Path
        Directory the project will be created in.

    Raises
    ------
    PreconditionError
        If ``path`` does not exist or is not a directory.
    DirectoryNotEmptyError
        If ``path`` contains any entry, hidden files included.
    """
    if not path.exists():
        raise PreconditionError(f"Directory '{path}' does not exist.")
    if not path.is_dir():
        raise PreconditionError(f"'{path}' is not a directory.")
    if any(path.iterdir()):
        raise DirectoryNotEmptyError(path)


def extract_archive(archive: Path, destination: Path) -> list[str]:
    """
    Extract a tar archive into ``destination``.

    Members that would escape ``destination`` (absolute paths, ``..``,
    unsafe links) are refused by the ``data`` extraction filter.

    Returns
    -------
    list[str]
        Member names that were extracted.

    Raises
    ------
    TemplateFetchError
        If the archive cannot be read or a member is refused.
    """
    try:
        with tarfile.open(archive) as tar:
            names = tar.getnames()
            tar.extractall(destination, filter="data")
    except (tarfile.TarError, OSError) as e:
        raise TemplateFetchError(f"Archive extraction failed. {e}") from e

    return names


def fetch_template(
    settings: ScaffoldSettings,
    target: Path,
    executor: CommandExecutor,
) -> list[str]:
    """
    Snapshot the template repository's default branch into ``target``.

    Parameters
    ----------
    settings : ScaffoldSettings
        Supplies the repository URL and archive name.

    target : Path
        Directory the template files are extracted into.

    executor : CommandExecutor
        Runs ``git``.

    Returns
    -------
    list[str]
        Paths (relative to ``target``) of the extracted entries.

    Raises
    ------
    TemplateFetchError
        If ``git clone`` or ``git archive`` exits non-zero, or the archive
        cannot be extracted.
    """
    clone_dir = target / settings.template_name

    result = executor.run(["git", "clone", settings.template_repository], cwd=target)
    if not result.ok:
        raise TemplateFetchError("git clone failed")

    result = executor.run(
        ["git", "archive", "--format", "tar", "--output", f"./{settings.archive_name}", "HEAD"],
        cwd=clone_dir,
    )
    if not result.ok:
        raise TemplateFetchError("git archive failed")

    names = extract_archive(clone_dir / settings.archive_name, target)

    # The clone holds both the .git directory and the archive.
    shutil.rmtree(clone_dir)

    return names
