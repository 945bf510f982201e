"""
cloudhatch.instantiator - Template Instantiation
================================================

Turns a freshly fetched template tree into the operator's project by
substituting placeholder tokens (``{{application-name}}`` and, for the
extended variant, ``{{repo-name}}`` and ``{{application-name-camel}}``).

Algorithm
---------
The tree is collected once, up front, and only then mutated:

    1. gather_tree()    - every file and directory, directories post-order
    2. file contents    - tokens replaced, trailing whitespace stripped,
                          exactly one trailing newline
    3. file names       - renamed in place (parent paths still valid)
    4. directory names  - renamed deepest first

Renaming a directory invalidates every collected path beneath it. Because
directories are renamed last and children before parents, no collected path
is used after one of its ancestors moved.

Symlinks are neither followed nor rewritten. Files that are not UTF-8 text
(images, fonts, Latin-1 sources) have their tokens replaced at the byte
level and are otherwise left byte-for-byte untouched: no re-encoding and no
whitespace normalization.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from cloudhatch.errors import TemplateError
from cloudhatch.models import TemplateVariant


if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path

    from cloudhatch.models import ProjectConfig


@dataclass
class TemplateTree:
    """
    Snapshot of a template's paths taken before any mutation.

    Attributes
    ----------
    files : list[Path]
        Regular files, each listed once.

    directories : list[Path]
        Directories in post-order: a directory appears after all of its
        descendants.
    """

    files: list[Path] = field(default_factory=list)
    directories: list[Path] = field(default_factory=list)


@dataclass
class InstantiationResult:
    """
    What instantiation did to the tree.

    Attributes
    ----------
    files_rewritten : list[Path]
        Files whose content was processed (paths as they were before any
        rename).

    files_skipped : list[Path]
        Files that are not UTF-8 text. Tokens in them were replaced as
        bytes; nothing else was changed.

    renamed : list[tuple[Path, Path]]
        ``(old, new)`` pairs for every renamed file or directory, in the
        order the renames happened.
    """

    files_rewritten: list[Path] = field(default_factory=list)
    files_skipped: list[Path] = field(default_factory=list)
    renamed: list[tuple[Path, Path]] = field(default_factory=list)


def gather_tree(root: Path, tree: TemplateTree | None = None) -> TemplateTree:
    """
    Recursively collect files and directories under ``root``.

    ``root`` itself is not included. Entries are visited in sorted order so
    the result is deterministic.
    """
    if tree is None:
        tree = TemplateTree()

    for child in sorted(root.iterdir()):
        if child.is_symlink():
            continue
        if child.is_file():
            tree.files.append(child)
        elif child.is_dir():
            gather_tree(child, tree)
            tree.directories.append(child)

    return tree


def substitute(text: str, replacements: Mapping[str, str]) -> str:
    """
    Replace every occurrence of each token in ``text``.

    Examples
    --------
    >>> substitute("Hello {{application-name}}", {"{{application-name}}": "sample"})
    'Hello sample'
    """
    for token, value in replacements.items():
        text = text.replace(token, value)
    return text


def substitute_bytes(data: bytes, replacements: Mapping[str, str]) -> bytes:
    """Replace every occurrence of each UTF-8 encoded token in ``data``."""
    for token, value in replacements.items():
        data = data.replace(token.encode("utf-8"), value.encode("utf-8"))
    return data


def rewrite_file(path: Path, replacements: Mapping[str, str]) -> bool:
    """
    Substitute tokens in one file's content.

    UTF-8 text is rewritten with trailing whitespace removed and a single
    trailing newline, whether or not it contained a token. Any other file
    gets a byte-level replacement of the UTF-8 encoded tokens and is
    written back only if a token was found.

    Returns
    -------
    bool
        False if the file is not UTF-8 text.

    Raises
    ------
    OSError
        If the file cannot be read or written.
    """
    raw = path.read_bytes()
    try:
        content = raw.decode("utf-8")
    except UnicodeDecodeError:
        replaced = substitute_bytes(raw, replacements)
        if replaced != raw:
            path.write_bytes(replaced)
        return False

    new_content = substitute(content, replacements).rstrip()
    path.write_text(f"{new_content}\n", encoding="utf-8")
    return True


def _rename(path: Path, replacements: Mapping[str, str]) -> Path | None:
    new_name = substitute(path.name, replacements)
    if new_name == path.name:
        return None

    new_path = path.with_name(new_name)
    if new_path.exists():
        raise TemplateError(f"Cannot rename '{path}': '{new_path}' already exists.")

    path.rename(new_path)
    return new_path


def instantiate_template(
    config: ProjectConfig,
    root: Path,
    variant: TemplateVariant = TemplateVariant.STANDARD,
) -> InstantiationResult:
    """
    Substitute placeholder tokens throughout the tree under ``root``.

    Parameters
    ----------
    config : ProjectConfig
        Supplies the replacement values.

    root : Path
        Root of the fetched template (the new project directory).

    variant : TemplateVariant
        Selects which tokens are recognized.

    Returns
    -------
    InstantiationResult
        Files rewritten or skipped, and every rename performed.

    Raises
    ------
    OSError
        If a file cannot be read, written or renamed.
    TemplateError
        If a rename would overwrite an existing path.
    """
    replacements = config.replacements(variant)
    tree = gather_tree(root)
    result = InstantiationResult()

    for file_path in tree.files:
        if rewrite_file(file_path, replacements):
            result.files_rewritten.append(file_path)
        else:
            result.files_skipped.append(file_path)

    # Parents are untouched until the directory pass, so file paths are valid.
    for file_path in tree.files:
        new_path = _rename(file_path, replacements)
        if new_path is not None:
            result.renamed.append((file_path, new_path))

    for dir_path in tree.directories:
        new_path = _rename(dir_path, replacements)
        if new_path is not None:
            result.renamed.append((dir_path, new_path))

    return result
