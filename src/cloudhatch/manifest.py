"""
cloudhatch.manifest - package.json Update
=========================================

The template's manifest already carries the right name (it contains the
``{{application-name}}`` token); only the description has to be filled in.
The document is parsed, exactly one field is overwritten, and it is written
back with 2-space indentation. Key order is preserved and non-ASCII text
is kept as-is.

Every other field keeps its value, not its source text: the file is
re-serialized, so escapes such as ``\\u00e9`` come back as the literal
character, numbers are written in Python's form (``1e5`` becomes
``100000.0``) and the original indentation is replaced.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from cloudhatch.errors import ManifestError


if TYPE_CHECKING:
    from pathlib import Path

    from cloudhatch.models import ProjectConfig


def read_manifest(path: Path) -> dict[str, Any]:
    """
    Parse a JSON manifest.

    Raises
    ------
    ManifestError
        If the file is missing, is not valid JSON, or is not a JSON object.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise ManifestError(f"No {path.name} found at {path.parent}") from e

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ManifestError(f"Invalid {path.name}: {e}") from e

    if not isinstance(data, dict):
        raise ManifestError(f"Invalid {path.name}: expected a JSON object")

    return data


def write_manifest(path: Path, data: dict[str, Any]) -> None:
    """
    Serialize ``data`` with 2-space indentation and a trailing newline.

    Values round-trip exactly; their spelling in the file may not.
    """
    path.write_text(
        json.dumps(data, indent=2, ensure_ascii=False) + "\n",
        encoding="utf-8",
    )


def update_manifest(config: ProjectConfig, path: Path) -> dict[str, Any]:
    """
    Set the manifest's ``description`` to the operator-supplied one.

    Parameters
    ----------
    config : ProjectConfig
        Supplies the description.

    path : Path
        Manifest file (normally ``package.json``).

    Returns
    -------
    dict[str, Any]
        The manifest as written.

    Raises
    ------
    ManifestError
        If the existing manifest is missing or malformed.
    """
    data = read_manifest(path)
    data["description"] = config.description
    write_manifest(path, data)
    return data
