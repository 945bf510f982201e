"""
cloudhatch.models - Pydantic Models for Project and Tool Configuration
======================================================================

This module defines the data models shared by every pipeline stage. As in
the rest of cloudhatch, Pydantic gives us validation with readable error
messages and immutable, self-documenting records.

Architecture Notes
------------------
    ProjectConfig (collected from the operator, frozen)
    ├── name               -> {{application-name}}
    ├── description        -> package.json "description"
    ├── repo_name          -> {{repo-name}}                (extended variant)
    └── camel_case_name    -> {{application-name-camel}}   (extended variant)

    ScaffoldSettings (the tool's own configuration)
    ├── template_repository / variant
    ├── manifest_name / archive_name
    └── install / peer install / upgrade commands

Usage Example
-------------
>>> from cloudhatch.models import ProjectConfig, TemplateVariant
>>> config = ProjectConfig(name="my-dashboard", description="Ops dashboard")
>>> config.camel_name
'myDashboard'
>>> config.replacements(TemplateVariant.STANDARD)
{'{{application-name}}': 'my-dashboard'}
"""

from __future__ import annotations

import re
import tomllib
from enum import Enum
from pathlib import Path
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator


# =============================================================================
# Placeholder Tokens
# =============================================================================

APPLICATION_NAME_TOKEN = "{{application-name}}"
REPO_NAME_TOKEN = "{{repo-name}}"
CAMEL_CASE_NAME_TOKEN = "{{application-name-camel}}"

DEFAULT_TEMPLATE_REPOSITORY = "git@github.com:VHT/vht-cloud-services-ui-template.git"


def to_camel_case(value: str) -> str:
    """
    Convert a dashed or underscored name to a lowerCamelCase identifier.

    The result is always a valid JavaScript identifier: a name that starts
    with a digit gets a leading underscore.

    Examples
    --------
    >>> to_camel_case("my-cool_app")
    'myCoolApp'
    >>> to_camel_case("dashboard")
    'dashboard'
    >>> to_camel_case("2024-dashboard")
    '_2024Dashboard'
    """
    parts = [part for part in re.split(r"[^A-Za-z0-9]+", value) if part]
    if not parts:
        return ""
    head, *tail = parts
    camel = head[0].lower() + head[1:] + "".join(p[0].upper() + p[1:] for p in tail)
    if camel[0].isdigit():
        camel = f"_{camel}"
    return camel


# =============================================================================
# Enumerations
# =============================================================================

class TemplateVariant(str, Enum):
    """
    Which placeholder tokens a template recognizes.

    Attributes
    ----------
    STANDARD : str
        Only ``{{application-name}}``.

    EXTENDED : str
        Adds ``{{repo-name}}`` and ``{{application-name-camel}}``.
    """

    STANDARD = "standard"
    EXTENDED = "extended"

    @property
    def tokens(self) -> tuple[str, ...]:
        """Tokens substituted for this variant, in replacement order."""
        if self is TemplateVariant.EXTENDED:
            return (APPLICATION_NAME_TOKEN, REPO_NAME_TOKEN, CAMEL_CASE_NAME_TOKEN)
        return (APPLICATION_NAME_TOKEN,)


# =============================================================================
# Project Metadata
# =============================================================================

class ProjectConfig(BaseModel):
    """
    Project metadata collected from the operator.

    The record is frozen once built; the instantiation and manifest stages
    only read from it.

    Attributes
    ----------
    name : str
        Package name of the new application. Substituted for
        ``{{application-name}}`` in file contents, file names and
        directory names.

    description : str
        Written to the manifest's ``description`` field.

    repo_name : str | None
        Repository identifier for the extended template variant. Falls back
        to ``name`` when not given.

    camel_case_name : str | None
        camelCase identifier for the extended template variant. Derived from
        ``name`` when not given.

    Examples
    --------
    >>> config = ProjectConfig(name="Sample", description="demo")
    >>> config.name
    'sample'
    """

    model_config = ConfigDict(frozen=True)

    name: Annotated[str, Field(
        description="Project name (package.json name, directory names)",
        min_length=1,
        max_length=214,
    )]
    description: Annotated[str, Field(
        description="Short project description",
        min_length=1,
    )]
    repo_name: str | None = Field(
        default=None,
        description="Repository name for the extended template variant",
    )
    camel_case_name: str | None = Field(
        default=None,
        description="camelCase application identifier",
    )

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """
        Check the name is a usable npm package name.

        The name is used exactly as given; uppercase letters and surrounding
        whitespace are rejected rather than rewritten. Scoped names
        (``@scope/name``) are rejected because the name is also substituted
        into directory names.
        """
        if not re.fullmatch(r"[a-z0-9~-][a-z0-9._~-]*", v):
            msg = (
                f"Invalid project name '{v}'. Names must start with a lowercase "
                "letter, digit, '-' or '~' and contain only lowercase letters, "
                "digits, '.', '_', '-' and '~'."
            )
            raise ValueError(msg)
        return v

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: str) -> str:
        # Stored verbatim; only a blank description is refused.
        if not v.strip():
            raise ValueError("Description must not be empty.")
        return v

    @field_validator("repo_name")
    @classmethod
    def validate_repo_name(cls, v: str | None) -> str | None:
        if v is None:
            return None
        if not re.fullmatch(r"[A-Za-z0-9._-]+", v):
            msg = f"Invalid repository name '{v}'."
            raise ValueError(msg)
        return v

    @field_validator("camel_case_name")
    @classmethod
    def validate_camel_case_name(cls, v: str | None) -> str | None:
        if v is None:
            return None
        if not re.fullmatch(r"[A-Za-z_$][A-Za-z0-9_$]*", v):
            msg = f"Invalid camelCase name '{v}'. It must be a valid JavaScript identifier."
            raise ValueError(msg)
        return v

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------

    @property
    def repo(self) -> str:
        """Repository name, falling back to the project name."""
        return self.repo_name or self.name

    @property
    def camel_name(self) -> str:
        """camelCase identifier, derived from ``name`` unless given."""
        return self.camel_case_name or to_camel_case(self.name)

    def replacements(self, variant: TemplateVariant = TemplateVariant.STANDARD) -> dict[str, str]:
        """
        Map each token recognized by ``variant`` to its value.

        Parameters
        ----------
        variant : TemplateVariant
            The template flavour being instantiated.

        Returns
        -------
        dict[str, str]
            Token -> replacement, in the order tokens are substituted.
        """
        values = {
            APPLICATION_NAME_TOKEN: self.name,
            REPO_NAME_TOKEN: self.repo,
            CAMEL_CASE_NAME_TOKEN: self.camel_name,
        }
        return {token: values[token] for token in variant.tokens}


# =============================================================================
# Tool Settings
# =============================================================================

class ScaffoldSettings(BaseModel):
    """
    Configuration of the scaffolding tool itself.

    Defaults reproduce the stock cloud services UI workflow. Any field can
    be overridden from a TOML file (see ``from_toml``) and, for the most
    common ones, from the command line.

    Attributes
    ----------
    template_repository : str
        Clone URL of the template repository.

    variant : TemplateVariant
        Which placeholder tokens the template uses.

    manifest_name : str
        Manifest file whose ``description`` is rewritten.

    archive_name : str
        Name of the intermediate tar snapshot written inside the clone.

    install_command, peer_install_command, upgrade_command : list[str]
        Package-manager invocations.

    install_peer_dependencies : bool
        Whether the peer-dependency stage runs.

    upgrade : bool
        Whether the shared-tooling upgrade stage runs.
    """

    model_config = ConfigDict(extra="forbid")

    template_repository: str = Field(
        default=DEFAULT_TEMPLATE_REPOSITORY,
        min_length=1,
        description="Clone URL of the template repository",
    )
    variant: TemplateVariant = Field(
        default=TemplateVariant.STANDARD,
        description="Placeholder tokens recognized by the template",
    )
    manifest_name: str = Field(default="package.json", min_length=1)
    archive_name: str = Field(default="tmp.tar", min_length=1)
    install_command: list[str] = Field(default_factory=lambda: ["yarn"])
    peer_install_command: list[str] = Field(
        default_factory=lambda: ["yarn", "run", "react-scripts", "peerDeps"],
    )
    upgrade_command: list[str] = Field(
        default_factory=lambda: ["yarn", "run", "upgradevht"],
    )
    install_peer_dependencies: bool = True
    upgrade: bool = True

    @field_validator("install_command", "peer_install_command", "upgrade_command")
    @classmethod
    def validate_command(cls, v: list[str]) -> list[str]:
        if not v or not v[0].strip():
            raise ValueError("Commands must name an executable.")
        return v

    @property
    def template_name(self) -> str:
        """
        Directory name ``git clone`` creates for the template repository.

        Examples
        --------
        >>> ScaffoldSettings().template_name
        'vht-cloud-services-ui-template'
        """
        last = re.split(r"[/:]", self.template_repository.rstrip("/"))[-1]
        return last.removesuffix(".git")

    @classmethod
    def from_toml(cls, path: Path) -> ScaffoldSettings:
        """
        Load settings from a TOML file.

        Parameters
        ----------
        path : Path
            TOML file whose top-level keys are ``ScaffoldSettings`` fields.

        Raises
        ------
        FileNotFoundError
            If the file doesn't exist.
        tomllib.TOMLDecodeError
            If the file is not valid TOML.
        ValidationError
            If the file has unknown keys or invalid values.
        """
        with path.open("rb") as f:
            data = tomllib.load(f)

        return cls(**data)
