"""
cloudhatch.cli - Command Line Interface
=======================================

This module provides the command-line interface for cloudhatch using Typer,
with questionary for the interactive prompts and Rich for terminal output.

Architecture
------------
    app (main entry point)
    └── new      - Create a new front-end application in an empty directory

The ``new`` command is interactive by default: it asks for the project
name (defaulting to the directory name) and description. Anything given
as an option is not asked for, and ``--yes`` accepts the remaining
defaults so the command can run unattended.

Usage Examples
--------------
Interactive mode, in a new empty directory:
    $ mkdir my-dashboard && cd my-dashboard
    $ cloudhatch new

Non-interactive mode:
    $ cloudhatch new ./my-dashboard --description "Ops dashboard" --yes

Extended template with repo and camelCase identifiers:
    $ cloudhatch new --variant extended --repo-name my-dashboard-ui

See Also
--------
- pipeline.py: The scaffolding state machine
- models.py: Configuration data models
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import questionary
import typer
from pydantic import ValidationError
from rich import print as rprint
from rich.console import Console
from rich.panel import Panel

from cloudhatch import __version__
from cloudhatch.executor import SubprocessExecutor
from cloudhatch.models import ProjectConfig, ScaffoldSettings, TemplateVariant, to_camel_case
from cloudhatch.pipeline import ScaffoldPipeline


# =============================================================================
# CLI Application Setup
# =============================================================================

app = typer.Typer(
    name="cloudhatch",
    help="Create a new cloud services UI project from the shared template.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=True,
)

# Console for rich output
console = Console()


# =============================================================================
# Version Callback
# =============================================================================

def version_callback(value: bool) -> None:
    """Display version information and exit."""
    if value:
        console.print(Panel(
            f"[bold green]cloudhatch[/] version [cyan]{__version__}[/]\n\n"
            f"[dim]Cloud services UI project scaffolder[/]",
            border_style="green",
        ))
        raise typer.Exit()


# =============================================================================
# Interactive Prompts
# =============================================================================

def _ask_text(message: str, default: str = "", *, required: bool = False) -> str:
    """
    Ask a free-text question.

    Raises
    ------
    typer.Abort
        If the operator cancels the prompt (Ctrl-C).
    """
    result = questionary.text(
        message,
        default=default,
        validate=(lambda v: bool(v.strip()) or "A value is required") if required else None,
    ).ask()

    if result is None:
        raise typer.Abort()

    return result


def collect_config(
    target: Path,
    variant: TemplateVariant,
    *,
    name: str | None = None,
    description: str | None = None,
    repo_name: str | None = None,
    camel_name: str | None = None,
    assume_yes: bool = False,
) -> ProjectConfig:
    """
    Gather project metadata, prompting for whatever was not given.

    Defaults are derived from the target directory's name. The suggested
    project name is that name lowercased; typed values are never rewritten.

    Parameters
    ----------
    target : Path
        Directory the project is created in.

    variant : TemplateVariant
        The extended variant also asks for repo and camelCase names.

    name, description, repo_name, camel_name : str | None
        Values supplied on the command line.

    assume_yes : bool, default=False
        If True, never prompt; missing values take their defaults.

    Returns
    -------
    ProjectConfig
        Validated, frozen project metadata.

    Raises
    ------
    typer.Abort
        If the operator cancels a prompt.
    ValueError
        If ``assume_yes`` is set without a description, or a value is
        invalid (pydantic ``ValidationError``).
    """
    default_name = target.name.lower()

    if name is None:
        name = default_name if assume_yes else _ask_text("Project Name:", default_name, required=True)

    if description is None:
        if assume_yes:
            raise ValueError("A description is required; pass --description.")
        description = _ask_text("Description:", required=True)

    if variant is TemplateVariant.EXTENDED:
        if repo_name is None:
            repo_name = target.name if assume_yes else _ask_text("Repo Name:", target.name)
        if camel_name is None:
            default_camel = to_camel_case(name)
            camel_name = (
                default_camel if assume_yes else _ask_text("Camel Case App Name:", default_camel)
            )

    return ProjectConfig(
        name=name,
        description=description,
        repo_name=repo_name or None,
        camel_case_name=camel_name or None,
    )


def load_settings(
    config_file: Path | None,
    *,
    template: str | None = None,
    variant: str | None = None,
    skip_peer_deps: bool = False,
    skip_upgrade: bool = False,
) -> ScaffoldSettings:
    """
    Build tool settings from an optional TOML file and CLI overrides.

    Command-line values win over the file.

    Raises
    ------
    ValueError
        If the variant is unknown or a value is invalid.
    """
    settings = ScaffoldSettings.from_toml(config_file) if config_file else ScaffoldSettings()

    overrides: dict[str, object] = {}
    if template:
        overrides["template_repository"] = template
    if variant:
        try:
            overrides["variant"] = TemplateVariant(variant.lower())
        except ValueError:
            valid = ", ".join(v.value for v in TemplateVariant)
            msg = f"Invalid variant '{variant}'. Valid: {valid}"
            raise ValueError(msg) from None
    if skip_peer_deps:
        overrides["install_peer_dependencies"] = False
    if skip_upgrade:
        overrides["upgrade"] = False

    if not overrides:
        return settings
    return ScaffoldSettings(**{**settings.model_dump(), **overrides})


# =============================================================================
# Main Application Callback
# =============================================================================

@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """
    [bold]cloudhatch[/] - Cloud services UI project scaffolder.

    Clones the shared UI template, fills in your project details and
    installs dependencies with [cyan]yarn[/].

    [bold]Quick Start:[/]

        mkdir my-app && cd my-app && cloudhatch new
    """


# =============================================================================
# New Command - Create a New Project
# =============================================================================

@app.command()
def new(
    path: Annotated[
        Path | None,
        typer.Argument(
            help="Empty directory to create the project in (default: current directory)",
            file_okay=False,
        ),
    ] = None,
    name: Annotated[
        str | None,
        typer.Option("--name", "-n", help="Project name (default: directory name)"),
    ] = None,
    description: Annotated[
        str | None,
        typer.Option("--description", "-d", help="Short project description"),
    ] = None,
    repo_name: Annotated[
        str | None,
        typer.Option("--repo-name", help="Repository name (extended variant)"),
    ] = None,
    camel_name: Annotated[
        str | None,
        typer.Option("--camel-name", help="camelCase application name (extended variant)"),
    ] = None,
    template: Annotated[
        str | None,
        typer.Option("--template", "-t", help="Template repository clone URL"),
    ] = None,
    variant: Annotated[
        str | None,
        typer.Option("--variant", help="Template variant: standard, extended"),
    ] = None,
    config_file: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="TOML file with cloudhatch settings",
            exists=True,
            dir_okay=False,
        ),
    ] = None,
    skip_peer_deps: Annotated[
        bool,
        typer.Option("--skip-peer-deps", help="Skip the peer dependency install"),
    ] = False,
    skip_upgrade: Annotated[
        bool,
        typer.Option("--skip-upgrade", help="Skip the shared tooling upgrade"),
    ] = False,
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip all prompts, use defaults"),
    ] = False,
) -> None:
    """
    Create a new cloud services UI project.

    The target directory must be empty. The template is cloned, its
    [cyan]{{application-name}}[/] placeholders are filled in, the
    package.json description is set and dependencies are installed.

    [bold]Examples:[/]

        # Interactive, in the current (empty) directory
        cloudhatch new

        # Unattended
        cloudhatch new ./my-app -d "My app" --yes
    """
    try:
        settings = load_settings(
            config_file,
            template=template,
            variant=variant,
            skip_peer_deps=skip_peer_deps,
            skip_upgrade=skip_upgrade,
        )
    except (ValidationError, ValueError, OSError) as e:
        rprint(f"[red]Error:[/] {e}")
        raise typer.Exit(1)

    target = (path or Path.cwd()).resolve()

    def prompt_for_config() -> ProjectConfig:
        if not yes:
            console.print("[blue]Enter project details:[/]")
        return collect_config(
            target,
            settings.variant,
            name=name,
            description=description,
            repo_name=repo_name,
            camel_name=camel_name,
            assume_yes=yes,
        )

    console.print()
    console.print("[bold blue]Create a new cloud services UI project.[/]")

    pipeline = ScaffoldPipeline(
        target=target,
        settings=settings,
        executor=SubprocessExecutor(console),
        collect_config=prompt_for_config,
        console=console,
    )
    result = pipeline.run()

    if not result.success:
        raise typer.Exit(1)


# =============================================================================
# Entry Point
# =============================================================================

if __name__ == "__main__":
    app()
