"""
cloudhatch.pipeline - Scaffolding State Machine
===============================================

This module drives a project from an empty directory to an installed
application. Stages run strictly in order, never loop, and never run
concurrently:

    CheckPreconditions → CollectConfig → Fetch → Instantiate
        → UpdateManifest → InstallDeps → [InstallPeerDeps] → [Upgrade]
        → Success | Failure

Bracketed stages are optional and controlled by ``ScaffoldSettings``.
Any stage failure moves straight to ``Failure``: a diagnostic is printed,
the result records which stage failed, and later stages (including the
upgrade) never run. Partially written files are left in place.

Usage Example
-------------
>>> from cloudhatch.executor import SubprocessExecutor
>>> from cloudhatch.models import ProjectConfig, ScaffoldSettings
>>> pipeline = ScaffoldPipeline(
...     target=Path.cwd(),
...     settings=ScaffoldSettings(),
...     executor=SubprocessExecutor(),
...     collect_config=lambda: ProjectConfig(name="sample", description="demo"),
... )
>>> result = pipeline.run()
>>> result.success
True
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from cloudhatch.errors import ScaffoldError
from cloudhatch.fetcher import check_directory_empty, fetch_template
from cloudhatch.installer import (
    install_dependencies,
    install_peer_dependencies,
    upgrade_dependencies,
)
from cloudhatch.instantiator import instantiate_template
from cloudhatch.manifest import update_manifest


if TYPE_CHECKING:
    from collections.abc import Callable

    from cloudhatch.executor import CommandExecutor
    from cloudhatch.models import ProjectConfig, ScaffoldSettings


# =============================================================================
# States
# =============================================================================

class Stage(str, Enum):
    """Pipeline states, in execution order."""

    CHECK_PRECONDITIONS = "check_preconditions"
    COLLECT_CONFIG = "collect_config"
    FETCH = "fetch"
    INSTANTIATE = "instantiate"
    UPDATE_MANIFEST = "update_manifest"
    INSTALL_DEPS = "install_deps"
    INSTALL_PEER_DEPS = "install_peer_deps"
    UPGRADE = "upgrade"
    SUCCESS = "success"
    FAILURE = "failure"

    @property
    def is_terminal(self) -> bool:
        return self in {Stage.SUCCESS, Stage.FAILURE}


# Stage headers shown to the operator; stages without one run silently.
STAGE_HEADERS: dict[Stage, str] = {
    Stage.FETCH: "Copying template files...",
    Stage.UPDATE_MANIFEST: "Updating {manifest}...",
    Stage.INSTALL_DEPS: "Installing dependencies...",
    Stage.UPGRADE: "Upgrading dependencies...",
}


@dataclass
class PipelineResult:
    """
    Outcome of one pipeline run.

    Attributes
    ----------
    success : bool
        Whether the run reached ``Success``.

    project_path : Path
        Directory the project was created in.

    stages_completed : list[Stage]
        Non-terminal stages that finished, in order.

    failed_stage : Stage | None
        The stage that moved the run to ``Failure``.

    errors : list[str]
        Diagnostics for the failure, if any.

    config : ProjectConfig | None
        Metadata collected from the operator, once available.
    """

    success: bool
    project_path: Path
    stages_completed: list[Stage] = field(default_factory=list)
    failed_stage: Stage | None = None
    errors: list[str] = field(default_factory=list)
    config: ProjectConfig | None = None

    @property
    def final_stage(self) -> Stage:
        return Stage.SUCCESS if self.success else Stage.FAILURE


# =============================================================================
# Pipeline
# =============================================================================

class ScaffoldPipeline:
    """
    Linear state machine that creates a project in ``target``.

    Parameters
    ----------
    target : Path
        Directory the project is created in. Must be empty.

    settings : ScaffoldSettings
        Template location, variant and package-manager commands.

    executor : CommandExecutor
        Runs git and the package manager.

    collect_config : Callable[[], ProjectConfig]
        Asks the operator for project metadata. Called only after the
        precondition check passed.

    console : Console | None
        Rich console for stage headers, diagnostics and the final banner.
    """

    def __init__(
        self,
        target: Path,
        settings: ScaffoldSettings,
        executor: CommandExecutor,
        collect_config: Callable[[], ProjectConfig],
        console: Console | None = None,
    ) -> None:
        self.target = target
        self.settings = settings
        self.executor = executor
        self.collect_config = collect_config
        self.console = console or Console()
        self.config: ProjectConfig | None = None

        self._handlers: dict[Stage, Callable[[], None]] = {
            Stage.CHECK_PRECONDITIONS: self._check_preconditions,
            Stage.COLLECT_CONFIG: self._collect_config,
            Stage.FETCH: self._fetch,
            Stage.INSTANTIATE: self._instantiate,
            Stage.UPDATE_MANIFEST: self._update_manifest,
            Stage.INSTALL_DEPS: self._install_deps,
            Stage.INSTALL_PEER_DEPS: self._install_peer_deps,
            Stage.UPGRADE: self._upgrade,
        }

    # -------------------------------------------------------------------------
    # Planning
    # -------------------------------------------------------------------------

    def plan(self) -> list[Stage]:
        """Non-terminal stages this run will go through, in order."""
        stages = [
            Stage.CHECK_PRECONDITIONS,
            Stage.COLLECT_CONFIG,
            Stage.FETCH,
            Stage.INSTANTIATE,
            Stage.UPDATE_MANIFEST,
            Stage.INSTALL_DEPS,
        ]
        if self.settings.install_peer_dependencies:
            stages.append(Stage.INSTALL_PEER_DEPS)
        if self.settings.upgrade:
            stages.append(Stage.UPGRADE)
        return stages

    def next_stage(self, stage: Stage) -> Stage:
        """Stage that follows ``stage`` when it succeeds."""
        stages = self.plan()
        index = stages.index(stage)
        if index + 1 < len(stages):
            return stages[index + 1]
        return Stage.SUCCESS

    # -------------------------------------------------------------------------
    # Execution
    # -------------------------------------------------------------------------

    def run(self) -> PipelineResult:
        """
        Drive the state machine until ``Success`` or ``Failure``.

        Returns
        -------
        PipelineResult
            ``success`` is False if any stage failed; the failure has
            already been reported on the console.
        """
        result = PipelineResult(success=False, project_path=self.target)
        headers = [s for s in self.plan() if s in STAGE_HEADERS]

        stage = Stage.CHECK_PRECONDITIONS
        while not stage.is_terminal:
            if stage in STAGE_HEADERS:
                self._print_header(headers.index(stage) + 1, len(headers), stage)

            try:
                self._handlers[stage]()
            except (ScaffoldError, OSError, ValueError) as e:
                result.failed_stage = stage
                result.errors.append(str(e))
                result.config = self.config
                self._print_failure(e)
                return result

            result.stages_completed.append(stage)
            stage = self.next_stage(stage)

        result.success = True
        result.config = self.config
        self._print_success()
        return result

    def _require_config(self) -> ProjectConfig:
        if self.config is None:
            raise ScaffoldError("Project configuration has not been collected.")
        return self.config

    def _check_preconditions(self) -> None:
        check_directory_empty(self.target)

    def _collect_config(self) -> None:
        self.config = self.collect_config()

    def _fetch(self) -> None:
        fetch_template(self.settings, self.target, self.executor)

    def _instantiate(self) -> None:
        instantiate_template(self._require_config(), self.target, self.settings.variant)

    def _update_manifest(self) -> None:
        update_manifest(self._require_config(), self.target / self.settings.manifest_name)

    def _install_deps(self) -> None:
        install_dependencies(self.settings, self.target, self.executor)

    def _install_peer_deps(self) -> None:
        install_peer_dependencies(self.settings, self.target, self.executor)

    def _upgrade(self) -> None:
        upgrade_dependencies(self.settings, self.target, self.executor)

    # -------------------------------------------------------------------------
    # Output
    # -------------------------------------------------------------------------

    def _print_header(self, number: int, total: int, stage: Stage) -> None:
        header = STAGE_HEADERS[stage].format(manifest=self.settings.manifest_name)
        self.console.print(f"[bold]\\[{number}/{total}][/] {header}")

    def _print_failure(self, error: Exception) -> None:
        self.console.print()
        self.console.print(f"[bold red]Failed:[/] {escape(str(error))}")

    def _print_success(self) -> None:
        package_manager = self.settings.install_command[0]
        self.console.print()
        self.console.print(
            Panel(
                "[bold green]⭐️ Application creation complete. ⭐️[/]\n\n"
                f"[dim]Location:[/] {self.target}\n\n"
                "[bold]Next steps:[/]\n"
                "  You should now [blue]git init[/] this project.\n"
                f"  Run [blue]{package_manager} react-scripts[/] for a list of commands.",
                title="[bold green]Success[/]",
                border_style="green",
            )
        )
