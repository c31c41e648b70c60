"""Build-integration pipeline planning and execution."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable, List

from core.command_runner import CommandRunner
from core.console import Console

from .artifacts import ArtifactSet, expected_artifacts, locate_artifacts
from .errors import MissingArtifactError, PipelineError
from .invoker import ExternalBuildInvoker
from .profiles import BuildProfile, select_profile
from .request import BuildRequest, validate_request
from .staging import OutputLayout, resolve_layout, stage_artifacts


class PipelineState(str, Enum):
    VALIDATING = "validating"
    SELECTING_PROFILE = "selecting-profile"
    INVOKING = "invoking"
    LOCATING = "locating"
    STAGING = "staging"
    DONE = "done"
    FAILED = "failed"
    MISSING_ARTIFACT = "missing-artifact"


TransitionHook = Callable[[PipelineState], None]


@dataclass(slots=True)
class BuildPlan:
    request: BuildRequest
    profile: BuildProfile
    command: List[str]
    cwd: Path
    artifacts: ArtifactSet
    layout: OutputLayout | None

    def describe(self) -> List[str]:
        lines = [
            f"profile: {self.profile.directory}",
            f"cwd: {self.cwd}",
            f"binary: {self.artifacts.binary}",
            f"debug symbols: {self.artifacts.debug_symbols} (optional)",
        ]
        if self.layout is not None:
            lines.append(f"destination: {self.layout.destination}")
        else:
            lines.append("destination: <staging disabled>")
        return lines


@dataclass(slots=True)
class PipelineResult:
    state: PipelineState
    history: List[PipelineState]
    profile: BuildProfile
    artifacts: ArtifactSet
    layout: OutputLayout | None
    staged: List[Path] = field(default_factory=list)


class Pipeline:
    """Runs one :class:`BuildRequest` through validate, build, verify and stage.

    Every run is independent: the request carries the build configuration and
    nothing is remembered between runs.
    """

    def __init__(
        self,
        *,
        command_runner: CommandRunner,
        console: Console | None = None,
        on_transition: TransitionHook | None = None,
    ) -> None:
        self._console = console or Console()
        self._invoker = ExternalBuildInvoker(command_runner, console=self._console)
        self._on_transition = on_transition

    def plan(self, request: BuildRequest, *, stage: bool = True) -> BuildPlan:
        """Validate ``request`` and derive everything a run would do."""

        validate_request(request, require_output=stage)
        profile = select_profile(request.build_config)
        return BuildPlan(
            request=request,
            profile=profile,
            command=self._invoker.build_command(request, profile),
            cwd=request.working_path,
            artifacts=expected_artifacts(request.target_path, profile, request.artifact_names),
            layout=resolve_layout(request.output_path, request.build_config) if stage else None,
        )

    def rehearse(self, request: BuildRequest, *, stage: bool = True) -> BuildPlan:
        """Plan ``request`` and pass its command to the runner, then stop.

        Used with a recording runner: nothing is built, so the artifacts are
        neither verified nor staged.
        """

        plan = self.plan(request, stage=stage)
        self._invoker.invoke(request, plan.profile)
        return plan

    def run(self, request: BuildRequest, *, stage: bool = True) -> PipelineResult:
        history: List[PipelineState] = []

        def enter(state: PipelineState) -> None:
            history.append(state)
            self._console.debug(f"pipeline -> {state.value}")
            if self._on_transition is not None:
                self._on_transition(state)

        try:
            enter(PipelineState.VALIDATING)
            validate_request(request, require_output=stage)

            enter(PipelineState.SELECTING_PROFILE)
            profile = select_profile(request.build_config)

            enter(PipelineState.INVOKING)
            self._invoker.invoke(request, profile)

            enter(PipelineState.LOCATING)
            artifacts = locate_artifacts(request.target_path, profile, request.artifact_names)
            if not artifacts.has_debug_symbols:
                self._console.debug(f"no debug symbols at {artifacts.debug_symbols}")

            layout: OutputLayout | None = None
            staged: List[Path] = []
            if stage:
                enter(PipelineState.STAGING)
                layout = resolve_layout(request.output_path, request.build_config)
                staged = stage_artifacts(artifacts, layout, console=self._console)
        except MissingArtifactError:
            enter(PipelineState.MISSING_ARTIFACT)
            raise
        except PipelineError:
            enter(PipelineState.FAILED)
            raise

        enter(PipelineState.DONE)
        return PipelineResult(
            state=PipelineState.DONE,
            history=history,
            profile=profile,
            artifacts=artifacts,
            layout=layout,
            staged=staged,
        )


__all__ = ["BuildPlan", "Pipeline", "PipelineResult", "PipelineState", "TransitionHook"]
