"""Synchronous invocation of the external toolchain."""
from __future__ import annotations

from typing import List

from core.command_runner import CommandError, CommandResult, CommandRunner
from core.console import Console

from .errors import BuildFailure, ConfigurationError
from .profiles import BuildProfile
from .request import BuildRequest

BUILD_SUBCOMMAND = "build"
COMMAND_NOT_FOUND_EXIT_CODE = 127


class ExternalBuildInvoker:
    def __init__(self, runner: CommandRunner, *, console: Console | None = None) -> None:
        self._runner = runner
        self._console = console or Console()

    @staticmethod
    def build_command(request: BuildRequest, profile: BuildProfile) -> List[str]:
        # Paths are passed as given; the toolchain resolves them from working_dir.
        command = [
            str(request.toolchain_command),
            BUILD_SUBCOMMAND,
            "--manifest-path",
            str(request.manifest_path),
            "--target-dir",
            str(request.target_dir),
        ]
        command.extend(profile.arguments)
        return command

    def invoke(self, request: BuildRequest, profile: BuildProfile) -> CommandResult:
        """Run the toolchain to completion and raise on a non-zero exit code."""

        command = self.build_command(request, profile)
        cwd = request.working_path
        if not cwd.is_dir():
            raise ConfigurationError(f"Working directory '{cwd}' does not exist or is not a directory", field="working_dir")

        self._console.info(f"Building {request.manifest_file} ({profile.directory})")
        self._console.debug(f"cwd={cwd} command={self._runner.format_command(command)}")
        try:
            return self._runner.run(
                command,
                cwd=cwd,
                env=dict(request.environment) if request.environment else None,
                note="external build",
                stream=True,
            )
        except CommandError as exc:
            raise BuildFailure(exc.result.returncode, command) from exc
        except OSError as exc:
            raise BuildFailure(
                COMMAND_NOT_FOUND_EXIT_CODE,
                command,
                reason=f"could not start '{request.toolchain_command}': {exc}",
            ) from exc


__all__ = ["BUILD_SUBCOMMAND", "COMMAND_NOT_FOUND_EXIT_CODE", "ExternalBuildInvoker"]
