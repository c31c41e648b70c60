"""Error taxonomy for the build-integration pipeline."""
from __future__ import annotations

from pathlib import Path
from typing import Sequence

from core.command_runner import format_command


class PipelineError(RuntimeError):
    """Base class for fatal pipeline errors."""


class ConfigurationError(PipelineError):
    """Raised when a required build parameter is absent or malformed."""

    def __init__(self, message: str, *, field: str | None = None):
        super().__init__(message)
        self.field = field

    @classmethod
    def missing(cls, field: str) -> "ConfigurationError":
        return cls(f"Required build parameter '{field}' is not defined", field=field)


class BuildFailure(PipelineError):
    """Raised when the external toolchain exits with a non-zero status."""

    def __init__(self, exit_code: int, command: Sequence[str] = (), *, reason: str | None = None):
        message = f"External build failed with exit code {exit_code}"
        if reason:
            message = f"{message} ({reason})"
        if command:
            message = f"{message}: {format_command(command)}"
        super().__init__(message)
        self.exit_code = exit_code
        self.command = list(command)


class MissingArtifactError(PipelineError):
    """Raised when the toolchain reports success but the binary is absent."""

    def __init__(self, path: Path):
        super().__init__(f"Build reported success but the expected binary is missing: {path}")
        self.path = path


class StagingError(PipelineError):
    """Raised when artifacts cannot be copied into the output layout."""

    def __init__(self, message: str, *, path: Path | None = None):
        super().__init__(message)
        self.path = path


__all__ = [
    "BuildFailure",
    "ConfigurationError",
    "MissingArtifactError",
    "PipelineError",
    "StagingError",
]
