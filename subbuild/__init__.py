"""Integrate an externally built subsystem and stage its artifacts."""

from .artifacts import ArtifactSet, expected_artifacts, locate_artifacts
from .errors import BuildFailure, ConfigurationError, MissingArtifactError, PipelineError, StagingError
from .invoker import ExternalBuildInvoker
from .pipeline import BuildPlan, Pipeline, PipelineResult, PipelineState
from .profiles import BuildProfile, select_profile
from .request import ArtifactNames, BuildRequest, validate_request
from .staging import OutputLayout, resolve_layout, stage_artifacts
from .cli import main

__all__ = [
    "ArtifactNames",
    "ArtifactSet",
    "BuildFailure",
    "BuildPlan",
    "BuildProfile",
    "BuildRequest",
    "ConfigurationError",
    "ExternalBuildInvoker",
    "MissingArtifactError",
    "OutputLayout",
    "Pipeline",
    "PipelineError",
    "PipelineResult",
    "PipelineState",
    "StagingError",
    "expected_artifacts",
    "locate_artifacts",
    "main",
    "resolve_layout",
    "select_profile",
    "stage_artifacts",
    "validate_request",
]
