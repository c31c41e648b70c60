"""Build request model and the fail-fast parameter validation gate."""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

from .errors import ConfigurationError

DEFAULT_BINARY_NAME = "winmine.exe"
DEFAULT_DEBUG_SYMBOL_NAME = "winmine.pdb"

REQUIRED_FIELDS = ("toolchain_command", "manifest_path", "target_dir", "working_dir")
"""Fields that must be present before anything runs, in reporting order."""


@dataclass(frozen=True, slots=True)
class ArtifactNames:
    """File names the external toolchain is expected to produce."""

    binary: str = DEFAULT_BINARY_NAME
    debug_symbols: str = DEFAULT_DEBUG_SYMBOL_NAME

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ArtifactNames":
        allowed_keys = {"binary", "debug_symbols"}
        unknown = {str(key) for key in data.keys() if str(key) not in allowed_keys}
        if unknown:
            joined = ", ".join(sorted(unknown))
            raise ConfigurationError(f"[artifacts] contains unknown keys: {joined}")

        binary = str(data.get("binary") or DEFAULT_BINARY_NAME).strip()
        debug_symbols = str(data.get("debug_symbols") or DEFAULT_DEBUG_SYMBOL_NAME).strip()
        for key, value in (("binary", binary), ("debug_symbols", debug_symbols)):
            if not value or Path(value).name != value:
                raise ConfigurationError(
                    f"artifacts.{key} must be a plain file name, got '{value}'",
                    field=f"artifacts.{key}",
                )
        return cls(binary=binary, debug_symbols=debug_symbols)


@dataclass(frozen=True, slots=True)
class BuildRequest:
    """Inputs of one pipeline run.

    Values are kept exactly as supplied so that absence can be told apart from
    an explicitly empty value. ``build_config`` is compared literally.
    Relative ``manifest_path`` and ``target_dir`` are relative to
    ``working_dir``, the same way the toolchain process sees them.
    """

    toolchain_command: str | None
    manifest_path: str | None
    target_dir: str | None
    working_dir: str | None
    output_dir: str | None = None
    build_config: str | None = None
    environment: Mapping[str, str] = field(default_factory=dict)
    artifact_names: ArtifactNames = field(default_factory=ArtifactNames)

    @property
    def working_path(self) -> Path:
        return Path(_require(self.working_dir, "working_dir"))

    @property
    def target_path(self) -> Path:
        """Target directory as seen by the toolchain, which runs in ``working_dir``."""
        return self.working_path / _require(self.target_dir, "target_dir")

    @property
    def manifest_file(self) -> Path:
        return self.working_path / _require(self.manifest_path, "manifest_path")

    @property
    def output_path(self) -> Path:
        return Path(_require(self.output_dir, "output_dir"))


def _is_missing(value: str | None) -> bool:
    return value is None or not str(value).strip()


def _require(value: str | None, name: str) -> str:
    if _is_missing(value):
        raise ConfigurationError.missing(name)
    return str(value)


def validate_request(request: BuildRequest, *, require_output: bool = True) -> None:
    """Raise :class:`ConfigurationError` for the first absent required field.

    ``output_dir`` is only required when the artifacts are going to be staged.
    Nothing is read from or written to the filesystem here.
    """

    fields = list(REQUIRED_FIELDS)
    if require_output:
        fields.append("output_dir")
    for name in fields:
        if _is_missing(getattr(request, name)):
            raise ConfigurationError.missing(name)


__all__ = [
    "ArtifactNames",
    "BuildRequest",
    "DEFAULT_BINARY_NAME",
    "DEFAULT_DEBUG_SYMBOL_NAME",
    "REQUIRED_FIELDS",
    "validate_request",
]
