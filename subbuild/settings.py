"""Assemble a :class:`BuildRequest` from files, environment and command line."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping
import os

from core.config_loader import ConfigFileError, find_config_file, layer_values, load_config_file
from core.console import Console

from .errors import ConfigurationError
from .request import ArtifactNames, BuildRequest

FIELD_NAMES = (
    "toolchain_command",
    "manifest_path",
    "target_dir",
    "working_dir",
    "output_dir",
    "build_config",
)
PATH_FIELDS = frozenset({"manifest_path", "target_dir", "working_dir", "output_dir"})

DEFINITION_ALIASES: Dict[str, str] = {
    "CARGO_COMMAND": "toolchain_command",
    "RUST_MANIFEST_PATH": "manifest_path",
    "RUST_TARGET_DIR": "target_dir",
    "RUST_WORKING_DIR": "working_dir",
    "OUTPUT_DIR": "output_dir",
    "BUILD_CONFIG": "build_config",
}
"""CMake-style variable names accepted by ``-D NAME=VALUE``."""

ENV_PREFIX = "SUBBUILD_"
CONFIG_ENV_VAR = "SUBBUILD_CONFIG"
DEFAULT_CONFIG_STEM = "subbuild"
DEFAULT_LOG_LEVEL = "error"


@dataclass(slots=True)
class Settings:
    request: BuildRequest
    log_level: str = DEFAULT_LOG_LEVEL
    config_file: Path | None = None


def parse_definitions(values: Iterable[str]) -> Dict[str, str]:
    """Parse ``NAME=VALUE`` strings into request field values.

    Both the CMake-style aliases and the plain field names are accepted.
    """

    parsed: Dict[str, str] = {}
    for raw in values:
        if raw is None or not raw.strip():
            continue
        # Values are kept verbatim, only the name is trimmed.
        name, sep, value = raw.partition("=")
        name = name.strip()
        if not sep or not name:
            raise ConfigurationError(f"Definition '{raw}' must use the form NAME=VALUE")
        field_name = DEFINITION_ALIASES.get(name, name)
        if field_name not in FIELD_NAMES:
            known = ", ".join(sorted([*DEFINITION_ALIASES, *FIELD_NAMES]))
            raise ConfigurationError(f"Unknown definition '{name}'. Known names: {known}", field=name)
        parsed[field_name] = value
    return parsed


def environment_values(environ: Mapping[str, str]) -> Dict[str, str]:
    values: Dict[str, str] = {}
    for name in FIELD_NAMES:
        key = f"{ENV_PREFIX}{name.upper()}"
        if key in environ:
            values[name] = environ[key]
    return values


def locate_config_file(
    workspace: Path,
    explicit: str | Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> Path | None:
    """Return the configuration file to use, or ``None`` when there is none.

    An explicit path wins over ``SUBBUILD_CONFIG``; otherwise a single
    ``subbuild.{toml,json,yaml,yml}`` in ``workspace`` is used if present.
    """

    environ = os.environ if environ is None else environ
    candidate = explicit or environ.get(CONFIG_ENV_VAR)
    if candidate:
        path = Path(candidate)
        if not path.is_absolute():
            path = workspace / path
        if not path.is_file():
            raise ConfigurationError(f"Configuration file not found: {path}", field="config_file")
        return path
    try:
        return find_config_file(workspace, DEFAULT_CONFIG_STEM)
    except ConfigFileError as exc:
        raise ConfigurationError(str(exc), field="config_file") from exc


def _resolve_relative(value: Any, base: Path) -> str:
    text = str(value)
    if not text.strip():
        return text
    path = Path(text).expanduser()
    if path.is_absolute():
        return str(path)
    return str(base / path)


def _anchor_paths(values: Mapping[str, Any], base: Path) -> Dict[str, str]:
    """Make relative path values absolute against ``base``.

    ``toolchain_command`` is only anchored when it contains a path separator,
    so bare program names are still looked up on ``PATH``.
    """

    anchored: Dict[str, str] = {}
    for key, value in values.items():
        if value is None:
            continue
        if key in PATH_FIELDS:
            anchored[key] = _resolve_relative(value, base)
        elif key == "toolchain_command" and ("/" in str(value) or os.sep in str(value)):
            anchored[key] = _resolve_relative(value, base)
        else:
            anchored[key] = str(value)
    return anchored


def _read_config(path: Path) -> Dict[str, Any]:
    try:
        data = load_config_file(path)
    except ConfigFileError as exc:
        raise ConfigurationError(f"Could not load configuration {exc}", field="config_file") from exc

    allowed_sections = {"build", "artifacts", "environment", "console"}
    unknown = {str(key) for key in data.keys() if str(key) not in allowed_sections}
    if unknown:
        joined = ", ".join(sorted(unknown))
        raise ConfigurationError(f"Configuration '{path}' contains unknown sections: {joined}")

    build_section = data.get("build", {})
    if not isinstance(build_section, Mapping):
        raise ConfigurationError(f"[build] in '{path}' must be a table/mapping")
    unknown = {str(key) for key in build_section.keys() if str(key) not in FIELD_NAMES}
    if unknown:
        joined = ", ".join(sorted(unknown))
        raise ConfigurationError(f"[build] in '{path}' contains unknown keys: {joined}")

    result: Dict[str, Any] = {"build": _anchor_paths(build_section, path.parent)}
    for section in ("artifacts", "environment", "console"):
        value = data.get(section)
        if value is None:
            continue
        if not isinstance(value, Mapping):
            raise ConfigurationError(f"[{section}] in '{path}' must be a table/mapping")
        result[section] = dict(value)
    return result


def load_settings(
    *,
    workspace: Path,
    config_file: str | Path | None = None,
    environ: Mapping[str, str] | None = None,
    definitions: Iterable[str] = (),
    overrides: Mapping[str, str | None] | None = None,
) -> Settings:
    """Merge every configuration source into :class:`Settings`.

    Precedence, lowest first: configuration file, ``SUBBUILD_*`` environment
    variables, ``-D`` definitions, explicit command line options. ``None``
    values in ``overrides`` mean "not given".

    Relative paths from the configuration file are anchored at the file's
    directory; relative paths from every other source are anchored at
    ``workspace``. The resulting request only carries absolute paths, so the
    toolchain (running in ``working_dir``) and the artifact lookup agree.
    """

    environ = os.environ if environ is None else environ
    workspace = Path(workspace).absolute()
    path = locate_config_file(workspace, config_file, environ)
    file_data: Dict[str, Any] = _read_config(path) if path is not None else {"build": {}}

    values = layer_values(
        file_data.get("build"),
        _anchor_paths(environment_values(environ), workspace),
        _anchor_paths(parse_definitions(definitions), workspace),
        _anchor_paths(overrides or {}, workspace),
    )

    artifact_names = ArtifactNames.from_mapping(file_data.get("artifacts", {}))
    environment = {str(key): str(value) for key, value in file_data.get("environment", {}).items()}
    console_section = file_data.get("console", {})
    log_level = str(console_section.get("level", DEFAULT_LOG_LEVEL))
    if log_level not in Console.LEVELS:
        choices = ", ".join(Console.LEVELS)
        raise ConfigurationError(f"console.level must be one of: {choices}", field="console.level")

    request = BuildRequest(
        toolchain_command=values.get("toolchain_command"),
        manifest_path=values.get("manifest_path"),
        target_dir=values.get("target_dir"),
        working_dir=values.get("working_dir"),
        output_dir=values.get("output_dir"),
        build_config=values.get("build_config"),
        environment=environment,
        artifact_names=artifact_names,
    )
    return Settings(request=request, log_level=log_level, config_file=path)


__all__ = [
    "CONFIG_ENV_VAR",
    "DEFINITION_ALIASES",
    "ENV_PREFIX",
    "FIELD_NAMES",
    "Settings",
    "environment_values",
    "load_settings",
    "locate_config_file",
    "parse_definitions",
]
