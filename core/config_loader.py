"""Read configuration files and layer flat value mappings."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Dict, Mapping

import json
import tomllib

import yaml


class ConfigFileError(ValueError):
    """A configuration file that cannot be found, read or decoded."""

    def __init__(self, path: Path, message: str):
        super().__init__(f"{path}: {message}")
        self.path = path


def _load_toml(path: Path) -> Any:
    with path.open("rb") as handle:
        return tomllib.load(handle)


def _load_json(path: Path) -> Any:
    with path.open(encoding="utf-8") as handle:
        return json.load(handle)


def _load_yaml(path: Path) -> Any:
    with path.open(encoding="utf-8") as handle:
        return yaml.safe_load(handle)


FILE_LOADERS: Dict[str, Callable[[Path], Any]] = {
    ".toml": _load_toml,
    ".json": _load_json,
    ".yaml": _load_yaml,
    ".yml": _load_yaml,
}

_DECODE_ERRORS = (tomllib.TOMLDecodeError, json.JSONDecodeError, yaml.YAMLError, UnicodeDecodeError)


def load_config_file(path: Path) -> Dict[str, Any]:
    """Decode ``path`` by its suffix; an empty document is an empty mapping."""

    loader = FILE_LOADERS.get(path.suffix.lower())
    if loader is None:
        supported = ", ".join(sorted(FILE_LOADERS))
        raise ConfigFileError(path, f"unsupported extension '{path.suffix}' (supported: {supported})")
    try:
        data = loader(path)
    except _DECODE_ERRORS as exc:
        raise ConfigFileError(path, f"cannot be decoded: {exc}") from exc
    except OSError as exc:
        raise ConfigFileError(path, f"cannot be read: {exc.strerror or exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise ConfigFileError(path, "must contain a mapping at the root")
    return dict(data)


def find_config_file(directory: Path, stem: str) -> Path | None:
    """Return ``directory/stem.<suffix>`` if exactly one supported format exists."""

    found = [directory / f"{stem}{suffix}" for suffix in FILE_LOADERS]
    found = [path for path in found if path.is_file()]
    if len(found) > 1:
        names = ", ".join(path.name for path in found)
        raise ConfigFileError(directory, f"several configuration files for '{stem}' ({names}); keep only one")
    return found[0] if found else None


def layer_values(*layers: Mapping[str, Any] | None) -> Dict[str, Any]:
    """Combine flat mappings; later layers win and ``None`` means "not set"."""

    result: Dict[str, Any] = {}
    for layer in layers:
        if not layer:
            continue
        result.update((key, value) for key, value in layer.items() if value is not None)
    return result


__all__ = [
    "ConfigFileError",
    "FILE_LOADERS",
    "find_config_file",
    "layer_values",
    "load_config_file",
]
