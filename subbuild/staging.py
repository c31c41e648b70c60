"""Copying verified artifacts into the configuration-specific output layout."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List
import shutil

from core.console import Console

from .artifacts import ArtifactSet
from .errors import StagingError


@dataclass(frozen=True, slots=True)
class OutputLayout:
    root: Path
    configuration: str = ""

    @property
    def destination(self) -> Path:
        if self.configuration:
            return self.root / self.configuration
        return self.root


def resolve_layout(output_dir: Path | str, build_config: str | None) -> OutputLayout:
    return OutputLayout(root=Path(output_dir), configuration=build_config or "")


def _copy(source: Path, destination: Path, console: Console) -> Path:
    target = destination / source.name
    if target.exists() and target.resolve() == source.resolve():
        console.debug(f"{target} is already in place")
        return target
    console.debug(f"copy {source} -> {target}")
    try:
        shutil.copy2(source, target)
    except OSError as exc:
        raise StagingError(f"Failed to copy '{source}' to '{target}': {exc}", path=target) from exc
    return target


def stage_artifacts(
    artifacts: ArtifactSet,
    layout: OutputLayout,
    *,
    console: Console | None = None,
) -> List[Path]:
    """Copy ``artifacts`` into ``layout.destination`` and return the staged paths.

    Existing files are overwritten; a destination that already is the source
    file is left alone. The debug-symbol file is copied only when it was
    found next to the binary.
    """

    console = console or Console()
    destination = layout.destination
    try:
        destination.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise StagingError(f"Failed to create output directory '{destination}': {exc}", path=destination) from exc

    staged = [_copy(artifacts.binary, destination, console)]
    if artifacts.has_debug_symbols:
        staged.append(_copy(artifacts.debug_symbols, destination, console))
    console.info(f"Staged {len(staged)} artifact(s) into {destination}")
    return staged


__all__ = ["OutputLayout", "resolve_layout", "stage_artifacts"]
