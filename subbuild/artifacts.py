"""Location and verification of the artifacts produced by the toolchain."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .errors import MissingArtifactError
from .profiles import BuildProfile
from .request import ArtifactNames


@dataclass(frozen=True, slots=True)
class ArtifactSet:
    binary: Path
    debug_symbols: Path
    has_debug_symbols: bool = False


def expected_artifacts(target_dir: Path, profile: BuildProfile, names: ArtifactNames) -> ArtifactSet:
    """Compute ``target/<profile>/<name>`` paths without touching the disk."""

    profile_dir = Path(target_dir) / profile.directory
    return ArtifactSet(
        binary=profile_dir / names.binary,
        debug_symbols=profile_dir / names.debug_symbols,
    )


def locate_artifacts(target_dir: Path, profile: BuildProfile, names: ArtifactNames) -> ArtifactSet:
    """Return the artifact set, requiring the primary binary to exist.

    The debug-symbol file is optional; its presence is only recorded.
    """

    expected = expected_artifacts(target_dir, profile, names)
    if not expected.binary.is_file():
        raise MissingArtifactError(expected.binary)
    return ArtifactSet(
        binary=expected.binary,
        debug_symbols=expected.debug_symbols,
        has_debug_symbols=expected.debug_symbols.is_file(),
    )


__all__ = ["ArtifactSet", "expected_artifacts", "locate_artifacts"]
