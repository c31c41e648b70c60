"""Mapping from build-configuration names to toolchain profiles."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

DEBUG_CONFIGURATION = "Debug"
DEBUG_DIRECTORY = "debug"
RELEASE_DIRECTORY = "release"
RELEASE_FLAG = "--release"


@dataclass(frozen=True, slots=True)
class BuildProfile:
    release: bool
    directory: str

    @property
    def arguments(self) -> Tuple[str, ...]:
        return (RELEASE_FLAG,) if self.release else ()


DEBUG_PROFILE = BuildProfile(release=False, directory=DEBUG_DIRECTORY)
RELEASE_PROFILE = BuildProfile(release=True, directory=RELEASE_DIRECTORY)


def select_profile(build_config: str | None) -> BuildProfile:
    """Return the debug profile for exactly ``"Debug"`` and release otherwise.

    The comparison is case-sensitive and untrimmed: ``"debug"`` and ``""`` both
    select release.
    """

    if build_config == DEBUG_CONFIGURATION:
        return DEBUG_PROFILE
    return RELEASE_PROFILE


__all__ = [
    "BuildProfile",
    "DEBUG_CONFIGURATION",
    "DEBUG_DIRECTORY",
    "DEBUG_PROFILE",
    "RELEASE_DIRECTORY",
    "RELEASE_FLAG",
    "RELEASE_PROFILE",
    "select_profile",
]
