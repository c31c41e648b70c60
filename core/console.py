"""Leveled console output for the command line tools."""
from __future__ import annotations

from typing import TextIO
import sys


class Console:
    """Tagged console lines filtered by level: none < error < info < debug.

    The default level ``none`` prints nothing. ``[DRY]`` lines ignore the
    level and only appear in dry-run mode.
    """

    LEVELS = ("none", "error", "info", "debug")

    def __init__(
        self,
        level: str = "none",
        *,
        dry_run: bool = False,
        stdout: TextIO | None = None,
        stderr: TextIO | None = None,
    ):
        if level not in self.LEVELS:
            raise ValueError(f"Unknown log level '{level}'. Choose one of: {', '.join(self.LEVELS)}")
        self.level = level
        self.dry_run = dry_run
        self._stdout = stdout
        self._stderr = stderr

    @classmethod
    def from_options(cls, level: str, *, verbose: bool = False, dry_run: bool = False) -> "Console":
        return cls("debug" if verbose else level, dry_run=dry_run)

    def enabled(self, level: str) -> bool:
        return self.LEVELS.index(self.level) >= self.LEVELS.index(level)

    def _emit(self, tag: str, message: str, stream: TextIO | None) -> None:
        # sys.stdout is looked up per call so redirected streams are honored.
        print(f"[{tag}] {message}", file=stream or sys.stdout)

    def error(self, message: str) -> None:
        if self.enabled("error"):
            self._emit("ERROR", message, self._stderr or sys.stderr)

    def info(self, message: str) -> None:
        if self.enabled("info"):
            self._emit("INFO", message, self._stdout)

    def debug(self, message: str) -> None:
        if self.enabled("debug"):
            self._emit("DEBUG", message, self._stdout)

    def dry(self, message: str) -> None:
        if self.dry_run:
            self._emit("DRY", message, self._stdout)


__all__ = ["Console"]
