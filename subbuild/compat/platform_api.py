"""Modern platform API surface targeted by the legacy compatibility layer."""
from __future__ import annotations

from typing import Any, Callable, NamedTuple, Protocol, Sequence, TypeVar, runtime_checkable

SW_SHOWNORMAL = 1

F = TypeVar("F", bound=Callable[..., Any])


class Point(NamedTuple):
    x: int
    y: int


@runtime_checkable
class DeviceContext(Protocol):
    """Drawing surface exposing the two-output move primitive."""

    def move_to_ex(self, x: int, y: int) -> tuple[bool, Point]:
        """Move the current position and return ``(ok, previous_position)``."""
        ...


class WinMainEntryPoint(Protocol):
    def __call__(self, instance: Any, prev_instance: Any, cmd_line: str, show_cmd: int) -> int: ...


class ConsoleEntryPoint(Protocol):
    def __call__(self, argv: Sequence[str]) -> int: ...


def copy_bytes(dest: bytearray | memoryview, src: bytes | bytearray | memoryview, count: int) -> bytearray | memoryview:
    """Copy ``count`` bytes from the start of ``src`` into the start of ``dest``."""

    if count < 0:
        raise ValueError("count must not be negative")
    if count > len(src) or count > len(dest):
        raise ValueError(f"cannot copy {count} bytes between buffers of {len(src)} and {len(dest)} bytes")
    memoryview(dest)[:count] = memoryview(src)[:count]
    return dest


def fill_bytes(dest: bytearray | memoryview, value: int, count: int) -> bytearray | memoryview:
    """Set the first ``count`` bytes of ``dest`` to ``value & 0xFF``."""

    if count < 0:
        raise ValueError("count must not be negative")
    if count > len(dest):
        raise ValueError(f"cannot fill {count} bytes of a {len(dest)} byte buffer")
    memoryview(dest)[:count] = bytes([value & 0xFF]) * count
    return dest


def _linkage(kind: str) -> Callable[[F], F]:
    def mark(function: F) -> F:
        function.__linkage__ = kind  # type: ignore[attr-defined]
        return function

    mark.__name__ = mark.__qualname__ = kind
    return mark


winapi = _linkage("winapi")
"""Marks an exported API function. Carries no runtime behavior."""

callback = _linkage("callback")
"""Marks a function handed to the platform as a callback."""


__all__ = [
    "ConsoleEntryPoint",
    "DeviceContext",
    "Point",
    "SW_SHOWNORMAL",
    "WinMainEntryPoint",
    "callback",
    "copy_bytes",
    "fill_bytes",
    "winapi",
]
