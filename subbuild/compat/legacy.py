"""Legacy platform-API names mapped onto the modern API.

Code written for the older convention keeps calling ``hmemcpy``, ``MMoveTo``
and friends; the bindings here route those calls to :mod:`.platform_api`.
Every binding is conditional, so names already provided by another module
win and are never overwritten.
"""
from __future__ import annotations

from functools import wraps
from typing import Any, Callable, Dict, Sequence
import sys

from .namespace import SymbolNamespace
from .platform_api import (
    SW_SHOWNORMAL,
    ConsoleEntryPoint,
    DeviceContext,
    WinMainEntryPoint,
    callback,
    copy_bytes,
    fill_bytes,
    winapi,
)

LegacyEntryPoint = Callable[[Any, Any, str, int], int]

ENTRY_POINT_SYMBOL = "MMain"


def legacy_max(a: Any, b: Any) -> Any:
    # Mirrors ((a) > (b)) ? (a) : (b): ties return ``b``.
    return a if a > b else b


def legacy_min(a: Any, b: Any) -> Any:
    return a if a < b else b


def legacy_move_to(dc: DeviceContext, x: int, y: int) -> bool:
    """Move the current position, discarding the previous one."""

    ok, _previous = dc.move_to_ex(x, y)
    return bool(ok)


def legacy_bindings() -> Dict[str, Any]:
    return {
        "hmemcpy": copy_bytes,
        "hmemset": fill_bytes,
        "EXPENTRY": winapi,
        "WINAPI16": callback,
        "max": legacy_max,
        "min": legacy_min,
        "MMoveTo": legacy_move_to,
    }


def install_legacy_names(namespace: SymbolNamespace) -> list[str]:
    """Bind every legacy name missing from ``namespace``; return those bound."""

    return [name for name, value in legacy_bindings().items() if namespace.bind_if_absent(name, value)]


LEGACY = SymbolNamespace("legacy")
install_legacy_names(LEGACY)

ENTRY_POINTS = SymbolNamespace("entry-points")


def legacy_main(function: LegacyEntryPoint, *, namespace: SymbolNamespace | None = None) -> LegacyEntryPoint:
    """Declare ``function`` as the program's legacy entry point.

    Only the first declaration counts; later ones are ignored.
    """

    (ENTRY_POINTS if namespace is None else namespace).bind_if_absent(ENTRY_POINT_SYMBOL, function)
    return function


def declared_entry_point(namespace: SymbolNamespace | None = None) -> LegacyEntryPoint:
    target = ENTRY_POINTS if namespace is None else namespace
    if not target.is_bound(ENTRY_POINT_SYMBOL):
        raise LookupError("No legacy entry point has been declared")
    return target.lookup(ENTRY_POINT_SYMBOL)


def _link_winmain(function: LegacyEntryPoint) -> WinMainEntryPoint:
    @wraps(function)
    def win_main(instance: Any, prev_instance: Any, cmd_line: str, show_cmd: int) -> int:
        return function(instance, prev_instance, cmd_line, show_cmd)

    return winapi(win_main)


def _link_console(function: LegacyEntryPoint) -> ConsoleEntryPoint:
    @wraps(function)
    def main(argv: Sequence[str]) -> int:
        cmd_line = " ".join(argv[1:])
        return function(None, None, cmd_line, SW_SHOWNORMAL)

    return main


ENTRY_POINT_LINKERS: Dict[str, Callable[[LegacyEntryPoint], Callable[..., int]]] = {
    "win32": _link_winmain,
}
"""Platform-specific entry point adapters; other platforms get ``main(argv)``."""


def link_entry_point(
    function: LegacyEntryPoint | None = None,
    *,
    platform: str | None = None,
) -> Callable[..., int]:
    """Return the modern entry point for ``platform`` wrapping ``function``.

    Without ``function`` the declared legacy entry point is used.
    """

    target = function if function is not None else declared_entry_point()
    linker = ENTRY_POINT_LINKERS.get(platform or sys.platform, _link_console)
    return linker(target)


__all__ = [
    "ENTRY_POINTS",
    "ENTRY_POINT_LINKERS",
    "LEGACY",
    "LegacyEntryPoint",
    "declared_entry_point",
    "install_legacy_names",
    "legacy_bindings",
    "legacy_main",
    "legacy_max",
    "legacy_min",
    "legacy_move_to",
    "link_entry_point",
]
