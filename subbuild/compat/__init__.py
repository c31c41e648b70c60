"""Compatibility layer letting legacy-convention code use the modern platform API."""

from .legacy import (
    ENTRY_POINTS,
    LEGACY,
    declared_entry_point,
    install_legacy_names,
    legacy_main,
    legacy_max,
    legacy_min,
    legacy_move_to,
    link_entry_point,
)
from .namespace import SymbolNamespace
from .platform_api import DeviceContext, Point, callback, copy_bytes, fill_bytes, winapi

__all__ = [
    "ENTRY_POINTS",
    "LEGACY",
    "DeviceContext",
    "Point",
    "SymbolNamespace",
    "callback",
    "copy_bytes",
    "declared_entry_point",
    "fill_bytes",
    "install_legacy_names",
    "legacy_main",
    "legacy_max",
    "legacy_min",
    "legacy_move_to",
    "link_entry_point",
    "winapi",
]
