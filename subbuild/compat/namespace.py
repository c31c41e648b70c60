"""Scoped symbol namespaces with bind-once semantics."""
from __future__ import annotations

from typing import Any, Dict, Mapping


class SymbolNamespace:
    """Named collection of aliases where a name is bound at most once.

    ``bind_if_absent`` leaves an existing binding untouched, so several
    providers can offer the same legacy name without colliding.
    """

    def __init__(self, name: str, bindings: Mapping[str, Any] | None = None) -> None:
        self.name = name
        self._bindings: Dict[str, Any] = dict(bindings or {})

    def bind_if_absent(self, symbol: str, value: Any) -> bool:
        if symbol in self._bindings:
            return False
        self._bindings[symbol] = value
        return True

    def is_bound(self, symbol: str) -> bool:
        return symbol in self._bindings

    def lookup(self, symbol: str) -> Any:
        try:
            return self._bindings[symbol]
        except KeyError:
            raise KeyError(f"'{symbol}' is not bound in namespace '{self.name}'") from None

    def names(self) -> list[str]:
        return sorted(self._bindings)

    def __getattr__(self, symbol: str) -> Any:
        # Attribute access is what legacy call sites use: LEGACY.hmemcpy(...)
        if symbol.startswith("_"):
            raise AttributeError(symbol)
        try:
            return self._bindings[symbol]
        except KeyError:
            raise AttributeError(f"'{symbol}' is not bound in namespace '{self.name}'") from None

    def __repr__(self) -> str:
        return f"SymbolNamespace({self.name!r}, names={self.names()!r})"


__all__ = ["SymbolNamespace"]
