from __future__ import annotations

from typing import Any, Sequence
import unittest

from subbuild.compat import (
    LEGACY,
    Point,
    SymbolNamespace,
    copy_bytes,
    declared_entry_point,
    fill_bytes,
    install_legacy_names,
    legacy_main,
    legacy_move_to,
    link_entry_point,
)
from subbuild.compat.platform_api import DeviceContext, SW_SHOWNORMAL, callback, winapi


class FakeDeviceContext:
    def __init__(self, *, succeed: bool = True) -> None:
        self.position = Point(0, 0)
        self.succeed = succeed
        self.calls: list[tuple[int, int]] = []

    def move_to_ex(self, x: int, y: int) -> tuple[bool, Point]:
        self.calls.append((x, y))
        previous = self.position
        if self.succeed:
            self.position = Point(x, y)
        return self.succeed, previous


class SymbolNamespaceTests(unittest.TestCase):
    def test_bind_if_absent_keeps_first_binding(self) -> None:
        namespace = SymbolNamespace("test")
        self.assertTrue(namespace.bind_if_absent("max", max))
        self.assertFalse(namespace.bind_if_absent("max", min))
        self.assertIs(namespace.lookup("max"), max)
        self.assertIs(namespace.max, max)
        self.assertTrue(namespace.is_bound("max"))
        self.assertEqual(namespace.names(), ["max"])

    def test_unbound_lookup(self) -> None:
        namespace = SymbolNamespace("test")
        with self.assertRaises(KeyError):
            namespace.lookup("hmemcpy")
        with self.assertRaises(AttributeError):
            _ = namespace.hmemcpy

    def test_install_respects_existing_names(self) -> None:
        sentinel = object()
        namespace = SymbolNamespace("mixed", {"min": sentinel})
        bound = install_legacy_names(namespace)

        self.assertNotIn("min", bound)
        self.assertIs(namespace.lookup("min"), sentinel)
        self.assertIn("hmemcpy", bound)
        self.assertEqual(install_legacy_names(namespace), [])


class LegacyBindingTests(unittest.TestCase):
    def test_legacy_names_are_bound(self) -> None:
        self.assertEqual(
            LEGACY.names(),
            ["EXPENTRY", "MMoveTo", "WINAPI16", "hmemcpy", "hmemset", "max", "min"],
        )
        self.assertIs(LEGACY.hmemcpy, copy_bytes)
        self.assertIs(LEGACY.hmemset, fill_bytes)
        self.assertIs(LEGACY.EXPENTRY, winapi)
        self.assertIs(LEGACY.WINAPI16, callback)

    def test_memory_helpers(self) -> None:
        buffer = bytearray(b"........")
        LEGACY.hmemcpy(buffer, b"abcdef", 3)
        self.assertEqual(buffer, bytearray(b"abc....."))
        LEGACY.hmemset(buffer, 0x2A, 2)
        self.assertEqual(buffer, bytearray(b"**c....."))
        LEGACY.hmemset(buffer, 0x141, 1)
        self.assertEqual(buffer[:1], b"A")
        with self.assertRaises(ValueError):
            LEGACY.hmemcpy(bytearray(2), b"abc", 3)
        with self.assertRaises(ValueError):
            LEGACY.hmemset(buffer, 0, -1)

    def test_min_max_follow_conditional_expression(self) -> None:
        self.assertEqual(LEGACY.max(3, 7), 7)
        self.assertEqual(LEGACY.min(3, 7), 3)
        first, second = [1], [1]
        self.assertIs(LEGACY.max(first, second), second)
        self.assertIs(LEGACY.min(first, second), second)

    def test_linkage_markers_do_not_change_behavior(self) -> None:
        @LEGACY.EXPENTRY
        def exported(value: int) -> int:
            return value + 1

        @LEGACY.WINAPI16
        def handler() -> str:
            return "handled"

        self.assertEqual(exported(1), 2)
        self.assertEqual(handler(), "handled")
        self.assertEqual(exported.__linkage__, "winapi")
        self.assertEqual(handler.__linkage__, "callback")


class MoveToAdapterTests(unittest.TestCase):
    def test_discards_previous_position(self) -> None:
        dc = FakeDeviceContext()
        self.assertIsInstance(dc, DeviceContext)
        self.assertIs(legacy_move_to(dc, 4, 9), True)
        self.assertIs(LEGACY.MMoveTo(dc, 1, 2), True)
        self.assertEqual(dc.calls, [(4, 9), (1, 2)])
        self.assertEqual(dc.position, Point(1, 2))

    def test_reports_failure(self) -> None:
        self.assertIs(legacy_move_to(FakeDeviceContext(succeed=False), 1, 1), False)


class EntryPointTests(unittest.TestCase):
    def setUp(self) -> None:
        self.calls: list[tuple[Any, Any, str, int]] = []

    def _program(self, instance: Any, prev_instance: Any, cmd_line: str, show_cmd: int) -> int:
        self.calls.append((instance, prev_instance, cmd_line, show_cmd))
        return 42

    def test_only_first_declaration_counts(self) -> None:
        namespace = SymbolNamespace("entry")

        def other(*_args: Any) -> int:
            return 0

        legacy_main(self._program, namespace=namespace)
        legacy_main(other, namespace=namespace)
        self.assertEqual(declared_entry_point(namespace), self._program)

    def test_undeclared_entry_point(self) -> None:
        with self.assertRaises(LookupError):
            declared_entry_point(SymbolNamespace("empty"))

    def test_win32_links_winmain_signature(self) -> None:
        entry = link_entry_point(self._program, platform="win32")
        self.assertEqual(entry("hinst", None, "-b", 3), 42)
        self.assertEqual(self.calls, [("hinst", None, "-b", 3)])
        self.assertEqual(entry.__linkage__, "winapi")

    def test_other_platforms_link_console_main(self) -> None:
        entry = link_entry_point(self._program, platform="linux")
        argv: Sequence[str] = ["winmine", "-b", "--seed", "7"]
        self.assertEqual(entry(argv), 42)
        self.assertEqual(self.calls, [(None, None, "-b --seed 7", SW_SHOWNORMAL)])


if __name__ == "__main__":
    unittest.main()
