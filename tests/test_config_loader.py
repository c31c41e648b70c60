from __future__ import annotations

from pathlib import Path
import tempfile
import textwrap
import unittest

from core.config_loader import ConfigFileError, find_config_file, layer_values, load_config_file


class ConfigLoaderTests(unittest.TestCase):
    def setUp(self) -> None:
        self.temp_dir = tempfile.TemporaryDirectory()
        self.root = Path(self.temp_dir.name)

    def tearDown(self) -> None:
        self.temp_dir.cleanup()

    def test_loads_toml_yaml_and_json(self) -> None:
        (self.root / "a.toml").write_text('[build]\nbuild_config = "Debug"\n')
        (self.root / "b.yaml").write_text(
            textwrap.dedent(
                """
                build:
                  build_config: Debug
                """
            )
        )
        (self.root / "c.json").write_text('{"build": {"build_config": "Debug"}}')
        for name in ("a.toml", "b.yaml", "c.json"):
            with self.subTest(name=name):
                self.assertEqual(load_config_file(self.root / name), {"build": {"build_config": "Debug"}})

    def test_empty_yaml_is_empty_mapping(self) -> None:
        (self.root / "empty.yml").write_text("")
        self.assertEqual(load_config_file(self.root / "empty.yml"), {})

    def test_rejects_unknown_suffix_and_non_mapping(self) -> None:
        (self.root / "config.ini").write_text("[build]\n")
        with self.assertRaises(ConfigFileError) as ctx:
            load_config_file(self.root / "config.ini")
        self.assertEqual(ctx.exception.path, self.root / "config.ini")
        (self.root / "list.json").write_text("[1, 2]")
        with self.assertRaises(ConfigFileError):
            load_config_file(self.root / "list.json")

    def test_decode_errors_carry_the_path(self) -> None:
        for name, text in (("bad.toml", "[build\n"), ("bad.json", "{"), ("bad.yaml", "build: [1, 2\n")):
            with self.subTest(name=name):
                (self.root / name).write_text(text)
                with self.assertRaises(ConfigFileError) as ctx:
                    load_config_file(self.root / name)
                self.assertIn(name, str(ctx.exception))
                self.assertIn("cannot be decoded", str(ctx.exception))

    def test_unreadable_file(self) -> None:
        with self.assertRaises(ConfigFileError) as ctx:
            load_config_file(self.root / "missing.toml")
        self.assertIn("cannot be read", str(ctx.exception))

    def test_find_config_file(self) -> None:
        self.assertIsNone(find_config_file(self.root, "subbuild"))
        (self.root / "subbuild.toml").write_text("")
        self.assertEqual(find_config_file(self.root, "subbuild"), self.root / "subbuild.toml")
        (self.root / "subbuild.yaml").write_text("")
        with self.assertRaises(ConfigFileError):
            find_config_file(self.root, "subbuild")


class LayerValuesTests(unittest.TestCase):
    def test_later_layers_win_and_none_is_unset(self) -> None:
        merged = layer_values({"a": "1", "b": "2"}, None, {"b": "3", "c": None}, {"a": ""})
        self.assertEqual(merged, {"a": "", "b": "3"})


if __name__ == "__main__":
    unittest.main()
