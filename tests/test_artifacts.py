from __future__ import annotations

from pathlib import Path
import tempfile
import unittest

from subbuild.artifacts import expected_artifacts, locate_artifacts
from subbuild.errors import MissingArtifactError
from subbuild.profiles import DEBUG_PROFILE, RELEASE_PROFILE
from subbuild.request import ArtifactNames


class LocateArtifactsTests(unittest.TestCase):
    def setUp(self) -> None:
        self.temp_dir = tempfile.TemporaryDirectory()
        self.target = Path(self.temp_dir.name) / "target"

    def tearDown(self) -> None:
        self.temp_dir.cleanup()

    def test_expected_paths_follow_profile_directory(self) -> None:
        artifacts = expected_artifacts(self.target, DEBUG_PROFILE, ArtifactNames())
        self.assertEqual(artifacts.binary, self.target / "debug" / "winmine.exe")
        self.assertEqual(artifacts.debug_symbols, self.target / "debug" / "winmine.pdb")
        self.assertFalse(self.target.exists())

    def test_missing_binary_raises(self) -> None:
        (self.target / "release").mkdir(parents=True)
        (self.target / "release" / "winmine.pdb").write_text("pdb")
        with self.assertRaises(MissingArtifactError) as ctx:
            locate_artifacts(self.target, RELEASE_PROFILE, ArtifactNames())
        self.assertEqual(ctx.exception.path, self.target / "release" / "winmine.exe")

    def test_debug_symbols_presence_is_recorded(self) -> None:
        release_dir = self.target / "release"
        release_dir.mkdir(parents=True)
        (release_dir / "winmine.exe").write_text("exe")

        without = locate_artifacts(self.target, RELEASE_PROFILE, ArtifactNames())
        self.assertFalse(without.has_debug_symbols)

        (release_dir / "winmine.pdb").write_text("pdb")
        with_symbols = locate_artifacts(self.target, RELEASE_PROFILE, ArtifactNames())
        self.assertTrue(with_symbols.has_debug_symbols)

    def test_custom_names(self) -> None:
        names = ArtifactNames(binary="app", debug_symbols="app.debug")
        (self.target / "debug").mkdir(parents=True)
        (self.target / "debug" / "app").write_text("elf")
        artifacts = locate_artifacts(self.target, DEBUG_PROFILE, names)
        self.assertEqual(artifacts.binary.name, "app")
        self.assertEqual(artifacts.debug_symbols.name, "app.debug")


if __name__ == "__main__":
    unittest.main()
