"""Tests for application bundle discovery."""

from __future__ import annotations

import io
import os
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path

from caskup.core.detector import find_app_path, get_user_applications


class _AppsDirTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.apps_dir = self._tmp.name

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def make_bundle(self, name: str) -> Path:
        path = Path(self.apps_dir) / name
        (path / "Contents").mkdir(parents=True)
        return path


class TestGetUserApplications(_AppsDirTestCase):
    def test_lists_bundles_sorted_without_suffix(self) -> None:
        self.make_bundle("Zoom.app")
        self.make_bundle("Brave Browser.app")
        self.make_bundle("Slack.app")
        self.assertEqual(get_user_applications(self.apps_dir), ["Brave Browser", "Slack", "Zoom"])

    def test_ignores_non_bundles(self) -> None:
        self.make_bundle("Slack.app")
        self.make_bundle("Helpers")
        Path(self.apps_dir, "Broken.app").write_text("not a directory")
        Path(self.apps_dir, ".DS_Store").write_text("")
        self.assertEqual(get_user_applications(self.apps_dir), ["Slack"])

    def test_empty_directory(self) -> None:
        self.assertEqual(get_user_applications(self.apps_dir), [])

    def test_missing_directory(self) -> None:
        missing = os.path.join(self.apps_dir, "nope")
        self.assertEqual(get_user_applications(missing), [])


class TestFindAppPath(_AppsDirTestCase):
    def test_expected_path(self) -> None:
        bundle = self.make_bundle("Slack.app")
        with redirect_stdout(io.StringIO()) as out:
            self.assertEqual(find_app_path("Slack", self.apps_dir), str(bundle))
        self.assertEqual(out.getvalue(), "")

    def test_alternative_path(self) -> None:
        bundle = self.make_bundle("Obsidian Beta.app")
        with redirect_stdout(io.StringIO()) as out:
            self.assertEqual(find_app_path("Obsidian", self.apps_dir), str(bundle))
        self.assertIn("App not found at expected path", out.getvalue())
        self.assertIn("Found app at alternative path", out.getvalue())

    def test_not_found(self) -> None:
        self.make_bundle("Slack.app")
        with redirect_stdout(io.StringIO()) as out:
            self.assertIsNone(find_app_path("Zoom", self.apps_dir))
        self.assertIn("App not found at expected path", out.getvalue())

    def test_glob_characters_in_name(self) -> None:
        bundle = self.make_bundle("App [Pro].app")
        with redirect_stdout(io.StringIO()):
            self.assertEqual(find_app_path("App [Pro]", self.apps_dir), str(bundle))
