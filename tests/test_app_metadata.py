"""Tests for cask token derivation."""

from __future__ import annotations

import unittest

from caskup.utils.app_metadata import (
    CASK_NAME_OVERRIDES,
    app_name_from_path,
    derive_cask_token,
)


class TestDeriveCaskToken(unittest.TestCase):
    def test_lowercases_single_word(self) -> None:
        self.assertEqual(derive_cask_token("Firefox"), "firefox")

    def test_spaces_become_hyphens(self) -> None:
        self.assertEqual(derive_cask_token("Visual Studio Code"), "visual-studio-code")

    def test_every_space_replaced(self) -> None:
        # Consecutive spaces each map to their own hyphen
        self.assertEqual(derive_cask_token("Some  App"), "some--app")

    def test_app_suffix_ignored(self) -> None:
        self.assertEqual(derive_cask_token("Google Chrome.app"), "google-chrome")

    def test_overrides_win(self) -> None:
        for app_name, token in CASK_NAME_OVERRIDES.items():
            self.assertEqual(derive_cask_token(app_name), token)

    def test_lowercase_name_falls_back_to_plain_rule(self) -> None:
        self.assertEqual(derive_cask_token("JetBrains Toolbox"), "jetbrains-toolbox")
        self.assertEqual(derive_cask_token("jetbrains toolbox"), "jetbrains-toolbox")

    def test_deterministic(self) -> None:
        names = ["Slack", "Notion Calendar", "1Password 7", "Brave Browser"]
        first = [derive_cask_token(n) for n in names]
        second = [derive_cask_token(n) for n in names]
        self.assertEqual(first, second)

    def test_keeps_digits_and_dots(self) -> None:
        self.assertEqual(derive_cask_token("1Password 7"), "1password-7")


class TestAppNameFromPath(unittest.TestCase):
    def test_strips_suffix(self) -> None:
        self.assertEqual(app_name_from_path("/Users/me/Applications/Slack.app"), "Slack")

    def test_trailing_slash(self) -> None:
        self.assertEqual(app_name_from_path("/Users/me/Applications/Zoom Rooms.app/"), "Zoom Rooms")

    def test_no_suffix(self) -> None:
        self.assertEqual(app_name_from_path("/tmp/Thing"), "Thing")
