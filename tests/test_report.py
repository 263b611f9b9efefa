"""Tests for the end-of-run report."""

from __future__ import annotations

import io
import unittest
from contextlib import redirect_stdout

from caskup.core.models import AppResult, Outcome, UpgradeReport
from caskup.core.report import render_report
from caskup.utils.ui import TableFormatter, strip_ansi


def _report(*results: AppResult) -> UpgradeReport:
    report = UpgradeReport(total_found=len(results))
    for result in results:
        report.add(result)
    return report


def _render(report: UpgradeReport, skip_sudo: bool = False) -> str:
    with redirect_stdout(io.StringIO()) as out:
        render_report(report, skip_sudo)
    return strip_ansi(out.getvalue())


class TestUpgradeReport(unittest.TestCase):
    def test_counts_cover_every_outcome(self) -> None:
        report = _report(
            AppResult("Slack", "slack", Outcome.UPGRADED),
            AppResult("Zoom", "zoom", Outcome.NOT_MANAGED),
        )
        counts = report.counts()
        self.assertEqual(set(counts), set(Outcome))
        self.assertEqual(counts[Outcome.UPGRADED], 1)
        self.assertEqual(counts[Outcome.FAILED], 0)
        self.assertEqual(sum(counts.values()), report.total_found)

    def test_failure_messages(self) -> None:
        report = _report(AppResult("Slack", "slack", Outcome.FAILED, error_message="Error: boom"))
        self.assertEqual(report.failure_messages, ["Slack: Error: boom"])


class TestRenderReport(unittest.TestCase):
    def test_all_clear(self) -> None:
        output = _render(_report(AppResult("Slack", "slack", Outcome.UP_TO_DATE)))
        self.assertIn("==== Summary ====", output)
        self.assertIn("Already Up-to-date Apps:", output)
        self.assertIn("Successfully Upgraded Apps:", output)
        self.assertIn("(none)", output)
        self.assertNotIn("Failed Upgrades", output)
        self.assertNotIn("Skipped (sudo required)", output)
        self.assertNotIn("brew doctor", output)
        self.assertIn("==== Done ====", output)

    def test_failures_and_recommendations(self) -> None:
        output = _render(_report(
            AppResult("Slack", "slack", Outcome.UPGRADED),
            AppResult("Docker", "docker", Outcome.FAILED, error_message="Error: sudo required",
                      flagged_sudo=True),
        ))
        self.assertIn("==== Failed Upgrades ====", output)
        self.assertIn("Docker: Error: sudo required", output)
        self.assertIn("Failed Upgrade Apps:", output)
        self.assertIn("  - Slack", output)
        self.assertIn("Casks flagged as requiring sudo during this run:", output)
        self.assertIn("  - docker", output)
        self.assertIn("brew doctor", output)
        self.assertIn("--skip-sudo", output)

    def test_failure_hint_under_message(self) -> None:
        output = _render(_report(
            AppResult("Slack", "slack", Outcome.FAILED, error_message="Error: It seems Slack is already running",
                      hint="The app may be currently running. Close it and try again."),
            AppResult("Zoom", "zoom", Outcome.FAILED, error_message="App not found at expected path"),
        ))
        failed = output[output.index("==== Failed Upgrades ===="):output.index("==== Application Status Details")]
        lines = failed.splitlines()
        slack = next(i for i, line in enumerate(lines) if "Slack: Error:" in line)
        self.assertEqual(lines[slack + 1].strip(), "Hint: The app may be currently running. Close it and try again.")
        self.assertEqual(failed.count("Hint:"), 1)

    def test_sudo_skips_under_flag(self) -> None:
        output = _render(_report(
            AppResult("Spotify", "spotify", Outcome.SUDO_SKIPPED),
            AppResult("Notes", "notes", Outcome.NOT_MANAGED),
        ), skip_sudo=True)
        self.assertIn("Skipped (sudo required)", output)
        self.assertIn("Apps Skipped (Sudo Required):", output)
        self.assertIn("Apps Not Managed by Homebrew:", output)
        self.assertIn("Run without the --skip-sudo option", output)

    def test_summary_rows(self) -> None:
        output = _render(_report(
            AppResult("A", "a", Outcome.UPGRADED),
            AppResult("B", "b", Outcome.UPGRADED),
            AppResult("C", "c", Outcome.NOT_MANAGED),
        ))
        lines = [line for line in output.splitlines() if "Successfully upgraded" in line]
        self.assertEqual(len(lines), 1)
        self.assertIn(" 2 ", lines[0])


class TestTableFormatter(unittest.TestCase):
    def test_pads_on_visible_width(self) -> None:
        table = TableFormatter().format_table(["Name", "Count"], [("\033[32mabc\033[0m", "1"), ("abcdef", "22")])
        widths = {len(strip_ansi(line)) for line in table.splitlines()}
        self.assertEqual(len(widths), 1)

    def test_ascii(self) -> None:
        table = TableFormatter(use_unicode=False).format_table(["A"], [("x",)])
        self.assertTrue(table.startswith("+"))
        self.assertIn("| x |", table)

    def test_empty(self) -> None:
        self.assertEqual(TableFormatter().format_table(["A"], []), "")
