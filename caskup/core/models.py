"""Result types for an upgrade run."""

from enum import Enum
from typing import Dict, List, NamedTuple, Optional


class Outcome(Enum):
    """What happened to a single application during the run."""
    UPGRADED = "upgraded"
    UP_TO_DATE = "up_to_date"
    FAILED = "failed"
    NOT_MANAGED = "not_managed"
    SUDO_SKIPPED = "sudo_skipped"


class AppResult(NamedTuple):
    """Outcome of processing one application."""
    app_name: str
    cask_token: str
    outcome: Outcome
    error_message: Optional[str] = None
    hint: Optional[str] = None
    flagged_sudo: bool = False


class UpgradeReport:
    """Accumulates per-application results in processing order."""

    def __init__(self, total_found: int = 0):
        self.total_found = total_found
        self.results: List[AppResult] = []

    def add(self, result: AppResult):
        self.results.append(result)

    @property
    def processed_count(self) -> int:
        return len(self.results)

    def apps_with(self, outcome: Outcome) -> List[str]:
        """Application names with the given outcome, in processing order"""
        return [r.app_name for r in self.results if r.outcome is outcome]

    def count(self, outcome: Outcome) -> int:
        return sum(1 for r in self.results if r.outcome is outcome)

    def counts(self) -> Dict[Outcome, int]:
        return {outcome: self.count(outcome) for outcome in Outcome}

    @property
    def upgraded(self) -> List[str]:
        return self.apps_with(Outcome.UPGRADED)

    @property
    def up_to_date(self) -> List[str]:
        return self.apps_with(Outcome.UP_TO_DATE)

    @property
    def failed(self) -> List[str]:
        return self.apps_with(Outcome.FAILED)

    @property
    def not_managed(self) -> List[str]:
        return self.apps_with(Outcome.NOT_MANAGED)

    @property
    def sudo_skipped(self) -> List[str]:
        return self.apps_with(Outcome.SUDO_SKIPPED)

    @property
    def failures(self) -> List[AppResult]:
        return [r for r in self.results if r.outcome is Outcome.FAILED]

    @property
    def failure_messages(self) -> List[str]:
        """"<app>: <message>" lines for every failed application"""
        return [f"{r.app_name}: {r.error_message}" for r in self.failures]

    @property
    def flagged_sudo_casks(self) -> List[str]:
        """Tokens marked as sudo-requiring during this run"""
        return [r.cask_token for r in self.results if r.flagged_sudo]
