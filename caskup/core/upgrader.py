"""Per-application upgrade logic.

Each application goes through the same sequence: derive its cask token, check
that Homebrew manages it, honor --skip-sudo, make sure the bundle is still on
disk, then run ``brew upgrade --cask`` and classify what brew printed.
Failures are recorded and the run moves on to the next application.
"""

import logging
from typing import Iterable, Optional, Set, Tuple

from .detector import find_app_path
from .models import AppResult, Outcome, UpgradeReport
from ..providers import homebrew
from ..utils.app_metadata import derive_cask_token
from ..utils.ui import print_error, print_info, print_separator, print_success, print_warning

# Set up logging for this module
logger = logging.getLogger(__name__)

UP_TO_DATE_MARKERS = ("already installed", "up-to-date")
APP_NOT_FOUND_MESSAGE = "App not found at expected path"


def is_up_to_date_output(output: str) -> bool:
    """Whether a successful brew run only reported the cask as current"""
    return any(marker in output for marker in UP_TO_DATE_MARKERS)


def extract_error_message(output: str) -> str:
    """Pick the most useful line out of failed brew output

    The first line mentioning "error:" wins; otherwise the last three
    non-empty lines are used.
    """
    lines = [line.strip() for line in output.splitlines() if line.strip()]
    for line in lines:
        if "error:" in line.lower():
            return line
    return "\n".join(lines[-3:])


def diagnose_failure(output: str, cask_token: str) -> Tuple[Optional[str], bool]:
    """Map failed brew output to an advisory hint

    Returns:
        (hint, privilege_related). hint is None when nothing is recognized.
    """
    text = output.lower()
    if "sudo" in text or "password" in text:
        return "This app may require sudo privileges. Consider using --skip-sudo option.", True
    if "already running" in text:
        return "The app may be currently running. Close it and try again.", False
    if "not there" in text or "not found" in text:
        return "The app path may be incorrect. The app might have been moved or renamed.", False
    if "no cask" in text:
        return f"The cask name might have changed. Check with 'brew info {cask_token}'.", False
    return None, False


def _run_upgrade(cask_token: str) -> homebrew.UpgradeResult:
    # No spinner here: brew may hand the terminal to sudo for a password prompt
    print(f"Attempting to upgrade {cask_token}...", flush=True)
    return homebrew.upgrade_cask(cask_token)


def process_application(app_name: str, installed_casks: Set[str], sudo_casks: Set[str],
                        skip_sudo: bool, apps_dir: str) -> AppResult:
    """Decide on and carry out the upgrade of one application

    Args:
        app_name: Application name without the .app suffix
        installed_casks: Tokens reported by 'brew list --cask'
        sudo_casks: Tokens believed to need elevated privileges. Updated in
            place when a failure looks privilege-related.
        skip_sudo: Skip applications whose token is in sudo_casks
        apps_dir: Directory holding the application bundles

    Returns:
        AppResult with exactly one outcome
    """
    cask_token = derive_cask_token(app_name)
    print_info(f"Processing {app_name} ({cask_token})...")

    if cask_token not in installed_casks:
        print_warning(f"Skipping {app_name} - not managed by Homebrew.")
        return AppResult(app_name, cask_token, Outcome.NOT_MANAGED)

    if skip_sudo and cask_token in sudo_casks:
        print_warning(f"Skipping {app_name} as it typically requires sudo (--skip-sudo option enabled).")
        return AppResult(app_name, cask_token, Outcome.SUDO_SKIPPED)

    if find_app_path(app_name, apps_dir) is None:
        print_error(f"Cannot find {app_name} in Applications directory. Skipping upgrade.")
        return AppResult(app_name, cask_token, Outcome.FAILED, error_message=APP_NOT_FOUND_MESSAGE)

    result = _run_upgrade(cask_token)

    if result.succeeded:
        if is_up_to_date_output(result.output):
            print_info(f"{app_name} is already up-to-date.")
            return AppResult(app_name, cask_token, Outcome.UP_TO_DATE)
        print_success(f"{app_name} upgraded successfully.")
        return AppResult(app_name, cask_token, Outcome.UPGRADED)

    error_message = extract_error_message(result.output)
    print_error(f"Failed to upgrade {app_name}.")
    print_warning(f"Error message: {error_message}")
    logger.debug(f"brew output for {cask_token}:\n{result.output}")

    hint, privilege_related = diagnose_failure(result.output, cask_token)
    if hint:
        print_info(hint)

    flagged = False
    if privilege_related and cask_token not in sudo_casks:
        sudo_casks.add(cask_token)
        flagged = True
        logger.info(f"Marked {cask_token} as requiring sudo")

    return AppResult(app_name, cask_token, Outcome.FAILED,
                     error_message=error_message, hint=hint, flagged_sudo=flagged)


def upgrade_applications(app_names: Iterable[str], installed_casks: Set[str], sudo_casks: Set[str],
                         skip_sudo: bool, apps_dir: str) -> UpgradeReport:
    """Process every application in order and collect the results"""
    app_names = list(app_names)
    report = UpgradeReport(total_found=len(app_names))

    for app_name in app_names:
        report.add(process_application(app_name, installed_casks, sudo_casks, skip_sudo, apps_dir))
        print_separator()

    logger.info(f"Processed {report.processed_count} applications")
    return report
