"""Upgrade command implementation."""

import logging

from ..config import UpgradeConfig
from ..core.detector import get_user_applications
from ..core.report import render_report
from ..core.upgrader import upgrade_applications
from ..providers.homebrew import (
    HomebrewError, check_homebrew_installed, find_running_brew_processes,
    get_installed_casks,
)
from ..utils.ui import (
    ProgressIndicator, print_error, print_header, print_info, print_warning,
    progress_wrapper, subprocess_counter,
)

# Set up logging for this module
logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1


def confirm_continue(prompt: str) -> bool:
    """Ask a y/n question; anything but 'y' (including EOF) is a no"""
    try:
        reply = input(prompt)
    except EOFError:
        print()
        return False
    return reply.strip().lower() == 'y'


def check_running_brew(assume_yes: bool) -> bool:
    """Warn about other brew processes. Returns False if the user wants to stop."""
    running = find_running_brew_processes()
    if not running:
        return True

    for command in running:
        logger.debug(f"Running brew process: {command}")
    print_warning("Other brew processes are currently running.")
    print_warning("This may cause conflicts. Consider trying again later.")
    if assume_yes:
        return True
    return confirm_continue("Continue anyway? (y/n) ")


def handle_upgrade_command(config: UpgradeConfig) -> int:
    """Run the full upgrade and return the process exit code"""
    if not check_homebrew_installed():
        print_error("Homebrew is not installed or not in PATH.")
        print("Please install Homebrew first: https://brew.sh/")
        return EXIT_FAILURE

    if not check_running_brew(config.assume_yes):
        print_info("Exiting.")
        return EXIT_OK

    print_info("Getting list of installed Homebrew casks...")
    try:
        with ProgressIndicator("Running brew list --cask"):
            installed_casks = get_installed_casks()
    except HomebrewError as e:
        logger.error(f"Cask list query failed: {e}")
        print_error("Failed to retrieve Homebrew casks. Exiting.")
        return EXIT_FAILURE

    print_info(f"Scanning {config.apps_dir} directory...")
    apps = progress_wrapper(f"Scanning {config.apps_dir}", get_user_applications, config.apps_dir)
    if not apps:
        print_warning(f"No applications found in {config.apps_dir}.")
        return EXIT_OK

    print_info(f"Found {len(apps)} applications in {config.apps_dir}.")

    print_header("Processing Applications")
    report = upgrade_applications(
        apps,
        installed_casks,
        config.sudo_casks,
        config.skip_sudo,
        config.apps_dir
    )

    render_report(report, config.skip_sudo)
    logger.debug(subprocess_counter.report())
    return EXIT_OK
