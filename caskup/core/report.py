"""End-of-run summary output."""

from .models import Outcome, UpgradeReport
from ..utils.ui import (
    Colors, StatusIcons, TableFormatter, print_error, print_header,
    print_info, print_success, print_warning,
)


def _print_app_list(apps):
    for app in apps:
        print(f"  - {app}")


def render_summary(report: UpgradeReport):
    """Print the counts table"""
    counts = report.counts()
    rows = [
        ("Total applications found", str(report.total_found)),
        ("Applications processed", str(report.processed_count)),
        (f"{Colors.GREEN}Successfully upgraded{Colors.RESET}", str(counts[Outcome.UPGRADED])),
        ("Already up-to-date", str(counts[Outcome.UP_TO_DATE])),
        (f"{Colors.RED}Failed upgrades{Colors.RESET}", str(counts[Outcome.FAILED])),
        (f"{Colors.YELLOW}Skipped (not managed by Homebrew){Colors.RESET}", str(counts[Outcome.NOT_MANAGED])),
    ]
    if counts[Outcome.SUDO_SKIPPED] > 0:
        rows.append((f"{Colors.YELLOW}Skipped (sudo required){Colors.RESET}", str(counts[Outcome.SUDO_SKIPPED])))

    print_header("Summary")
    print(TableFormatter().format_table(headers=['Category', 'Count'], rows=rows))


def render_failures(report: UpgradeReport):
    failures = report.failures
    if not failures:
        return

    print_header("Failed Upgrades")
    for result in failures:
        print_error(f"{result.app_name}: {result.error_message}")
        if result.hint:
            print(f"    {Colors.DIM}Hint: {result.hint}{Colors.RESET}")
    print()
    print_info("You may want to upgrade these applications manually or check the error messages.")
    print_info("For apps that require sudo, try running the script with admin privileges or upgrade manually.")


def render_status_details(report: UpgradeReport):
    """Print every application grouped by outcome"""
    print_header("Application Status Details")

    # Always shown, even when empty
    print_success("Successfully Upgraded Apps:")
    if report.upgraded:
        _print_app_list(report.upgraded)
    else:
        print("  (none)")
    print()

    sections = [
        (print_info, "Already Up-to-date Apps:", report.up_to_date),
        (print_error, "Failed Upgrade Apps:", report.failed),
        (print_warning, "Apps Not Managed by Homebrew:", report.not_managed),
        (print_warning, "Apps Skipped (Sudo Required):", report.sudo_skipped),
    ]
    for printer, title, apps in sections:
        if apps:
            printer(title)
            _print_app_list(apps)
            print()

    flagged = report.flagged_sudo_casks
    if flagged:
        print_warning("Casks flagged as requiring sudo during this run:")
        _print_app_list(flagged)
        print()


def render_recommendations(report: UpgradeReport, skip_sudo: bool):
    print_header("Recommendations")

    if report.count(Outcome.FAILED) > 0:
        print_info("Some upgrades failed. You may want to:")
        print("  - Run 'brew doctor' to check for Homebrew issues")
        print("  - Check if apps are currently running before upgrading")
        print("  - Try using 'brew upgrade --cask --force [app]' for specific apps")
        print("  - You may need to run with sudo for some apps: 'sudo brew upgrade --cask [app]'")

    if report.flagged_sudo_casks and not skip_sudo:
        print_info("Some casks appear to need sudo privileges.")
        print("  - Run with --skip-sudo to leave them out of unattended runs")

    if report.count(Outcome.SUDO_SKIPPED) > 0 and skip_sudo:
        print_info("Some apps were skipped because they require sudo privileges.")
        print("  - Run without the --skip-sudo option to attempt upgrading these apps")
        print("  - Or upgrade these apps manually using 'brew upgrade --cask [app]'")


def render_report(report: UpgradeReport, skip_sudo: bool):
    """Print the full end-of-run report"""
    render_summary(report)
    render_failures(report)
    render_status_details(report)
    render_recommendations(report, skip_sudo)
    print_header("Done")
    print(f"{StatusIcons.SUCCESS} {Colors.DIM}Finished processing {report.processed_count} applications{Colors.RESET}")
