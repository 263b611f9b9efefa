"""Command-line interface for caskup."""

import argparse
import logging
import sys

from . import __version__
from .config import DEFAULT_APPS_DIR, UpgradeConfig
from .commands.upgrade import handle_upgrade_command
from .utils.ui import print_header, subprocess_counter

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def build_parser():
    parser = argparse.ArgumentParser(
        prog="caskup",
        description="Upgrade Homebrew cask-managed applications in ~/Applications",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  caskup                           # Upgrade every Homebrew-managed app
  caskup --skip-sudo               # Leave out apps that usually need sudo
  caskup --apps-dir /Applications  # Scan a different directory
  caskup --yes                     # Don't ask when other brew processes run
        """
    )
    parser.add_argument('--skip-sudo', action='store_true',
                        help='Skip applications that typically require sudo permissions')
    parser.add_argument('-y', '--yes', action='store_true',
                        help='Continue without asking when other brew processes are running')
    parser.add_argument('--apps-dir', default=DEFAULT_APPS_DIR, metavar='PATH',
                        help=f'Directory containing the applications to upgrade (default: {DEFAULT_APPS_DIR})')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Log debug details to stderr')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    return parser


def parse_arguments(argv=None):
    """Parse command line arguments"""
    return build_parser().parse_args(argv)


def configure_logging(verbose: bool):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
        stream=sys.stderr
    )


def main(argv=None):
    args = parse_arguments(argv)
    config = UpgradeConfig.from_args(args)
    configure_logging(config.verbose)

    # Reset subprocess counter for this run
    subprocess_counter.reset()

    print_header("Homebrew Application Upgrade")
    return handle_upgrade_command(config)


if __name__ == "__main__":
    sys.exit(main())
