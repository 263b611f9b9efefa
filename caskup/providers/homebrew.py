"""Homebrew package manager operations."""

import os
import subprocess
import logging
from typing import List, NamedTuple, Set

from ..utils.ui import subprocess_counter

# Set up logging for this module
logger = logging.getLogger(__name__)

BREW_COMMAND = "brew"
LIST_TIMEOUT = 60

# Command line markers of a running Homebrew invocation
BREW_PROCESS_MARKERS = ("Library/Homebrew/brew.sh", "Library/Homebrew/brew.rb")


class HomebrewError(RuntimeError):
    """Raised when a Homebrew query the run depends on fails."""


class UpgradeResult(NamedTuple):
    """Exit status and combined stdout/stderr of a brew upgrade call."""
    returncode: int
    output: str

    @property
    def succeeded(self) -> bool:
        return self.returncode == 0


def check_homebrew_installed():
    """Check if Homebrew is installed with improved error reporting"""
    try:
        subprocess_counter.increment("which brew")
        result = subprocess.run(["which", BREW_COMMAND], check=True, capture_output=True, text=True)
        logger.debug(f"Homebrew found at: {result.stdout.strip()}")
        return True
    except subprocess.CalledProcessError:
        logger.info("Homebrew is not installed or not in PATH")
        return False
    except FileNotFoundError:
        logger.error("'which' command not found - unable to check for Homebrew")
        return False


def get_installed_casks() -> Set[str]:
    """Get the set of installed cask tokens from 'brew list --cask'

    Raises:
        HomebrewError: if brew cannot be run or reports a failure
    """
    try:
        subprocess_counter.increment("brew list --cask")
        result = subprocess.run(
            [BREW_COMMAND, "list", "--cask"],
            capture_output=True,
            text=True,
            timeout=LIST_TIMEOUT
        )
    except FileNotFoundError as e:
        raise HomebrewError("brew executable not found") from e
    except subprocess.TimeoutExpired as e:
        raise HomebrewError(f"brew list --cask timed out after {LIST_TIMEOUT}s") from e

    if result.returncode != 0:
        logger.error(f"brew list --cask failed ({result.returncode}): {result.stderr.strip()}")
        raise HomebrewError(f"brew list --cask exited with status {result.returncode}")

    casks = set(line.strip() for line in result.stdout.splitlines() if line.strip())
    logger.info(f"Homebrew reports {len(casks)} installed casks")
    return casks


def upgrade_cask(cask_token: str) -> UpgradeResult:
    """Run 'brew upgrade --cask <token>' and capture its output

    Blocks until brew exits. stderr is merged into stdout so the output can
    be searched as a whole.
    """
    logger.debug(f"Running brew upgrade --cask {cask_token}")
    try:
        subprocess_counter.increment("brew upgrade --cask")
        result = subprocess.run(
            [BREW_COMMAND, "upgrade", "--cask", cask_token],
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True
        )
    except FileNotFoundError:
        logger.error("brew executable disappeared during the run")
        return UpgradeResult(127, "Error: brew: command not found")

    logger.debug(f"brew upgrade --cask {cask_token} exited with {result.returncode}")
    return UpgradeResult(result.returncode, result.stdout or "")


def _is_brew_command(command: str) -> bool:
    if any(marker in command for marker in BREW_PROCESS_MARKERS):
        return True
    executable = command.split(None, 1)[0] if command.strip() else ""
    return os.path.basename(executable) == BREW_COMMAND


def find_running_brew_processes() -> List[str]:
    """List command lines of other brew invocations currently running

    This is a point-in-time snapshot; it cannot guarantee brew's lock is free.
    """
    try:
        subprocess_counter.increment("ps")
        result = subprocess.run(
            ["ps", "-Ao", "pid=,command="],
            capture_output=True,
            text=True,
            timeout=10
        )
    except (FileNotFoundError, subprocess.SubprocessError) as e:
        logger.debug(f"Unable to list processes: {e}")
        return []

    if result.returncode != 0:
        logger.debug(f"ps exited with {result.returncode}: {result.stderr.strip()}")
        return []

    own_pids = {os.getpid(), os.getppid()}
    running = []
    for line in result.stdout.splitlines():
        parts = line.strip().split(None, 1)
        if len(parts) != 2:
            continue
        pid, command = parts
        try:
            if int(pid) in own_pids:
                continue
        except ValueError:
            continue
        if _is_brew_command(command):
            running.append(command)

    if running:
        logger.info(f"Found {len(running)} running brew processes")
    return running
