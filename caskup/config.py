"""Run configuration for caskup."""

import os
from dataclasses import dataclass, field
from typing import FrozenSet, Set

DEFAULT_APPS_DIR = "~/Applications"

# Casks known to prompt for an administrator password during upgrade
DEFAULT_SUDO_CASKS: FrozenSet[str] = frozenset({
    "spotify",
    "jetbrains-toolbox",
})


def _default_sudo_casks() -> Set[str]:
    return set(DEFAULT_SUDO_CASKS)


@dataclass
class UpgradeConfig:
    """Settings for a single upgrade run."""
    apps_dir: str = DEFAULT_APPS_DIR
    skip_sudo: bool = False
    assume_yes: bool = False
    verbose: bool = False
    # Mutable per run: failures that look privilege-related add their token here
    sudo_casks: Set[str] = field(default_factory=_default_sudo_casks)

    def __post_init__(self):
        self.apps_dir = os.path.expanduser(self.apps_dir)

    @classmethod
    def from_args(cls, args) -> "UpgradeConfig":
        """Build a config from parsed command line arguments"""
        return cls(
            apps_dir=getattr(args, 'apps_dir', None) or DEFAULT_APPS_DIR,
            skip_sudo=getattr(args, 'skip_sudo', False),
            assume_yes=getattr(args, 'yes', False),
            verbose=getattr(args, 'verbose', False),
        )
