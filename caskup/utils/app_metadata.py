"""Utilities for deriving Homebrew cask tokens from macOS application names."""

import os
import functools
import logging
from typing import Dict

# Set up logging for this module
logger = logging.getLogger(__name__)

APP_SUFFIX = ".app"

# Applications whose cask token differs from the plain lowercase/hyphen form
CASK_NAME_OVERRIDES: Dict[str, str] = {
    "Brave Browser": "brave-browser",
    "Notion Calendar": "notion-calendar",
    "JetBrains Toolbox": "jetbrains-toolbox",
}


def app_name_from_path(app_path: str) -> str:
    """Return the application name for a bundle path.

    "/Users/me/Applications/Visual Studio Code.app" -> "Visual Studio Code"
    """
    name = os.path.basename(os.path.normpath(app_path))
    if name.endswith(APP_SUFFIX):
        name = name[:-len(APP_SUFFIX)]
    return name


@functools.lru_cache(maxsize=512)
def derive_cask_token(app_name: str) -> str:
    """Derive the candidate cask token for an application name.

    The name is lowercased and every space becomes a hyphen. Names listed in
    CASK_NAME_OVERRIDES map to their fixed token instead.

    Args:
        app_name: Application name, with or without the .app suffix

    Returns:
        Candidate cask token
    """
    if app_name.endswith(APP_SUFFIX):
        app_name = app_name[:-len(APP_SUFFIX)]

    override = CASK_NAME_OVERRIDES.get(app_name)
    if override:
        logger.debug(f"Using override token '{override}' for {app_name}")
        return override

    return app_name.lower().replace(" ", "-")
