"""Application bundle discovery in the user applications directory."""

import os
import glob
import logging
from typing import List, Optional

from ..utils.app_metadata import APP_SUFFIX, app_name_from_path
from ..utils.ui import print_info, print_warning

# Set up logging for this module
logger = logging.getLogger(__name__)


def get_user_applications(apps_dir: str) -> List[str]:
    """Get the names of all application bundles in apps_dir

    Only directories ending in .app count. Names are returned without the
    suffix, sorted alphabetically.
    """
    try:
        if not os.path.isdir(apps_dir):
            logger.warning(f"{apps_dir} directory does not exist")
            return []

        apps = []
        for item in os.listdir(apps_dir):
            if not item.endswith(APP_SUFFIX):
                continue
            app_path = os.path.join(apps_dir, item)
            # Verify the .app is actually a directory
            if os.path.isdir(app_path):
                apps.append(app_name_from_path(app_path))
            else:
                logger.warning(f"Skipping {item} - not a valid application bundle")

        logger.info(f"Found {len(apps)} applications in {apps_dir}")
        return sorted(apps)
    except PermissionError:
        logger.error(f"Permission denied accessing {apps_dir} directory")
        return []
    except OSError as e:
        logger.error(f"OS error scanning {apps_dir} directory: {e}")
        return []


def find_app_path(app_name: str, apps_dir: str) -> Optional[str]:
    """Locate the bundle for app_name, falling back to a prefix match

    Args:
        app_name: Application name without the .app suffix
        apps_dir: Directory holding the bundles

    Returns:
        Path to the bundle, or None when nothing matches
    """
    app_path = os.path.join(apps_dir, f"{app_name}{APP_SUFFIX}")
    if os.path.isdir(app_path):
        return app_path

    print_warning(f"App not found at expected path: {app_path}")

    # Bundles sometimes carry a version or edition suffix in their name
    pattern = os.path.join(glob.escape(apps_dir), f"{glob.escape(app_name)}*{APP_SUFFIX}")
    candidates = sorted(path for path in glob.glob(pattern) if os.path.isdir(path))
    if candidates:
        print_info(f"Found app at alternative path: {candidates[0]}")
        return candidates[0]

    logger.debug(f"No bundle matching {pattern}")
    return None
