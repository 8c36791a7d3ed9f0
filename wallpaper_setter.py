"""
Hand a finished per-monitor image to the OS wallpaper utility.

  xwallpaper --output <monitor> --maximize <image>
"""

import logging
import subprocess
from pathlib import Path

from wallpaper_errors import ExternalToolFailure

logger = logging.getLogger(__name__)

WALLPAPER_TOOL = "xwallpaper"
DISPLAY_MODE = "--maximize"


def wallpaper_command(name: str, image_path: Path, tool: str = WALLPAPER_TOOL) -> list[str]:
    return [tool, "--output", name, DISPLAY_MODE, str(image_path)]


def apply_wallpaper(name: str, image_path: Path, tool: str = WALLPAPER_TOOL):
    command = wallpaper_command(name, image_path, tool)
    logger.debug("Running %s", " ".join(command))
    try:
        subprocess.run(command, capture_output=True, text=True, check=True)
    except FileNotFoundError as exc:
        raise ExternalToolFailure(f"{tool} is not installed") from exc
    except subprocess.CalledProcessError as exc:
        raise ExternalToolFailure(
            f"{tool} failed for {name} with status {exc.returncode}: {exc.stderr}".rstrip()
        ) from exc


def make_applier(tool: str = WALLPAPER_TOOL):
    """apply(name, path) bound to a specific wallpaper tool."""
    def apply(name: str, image_path: Path):
        apply_wallpaper(name, image_path, tool)
    return apply
