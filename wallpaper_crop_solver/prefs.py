"""
Persistent wallpaper dimensions.

After a wallpaper is set, its output size is remembered so the desired
wallpaper dimensions can be re-suggested later (e.g. after a restart or
a display change).  Storing ``0`` for either dimension clears the entry,
meaning "use the device defaults".

The on-disk format uses a versioned envelope::

    {
        "version": 1,
        "values": {
            "wallpaper.width": 2160,
            "wallpaper.height": 1920
        }
    }
"""

import json
import logging

from wallpaper_crop_solver.config import (
    PREFS_FILENAME,
    WALLPAPER_HEIGHT_KEY,
    WALLPAPER_WIDTH_KEY,
    config_dir,
)
from wallpaper_crop_solver.models import Size
from wallpaper_crop_solver.solver import default_wallpaper_size

logger = logging.getLogger(__name__)

_PREFS_VERSION = 1


# =============================================================================
# Load / Save
# =============================================================================
def load_wallpaper_prefs() -> dict:
    """
    Load the wallpaper preferences from disk.

    Returns the ``values`` dict from the versioned envelope, or an empty
    dict if the file is missing, corrupt, or has an unexpected version.
    """
    path = config_dir() / PREFS_FILENAME

    if not path.exists():
        logger.debug("No wallpaper prefs found at %s, starting fresh", path)
        return {}

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, OSError) as exc:
        logger.warning("Failed to read wallpaper prefs (%s), starting fresh", exc)
        return {}

    if not isinstance(raw, dict) or raw.get("version") != _PREFS_VERSION:
        logger.warning("Wallpaper prefs version mismatch or invalid format, starting fresh")
        return {}

    values = raw.get("values")
    if not isinstance(values, dict):
        logger.warning("Wallpaper prefs missing 'values' dict, starting fresh")
        return {}

    return values


def save_wallpaper_prefs(prefs: dict) -> None:
    """Write *prefs* (as returned by ``load_wallpaper_prefs``) to disk."""
    envelope = {"version": _PREFS_VERSION, "values": prefs}
    path = config_dir() / PREFS_FILENAME
    try:
        path.write_text(json.dumps(envelope, indent=2), encoding="utf-8")
        logger.debug("Saved wallpaper prefs to %s", path)
    except OSError as exc:
        logger.error("Could not write wallpaper prefs to %s: %s", path, exc)


# =============================================================================
# Dimensions
# =============================================================================
def update_wallpaper_dimensions(prefs: dict, width: int, height: int) -> None:
    """Record the wallpaper size, or forget it when either side is 0."""
    if width != 0 and height != 0:
        prefs[WALLPAPER_WIDTH_KEY] = width
        prefs[WALLPAPER_HEIGHT_KEY] = height
    else:
        prefs.pop(WALLPAPER_WIDTH_KEY, None)
        prefs.pop(WALLPAPER_HEIGHT_KEY, None)


def stored_dimensions(prefs: dict) -> Size | None:
    """The remembered wallpaper size, or None if nothing valid is stored."""
    width = prefs.get(WALLPAPER_WIDTH_KEY)
    height = prefs.get(WALLPAPER_HEIGHT_KEY)
    if not isinstance(width, int) or not isinstance(height, int):
        return None
    if width <= 0 or height <= 0:
        return None
    return Size(width, height)


def suggest_wallpaper_dimension(
    prefs: dict,
    display_size: Size,
    current_minimum: Size,
    fall_back_to_defaults: bool = True,
) -> Size | None:
    """
    Decide which desired wallpaper dimensions to suggest to the device.

    The stored size wins; without one, the display's default wallpaper
    size is used when *fall_back_to_defaults* is set.  Returns None when
    there is nothing to suggest or the device already reports the same
    minimum dimensions.
    """
    suggested = stored_dimensions(prefs)
    if suggested is None:
        if not fall_back_to_defaults:
            return None
        suggested = default_wallpaper_size(display_size)

    if suggested == current_minimum:
        return None

    logger.info(
        "Suggesting wallpaper dimensions %dx%d (device reports %dx%d)",
        suggested.width, suggested.height, current_minimum.width, current_minimum.height,
    )
    return suggested
