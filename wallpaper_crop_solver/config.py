"""
Application constants and configuration.

Geometry constants used by the crop solver, the preference keys used to
persist the chosen wallpaper dimensions, and the image extensions the
source-size probe accepts.

The ``config_dir()`` helper returns the platform-appropriate config
directory and is used by the preferences module.
"""

import os
import sys
from pathlib import Path

# =============================================================================
# APP IDENTITY & CONFIG DIRECTORY
# =============================================================================
APP_NAME = "wallpaper-crop-solver"


def config_dir() -> Path:
    """Return the platform-appropriate config directory, creating it if needed."""
    if sys.platform == "win32":
        base = Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming"))
    elif sys.platform == "darwin":
        base = Path.home() / "Library" / "Application Support"
    else:
        base = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
    directory = base / APP_NAME
    directory.mkdir(parents=True, exist_ok=True)
    return directory


# =============================================================================
# WALLPAPER GEOMETRY
# =============================================================================
# How many screens wide the wallpaper should be, for horizontal parallax
WALLPAPER_SCREENS_SPAN = 2.0

# Rotations are quarter turns only; anything else is rejected
ROTATION_STEP = 90

# Anchor the crop on its centre rather than the leading edge
CENTER_CROP_DEFAULT = False

# =============================================================================
# PREFERENCES
# =============================================================================
PREFS_FILENAME = "wallpaper_prefs.json"
WALLPAPER_WIDTH_KEY = "wallpaper.width"
WALLPAPER_HEIGHT_KEY = "wallpaper.height"

# Supported image extensions for the source-size probe
IMAGE_EXTENSIONS = {".png", ".jpg", ".jpeg", ".bmp", ".tiff", ".tif", ".webp", ".gif", ".psd"}
