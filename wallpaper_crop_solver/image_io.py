"""
Source-size probe.

Reads an image's pixel dimensions from its header without decoding the
bitmap: psd-tools for PSD, Pillow for everything else.  ``load_source_size``
is the loader boundary in front of the solver; any failure to read the
file is logged and reported as ``None`` so the solver is never invoked
on a missing size.
"""

import logging
from pathlib import Path

from PIL import Image, UnidentifiedImageError
from psd_tools import PSDImage

from wallpaper_crop_solver.config import IMAGE_EXTENSIONS
from wallpaper_crop_solver.models import Size

# Allow very large images (Pillow's default limit is ~178MP)
Image.MAX_IMAGE_PIXELS = None

logger = logging.getLogger(__name__)


def get_image_size(path: Path) -> tuple[int, int]:
    """Get image dimensions without fully loading/compositing."""
    if path.suffix.lower() == ".psd":
        psd = PSDImage.open(str(path))
        return psd.width, psd.height
    with Image.open(path) as img:
        return img.size


def load_source_size(path: Path) -> Size | None:
    """
    Return the pixel size of the image at *path*, or None if it can't be read.

    Unsupported extensions, missing or unreadable files (including
    permission failures) and corrupt headers all yield None.
    """
    path = Path(path)
    if path.suffix.lower() not in IMAGE_EXTENSIONS:
        logger.warning("Unsupported image type %r: %s", path.suffix, path)
        return None

    try:
        width, height = get_image_size(path)
    except UnidentifiedImageError as exc:
        logger.error("Not a readable image %s: %s", path, exc)
        return None
    except (OSError, ValueError) as exc:
        logger.error("Failed to load %s: %s", path, exc)
        return None

    if width <= 0 or height <= 0:
        logger.error("Image %s reports empty size %dx%d", path, width, height)
        return None

    logger.debug("Loaded source size %dx%d from %s", width, height, path)
    return Size(width, height)
