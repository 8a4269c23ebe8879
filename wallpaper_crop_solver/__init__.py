"""Crop geometry for setting an image as a device wallpaper."""

from wallpaper_crop_solver.models import CropRequest, CropResult, InvalidGeometry, Rect, Size
from wallpaper_crop_solver.solver import (
    default_wallpaper_size,
    max_aspect_crop,
    solve_crop,
    solve_default_crop,
    solve_no_crop,
)

__version__ = "1.0.0"

__all__ = [
    "CropRequest",
    "CropResult",
    "InvalidGeometry",
    "Rect",
    "Size",
    "default_wallpaper_size",
    "max_aspect_crop",
    "solve_crop",
    "solve_default_crop",
    "solve_no_crop",
]
