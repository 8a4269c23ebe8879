"""
Wallpaper crop geometry.

``solve_crop`` turns a user-adjusted crop into a wallpaper-compliant one:
the candidate rect is clamped to the rotated image, widened for parallax,
its height fitted to the display orientation, and the output pixel size
derived from the crop-view scale.  Every step is a pure function returning
a new ``Rect``.

Two simpler modes sit alongside it: ``solve_default_crop`` (largest
centred crop matching the wallpaper aspect, no user input) and
``solve_no_crop`` (the whole rotated image as-is).

Rounding of output sizes is half away from zero.  All rounded values are
non-negative, so this is ``floor(x + 0.5)``.
"""

import logging
import math

from wallpaper_crop_solver.config import ROTATION_STEP, WALLPAPER_SCREENS_SPAN
from wallpaper_crop_solver.models import CropRequest, CropResult, InvalidGeometry, Rect, Size

logger = logging.getLogger(__name__)

# (cos, sin) for each quarter turn, exact so 90/270 never leave float residue
_QUARTER_TURNS = {0: (1, 0), 90: (0, 1), 180: (-1, 0), 270: (0, -1)}


# =============================================================================
# Validation helpers
# =============================================================================
def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _check_size(size: Size, what: str) -> None:
    for name, value in (("width", size.width), ("height", size.height)):
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            raise InvalidGeometry(f"{what} {name} must be a positive integer, got {value!r}")


def _check_rect(rect: Rect) -> None:
    if not all(math.isfinite(v) for v in rect.as_tuple()):
        raise InvalidGeometry(f"crop rect has non-finite edges: {rect}")
    if rect.width <= 0 or rect.height <= 0:
        raise InvalidGeometry(f"crop rect is degenerate: {rect}")


def normalize_rotation(rotation: int) -> int:
    """Map any multiple of 90 degrees onto 0, 90, 180 or 270."""
    if isinstance(rotation, bool) or not isinstance(rotation, (int, float)):
        raise InvalidGeometry(f"rotation must be a number, got {rotation!r}")
    if not math.isfinite(rotation) or rotation % ROTATION_STEP != 0:
        raise InvalidGeometry(f"rotation must be a multiple of {ROTATION_STEP}, got {rotation!r}")
    return int(rotation) % 360


# =============================================================================
# Device policy
# =============================================================================
def default_wallpaper_size(display_size: Size) -> Size:
    """Desired wallpaper size for a display: ``WALLPAPER_SCREENS_SPAN`` screens wide."""
    _check_size(display_size, "display")
    return Size(_round_half_up(display_size.width * WALLPAPER_SCREENS_SPAN), display_size.height)


# =============================================================================
# Solver steps
# =============================================================================
def rotated_bounds(size: Size, rotation: int) -> tuple[float, float]:
    """Width and height of the image's bounding box after rotation."""
    _check_size(size, "source")
    cos_a, sin_a = _QUARTER_TURNS[normalize_rotation(rotation)]
    x = size.width * cos_a - size.height * sin_a
    y = size.width * sin_a + size.height * cos_a
    return float(abs(x)), float(abs(y))


def clamp_to_bounds(rect: Rect, bounds_w: float, bounds_h: float) -> Rect:
    """
    Clamp *rect* to ``[0, bounds_w] x [0, bounds_h]``.

    The crop view can report edges a hair outside the image after
    rounding; those are pulled back in.  A rect left with no area is
    rejected.
    """
    clamped = Rect(
        max(0.0, rect.left),
        max(0.0, rect.top),
        min(bounds_w, rect.right),
        min(bounds_h, rect.bottom),
    )
    if clamped.width <= 0 or clamped.height <= 0:
        raise InvalidGeometry(
            f"crop {rect} does not overlap the rotated image ({bounds_w} x {bounds_h})"
        )
    if clamped != rect:
        logger.debug("Clamped crop %s to %s", rect.as_tuple(), clamped.as_tuple())
    return clamped


def extend_width(
    rect: Rect,
    bounds_w: float,
    crop_scale: float,
    wallpaper_width: int,
    center_crop: bool,
    layout_is_ltr: bool = True,
) -> Rect:
    """
    Widen the crop for parallax, up to the wallpaper width.

    Centred crops grow equally on both sides, limited by the smaller
    margin.  Otherwise the trailing edge in reading order takes all of
    its margin (right in LTR, left in RTL).  A crop that is already wide
    enough is left alone.
    """
    if center_crop:
        extra = 2.0 * min(bounds_w - rect.right, rect.left)
    else:
        extra = bounds_w - rect.right if layout_is_ltr else rect.left

    max_extra = wallpaper_width / crop_scale - rect.width
    extra = max(0.0, min(extra, max_extra))
    if extra == 0.0:
        return rect

    if center_crop:
        half = extra / 2.0
        return rect.with_edges(
            left=max(0.0, rect.left - half),
            right=min(bounds_w, rect.right + half),
        )
    if layout_is_ltr:
        return rect.with_edges(right=min(bounds_w, rect.right + extra))
    return rect.with_edges(left=max(0.0, rect.left - extra))


def adjust_height(
    rect: Rect,
    bounds_h: float,
    crop_scale: float,
    wallpaper_height: int,
    portrait: bool,
) -> Rect:
    """
    Fit the crop height to the display orientation.

    Portrait: height is pinned to the wallpaper height, anchored at the
    current top.  If that runs past the image bottom the rect slides up;
    an image shorter than the pinned height is used in full.

    Landscape: grow top and bottom symmetrically toward the wallpaper
    height, limited by the smaller vertical margin.  Never shrinks.
    """
    target = wallpaper_height / crop_scale

    if portrait:
        top = rect.top
        if top + target > bounds_h:
            top = max(0.0, bounds_h - target)
        return rect.with_edges(top=top, bottom=min(bounds_h, top + target))

    extra = target - rect.height
    expand = max(0.0, min(bounds_h - rect.bottom, rect.top, extra / 2.0))
    if expand == 0.0:
        return rect
    return rect.with_edges(
        top=max(0.0, rect.top - expand),
        bottom=min(bounds_h, rect.bottom + expand),
    )


def output_size(rect: Rect, crop_scale: float) -> Size:
    """Pixel size of *rect* once scaled by *crop_scale*."""
    width = _round_half_up(rect.width * crop_scale)
    height = _round_half_up(rect.height * crop_scale)
    if width <= 0 or height <= 0:
        raise InvalidGeometry(f"crop {rect.as_tuple()} scales to an empty {width}x{height} output")
    return Size(width, height)


# =============================================================================
# Solving modes
# =============================================================================
def solve_crop(request: CropRequest) -> CropResult:
    """Compute the final crop and output size for a user-adjusted crop."""
    _check_size(request.display_size, "display")
    wallpaper = request.wallpaper_size or default_wallpaper_size(request.display_size)
    _check_size(wallpaper, "wallpaper")
    _check_rect(request.candidate_crop)

    crop_scale = request.crop_scale
    if not math.isfinite(crop_scale) or crop_scale <= 0:
        raise InvalidGeometry(f"crop scale must be positive and finite, got {crop_scale!r}")

    bounds_w, bounds_h = rotated_bounds(request.source_size, request.rotation)

    rect = clamp_to_bounds(request.candidate_crop, bounds_w, bounds_h)
    rect = extend_width(
        rect, bounds_w, crop_scale, wallpaper.width,
        request.center_crop, request.layout_is_ltr,
    )
    rect = adjust_height(rect, bounds_h, crop_scale, wallpaper.height, request.is_portrait)
    size = output_size(rect, crop_scale)

    logger.debug(
        "Solved crop %s -> %s at %dx%d (scale %.4f, rotation %d)",
        request.candidate_crop.as_tuple(), rect.as_tuple(),
        size.width, size.height, crop_scale, request.rotation,
    )
    return CropResult(rect, size)


def max_aspect_crop(source_size: Size, target_size: Size, left_aligned: bool = False) -> Rect:
    """
    Largest crop of the source with the target's aspect ratio.

    Wider sources keep full height and are cropped horizontally (centred,
    or at the left edge when *left_aligned*); taller sources keep full
    width and are centred vertically.
    """
    _check_size(source_size, "source")
    _check_size(target_size, "target")
    sw, sh = source_size.as_tuple()
    tw, th = target_size.as_tuple()

    # Integer cross-multiplication keeps equal aspects exact
    if sw * th > tw * sh:
        crop_w = sh * tw / th
        left = 0.0 if left_aligned else (sw - crop_w) / 2.0
        return Rect(left, 0.0, left + crop_w, float(sh))

    crop_h = sw * th / tw
    top = (sh - crop_h) / 2.0
    return Rect(0.0, top, float(sw), top + crop_h)


def solve_default_crop(
    source_size: Size,
    display_size: Size,
    wallpaper_size: Size | None = None,
    left_aligned: bool = False,
) -> CropResult:
    """Crop for an image used without user adjustment, scaled to the wallpaper size."""
    wallpaper = wallpaper_size or default_wallpaper_size(display_size)
    crop = max_aspect_crop(source_size, wallpaper, left_aligned)
    return CropResult(crop, wallpaper)


def solve_no_crop(source_size: Size, rotation: int = 0) -> CropResult:
    """Use the whole rotated image at its native size."""
    bounds_w, bounds_h = rotated_bounds(source_size, rotation)
    return CropResult(Rect(0.0, 0.0, bounds_w, bounds_h), Size(int(bounds_w), int(bounds_h)))
