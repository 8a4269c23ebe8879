"""
Data models shared by the solver, the preferences layer and the CLI.

All geometry values are immutable.  Every step of the solver takes a
``Rect`` and hands back a new one, so intermediate results can be
inspected and tested in isolation.
"""

from dataclasses import dataclass, replace


class InvalidGeometry(ValueError):
    """Structurally invalid solver input (bad sizes, scale, rotation or crop)."""


# =============================================================================
# Data classes
# =============================================================================
@dataclass(frozen=True)
class Size:
    """Pixel dimensions."""
    width: int
    height: int

    def as_tuple(self) -> tuple[int, int]:
        return self.width, self.height


@dataclass(frozen=True)
class Rect:
    """Crop rectangle in source-image coordinates (origin top-left, Y down)."""
    left: float = 0.0
    top: float = 0.0
    right: float = 0.0
    bottom: float = 0.0

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top

    def with_edges(self, **edges: float) -> "Rect":
        """Return a copy with some of left/top/right/bottom replaced."""
        return replace(self, **edges)

    def as_tuple(self) -> tuple[float, float, float, float]:
        return self.left, self.top, self.right, self.bottom


@dataclass(frozen=True)
class CropRequest:
    """
    Snapshot of everything the solver needs for one crop action.

    ``view_width`` is the on-screen width of the crop view in pixels; the
    ratio between it and ``candidate_crop.width`` converts source-space
    lengths to output pixels.  ``wallpaper_size`` falls back to
    ``default_wallpaper_size(display_size)`` when left as None.
    """
    source_size: Size
    candidate_crop: Rect
    view_width: float
    display_size: Size
    rotation: int = 0
    layout_is_ltr: bool = True
    center_crop: bool = False
    wallpaper_size: Size | None = None

    @property
    def crop_scale(self) -> float:
        return self.view_width / self.candidate_crop.width

    @property
    def is_portrait(self) -> bool:
        return self.display_size.width < self.display_size.height


@dataclass(frozen=True)
class CropResult:
    """Final crop rectangle and the pixel size it should be scaled to."""
    final_crop: Rect
    output_size: Size

    def to_dict(self) -> dict:
        """JSON-safe representation used by the CLI."""
        return {
            "crop": list(self.final_crop.as_tuple()),
            "width": self.output_size.width,
            "height": self.output_size.height,
        }
