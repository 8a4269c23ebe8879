"""
Command-line entry point.

Usage:
    python -m wallpaper_crop_solver solve photo.jpg --display 1080x1920
    wallpaper-crop-solver suggest --display 1080x1920 --current 1080x1920
                                 (after pip install)

Every solving command prints the result as JSON.  ``--save`` records the
output size in the wallpaper preferences, like setting the wallpaper would.
"""

import json
import logging
from pathlib import Path

import typer

from wallpaper_crop_solver.config import CENTER_CROP_DEFAULT
from wallpaper_crop_solver.image_io import load_source_size
from wallpaper_crop_solver.models import CropRequest, CropResult, InvalidGeometry, Rect, Size
from wallpaper_crop_solver.prefs import (
    load_wallpaper_prefs,
    save_wallpaper_prefs,
    suggest_wallpaper_dimension,
    update_wallpaper_dimensions,
)
from wallpaper_crop_solver.solver import (
    rotated_bounds,
    solve_crop,
    solve_default_crop,
    solve_no_crop,
)

app = typer.Typer(add_completion=False, no_args_is_help=True, help="Wallpaper crop solver.")
logger = logging.getLogger("wallpaper_crop_solver")


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


# =============================================================================
# Argument parsing
# =============================================================================
def _parse_size(value: str | None, option: str) -> Size | None:
    """Parse ``"WIDTHxHEIGHT"`` into a Size."""
    if value is None:
        return None
    parts = value.lower().split("x")
    try:
        width, height = (int(p) for p in parts)
    except ValueError:
        raise typer.BadParameter(f"expected WIDTHxHEIGHT, got {value!r}", param_hint=option)
    if width <= 0 or height <= 0:
        raise typer.BadParameter(f"size must be positive, got {value!r}", param_hint=option)
    return Size(width, height)


def _parse_rect(value: str | None) -> Rect | None:
    """Parse ``"left,top,right,bottom"`` into a Rect."""
    if value is None:
        return None
    try:
        left, top, right, bottom = (float(p) for p in value.split(","))
    except ValueError:
        raise typer.BadParameter(f"expected LEFT,TOP,RIGHT,BOTTOM, got {value!r}", param_hint="--crop")
    return Rect(left, top, right, bottom)


def _resolve_source(image: Path | None, source: str | None) -> Size:
    """Source size from an image file or an explicit ``--source``; exactly one is required."""
    if (image is None) == (source is None):
        raise typer.BadParameter("give either an IMAGE or --source WIDTHxHEIGHT, not both")
    if source is not None:
        return _parse_size(source, "--source")

    size = load_source_size(image)
    if size is None:
        typer.secho(f"Could not load image: {image}", err=True, fg=typer.colors.RED)
        raise typer.Exit(1)
    return size


def _emit(result: CropResult, save: bool, saved_size: Size | None = None) -> None:
    if save:
        width, height = saved_size.as_tuple() if saved_size else (0, 0)
        prefs = load_wallpaper_prefs()
        update_wallpaper_dimensions(prefs, width, height)
        save_wallpaper_prefs(prefs)
        logger.info("Stored wallpaper dimensions %dx%d", width, height)
    typer.echo(json.dumps(result.to_dict(), indent=2))


def _fail(exc: Exception) -> None:
    typer.secho(f"Invalid geometry: {exc}", err=True, fg=typer.colors.RED)
    raise typer.Exit(1)


# =============================================================================
# Commands
# =============================================================================
@app.command()
def solve(
    image: Path | None = typer.Argument(None, dir_okay=False, help="Image to crop (size is read from its header)."),
    source: str | None = typer.Option(None, "--source", help="Source size WIDTHxHEIGHT instead of an image."),
    display: str = typer.Option(..., "--display", help="Display size WIDTHxHEIGHT."),
    crop: str | None = typer.Option(None, "--crop", help="Candidate crop LEFT,TOP,RIGHT,BOTTOM (default: whole image)."),
    view_width: float | None = typer.Option(None, "--view-width", help="Crop view width in pixels (default: display width)."),
    wallpaper: str | None = typer.Option(None, "--wallpaper", help="Desired wallpaper size WIDTHxHEIGHT (default: from display)."),
    rotation: int = typer.Option(0, "--rotation", help="Image rotation in degrees (multiple of 90)."),
    rtl: bool = typer.Option(False, "--rtl/--ltr", help="Right-to-left layout."),
    center: bool = typer.Option(CENTER_CROP_DEFAULT, "--center/--edge", help="Extend the crop around its centre."),
    save: bool = typer.Option(False, "--save", help="Store the output size in the wallpaper preferences."),
    log_level: str = typer.Option("info", "--log-level"),
) -> None:
    """Solve the final crop for a user-adjusted crop rectangle."""
    _setup_logging(log_level)
    source_size = _resolve_source(image, source)
    display_size = _parse_size(display, "--display")

    try:
        candidate = _parse_rect(crop)
        if candidate is None:
            candidate = Rect(0.0, 0.0, *rotated_bounds(source_size, rotation))
        request = CropRequest(
            source_size=source_size,
            candidate_crop=candidate,
            view_width=view_width if view_width is not None else display_size.width,
            display_size=display_size,
            rotation=rotation,
            layout_is_ltr=not rtl,
            center_crop=center,
            wallpaper_size=_parse_size(wallpaper, "--wallpaper"),
        )
        result = solve_crop(request)
    except InvalidGeometry as exc:
        _fail(exc)

    _emit(result, save, result.output_size)


@app.command("default-crop")
def default_crop(
    image: Path | None = typer.Argument(None, dir_okay=False),
    source: str | None = typer.Option(None, "--source", help="Source size WIDTHxHEIGHT instead of an image."),
    display: str = typer.Option(..., "--display", help="Display size WIDTHxHEIGHT."),
    wallpaper: str | None = typer.Option(None, "--wallpaper", help="Desired wallpaper size WIDTHxHEIGHT."),
    left_aligned: bool = typer.Option(False, "--left-aligned", help="Anchor a horizontal crop at the left edge."),
    save: bool = typer.Option(False, "--save", help="Reset the stored dimensions to the device defaults."),
    log_level: str = typer.Option("info", "--log-level"),
) -> None:
    """Largest crop matching the wallpaper aspect, with no user adjustment."""
    _setup_logging(log_level)
    source_size = _resolve_source(image, source)
    try:
        result = solve_default_crop(
            source_size,
            _parse_size(display, "--display"),
            _parse_size(wallpaper, "--wallpaper"),
            left_aligned,
        )
    except InvalidGeometry as exc:
        _fail(exc)
    # Device defaults are implied, so nothing specific is stored
    _emit(result, save, None)


@app.command("no-crop")
def no_crop(
    image: Path | None = typer.Argument(None, dir_okay=False),
    source: str | None = typer.Option(None, "--source", help="Source size WIDTHxHEIGHT instead of an image."),
    rotation: int = typer.Option(0, "--rotation", help="Image rotation in degrees (multiple of 90)."),
    save: bool = typer.Option(False, "--save", help="Store the image bounds in the wallpaper preferences."),
    log_level: str = typer.Option("info", "--log-level"),
) -> None:
    """Use the whole (rotated) image without cropping."""
    _setup_logging(log_level)
    source_size = _resolve_source(image, source)
    try:
        result = solve_no_crop(source_size, rotation)
    except InvalidGeometry as exc:
        _fail(exc)
    _emit(result, save, result.output_size)


@app.command()
def suggest(
    display: str = typer.Option(..., "--display", help="Display size WIDTHxHEIGHT."),
    current: str = typer.Option(..., "--current", help="Minimum wallpaper size the device reports now."),
    fallback: bool = typer.Option(True, "--fallback/--no-fallback", help="Fall back to the display default."),
    log_level: str = typer.Option("info", "--log-level"),
) -> None:
    """Print the wallpaper dimensions to suggest to the device, or null if unchanged."""
    _setup_logging(log_level)
    size = suggest_wallpaper_dimension(
        load_wallpaper_prefs(),
        _parse_size(display, "--display"),
        _parse_size(current, "--current"),
        fallback,
    )
    typer.echo(json.dumps({"suggest": list(size.as_tuple()) if size else None}))


@app.command()
def reset(log_level: str = typer.Option("info", "--log-level")) -> None:
    """Forget the stored wallpaper dimensions."""
    _setup_logging(log_level)
    prefs = load_wallpaper_prefs()
    update_wallpaper_dimensions(prefs, 0, 0)
    save_wallpaper_prefs(prefs)
    typer.echo("Stored wallpaper dimensions cleared.")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
