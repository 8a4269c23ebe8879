"""Tests for the command-line interface."""

import json

import pytest
from PIL import Image
from typer.testing import CliRunner

from wallpaper_crop_solver.cli import app
from wallpaper_crop_solver.config import WALLPAPER_HEIGHT_KEY, WALLPAPER_WIDTH_KEY
from wallpaper_crop_solver.models import Size
from wallpaper_crop_solver.prefs import load_wallpaper_prefs, save_wallpaper_prefs, stored_dimensions


@pytest.fixture
def runner():
    return CliRunner()


def _invoke(runner, *args):
    return runner.invoke(app, [*args, "--log-level", "error"])


def test_solve_rtl_edge_crop(runner):
    result = _invoke(
        runner, "solve", "--source", "4000x3000", "--display", "1080x1920",
        "--crop", "2000,0,3000,1000", "--view-width", "2000", "--rtl", "--edge",
    )
    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload == {"crop": [1920.0, 0.0, 3000.0, 960.0], "width": 2160, "height": 1920}


def test_solve_image_and_save(runner, config_home, tmp_path):
    path = tmp_path / "tall.png"
    Image.new("RGB", (1000, 2000)).save(path)

    result = _invoke(runner, "solve", str(path), "--display", "1080x1920", "--center", "--save")
    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert (payload["width"], payload["height"]) == (1080, 1920)
    assert stored_dimensions(load_wallpaper_prefs()) == Size(1080, 1920)


def test_solve_rejects_bad_rotation(runner):
    result = _invoke(runner, "solve", "--source", "1000x2000", "--display", "1080x1920", "--rotation", "45")
    assert result.exit_code == 1


def test_solve_unreadable_image_fails(runner, tmp_path):
    result = _invoke(runner, "solve", str(tmp_path / "missing.png"), "--display", "1080x1920")
    assert result.exit_code == 1


def test_solve_needs_exactly_one_source(runner, tmp_path):
    both = _invoke(runner, "solve", str(tmp_path / "a.png"), "--source", "10x10", "--display", "1080x1920")
    neither = _invoke(runner, "solve", "--display", "1080x1920")
    assert both.exit_code == 2
    assert neither.exit_code == 2


def test_solve_rejects_malformed_size(runner):
    result = _invoke(runner, "solve", "--source", "1000by2000", "--display", "1080x1920")
    assert result.exit_code == 2


def test_default_crop_resets_stored_dimensions(runner, config_home):
    save_wallpaper_prefs({WALLPAPER_WIDTH_KEY: 1500, WALLPAPER_HEIGHT_KEY: 1920})

    result = _invoke(runner, "default-crop", "--source", "4000x2000", "--display", "1080x1920", "--save")
    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload == {"crop": [875.0, 0.0, 3125.0, 2000.0], "width": 2160, "height": 1920}
    assert load_wallpaper_prefs() == {}


def test_no_crop_rotated(runner):
    result = _invoke(runner, "no-crop", "--source", "1000x2000", "--rotation", "90")
    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout) == {"crop": [0.0, 0.0, 2000.0, 1000.0], "width": 2000, "height": 1000}


def test_suggest_uses_stored_dimensions(runner, config_home):
    save_wallpaper_prefs({WALLPAPER_WIDTH_KEY: 2160, WALLPAPER_HEIGHT_KEY: 1920})
    result = _invoke(runner, "suggest", "--display", "1080x1920", "--current", "1080x1920")
    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout) == {"suggest": [2160, 1920]}


def test_suggest_without_fallback(runner, config_home):
    result = _invoke(runner, "suggest", "--display", "1080x1920", "--current", "1080x1920", "--no-fallback")
    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout) == {"suggest": None}


def test_reset_clears_stored_dimensions(runner, config_home):
    save_wallpaper_prefs({WALLPAPER_WIDTH_KEY: 2160, WALLPAPER_HEIGHT_KEY: 1920})
    result = _invoke(runner, "reset")
    assert result.exit_code == 0, result.output
    assert load_wallpaper_prefs() == {}
