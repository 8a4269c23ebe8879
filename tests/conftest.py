import pytest


@pytest.fixture
def config_home(tmp_path, monkeypatch):
    """Point the preferences module at a throwaway config directory."""
    monkeypatch.setattr("wallpaper_crop_solver.prefs.config_dir", lambda: tmp_path)
    return tmp_path
