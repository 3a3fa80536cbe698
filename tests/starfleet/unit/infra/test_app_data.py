from __future__ import annotations

from pathlib import Path

from starfleet.game.infra.app_data import (
    ensure_app_data_dirs,
    resolve_app_data_root,
    resolve_saves_dir,
)


def test_resolve_app_data_root_prefers_configured_dir(monkeypatch, tmp_path) -> None:
    custom = tmp_path / "custom_root"
    monkeypatch.setenv("STARFLEET_APP_DATA_DIR", str(custom))
    assert resolve_app_data_root() == custom


def test_resolve_app_data_root_defaults_to_game_root_appdata(monkeypatch) -> None:
    monkeypatch.delenv("STARFLEET_APP_DATA_DIR", raising=False)
    root = resolve_app_data_root()
    assert root.name == "appdata"
    assert root.parent.name == "starfleet"


def test_ensure_app_data_dirs_creates_unified_paths(monkeypatch, tmp_path) -> None:
    monkeypatch.setenv("STARFLEET_APP_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.delenv("STARFLEET_LOG_DIR", raising=False)
    monkeypatch.delenv("STARFLEET_SAVES_DIR", raising=False)

    paths = ensure_app_data_dirs()

    assert Path(paths["logs"]).exists()
    assert Path(paths["saves"]).exists()
    assert paths["logs"] == tmp_path / "data" / "logs"
    assert paths["saves"] == tmp_path / "data" / "saves"


def test_relative_saves_dir_resolves_under_app_data(monkeypatch, tmp_path) -> None:
    monkeypatch.setenv("STARFLEET_APP_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("STARFLEET_SAVES_DIR", "slots")
    assert resolve_saves_dir() == tmp_path / "slots"
