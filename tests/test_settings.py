from __future__ import annotations

import pytest
from pydantic import ValidationError

from headjump.config.settings import GameSettings, Settings


def test_default_geometry() -> None:
    game = GameSettings()

    assert game.ground_line == 270.0
    assert game.obstacle_top == 290.0
    assert game.obstacle_bottom == 350.0
    assert game.player_leading_edge == 160.0
    assert game.tick_interval_ms == pytest.approx(16.6667, rel=1e-4)
    assert game.spawn_interval_ms == 2000.0


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("HEADJUMP_THEME", "dark")
    monkeypatch.setenv("HEADJUMP_DEBUG", "true")
    monkeypatch.setenv("HEADJUMP_GAME__GRAVITY", "0.8")
    monkeypatch.setenv("HEADJUMP_WINDOW__FPS", "30")

    settings = Settings(_env_file=None)

    assert settings.theme == "dark"
    assert settings.debug is True
    assert settings.game.gravity == 0.8
    assert settings.game.game_speed == 5.0
    assert settings.window.fps == 30


def test_invalid_values_are_rejected() -> None:
    with pytest.raises(ValidationError):
        GameSettings(game_speed=-1.0)
    with pytest.raises(ValidationError):
        GameSettings(jump_strength=5.0)
    with pytest.raises(ValidationError):
        Settings(_env_file=None, theme="sepia")
