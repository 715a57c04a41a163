from __future__ import annotations

import pytest

from headjump.config.settings import GameSettings, Settings
from headjump.core.events import EventBus
from headjump.game.engine import GameSession
from headjump.modes.base import ModeContext
from headjump.modes.head_jump import HeadJumpMode


@pytest.fixture
def game_settings() -> GameSettings:
    return GameSettings()


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None, log_file=None, debug=True)


@pytest.fixture
def session(game_settings: GameSettings) -> GameSession:
    return GameSession(game_settings, validate=True)


@pytest.fixture
def bus() -> EventBus:
    return EventBus()


@pytest.fixture
def mode(settings: Settings, bus: EventBus) -> HeadJumpMode:
    m = HeadJumpMode(ModeContext(event_bus=bus, settings=settings))
    m.enter()
    return m


@pytest.fixture
def hover():
    """Park the player in the air, out of reach of every obstacle."""

    def _hover(session: GameSession, y: float = 0.0) -> None:
        player = session.world.player
        player.vertical_position = y
        player.vertical_velocity = 0.0
        player.is_airborne = True

    return _hover
