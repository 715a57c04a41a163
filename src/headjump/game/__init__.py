"""Head Jump simulation."""

from headjump.game.world import (
    HeadJumpError,
    InvariantViolation,
    Obstacle,
    PlayerState,
    Rect,
    RunState,
    World,
)
from headjump.game.engine import GameSession, TickOutcome
from headjump.game.projection import Overlay, RenderFrame, project

__all__ = [
    "HeadJumpError",
    "InvariantViolation",
    "Obstacle",
    "PlayerState",
    "Rect",
    "RunState",
    "World",
    "GameSession",
    "TickOutcome",
    "Overlay",
    "RenderFrame",
    "project",
]
