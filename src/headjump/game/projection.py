"""Map simulation state to screen geometry.

The field is drawn with its origin at the top-left, but the player is
positioned by its distance from the bottom of the field.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List

from headjump.config.settings import GameSettings
from headjump.game.world import World, Rect


class Overlay(Enum):
    """Modal screen shown over the field."""
    NONE = auto()
    START = auto()
    GAME_OVER = auto()


@dataclass(frozen=True)
class ObstacleSprite:
    id: int
    left: float
    rect: Rect


@dataclass(frozen=True)
class RenderFrame:
    """Everything a painter needs for one frame."""

    player_bottom: float       # Offset of the player's feet from the field bottom
    player_rect: Rect          # Same position in top-left screen coordinates
    obstacles: List[ObstacleSprite] = field(default_factory=list)
    score: int = 0
    overlay: Overlay = Overlay.START
    ground_y: float = 0.0


def player_bottom_offset(vertical_position: float, settings: GameSettings) -> float:
    return settings.field_height - vertical_position - settings.player_height


def overlay_for(world: World) -> Overlay:
    if not world.run.started:
        return Overlay.START
    if world.run.over:
        return Overlay.GAME_OVER
    return Overlay.NONE


def project(world: World, settings: GameSettings) -> RenderFrame:
    """Build the render frame for the current world."""
    bottom = player_bottom_offset(world.player.vertical_position, settings)
    player_rect = Rect(
        settings.player_left,
        settings.field_height - bottom - settings.player_height,
        settings.player_width,
        settings.player_height,
    )
    sprites = [
        ObstacleSprite(id=o.id, left=o.horizontal_position, rect=world.obstacle_rect(o, settings))
        for o in world.obstacles
    ]
    return RenderFrame(
        player_bottom=bottom,
        player_rect=player_rect,
        obstacles=sprites,
        score=world.run.score,
        overlay=overlay_for(world),
        ground_y=settings.obstacle_bottom,
    )
