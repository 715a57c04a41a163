"""Simulation state for one Head Jump run.

Coordinates are play-field pixels with the origin at the top-left corner;
y grows downwards, so the player's ``vertical_position`` is the y of the
top of its rectangle.
"""

from dataclasses import dataclass, field
from itertools import count
from typing import Iterator, List
import math

from headjump.config.settings import GameSettings


class HeadJumpError(Exception):
    """Base error for the game package."""


class InvariantViolation(HeadJumpError):
    """Simulation state broke one of its invariants (a programming defect)."""


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle."""

    left: float
    top: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height

    def overlaps(self, other: "Rect") -> bool:
        """Strict overlap on both axes; touching edges do not count."""
        return (
            self.right > other.left
            and self.left < other.right
            and self.bottom > other.top
            and self.top < other.bottom
        )


@dataclass
class PlayerState:
    vertical_position: float
    vertical_velocity: float = 0.0
    is_airborne: bool = False


@dataclass
class Obstacle:
    id: int
    horizontal_position: float
    scored: bool = False


@dataclass
class RunState:
    started: bool = False
    over: bool = False
    score: int = 0

    @property
    def active(self) -> bool:
        """True while ticks, spawns and jumps have an effect."""
        return self.started and not self.over


@dataclass
class World:
    """Everything that belongs to a single run."""

    player: PlayerState
    obstacles: List[Obstacle] = field(default_factory=list)
    run: RunState = field(default_factory=RunState)
    _ids: Iterator[int] = field(default_factory=lambda: count(1), repr=False)

    @classmethod
    def fresh(cls, settings: GameSettings, started: bool = False) -> "World":
        """Player standing on the ground, no obstacles, score 0."""
        return cls(
            player=PlayerState(vertical_position=settings.ground_line),
            run=RunState(started=started),
        )

    def next_obstacle_id(self) -> int:
        return next(self._ids)

    def player_rect(self, settings: GameSettings, vertical_position: float | None = None) -> Rect:
        y = self.player.vertical_position if vertical_position is None else vertical_position
        return Rect(settings.player_left, y, settings.player_width, settings.player_height)

    @staticmethod
    def obstacle_rect(obstacle: Obstacle, settings: GameSettings) -> Rect:
        return Rect(
            obstacle.horizontal_position,
            settings.obstacle_top,
            settings.obstacle_width,
            settings.obstacle_height,
        )

    def validate(self, settings: GameSettings) -> None:
        """Raise InvariantViolation if the state is malformed."""
        player = self.player
        if math.isnan(player.vertical_position) or math.isnan(player.vertical_velocity):
            raise InvariantViolation(f"Player state is NaN: {player}")
        if player.vertical_position > settings.ground_line:
            raise InvariantViolation(
                f"Player below ground: y={player.vertical_position} > {settings.ground_line}"
            )
        if self.run.score < 0:
            raise InvariantViolation(f"Negative score: {self.run.score}")
        if self.run.over and not self.run.started:
            raise InvariantViolation("Run is over but was never started")

        ids = [o.id for o in self.obstacles]
        if len(ids) != len(set(ids)):
            raise InvariantViolation(f"Duplicate obstacle ids: {ids}")
        for obstacle in self.obstacles:
            if math.isnan(obstacle.horizontal_position):
                raise InvariantViolation(f"Obstacle {obstacle.id} position is NaN")
