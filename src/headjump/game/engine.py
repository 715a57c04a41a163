"""Head Jump simulation: tick, spawn, jump and session control.

``GameSession`` owns the current ``World``. It knows nothing about timers,
windows or events; whoever drives it decides when ``tick`` and ``spawn``
are called (see ``headjump.modes.head_jump``).
"""

from dataclasses import dataclass
from typing import Optional
import logging

from headjump.config.settings import GameSettings
from headjump.game.world import World, Obstacle

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TickOutcome:
    """What happened during one tick."""

    scored: int = 0
    collided: bool = False


class GameSession:
    """A Head Jump game: one world at a time, replaced on every start."""

    def __init__(self, settings: Optional[GameSettings] = None, validate: bool = False) -> None:
        self.settings = settings or GameSettings()
        self._validate = validate
        self.world = World.fresh(self.settings)

    # Convenience accessors
    @property
    def started(self) -> bool:
        return self.world.run.started

    @property
    def over(self) -> bool:
        return self.world.run.over

    @property
    def score(self) -> int:
        return self.world.run.score

    @property
    def is_running(self) -> bool:
        return self.world.run.active

    def start_game(self) -> World:
        """Throw the current world away and begin a new run."""
        self.world = World.fresh(self.settings, started=True)
        logger.info("Game started")
        return self.world

    def trigger_jump(self) -> bool:
        """Apply the jump impulse if the player is standing on the ground.

        Returns:
            True if the impulse was applied
        """
        if not self.world.run.active:
            logger.debug("Jump ignored: run not active")
            return False

        player = self.world.player
        if player.vertical_position < self.settings.ground_line - self.settings.jump_tolerance:
            logger.debug("Jump ignored: airborne")
            return False

        player.vertical_velocity = self.settings.jump_strength
        player.is_airborne = True
        return True

    def spawn(self) -> Optional[Obstacle]:
        """Append one obstacle at the right edge of the field."""
        if not self.world.run.active:
            return None

        obstacle = Obstacle(
            id=self.world.next_obstacle_id(),
            horizontal_position=float(self.settings.field_width),
        )
        self.world.obstacles.append(obstacle)
        logger.debug(f"Obstacle {obstacle.id} spawned")
        return obstacle

    def tick(self) -> TickOutcome:
        """Advance the simulation by one fixed step."""
        world = self.world
        if not world.run.active:
            return TickOutcome()

        s = self.settings
        player = world.player
        start_y = player.vertical_position

        # Player
        on_ground = player.vertical_position == s.ground_line and not player.is_airborne
        if not on_ground:
            player.vertical_velocity += s.gravity
        player.vertical_position += player.vertical_velocity

        if player.vertical_position >= s.ground_line:
            player.vertical_position = s.ground_line
            player.vertical_velocity = 0.0
            player.is_airborne = False

        # Obstacles
        lead = s.player_leading_edge
        previous = {o.id: o.horizontal_position for o in world.obstacles}
        for obstacle in world.obstacles:
            obstacle.horizontal_position -= s.game_speed
        world.obstacles = [
            o for o in world.obstacles if o.horizontal_position > -s.obstacle_width
        ]

        scored = 0
        for obstacle in world.obstacles:
            was_in_front = previous[obstacle.id] >= lead
            is_behind = obstacle.horizontal_position < lead
            if was_in_front and is_behind and not obstacle.scored:
                obstacle.scored = True
                scored += 1
        world.run.score += scored
        if scored:
            logger.debug(f"Passed {scored} obstacle(s), score {world.run.score}")

        # Collision uses the player rectangle from the start of the tick
        player_rect = world.player_rect(s, start_y)
        collided = any(
            player_rect.overlaps(world.obstacle_rect(o, s)) for o in world.obstacles
        )
        if collided:
            world.run.over = True
            logger.info(f"Collision, game over with score {world.run.score}")

        if self._validate:
            world.validate(s)

        return TickOutcome(scored=scored, collided=collided)
