"""Head Jump - jump over the obstacles scrolling towards you.

The mode drives a ``GameSession`` from two interval timers: the tick timer
(~60 Hz) and the spawn timer (every 2 s). Both only run while a run is in
progress and are restarted from scratch on every start.
"""

import logging
from typing import Optional

import numpy as np
from numpy.typing import NDArray

from headjump.modes.base import BaseMode, ModeContext, ModeResult, ModePhase
from headjump.core.events import Event, EventType
from headjump.core.scheduler import Scheduler
from headjump.game.engine import GameSession
from headjump.game.projection import RenderFrame, project
from headjump.graphics.renderer import FieldRenderer

logger = logging.getLogger(__name__)


class HeadJumpMode(BaseMode):
    name = "head_jump"

    TICK_TIMER = "tick"
    SPAWN_TIMER = "spawn"

    def __init__(self, context: ModeContext, renderer: Optional[FieldRenderer] = None):
        super().__init__(context)
        settings = context.settings
        self.game_settings = settings.game
        self.session = GameSession(self.game_settings, validate=settings.debug)
        self.renderer = renderer or FieldRenderer(self.game_settings)

        self.scheduler = Scheduler(max_delta_ms=settings.window.max_frame_delta_ms)
        self.scheduler.add_timer(self.TICK_TIMER, self.game_settings.tick_interval_ms, self._on_tick_timer)
        self.scheduler.add_timer(self.SPAWN_TIMER, self.game_settings.spawn_interval_ms, self._on_spawn_timer)

    @property
    def frame(self) -> RenderFrame:
        """Render projection of the current world."""
        return project(self.session.world, self.game_settings)

    def on_enter(self) -> None:
        self.scheduler.stop_all()
        self.session = GameSession(self.game_settings, validate=self.context.settings.debug)

    def on_exit(self) -> None:
        self.scheduler.stop_all()

    def start_game(self) -> None:
        """Begin a fresh run, from the start screen or after a game over."""
        self.scheduler.stop_all()
        self.session.start_game()
        self.scheduler.start(self.TICK_TIMER)
        self.scheduler.start(self.SPAWN_TIMER)
        self.change_phase(ModePhase.ACTIVE)
        self.emit_event(EventType.GAME_STARTED)

    def trigger_jump(self) -> bool:
        return self.session.trigger_jump()

    def on_input(self, event: Event) -> bool:
        if event.type == EventType.JUMP:
            self.trigger_jump()
            return True

        if event.type == EventType.START:
            self.start_game()
            return True

        return False

    def on_update(self, delta_ms: float) -> None:
        self.scheduler.advance(delta_ms)

    def _on_tick_timer(self) -> None:
        if not self.session.is_running:
            self.scheduler.stop_all()
            return

        outcome = self.session.tick()
        if outcome.scored:
            self.emit_event(EventType.OBSTACLE_PASSED, {"score": self.session.score})
        if outcome.collided:
            self._finish()

    def _on_spawn_timer(self) -> None:
        obstacle = self.session.spawn()
        if obstacle is not None:
            self.emit_event(EventType.OBSTACLE_SPAWNED, {"id": obstacle.id})

    def _finish(self) -> None:
        self.scheduler.stop_all()
        score = self.session.score
        self.complete(ModeResult(
            mode_name=self.name,
            success=True,
            data={"score": score},
            display_text=f"Final Score: {score}",
        ))
        self.emit_event(EventType.GAME_OVER, {"score": score})

    def render_main(self, buffer: NDArray[np.uint8]) -> None:
        self.renderer.render(buffer, self.frame)
