"""
Game entry point.

Wires the event bus, the Head Jump mode and the pygame window together and
runs them on one asyncio loop.
"""

import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from headjump.config.settings import Settings, get_settings
from headjump.config.themes import ThemeSwitcher
from headjump.core.events import EventBus, Event, EventType
from headjump.graphics.renderer import FieldRenderer
from headjump.modes.base import ModeContext, ModeResult
from headjump.modes.head_jump import HeadJumpMode
from headjump.simulator.window import GameWindow

logger = logging.getLogger(__name__)


def setup_logging(debug: bool = False, log_file: Optional[Path] = None) -> None:
    """Configure console logging, plus a file log truncated on each run."""
    formatter = logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S"
    )
    level = logging.DEBUG if debug else logging.INFO

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.addHandler(console_handler)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)
        logging.info(f"Logging to file: {log_file}")

    # Per-tick chatter
    logging.getLogger("headjump.core.scheduler").setLevel(logging.INFO)


class HeadJumpGame:
    """Main application integrating all systems."""

    def __init__(self, settings: Optional[Settings] = None, window: Optional[GameWindow] = None):
        self.settings = settings or get_settings()

        self.event_bus = EventBus()
        self.themes = ThemeSwitcher(self.settings.theme)
        self.renderer = FieldRenderer(self.settings.game, self.themes.current)

        self.mode = HeadJumpMode(
            ModeContext(event_bus=self.event_bus, settings=self.settings),
            renderer=self.renderer,
        )
        self.mode.set_on_complete(self._on_run_complete)

        self.window = window or GameWindow(
            settings=self.settings,
            event_bus=self.event_bus,
            theme=self.themes.current,
        )
        self.window.status_source = self._status_lines

        self._setup_event_handlers()
        self.mode.enter()
        self._push_frame()

        logger.info("HeadJumpGame initialized")

    def _setup_event_handlers(self) -> None:
        """Route bus events between the window and the mode."""
        self.event_bus.subscribe(EventType.TICK, self._on_tick)
        self.event_bus.subscribe(EventType.JUMP, self.mode.handle_input)
        self.event_bus.subscribe(EventType.START, self.mode.handle_input)
        self.event_bus.subscribe(EventType.THEME_TOGGLE, self._on_theme_toggle)
        self.event_bus.subscribe(EventType.GAME_STARTED, self._on_game_event)
        self.event_bus.subscribe(EventType.OBSTACLE_PASSED, self._on_game_event)
        self.event_bus.subscribe(EventType.GAME_OVER, self._on_game_event)

    def _on_tick(self, event: Event) -> None:
        """Handle frame tick - update and render."""
        delta = event.data.get("delta", 1 / 60)
        self.mode.update(delta * 1000)
        self._push_frame()

    def _push_frame(self) -> None:
        self.mode.render_main(self.window.field_display.buffer)
        self.window.set_frame(self.mode.frame)

    def _on_theme_toggle(self, event: Event) -> None:
        theme = self.themes.toggle()
        self.renderer.set_theme(theme)
        self.window.set_theme(theme)

    def _on_game_event(self, event: Event) -> None:
        logger.debug(f"{event.type.name} {event.data}")

    def _on_run_complete(self, result: ModeResult) -> None:
        logger.info(f"Run complete: {result.display_text}")

    def _status_lines(self) -> list[str]:
        session = self.mode.session
        scheduler = self.mode.scheduler
        return [
            f"Phase: {self.mode.phase.name}",
            f"Score: {session.score}",
            f"Obstacles: {len(session.world.obstacles)}",
            f"Player y: {session.world.player.vertical_position:.1f}",
            f"Velocity: {session.world.player.vertical_velocity:.2f}",
            f"Tick timer: {'on' if scheduler.is_running(HeadJumpMode.TICK_TIMER) else 'off'}",
            f"Spawn timer: {'on' if scheduler.is_running(HeadJumpMode.SPAWN_TIMER) else 'off'}",
        ]

    async def run(self) -> None:
        logger.info("Starting Head Jump...")
        try:
            await self.window.run()
        finally:
            self.mode.exit()


def main() -> None:
    """Main entry point."""
    load_dotenv()
    settings = get_settings()
    setup_logging(settings.debug, settings.log_file)

    logger.info("Controls: SPACE/UP or click - jump, ENTER - start, T - theme, D - debug, L - log, Q - quit")

    try:
        asyncio.run(HeadJumpGame(settings).run())
    except KeyboardInterrupt:
        logger.info("Stopped by user")
    except Exception as e:
        logger.exception(f"Game error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
