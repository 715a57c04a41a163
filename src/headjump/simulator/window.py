"""
Main game window using pygame.

Owns the pygame display, turns keyboard and mouse input into bus events
and paints the play field, score, overlays and developer panels.
"""

import pygame
import asyncio
import logging
from typing import Callable, Optional

from ..config.settings import Settings
from ..config.themes import Theme, load_theme
from ..core.events import EventBus, EventType, Event, jump_event, start_event, tick_event
from ..game.projection import Overlay, RenderFrame
from .display import FieldDisplay

logger = logging.getLogger(__name__)

StatusSource = Callable[[], list[str]]


class GameWindow:
    """
    Desktop window hosting the play field.

    Keyboard Mapping:
        SPACE / UP: Jump
        RETURN: Start / Play Again (only while an overlay is shown)
        T: Toggle light/dark theme
        D: Toggle debug panel
        L: Toggle log viewer
        S: Capture screenshot
        ESC / Q: Quit

    Mouse:
        Click on the play field: Jump
        Click on the overlay button: Start / Play Again
        Click on the theme button: Toggle theme
    """

    JUMP_KEYS = (pygame.K_SPACE, pygame.K_UP)
    START_KEYS = (pygame.K_RETURN, pygame.K_KP_ENTER)

    def __init__(
        self,
        settings: Settings,
        event_bus: Optional[EventBus] = None,
        theme: Optional[Theme] = None,
    ) -> None:
        self.settings = settings
        self.config = settings.window
        self.event_bus = event_bus or EventBus()
        self.theme = theme or load_theme(settings.theme)

        # Pygame setup
        self._screen: pygame.Surface | None = None
        self._clock: pygame.time.Clock | None = None
        self._running = False
        self._frame_count = 0
        self._show_debug = settings.debug

        game = settings.game
        self.field_display = FieldDisplay(game.field_width, game.field_height)

        # Latest projection of the game, pushed by the simulator every frame
        self._frame: RenderFrame | None = None
        self.status_source: StatusSource | None = None

        # Fonts
        self._font: pygame.font.Font | None = None
        self._big_font: pygame.font.Font | None = None
        self._small_font: pygame.font.Font | None = None

        # Log viewer
        self._show_log = False
        self._log_buffer: list[str] = []
        self._max_log_lines = 20
        self._log_handler: logging.Handler | None = None

        self._layout: dict[str, pygame.Rect] = {}
        self._calculate_layout()

        self._setup_log_capture()

        logger.info("GameWindow created")

    @property
    def overlay(self) -> Overlay:
        return self._frame.overlay if self._frame else Overlay.START

    @property
    def layout(self) -> dict[str, pygame.Rect]:
        return self._layout

    def set_frame(self, frame: RenderFrame) -> None:
        self._frame = frame

    def set_theme(self, theme: Theme) -> None:
        self.theme = theme

    def _setup_log_capture(self) -> None:
        """Setup log capturing for the log viewer."""
        class WindowLogHandler(logging.Handler):
            def __init__(self, window: 'GameWindow'):
                super().__init__()
                self.window = window

            def emit(self, record):
                msg = self.format(record)
                self.window._log_buffer.append(msg)
                if len(self.window._log_buffer) > self.window._max_log_lines * 2:
                    self.window._log_buffer = self.window._log_buffer[-self.window._max_log_lines:]

        handler = WindowLogHandler(self)
        handler.setFormatter(logging.Formatter('%(levelname).1s %(name)s: %(message)s'))
        logging.getLogger().addHandler(handler)
        self._log_handler = handler

    def _init_pygame(self) -> None:
        """Initialize pygame and create window."""
        pygame.init()
        pygame.display.set_caption(self.config.title)

        self._screen = pygame.display.set_mode(
            (self.config.width, self.config.height),
            pygame.DOUBLEBUF
        )
        self._clock = pygame.time.Clock()

        pygame.font.init()
        for font_name in ("DejaVu Sans", "Helvetica", "Arial"):
            if pygame.font.match_font(font_name):
                self._font = pygame.font.SysFont(font_name, 22)
                self._big_font = pygame.font.SysFont(font_name, 40, bold=True)
                self._small_font = pygame.font.SysFont(font_name, 14)
                logger.info(f"Using system font: {font_name}")
                break

        if not self._font:
            self._font = pygame.font.SysFont(None, 26)
            self._big_font = pygame.font.SysFont(None, 48, bold=True)
            self._small_font = pygame.font.SysFont(None, 18)
            logger.warning("No preferred font found, using default")

        logger.info(f"Pygame initialized: {self.config.width}x{self.config.height}")

    def _calculate_layout(self) -> None:
        """Calculate positions for all UI elements."""
        w, h = self.config.width, self.config.height
        field_w = self.field_display.width
        field_h = self.field_display.height

        field_x = (w - field_w) // 2
        info_y = 60
        field_y = info_y + 44

        button_w, button_h = 180, 44
        self._layout = {
            "title": pygame.Rect(0, 10, w, 40),
            "score": pygame.Rect(field_x, info_y, 200, 32),
            "theme": pygame.Rect(field_x + field_w - 160, info_y, 160, 32),
            "field": pygame.Rect(field_x, field_y, field_w, field_h),
            "button": pygame.Rect(
                field_x + (field_w - button_w) // 2,
                field_y + field_h // 2 + 30,
                button_w,
                button_h,
            ),
            "instructions": pygame.Rect(0, field_y + field_h + 16, w, 24),
            "debug": pygame.Rect(10, field_y, max(0, field_x - 20), 220),
        }

    def _handle_events(self) -> None:
        """Process pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._running = False

            elif event.type == pygame.KEYDOWN:
                self._handle_keydown(event)

            elif event.type == pygame.MOUSEBUTTONDOWN:
                self._handle_click(event.pos, event.button)

    def _handle_keydown(self, event: pygame.event.Event) -> None:
        """Handle key press."""
        key = event.key

        if key in (pygame.K_ESCAPE, pygame.K_q):
            self._running = False
            self.event_bus.emit(Event(EventType.SHUTDOWN, source="keyboard"))
        elif key == pygame.K_d:
            self._show_debug = not self._show_debug
        elif key == pygame.K_l:
            self._show_log = not self._show_log
        elif key == pygame.K_s:
            self._capture_screenshot()
        elif key == pygame.K_t:
            self.event_bus.emit(Event(EventType.THEME_TOGGLE, source="keyboard"))
        elif key in self.JUMP_KEYS:
            self.event_bus.emit(jump_event(source="keyboard"))
        elif key in self.START_KEYS:
            if self.overlay is not Overlay.NONE:
                self.event_bus.emit(start_event(source="keyboard"))

    def _handle_click(self, pos: tuple[int, int], button: int = 1) -> None:
        """Handle a mouse click; only the primary button does anything."""
        if button != 1:
            return

        if self._layout["theme"].collidepoint(pos):
            self.event_bus.emit(Event(EventType.THEME_TOGGLE, source="pointer"))
        elif self.overlay is not Overlay.NONE and self._layout["button"].collidepoint(pos):
            self.event_bus.emit(start_event(source="pointer"))
        elif self._layout["field"].collidepoint(pos):
            self.event_bus.emit(jump_event(source="pointer"))

    def _render(self) -> None:
        """Render all UI elements."""
        if not self._screen:
            return

        colors = self.theme.colors
        self._screen.fill(colors.to_rgb("background"))

        self._render_header()
        self._render_field()
        self._render_overlay()
        self._render_instructions()

        if self._show_debug:
            self._render_debug_panel()
        if self._show_log:
            self._render_log_panel()

        pygame.display.flip()

    def _blit_centered(self, font: pygame.font.Font, text: str, color, center) -> None:
        surface = font.render(text, True, color)
        self._screen.blit(surface, surface.get_rect(center=center))

    def _render_header(self) -> None:
        colors = self.theme.colors
        title = self._layout["title"]
        self._blit_centered(self._big_font, self.theme.messages.title, colors.to_rgb("text"), title.center)

        score = self._frame.score if self._frame else 0
        score_rect = self._layout["score"]
        surface = self._font.render(f"Score: {score}", True, colors.to_rgb("text"))
        self._screen.blit(surface, surface.get_rect(midleft=score_rect.midleft))

        button = self._layout["theme"]
        pygame.draw.rect(self._screen, colors.to_rgb("accent"), button, border_radius=6)
        self._blit_centered(self._small_font, self.theme.toggle_label, (255, 255, 255), button.center)

    def _render_field(self) -> None:
        rect = self._layout["field"]
        pygame.draw.rect(self._screen, self.theme.colors.to_rgb("text"), rect.inflate(4, 4), 2)
        self._screen.blit(self.field_display.render(), rect.topleft)

    def _render_overlay(self) -> None:
        overlay = self.overlay
        if overlay is Overlay.NONE:
            return

        messages = self.theme.messages
        field = self._layout["field"]
        button = self._layout["button"]
        white = (255, 255, 255)

        if overlay is Overlay.START:
            heading, line, label = messages.title, messages.start_hint, messages.start_button
        else:
            score = self._frame.score if self._frame else 0
            heading, line, label = messages.game_over, f"Final Score: {score}", messages.restart_button

        self._blit_centered(self._big_font, heading, white, (field.centerx, field.centery - 60))
        self._blit_centered(self._font, line, white, (field.centerx, field.centery - 10))

        pygame.draw.rect(self._screen, self.theme.colors.to_rgb("accent"), button, border_radius=8)
        self._blit_centered(self._font, label, white, button.center)

    def _render_instructions(self) -> None:
        rect = self._layout["instructions"]
        self._blit_centered(
            self._small_font, self.theme.messages.instructions,
            self.theme.colors.to_rgb("text"), rect.center,
        )

    def _render_debug_panel(self) -> None:
        """Render the debug information panel."""
        rect = self._layout["debug"]
        if rect.width <= 0:
            return

        lines = [
            f"FPS: {self._clock.get_fps():.1f}" if self._clock else "FPS: --",
            f"Frame: {self._frame_count}",
        ]
        if self.status_source:
            lines.extend(self.status_source())

        y = rect.y + 6
        for line in lines:
            text_surface = self._small_font.render(line, True, self.theme.colors.to_rgb("text"))
            self._screen.blit(text_surface, (rect.x + 6, y))
            y += 18

    def _render_log_panel(self) -> None:
        """Render the log viewer panel."""
        field = self._layout["field"]
        rect = pygame.Rect(field.x + 10, field.y + 10, field.width - 20, field.height - 20)

        surf = pygame.Surface((rect.width, rect.height), pygame.SRCALPHA)
        surf.fill((20, 25, 35, 230))
        self._screen.blit(surf, rect.topleft)

        y = rect.y + 8
        for line in self._log_buffer[-self._max_log_lines:]:
            if line.startswith('E'):
                color = (255, 100, 100)
            elif line.startswith('W'):
                color = (255, 200, 100)
            elif line.startswith('I'):
                color = (150, 200, 150)
            else:
                color = (150, 150, 170)

            display_line = line[:95] + "..." if len(line) > 98 else line
            self._screen.blit(self._small_font.render(display_line, True, color), (rect.x + 8, y))
            y += 18

            if y > rect.bottom - 18:
                break

    def _capture_screenshot(self) -> None:
        """Capture and save a screenshot."""
        if self._screen:
            filename = f"screenshot_{self._frame_count}.png"
            pygame.image.save(self._screen, filename)
            logger.info(f"Screenshot saved: {filename}")

    async def run(self) -> None:
        """Main window loop."""
        try:
            self._init_pygame()
            self._running = True

            logger.info("Window started")

            while self._running:
                self._handle_events()

                if self._clock:
                    delta = self._clock.get_time() / 1000.0
                    self.event_bus.emit(tick_event(delta, self._frame_count))

                await self.event_bus.process_queue()

                self._render()

                if self._clock:
                    self._clock.tick(self.config.fps)

                self._frame_count += 1

                await asyncio.sleep(0)
        finally:
            self._cleanup()

    def _cleanup(self) -> None:
        """Clean up pygame resources."""
        self._running = False
        if self._log_handler:
            logging.getLogger().removeHandler(self._log_handler)
            self._log_handler = None
        pygame.quit()
        logger.info("Window closed")

    def stop(self) -> None:
        """Stop the window loop."""
        self._running = False
