"""Play field renderer.

Paints a ``RenderFrame`` into a numpy framebuffer using the active theme's
palette. Text (score, overlays) is left to the window, which has real
fonts.
"""

import logging
from typing import Optional

from headjump.config.settings import GameSettings
from headjump.config.themes import Theme, load_theme
from headjump.game.projection import Overlay, RenderFrame
from headjump.graphics.primitives import (
    Buffer,
    fill,
    draw_rect,
    draw_circle,
    draw_hline,
    dim,
    new_buffer,
)

logger = logging.getLogger(__name__)


class FieldRenderer:
    """Draws ground, obstacles and the player."""

    OVERLAY_DIM = 0.55

    def __init__(self, settings: GameSettings, theme: Optional[Theme] = None) -> None:
        self.settings = settings
        self.theme = theme or load_theme("light")

    def set_theme(self, theme: Theme) -> None:
        self.theme = theme

    def create_buffer(self) -> Buffer:
        return new_buffer(self.settings.field_width, self.settings.field_height)

    def render(self, buffer: Buffer, frame: RenderFrame) -> None:
        colors = self.theme.colors
        s = self.settings

        fill(buffer, colors.to_rgb("field"))

        # Ground
        draw_rect(
            buffer, 0, frame.ground_y, s.field_width, s.field_height - frame.ground_y,
            colors.to_rgb("ground"),
        )
        draw_hline(buffer, frame.ground_y, colors.to_rgb("text"), thickness=2)

        for sprite in frame.obstacles:
            r = sprite.rect
            draw_rect(buffer, r.left, r.top, r.width, r.height, colors.to_rgb("obstacle"))

        self._draw_player(buffer, frame)

        if frame.overlay is not Overlay.NONE:
            dim(buffer, self.OVERLAY_DIM)

    def _draw_player(self, buffer: Buffer, frame: RenderFrame) -> None:
        colors = self.theme.colors
        r = frame.player_rect
        head = min(self.settings.player_head_size, r.width, r.height)

        # Body below the head, narrower than the hitbox
        body_w = r.width * 0.6
        draw_rect(
            buffer,
            r.left + (r.width - body_w) / 2,
            r.top + head * 0.9,
            body_w,
            r.height - head * 0.9,
            colors.to_rgb("player_body"),
        )
        draw_circle(
            buffer,
            r.left + r.width / 2,
            r.top + head / 2,
            head / 2,
            colors.to_rgb("player_head"),
        )
