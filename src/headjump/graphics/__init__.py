"""Graphics module for Head Jump rendering."""

from headjump.graphics.renderer import FieldRenderer
from headjump.graphics.primitives import (
    draw_rect,
    draw_circle,
    draw_hline,
    dim,
    fill,
    new_buffer,
)

__all__ = [
    "FieldRenderer",
    "draw_rect",
    "draw_circle",
    "draw_hline",
    "dim",
    "fill",
    "new_buffer",
]
