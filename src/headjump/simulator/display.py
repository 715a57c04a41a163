"""
Play field display for the simulator window.

Holds the numpy framebuffer the game renders into and converts it to a
pygame surface.
"""

import pygame
import numpy as np
from numpy.typing import NDArray


class FieldDisplay:
    """Numpy framebuffer of the play field, blitted 1:1 into the window."""

    def __init__(self, width: int, height: int) -> None:
        self._width = width
        self._height = height
        self._buffer = np.zeros((height, width, 3), dtype=np.uint8)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def buffer(self) -> NDArray[np.uint8]:
        """Live buffer; renderers draw straight into it."""
        return self._buffer

    def clear(self, r: int = 0, g: int = 0, b: int = 0) -> None:
        self._buffer[:, :] = [r, g, b]

    def get_buffer(self) -> NDArray[np.uint8]:
        return self._buffer.copy()

    def render(self) -> pygame.Surface:
        """Render buffer to a pygame surface (pygame wants x-major arrays)."""
        return pygame.surfarray.make_surface(self._buffer.swapaxes(0, 1))
