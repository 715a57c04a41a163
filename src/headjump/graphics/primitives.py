"""Basic drawing primitives for the play field framebuffer.

Buffers are numpy arrays shaped (height, width, 3). Coordinates may be
floats and may fall partly or wholly outside the buffer; everything is
clipped.
"""

from typing import Tuple
import numpy as np
from numpy.typing import NDArray

# Type aliases
Color = Tuple[int, int, int]
Buffer = NDArray[np.uint8]


def new_buffer(width: int, height: int) -> Buffer:
    return np.zeros((height, width, 3), dtype=np.uint8)


def fill(buffer: Buffer, color: Color) -> None:
    """Fill entire buffer with color."""
    buffer[:, :] = color


def draw_rect(
    buffer: Buffer,
    x: float,
    y: float,
    width: float,
    height: float,
    color: Color,
    filled: bool = True,
    thickness: int = 1,
) -> None:
    """Draw a rectangle on the buffer.

    Args:
        buffer: Target numpy array (height, width, 3)
        x: Left edge x coordinate
        y: Top edge y coordinate
        width: Rectangle width
        height: Rectangle height
        color: RGB color tuple
        filled: If True, fill rectangle; if False, draw outline only
        thickness: Line thickness for outline (when filled=False)
    """
    h, w = buffer.shape[:2]

    x1 = max(0, min(int(round(x)), w))
    y1 = max(0, min(int(round(y)), h))
    x2 = max(0, min(int(round(x + width)), w))
    y2 = max(0, min(int(round(y + height)), h))
    if x2 <= x1 or y2 <= y1:
        return

    if filled:
        buffer[y1:y2, x1:x2] = color
        return

    t = max(1, thickness)
    buffer[y1:min(y1 + t, y2), x1:x2] = color
    buffer[max(y2 - t, y1):y2, x1:x2] = color
    buffer[y1:y2, x1:min(x1 + t, x2)] = color
    buffer[y1:y2, max(x2 - t, x1):x2] = color


def draw_circle(
    buffer: Buffer,
    cx: float,
    cy: float,
    radius: float,
    color: Color,
) -> None:
    """Draw a filled circle, touching only its bounding box."""
    h, w = buffer.shape[:2]

    x1 = max(0, int(cx - radius))
    x2 = min(w, int(cx + radius) + 1)
    y1 = max(0, int(cy - radius))
    y2 = min(h, int(cy + radius) + 1)
    if x2 <= x1 or y2 <= y1:
        return

    ys, xs = np.ogrid[y1:y2, x1:x2]
    mask = (xs + 0.5 - cx) ** 2 + (ys + 0.5 - cy) ** 2 <= radius ** 2
    buffer[y1:y2, x1:x2][mask] = color


def draw_hline(buffer: Buffer, y: float, color: Color, thickness: int = 1) -> None:
    """Draw a full-width horizontal line."""
    h = buffer.shape[0]
    y1 = max(0, min(int(round(y)), h))
    y2 = max(0, min(y1 + thickness, h))
    buffer[y1:y2, :] = color


def dim(buffer: Buffer, amount: float) -> None:
    """Blend the whole buffer towards black by ``amount`` (0..1)."""
    amount = max(0.0, min(1.0, amount))
    buffer[:] = (buffer.astype(np.float32) * (1.0 - amount)).astype(np.uint8)
