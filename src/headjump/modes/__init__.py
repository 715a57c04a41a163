"""Game modes for Head Jump."""

from headjump.modes.base import BaseMode, ModeContext, ModeResult, ModePhase
from headjump.modes.head_jump import HeadJumpMode

__all__ = [
    "BaseMode",
    "ModeContext",
    "ModeResult",
    "ModePhase",
    "HeadJumpMode",
]
