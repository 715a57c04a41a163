"""Mode lifecycle shared by the simulator and the game.

A mode is entered once by the app, receives input and frame deltas from the
bus while entered, and reports a ``ModeResult`` each time a run ends.
"""

from abc import ABC, abstractmethod
from typing import Optional, Dict, Any, Callable
from dataclasses import dataclass, field
from enum import Enum, auto
import logging

from headjump.config.settings import Settings
from headjump.core.events import EventBus, Event, EventType

logger = logging.getLogger(__name__)


class ModePhase(Enum):
    """Which screen the mode is on."""

    INTRO = auto()   # Start overlay
    ACTIVE = auto()  # Run in progress
    RESULT = auto()  # Game over overlay


@dataclass
class ModeResult:
    """Outcome of one run, or of leaving the mode without finishing one."""

    mode_name: str
    success: bool = True
    data: Dict[str, Any] = field(default_factory=dict)
    display_text: str = ""
    error: Optional[str] = None


@dataclass
class ModeContext:
    """What a mode gets from the app."""

    event_bus: EventBus
    settings: Settings


ResultCallback = Callable[[ModeResult], None]


class BaseMode(ABC):
    """Abstract mode.

    ``enter``/``exit`` bracket the mode's life; ``update`` and
    ``handle_input`` are no-ops outside that bracket. Subclasses fill in
    the ``on_*`` hooks and call ``complete`` when a run ends.
    """

    name: str = "base"

    def __init__(self, context: ModeContext):
        self.context = context
        self.phase = ModePhase.INTRO
        self._entered = False
        self._last_result: Optional[ModeResult] = None
        self._result_callback: Optional[ResultCallback] = None

    @property
    def is_active(self) -> bool:
        return self._entered

    def set_on_complete(self, callback: ResultCallback) -> None:
        self._result_callback = callback

    def enter(self) -> None:
        self._entered = True
        self._last_result = None
        self.phase = ModePhase.INTRO
        logger.info(f"Entering mode: {self.name}")
        self.on_enter()

    def exit(self) -> ModeResult:
        """Leave the mode; returns the last run's result, or a failed one."""
        self.on_exit()
        self._entered = False
        logger.info(f"Left mode: {self.name}")

        if self._last_result is None:
            self._last_result = ModeResult(
                mode_name=self.name, success=False, error="No run finished"
            )
        return self._last_result

    def update(self, delta_ms: float) -> None:
        if self._entered:
            self.on_update(delta_ms)

    def handle_input(self, event: Event) -> bool:
        """Returns True if the mode consumed ``event``."""
        if not self._entered:
            return False
        return self.on_input(event)

    def change_phase(self, new_phase: ModePhase) -> None:
        logger.debug(f"Mode {self.name}: {self.phase.name} -> {new_phase.name}")
        self.phase = new_phase

    def complete(self, result: ModeResult) -> None:
        """Finish the current run and hand ``result`` to the app."""
        self._last_result = result
        self.change_phase(ModePhase.RESULT)
        if self._result_callback:
            self._result_callback(result)

    @abstractmethod
    def on_enter(self) -> None: ...

    @abstractmethod
    def on_update(self, delta_ms: float) -> None: ...

    @abstractmethod
    def on_input(self, event: Event) -> bool: ...

    @abstractmethod
    def on_exit(self) -> None: ...

    @abstractmethod
    def render_main(self, buffer) -> None:
        """Draw the play field into ``buffer``."""

    def emit_event(self, event_type: EventType, data: Optional[Dict[str, Any]] = None) -> None:
        self.context.event_bus.emit(
            Event(type=event_type, data=data or {}, source=f"mode_{self.name}")
        )
