"""
Event bus for Head Jump.

Input devices, the game mode and the simulator talk to each other only
through events. Everything runs on the window's asyncio loop, so handlers
are never invoked concurrently.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Awaitable
from enum import Enum, auto
import asyncio
import inspect
import logging
import time
from collections import defaultdict

logger = logging.getLogger(__name__)


class EventType(Enum):
    """Built-in event types."""
    # Input events
    JUMP = auto()          # Jump key or click on the play field
    START = auto()         # Start / Play Again control
    THEME_TOGGLE = auto()  # Cosmetic light/dark switch

    # Game events
    GAME_STARTED = auto()
    OBSTACLE_SPAWNED = auto()
    OBSTACLE_PASSED = auto()
    GAME_OVER = auto()

    # System events
    TICK = auto()  # Frame tick
    SHUTDOWN = auto()


@dataclass
class Event:
    """
    Event data container.

    Attributes:
        type: Event type (EventType enum or custom string)
        data: Event payload
        source: Component that emitted the event
        timestamp: Monotonic time the event was created
    """
    type: EventType | str
    data: dict[str, Any] = field(default_factory=dict)
    source: str = "system"
    timestamp: float = field(default_factory=time.monotonic)


# Type aliases for handlers
SyncHandler = Callable[[Event], Any]
AsyncHandler = Callable[[Event], Awaitable[None]]
Handler = SyncHandler | AsyncHandler


class EventBus:
    """
    Central event bus for component communication.

    Supports both synchronous and asynchronous handlers.
    Events can be emitted immediately or queued for the next frame.
    """

    def __init__(self, history_limit: int = 100) -> None:
        self._handlers: dict[EventType | str, list[Handler]] = defaultdict(list)
        self._queue: asyncio.Queue[Event] = asyncio.Queue()
        self._event_history: list[Event] = []
        self._history_limit = history_limit

    def subscribe(
        self,
        event_type: EventType | str,
        handler: Handler
    ) -> Callable[[], None]:
        """
        Subscribe to an event type.

        Args:
            event_type: Type of event to listen for
            handler: Callback function (sync or async)

        Returns:
            Unsubscribe function
        """
        self._handlers[event_type].append(handler)
        logger.debug(f"Handler subscribed to {event_type}")

        def unsubscribe() -> None:
            if handler in self._handlers[event_type]:
                self._handlers[event_type].remove(handler)
                logger.debug(f"Handler unsubscribed from {event_type}")

        return unsubscribe

    def emit(self, event: Event) -> None:
        """Emit an event immediately to its synchronous handlers."""
        self._add_to_history(event)
        self._dispatch_sync(event)

    def queue_event(self, event: Event) -> None:
        """Queue an event for the next process_queue() call."""
        self._queue.put_nowait(event)

    async def process_queue(self) -> None:
        """Process all queued events."""
        while not self._queue.empty():
            event = self._queue.get_nowait()
            self._add_to_history(event)
            await self._dispatch_async(event)
            self._queue.task_done()

    def _dispatch_sync(self, event: Event) -> None:
        """Dispatch event to synchronous handlers only."""
        for handler in list(self._handlers.get(event.type, [])):
            if inspect.iscoroutinefunction(handler):
                continue
            try:
                handler(event)
            except Exception as e:
                logger.exception(f"Error in event handler for {event.type}: {e}")

    async def _dispatch_async(self, event: Event) -> None:
        """Dispatch event to all handlers (sync and async)."""
        tasks = []
        for handler in list(self._handlers.get(event.type, [])):
            if inspect.iscoroutinefunction(handler):
                tasks.append(asyncio.create_task(handler(event)))
            else:
                try:
                    handler(event)
                except Exception as e:
                    logger.exception(f"Error in sync handler for {event.type}: {e}")

        if tasks:
            results = await asyncio.gather(*tasks, return_exceptions=True)
            for result in results:
                if isinstance(result, Exception):
                    logger.error(f"Error in async handler: {result}", exc_info=result)

    def _add_to_history(self, event: Event) -> None:
        """Add event to history, maintaining limit."""
        if event.type == EventType.TICK:
            return
        self._event_history.append(event)
        if len(self._event_history) > self._history_limit:
            self._event_history.pop(0)

    def get_history(
        self,
        event_type: EventType | str | None = None,
        limit: int = 10
    ) -> list[Event]:
        """Get recent events from history (frame ticks are not recorded)."""
        history = self._event_history
        if event_type is not None:
            history = [e for e in history if e.type == event_type]
        return history[-limit:]

    def clear_history(self) -> None:
        """Clear event history."""
        self._event_history.clear()


# Convenience functions for creating common events
def jump_event(source: str = "keyboard") -> Event:
    """Create a jump request event."""
    return Event(EventType.JUMP, source=source)


def start_event(source: str = "button") -> Event:
    """Create a start / play again event."""
    return Event(EventType.START, source=source)


def tick_event(delta: float, frame: int) -> Event:
    """Create a frame tick event. ``delta`` is in seconds."""
    return Event(EventType.TICK, data={"delta": delta, "frame": frame})
