"""
Fixed-rate timers driven by frame time.

The window hands every frame's elapsed time to ``Scheduler.advance``; the
scheduler then fires each running timer once per elapsed interval, merging
all timers into one chronological sequence. Callbacks run one at a time on
the caller's thread, so a callback always sees the state left by the
previous one.
"""

from dataclasses import dataclass, field
from typing import Callable, Optional
import logging

logger = logging.getLogger(__name__)


@dataclass
class IntervalTimer:
    """A named periodic callback."""

    name: str
    interval_ms: float
    callback: Callable[[], None]
    order: int = 0
    running: bool = False
    next_due_ms: float = 0.0
    fire_count: int = field(default=0)


class Scheduler:
    """Owns a set of interval timers sharing one clock.

    Starting a timer that is already running restarts its phase instead of
    adding a second schedule, so a timer can never fire twice per interval.
    """

    def __init__(self, max_delta_ms: Optional[float] = None) -> None:
        self._timers: dict[str, IntervalTimer] = {}
        self._now_ms = 0.0
        self._max_delta_ms = max_delta_ms

    @property
    def now_ms(self) -> float:
        """Scheduler clock, milliseconds since creation."""
        return self._now_ms

    def add_timer(
        self,
        name: str,
        interval_ms: float,
        callback: Callable[[], None],
    ) -> IntervalTimer:
        """Register a stopped timer.

        Args:
            name: Unique timer name
            interval_ms: Period in milliseconds
            callback: Called once per elapsed period while running

        Returns:
            The registered timer
        """
        if interval_ms <= 0:
            raise ValueError(f"Timer interval must be positive, got {interval_ms}")
        if name in self._timers:
            raise ValueError(f"Timer already registered: {name}")

        timer = IntervalTimer(
            name=name,
            interval_ms=interval_ms,
            callback=callback,
            order=len(self._timers),
        )
        self._timers[name] = timer
        return timer

    def get_timer(self, name: str) -> IntervalTimer:
        return self._timers[name]

    def start(self, name: str) -> None:
        """Start (or restart) a timer; first fire is one interval from now."""
        timer = self._timers[name]
        timer.running = True
        timer.next_due_ms = self._now_ms + timer.interval_ms
        logger.debug(f"Timer started: {name} every {timer.interval_ms:.2f}ms")

    def stop(self, name: str) -> None:
        """Stop a timer. Pending fires are discarded."""
        timer = self._timers[name]
        if timer.running:
            timer.running = False
            logger.debug(f"Timer stopped: {name}")

    def stop_all(self) -> None:
        for name in self._timers:
            self.stop(name)

    def is_running(self, name: str) -> bool:
        return self._timers[name].running

    @property
    def any_running(self) -> bool:
        return any(t.running for t in self._timers.values())

    def advance(self, delta_ms: float) -> int:
        """Move the clock forward and fire every timer that came due.

        Timers fire in due-time order; ties go to the timer registered
        first. A timer stopped by a callback fires no further in this call.

        Args:
            delta_ms: Elapsed time in milliseconds

        Returns:
            Number of callbacks fired
        """
        if delta_ms < 0:
            raise ValueError(f"Cannot advance by negative time: {delta_ms}")
        if self._max_delta_ms is not None and delta_ms > self._max_delta_ms:
            logger.debug(f"Frame delta {delta_ms:.1f}ms clamped to {self._max_delta_ms:.1f}ms")
            delta_ms = self._max_delta_ms

        target_ms = self._now_ms + delta_ms
        fired = 0

        while True:
            due = [
                t for t in self._timers.values()
                if t.running and t.next_due_ms <= target_ms
            ]
            if not due:
                break

            timer = min(due, key=lambda t: (t.next_due_ms, t.order))
            self._now_ms = timer.next_due_ms
            timer.next_due_ms += timer.interval_ms
            timer.fire_count += 1
            fired += 1
            timer.callback()

        self._now_ms = target_ms
        return fired
