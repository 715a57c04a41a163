"""Core framework components for Head Jump."""

from .events import EventBus, Event, EventType
from .scheduler import Scheduler, IntervalTimer

__all__ = ["EventBus", "Event", "EventType", "Scheduler", "IntervalTimer"]
