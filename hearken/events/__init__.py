"""Session event stream."""

from hearken.events.event_bus import EventBus
from hearken.events.types import SessionEvent, SessionEventType

__all__ = ["EventBus", "SessionEvent", "SessionEventType"]
