"""Pydantic models for session events."""

import time
from enum import Enum

from pydantic import BaseModel, Field


class SessionEventType(str, Enum):
    """Notifications a session broadcasts to its subscribers."""

    LISTENING_CHANGED = "listening_changed"
    TRANSCRIPT_CHANGED = "transcript_changed"
    TRANSCRIPT_CLEARED = "transcript_cleared"
    MICROPHONE_AVAILABILITY_CHANGED = "microphone_availability_changed"
    CAPABILITY_CHANGED = "capability_changed"


class SessionEvent(BaseModel):
    """A single broadcast flowing through a session's event bus.

    Fields are populated depending on the event type:
      - listening_changed: listening
      - transcript_changed: interim_transcript, final_transcript
      - microphone_availability_changed: microphone_available, error
      - capability_changed: supports_recognition, supports_continuous
    """

    type: SessionEventType
    timestamp: float = Field(default_factory=time.time)

    listening: bool | None = None

    interim_transcript: str | None = None
    final_transcript: str | None = None

    microphone_available: bool | None = None
    error: str | None = None

    supports_recognition: bool | None = None
    supports_continuous: bool | None = None
