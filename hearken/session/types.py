"""Enums and models describing a recognition session."""

from enum import Enum

from pydantic import BaseModel, ConfigDict


class SessionState(str, Enum):
    """Lifecycle state of a recognition session."""

    IDLE = "idle"
    LISTENING = "listening"
    STOPPING_PENDING_IDLE = "stopping_pending_idle"


class DisconnectKind(str, Enum):
    """Why the session asked the engine to end.

    STOP and ABORT leave the session idle. RESET only discards the current
    utterance, so a continuous session starts listening again.
    """

    NONE = "none"
    ABORT = "abort"
    RESET = "reset"
    STOP = "stop"


class Capabilities(BaseModel):
    """What the current engine can do."""

    model_config = ConfigDict(frozen=True)

    supports_recognition: bool = False
    supports_continuous: bool = False
