"""Pydantic models for notifications delivered by a recognition engine."""

from enum import Enum

from pydantic import BaseModel, Field


class RecognitionErrorKind(str, Enum):
    """Error kinds a recognition engine may report."""

    NOT_ALLOWED = "not-allowed"
    AUDIO_CAPTURE = "audio-capture"
    NO_SPEECH = "no-speech"
    NETWORK = "network"
    ABORTED = "aborted"


class RecognitionAlternative(BaseModel):
    """One hypothesis for an utterance segment."""

    transcript: str
    confidence: float = 1.0


class RecognitionResult(BaseModel):
    """An utterance segment: ordered alternatives, best first."""

    alternatives: list[RecognitionAlternative] = Field(min_length=1)
    is_final: bool = False

    @property
    def best(self) -> RecognitionAlternative:
        return self.alternatives[0]


class RecognitionResultEvent(BaseModel):
    """Results of the current session.

    ``result_index`` is the first result that changed in this notification.
    Engines that do not track it leave it as None, meaning only the last
    result is new.
    """

    results: list[RecognitionResult]
    result_index: int | None = None


class RecognitionErrorEvent(BaseModel):
    """An error reported by the engine. Unknown kinds are kept as plain strings."""

    error: RecognitionErrorKind | str
    message: str = ""
