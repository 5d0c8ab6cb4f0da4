"""Pure reducer that accumulates one subscriber's transcript."""

from typing import Literal, Union

from pydantic import BaseModel, ConfigDict

from hearken.errors import UnknownTranscriptEventError


class TranscriptState(BaseModel):
    """Interim and accumulated final text for one subscriber."""

    model_config = ConfigDict(frozen=True)

    interim: str = ""
    final: str = ""

    @property
    def transcript(self) -> str:
        return concat_transcripts(self.final, self.interim)


class ClearTranscript(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["clear"] = "clear"


class AppendTranscript(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["append"] = "append"
    interim: str = ""
    final: str = ""


TranscriptEvent = Union[ClearTranscript, AppendTranscript]


def concat_transcripts(*parts: str) -> str:
    """Join trimmed, non-empty transcript parts with single spaces."""
    return " ".join(part.strip() for part in parts if part.strip())


def reduce_transcript(state: TranscriptState, event: TranscriptEvent) -> TranscriptState:
    """Return the state after applying *event*.

    Raises UnknownTranscriptEventError for anything that is not a
    ClearTranscript or AppendTranscript.
    """
    if isinstance(event, ClearTranscript):
        return TranscriptState()
    if isinstance(event, AppendTranscript):
        return TranscriptState(
            interim=event.interim,
            final=concat_transcripts(state.final, event.final),
        )
    raise UnknownTranscriptEventError(
        f"Unknown transcript event: {type(event).__name__}"
    )
