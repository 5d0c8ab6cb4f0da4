"""Transcript accumulation for Hearken subscribers."""

from hearken.transcript.coalescer import FinalTranscriptCoalescer
from hearken.transcript.reducer import (
    AppendTranscript,
    ClearTranscript,
    TranscriptEvent,
    TranscriptState,
    concat_transcripts,
    reduce_transcript,
)

__all__ = [
    "AppendTranscript",
    "ClearTranscript",
    "FinalTranscriptCoalescer",
    "TranscriptEvent",
    "TranscriptState",
    "concat_transcripts",
    "reduce_transcript",
]
