"""Tests for hearken.transcript — reducer and final-segment coalescer."""

import pytest

from hearken.errors import UnknownTranscriptEventError
from hearken.transcript.coalescer import FinalTranscriptCoalescer
from hearken.transcript.reducer import (
    AppendTranscript,
    ClearTranscript,
    TranscriptState,
    concat_transcripts,
    reduce_transcript,
)


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, now: float = 100.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


# ---------------------------------------------------------------------------
# concat_transcripts
# ---------------------------------------------------------------------------


class TestConcatTranscripts:
    def test_joins_with_single_spaces(self):
        assert concat_transcripts("This is", " a test ") == "This is a test"

    def test_skips_empty_parts(self):
        assert concat_transcripts("", "hello", "  ", "world") == "hello world"

    def test_nothing_gives_empty(self):
        assert concat_transcripts() == ""
        assert concat_transcripts("", " ") == ""


# ---------------------------------------------------------------------------
# reduce_transcript
# ---------------------------------------------------------------------------


class TestReduceTranscript:
    def test_append_replaces_interim(self):
        state = TranscriptState(interim="This")
        state = reduce_transcript(state, AppendTranscript(interim="This is"))
        assert state.interim == "This is"
        assert state.final == ""

    def test_append_accumulates_final(self):
        state = TranscriptState(final="This is a test")
        state = reduce_transcript(state, AppendTranscript(final="This is a test"))
        assert state.final == "This is a test This is a test"

    def test_final_clears_interim(self):
        state = TranscriptState(interim="This is a")
        state = reduce_transcript(state, AppendTranscript(final="This is a test"))
        assert state.interim == ""
        assert state.transcript == "This is a test"

    def test_transcript_joins_final_and_interim(self):
        state = TranscriptState(interim="This", final="This is a test")
        assert state.transcript == "This is a test This"

    def test_clear(self):
        state = TranscriptState(interim="a", final="b")
        assert reduce_transcript(state, ClearTranscript()) == TranscriptState()

    def test_states_are_immutable(self):
        state = TranscriptState(final="kept")
        reduce_transcript(state, ClearTranscript())
        assert state.final == "kept"

    def test_unknown_event_raises(self):
        with pytest.raises(UnknownTranscriptEventError):
            reduce_transcript(TranscriptState(), object())

    def test_unknown_event_is_a_type_error(self):
        with pytest.raises(TypeError):
            reduce_transcript(TranscriptState(), "append")


# ---------------------------------------------------------------------------
# FinalTranscriptCoalescer
# ---------------------------------------------------------------------------


class TestFinalTranscriptCoalescer:
    def test_zero_window_accepts_everything(self):
        coalescer = FinalTranscriptCoalescer()
        assert all(coalescer.accept("x") for _ in range(3))

    def test_negative_window_rejected(self):
        with pytest.raises(ValueError):
            FinalTranscriptCoalescer(window=-1)

    def test_first_segment_of_burst_accepted(self):
        clock = FakeClock()
        coalescer = FinalTranscriptCoalescer(window=0.5, clock=clock)
        assert coalescer.accept("This is a test") is True
        clock.now += 0.1
        assert coalescer.accept("This is a test") is False

    def test_burst_extends_while_segments_keep_arriving(self):
        clock = FakeClock()
        coalescer = FinalTranscriptCoalescer(window=0.5, clock=clock)
        coalescer.accept("a")
        clock.now += 0.4
        assert coalescer.accept("a") is False
        clock.now += 0.4
        assert coalescer.accept("a") is False

    def test_segment_after_quiet_period_accepted(self):
        clock = FakeClock()
        coalescer = FinalTranscriptCoalescer(window=0.5, clock=clock)
        coalescer.accept("first")
        clock.now += 0.5
        assert coalescer.accept("second") is True

    def test_reset_starts_new_burst(self):
        clock = FakeClock()
        coalescer = FinalTranscriptCoalescer(window=0.5, clock=clock)
        coalescer.accept("first")
        coalescer.reset()
        assert coalescer.accept("second") is True
