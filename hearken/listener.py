"""Per-subscriber view of a recognition session.

A Listener keeps its own transcript and its own commands. Several listeners
can share one SessionManager; resetting one listener's transcript never
touches another's.
"""

from __future__ import annotations

import logging
from typing import Iterable

from hearken.commands.dispatcher import CommandDispatcher
from hearken.commands.types import Command
from hearken.session.manager import SessionManager
from hearken.session.subscriber import SubscriberCallbacks, SubscriberId
from hearken.transcript.reducer import (
    AppendTranscript,
    ClearTranscript,
    TranscriptEvent,
    TranscriptState,
    reduce_transcript,
)

logger = logging.getLogger(__name__)


class Listener:
    """Accumulates transcripts and runs commands for one subscriber.

    ``transcribing=False`` keeps command matching but stops accumulating
    text. ``clear_transcript_on_listen=False`` keeps the transcript when a
    new discontinuous session starts.
    """

    def __init__(
        self,
        session: SessionManager,
        commands: Iterable[Command] = (),
        *,
        transcribing: bool = True,
        clear_transcript_on_listen: bool = True,
    ) -> None:
        self._session = session
        self._transcribing = transcribing
        self._clear_transcript_on_listen = clear_transcript_on_listen

        self._state = TranscriptState(interim=session.interim_transcript)
        self._listening = session.listening
        self._microphone_available = session.microphone_available
        self._supports_recognition = session.supports_recognition
        self._supports_continuous = session.supports_continuous

        self._dispatcher = CommandDispatcher(commands, reset_transcript=self.reset_transcript)
        self._subscription = session.subscribe(
            SubscriberCallbacks(
                on_listening_change=self._on_listening_change,
                on_transcript_change=self._on_transcript_change,
                on_clear_transcript=self._on_clear_transcript,
                on_microphone_availability_change=self._on_microphone_availability_change,
                on_capability_change=self._on_capability_change,
            )
        )

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def id(self) -> SubscriberId:
        return self._subscription.id

    @property
    def transcript(self) -> str:
        return self._state.transcript

    @property
    def interim_transcript(self) -> str:
        return self._state.interim

    @property
    def final_transcript(self) -> str:
        return self._state.final

    @property
    def listening(self) -> bool:
        return self._listening

    @property
    def is_microphone_available(self) -> bool:
        return self._microphone_available

    @property
    def supports_recognition(self) -> bool:
        return self._supports_recognition

    @property
    def supports_continuous_listening(self) -> bool:
        return self._supports_continuous

    @property
    def commands(self) -> list[Command]:
        return self._dispatcher.commands

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def set_commands(self, commands: Iterable[Command]) -> None:
        self._dispatcher.set_commands(commands)

    def reset_transcript(self) -> None:
        """Clear this listener's transcript and drop the utterance in progress."""
        logger.debug("Listener %s reset its transcript", self.id)
        self._session.reset_transcript()
        self._apply(ClearTranscript())

    def close(self) -> None:
        self._subscription.close()

    def __enter__(self) -> Listener:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Session notifications
    # ------------------------------------------------------------------

    def _apply(self, event: TranscriptEvent) -> None:
        self._state = reduce_transcript(self._state, event)

    def _on_transcript_change(self, interim: str, final: str) -> None:
        if self._transcribing:
            self._apply(AppendTranscript(interim=interim, final=final))
        self._dispatcher.dispatch(interim, final)

    def _on_clear_transcript(self) -> None:
        if self._clear_transcript_on_listen:
            self._apply(ClearTranscript())

    def _on_listening_change(self, listening: bool) -> None:
        self._listening = listening

    def _on_microphone_availability_change(self, available: bool) -> None:
        self._microphone_available = available

    def _on_capability_change(self, supports_recognition: bool, supports_continuous: bool) -> None:
        self._supports_recognition = supports_recognition
        self._supports_continuous = supports_continuous
