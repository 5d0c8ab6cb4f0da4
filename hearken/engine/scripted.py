"""An in-process engine that turns text into recognition notifications.

ScriptedRecognitionEngine plays back sentences the way a live engine reports
them: an interim result for every growing word prefix, then the final
result, then an end notification unless it is in continuous mode. It is
used to replay transcripts from the CLI and to drive sessions in tests.
"""

import logging

from hearken.engine.base import RecognitionEngine
from hearken.engine.types import (
    RecognitionAlternative,
    RecognitionErrorEvent,
    RecognitionErrorKind,
    RecognitionResult,
    RecognitionResultEvent,
)
from hearken.errors import EngineAlreadyStartedError

logger = logging.getLogger(__name__)


class ScriptedRecognitionEngine(RecognitionEngine):
    """Recognition engine fed by ``say()`` instead of a microphone.

    With ``mobile=True`` it mimics mobile engines: every interim prefix is
    flagged final with zero confidence and the final sentence is reported
    twice.
    """

    def __init__(
        self,
        *,
        mobile: bool = False,
        supports_continuous: bool = True,
        start_error: Exception | None = None,
    ) -> None:
        super().__init__()
        self.mobile = mobile
        self.start_error = start_error
        self._supports_continuous = supports_continuous
        self._started = False
        self.start_count = 0

    @property
    def supports_continuous(self) -> bool:
        return self._supports_continuous

    @property
    def is_started(self) -> bool:
        return self._started

    async def start(self) -> None:
        if self.start_error is not None:
            raise self.start_error
        if self._started:
            raise EngineAlreadyStartedError("recognition has already started")
        self._started = True
        self.start_count += 1
        logger.debug("Scripted engine started (lang=%r, continuous=%s)", self.lang, self.continuous)

    def stop(self) -> None:
        self.abort()

    def abort(self) -> None:
        if not self._started:
            return
        self._started = False
        logger.debug("Scripted engine ended")
        self.on_end()

    # ------------------------------------------------------------------
    # Playback
    # ------------------------------------------------------------------

    def say(self, sentence: str, *, only_first_result: bool = False) -> None:
        """Report *sentence* as recognized speech. Ignored unless started."""
        if not self._started:
            return

        words = sentence.split(" ")
        if only_first_result:
            self._emit(words[0], is_final=False)
        else:
            text = ""
            for word in words:
                text = " ".join([text, word])
                self._emit(text, is_final=False)
            self._emit(sentence, is_final=True)
            if self.mobile:
                self._emit(sentence, is_final=True)

        if not self.continuous:
            self.abort()

    def emit_error(self, kind: RecognitionErrorKind | str, message: str = "") -> None:
        """Report an engine error."""
        self.on_error(RecognitionErrorEvent(error=kind, message=message))

    def deny_permission(self) -> None:
        """Report that microphone access was refused."""
        self.emit_error(RecognitionErrorKind.NOT_ALLOWED, "Permission denied")

    def _emit(self, text: str, *, is_final: bool) -> None:
        if self.mobile and not is_final:
            result = RecognitionResult(
                alternatives=[RecognitionAlternative(transcript=text, confidence=0.0)],
                is_final=True,
            )
        else:
            result = RecognitionResult(
                alternatives=[RecognitionAlternative(transcript=text, confidence=1.0)],
                is_final=is_final,
            )
        self.on_result(RecognitionResultEvent(results=[result], result_index=0))
