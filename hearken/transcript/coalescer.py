"""Leading-edge debounce for bursts of final transcript segments."""

import logging
import time
from typing import Callable

logger = logging.getLogger(__name__)


class FinalTranscriptCoalescer:
    """Collapses a burst of final segments into its first segment.

    Some mobile engines report the same utterance as final several times in
    quick succession. The first final segment of a burst is accepted; any
    final segment that arrives within ``window`` seconds of the previous one
    is dropped, and extends the burst. A window of 0 accepts everything.

    The clock is injectable so bursts can be replayed deterministically.
    """

    def __init__(
        self,
        window: float = 0.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if window < 0:
            raise ValueError(f"window must be >= 0, got {window}")
        self._window = window
        self._clock = clock
        self._last_seen: float | None = None

    @property
    def window(self) -> float:
        return self._window

    def accept(self, segment: str) -> bool:
        """Return True if *segment* should be appended to the final text."""
        if self._window <= 0:
            return True

        now = self._clock()
        in_burst = self._last_seen is not None and now - self._last_seen < self._window
        self._last_seen = now
        if in_burst:
            logger.debug("Dropping final segment inside debounce window: %r", segment)
            return False
        return True

    def reset(self) -> None:
        """Forget the current burst."""
        self._last_seen = None
