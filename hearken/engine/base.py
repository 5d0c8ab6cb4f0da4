"""Abstract base class for speech recognition engines.

An engine is the external capture-and-transcribe capability a session
drives. Hearken never recognizes speech itself: it configures the engine,
starts and stops it, and reacts to the notifications the engine delivers
through its ``on_result``, ``on_end`` and ``on_error`` slots.
"""

from abc import ABC, abstractmethod
from typing import Awaitable, Callable

from hearken.engine.types import RecognitionErrorEvent, RecognitionResultEvent


def _ignore(*args, **kwargs) -> None:
    return None


class RecognitionEngine(ABC):
    """Base class for recognition engines.

    Notifications must be delivered on the event loop thread that owns the
    session. ``start()`` may be a plain method or a coroutine function and
    must raise EngineAlreadyStartedError when the engine is already
    capturing. ``stop()`` ends capture after delivering pending results;
    ``abort()`` ends it immediately. Both are followed by ``on_end()``.
    """

    def __init__(self) -> None:
        self.lang: str = ""
        self.continuous: bool = False
        self.interim_results: bool = False
        self.on_result: Callable[[RecognitionResultEvent], None] = _ignore
        self.on_end: Callable[[], None] = _ignore
        self.on_error: Callable[[RecognitionErrorEvent], None] = _ignore

    @property
    def supports_continuous(self) -> bool:
        """Whether the engine can keep listening across utterances."""
        return True

    def detach(self) -> None:
        """Silence all notification slots."""
        self.on_result = _ignore
        self.on_end = _ignore
        self.on_error = _ignore

    @abstractmethod
    def start(self) -> Awaitable[None] | None:
        """Begin capturing speech."""

    @abstractmethod
    def stop(self) -> None:
        """Stop capturing; pending results are still delivered."""

    @abstractmethod
    def abort(self) -> None:
        """Stop capturing and discard pending results."""


EngineFactory = Callable[[], RecognitionEngine]
