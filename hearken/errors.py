"""Exception hierarchy for Hearken."""


class HearkenError(Exception):
    """Base exception for Hearken errors."""


class EngineError(HearkenError):
    """Raised by a recognition engine when an operation fails."""


class EngineAlreadyStartedError(EngineError):
    """Raised by ``start()`` when the engine is already capturing.

    The session treats this as a redundant start and swallows it.
    """


class PermissionDeniedError(EngineError):
    """The engine reported that microphone access was not allowed."""


class TransientStartError(EngineError):
    """The engine refused to start for a reason other than a redundant start."""


class UnknownTranscriptEventError(HearkenError, TypeError):
    """A transcript reducer received an event it does not understand.

    This is a programming fault and is never caught by Hearken.
    """
