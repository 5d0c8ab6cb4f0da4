"""Hearken — voice commands and live transcripts on top of a speech engine."""

from hearken.commands import Command, CommandDispatcher, MatchContext, compare_two_strings
from hearken.engine import RecognitionEngine, ScriptedRecognitionEngine, create_engine_factory
from hearken.listener import Listener
from hearken.session import SessionManager, SessionState, SubscriberCallbacks

__version__ = "0.1.0"


def create_session(**kwargs) -> SessionManager:
    """Build a SessionManager around the engine selected by HEARKEN_ENGINE."""
    return SessionManager(create_engine_factory(), **kwargs)


__all__ = [
    "Command",
    "CommandDispatcher",
    "Listener",
    "MatchContext",
    "RecognitionEngine",
    "ScriptedRecognitionEngine",
    "SessionManager",
    "SessionState",
    "SubscriberCallbacks",
    "compare_two_strings",
    "create_engine_factory",
    "create_session",
]
