"""Shared fixtures for Hearken tests."""

from unittest.mock import MagicMock

import pytest

from hearken.engine.scripted import ScriptedRecognitionEngine
from hearken.events.event_bus import EventBus
from hearken.session.manager import SessionManager
from hearken.session.subscriber import SubscriberCallbacks


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Keep developer environment variables from leaking into tests."""
    for name in (
        "HEARKEN_FUZZY_THRESHOLD",
        "HEARKEN_LANGUAGE",
        "HEARKEN_FINAL_DEBOUNCE",
        "HEARKEN_ENGINE",
        "HEARKEN_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def event_bus() -> EventBus:
    """Return a fresh EventBus instance with a small queue for testing."""
    return EventBus(maxsize=16)


@pytest.fixture
def engine() -> ScriptedRecognitionEngine:
    """Return a scripted engine that a session can drive."""
    return ScriptedRecognitionEngine()


@pytest.fixture
def session(engine: ScriptedRecognitionEngine) -> SessionManager:
    """Return a SessionManager whose default engine is the ``engine`` fixture."""
    return SessionManager(lambda: engine)


@pytest.fixture
def callbacks() -> MagicMock:
    """Return a mock holding one MagicMock per subscriber callback."""
    mock = MagicMock()
    mock.on_listening_change = MagicMock()
    mock.on_transcript_change = MagicMock()
    mock.on_clear_transcript = MagicMock()
    mock.on_microphone_availability_change = MagicMock()
    mock.on_capability_change = MagicMock()
    return mock


@pytest.fixture
def subscriber(session: SessionManager, callbacks: MagicMock) -> MagicMock:
    """Subscribe the ``callbacks`` mocks to the session and return them."""
    session.subscribe(
        SubscriberCallbacks(
            on_listening_change=callbacks.on_listening_change,
            on_transcript_change=callbacks.on_transcript_change,
            on_clear_transcript=callbacks.on_clear_transcript,
            on_microphone_availability_change=callbacks.on_microphone_availability_change,
            on_capability_change=callbacks.on_capability_change,
        )
    )
    return callbacks
