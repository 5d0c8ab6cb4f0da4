"""Recognition engine interface and built-in engines."""

from hearken.engine.base import EngineFactory, RecognitionEngine
from hearken.engine.factory import create_engine_factory
from hearken.engine.scripted import ScriptedRecognitionEngine
from hearken.engine.types import (
    RecognitionAlternative,
    RecognitionErrorEvent,
    RecognitionErrorKind,
    RecognitionResult,
    RecognitionResultEvent,
)

__all__ = [
    "EngineFactory",
    "RecognitionAlternative",
    "RecognitionEngine",
    "RecognitionErrorEvent",
    "RecognitionErrorKind",
    "RecognitionResult",
    "RecognitionResultEvent",
    "ScriptedRecognitionEngine",
    "create_engine_factory",
]
