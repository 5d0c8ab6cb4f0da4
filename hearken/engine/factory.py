"""Recognition engine factory — selects the default engine from config."""

import logging

from hearken.config import ENGINE_NAME
from hearken.engine.base import EngineFactory

logger = logging.getLogger(__name__)


def create_engine_factory(name: str | None = None) -> EngineFactory | None:
    """Return the engine factory named by *name* or HEARKEN_ENGINE.

    Returns:
        ScriptedRecognitionEngine for "scripted" (default)
        None for "none" or an unknown name, which disables recognition
    """
    engine_name = (name if name is not None else ENGINE_NAME).lower()

    if engine_name == "scripted":
        from hearken.engine.scripted import ScriptedRecognitionEngine
        logger.info("Using scripted recognition engine")
        return ScriptedRecognitionEngine

    if engine_name not in ("", "none"):
        logger.warning("Unknown recognition engine %r — recognition disabled", engine_name)
    else:
        logger.info("No recognition engine configured")
    return None
