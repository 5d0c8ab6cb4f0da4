"""Configuration constants and helpers for Hearken."""

import logging
import os

DEFAULT_FUZZY_THRESHOLD: float = 0.8
DEFAULT_LOG_LEVEL: str = "INFO"


def get_fuzzy_threshold() -> float:
    """Return the default fuzzy threshold from HEARKEN_FUZZY_THRESHOLD, clamped to [0, 1]."""
    raw = os.environ.get("HEARKEN_FUZZY_THRESHOLD")
    if raw is None:
        return DEFAULT_FUZZY_THRESHOLD
    try:
        value = float(raw)
    except ValueError:
        return DEFAULT_FUZZY_THRESHOLD
    return min(max(value, 0.0), 1.0)


def get_log_level() -> int:
    """Return the logging level named by HEARKEN_LOG_LEVEL, or INFO."""
    name = os.environ.get("HEARKEN_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
    level = logging.getLevelName(name)
    if isinstance(level, int):
        return level
    return logging.INFO


# --- Recognition session configuration ---

DEFAULT_LANGUAGE: str = os.environ.get("HEARKEN_LANGUAGE", "")
ENGINE_NAME: str = os.environ.get("HEARKEN_ENGINE", "scripted")

# Seconds during which repeated final segments collapse into one. 0 = off.
FINAL_DEBOUNCE_WINDOW: float = float(os.environ.get("HEARKEN_FINAL_DEBOUNCE", "0.0"))
