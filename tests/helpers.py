"""Helpers shared by the Hearken test modules."""

import asyncio

from hearken.engine.types import (
    RecognitionAlternative,
    RecognitionResult,
    RecognitionResultEvent,
)


def result_event(*segments: tuple[str, bool, float], result_index: int | None = 0):
    """Build a RecognitionResultEvent from (text, is_final, confidence) tuples."""
    return RecognitionResultEvent(
        results=[
            RecognitionResult(
                alternatives=[RecognitionAlternative(transcript=text, confidence=confidence)],
                is_final=is_final,
            )
            for text, is_final, confidence in segments
        ],
        result_index=result_index,
    )


async def drain() -> None:
    """Let tasks scheduled by engine notifications run to completion."""
    for _ in range(5):
        await asyncio.sleep(0)
