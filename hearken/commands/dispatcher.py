"""Matches utterances against registered commands and fires their callbacks.

Every command is checked on every pass, in registration order, and every
qualifying phrase fires. The only tie-break is ``best_match_only`` on fuzzy
commands, which keeps the single most similar phrase.
"""

from __future__ import annotations

import logging
import re
from typing import Callable, Iterable

from hearken.commands.pattern import match_phrase, phrase_to_regex
from hearken.commands.similarity import compare_two_strings, strip_special_characters
from hearken.commands.types import (
    Command,
    CompiledCommand,
    CompiledPhrase,
    FuzzyMatch,
    MatchContext,
    MatchResult,
    PhraseKind,
    PhraseMatch,
)

logger = logging.getLogger(__name__)


def compile_command(command: Command) -> CompiledCommand:
    """Resolve a command's phrase shape and compile each phrase once."""
    if isinstance(command.phrase, list):
        kind = PhraseKind.ANY_OF
        phrases = command.phrase
    elif isinstance(command.phrase, re.Pattern):
        kind = PhraseKind.PATTERN
        phrases = [command.phrase]
    else:
        kind = PhraseKind.LITERAL
        phrases = [command.phrase]

    return CompiledCommand(
        command=command,
        kind=kind,
        phrases=[
            CompiledPhrase(
                phrase=phrase,
                matcher=phrase_to_regex(phrase),
                normalized=strip_special_characters(phrase),
            )
            for phrase in phrases
        ],
    )


def select_input(command: Command, interim_transcript: str, final_transcript: str) -> str:
    """Pick the text a command is matched against.

    Final text always wins once there is any; interim text is only used by
    commands that opt in with ``match_interim``.
    """
    if not final_transcript and command.match_interim:
        return interim_transcript.strip()
    return final_transcript.strip()


def match_command(compiled: CompiledCommand, text: str) -> list[MatchResult]:
    """Return the matches of *text* against each phrase, in phrase order."""
    command = compiled.command
    results: list[MatchResult] = []
    for phrase in compiled.phrases:
        if command.is_fuzzy_match:
            similarity = compare_two_strings(phrase.normalized, text)
            if similarity >= command.fuzzy_matching_threshold:
                results.append(
                    FuzzyMatch(
                        phrase=phrase.phrase,
                        normalized_phrase=phrase.normalized,
                        similarity=similarity,
                    )
                )
        else:
            parameters = match_phrase(phrase.matcher, text)
            if parameters is not None:
                results.append(PhraseMatch(phrase=phrase.phrase, parameters=parameters))
    return results


class CommandDispatcher:
    """Runs a subscriber's commands against each transcript update."""

    def __init__(
        self,
        commands: Iterable[Command] = (),
        reset_transcript: Callable[[], None] | None = None,
    ) -> None:
        self._reset_transcript = reset_transcript or (lambda: None)
        self._compiled: list[CompiledCommand] = []
        self.set_commands(commands)

    @property
    def commands(self) -> list[Command]:
        return [compiled.command for compiled in self._compiled]

    def set_commands(self, commands: Iterable[Command]) -> None:
        """Replace the whole command list. Takes effect on the next dispatch."""
        self._compiled = [compile_command(command) for command in commands]
        logger.debug("Registered %d command(s)", len(self._compiled))

    def dispatch(self, interim_transcript: str, final_transcript: str) -> None:
        """Invoke the callback of every command matching this update."""
        for compiled in self._compiled:
            command = compiled.command
            text = select_input(command, interim_transcript, final_transcript)
            results = match_command(compiled, text)
            if not results:
                continue

            if command.is_fuzzy_match and command.best_match_only and len(results) >= 2:
                best = sorted(results, key=lambda r: r.similarity, reverse=True)[0]
                self._invoke(command, best, text)
                continue

            for result in results:
                self._invoke(command, result, text)

    def _invoke(self, command: Command, result: MatchResult, text: str) -> None:
        context = MatchContext(
            matched_phrase=result.phrase,
            reset_transcript=self._reset_transcript,
        )
        if isinstance(result, FuzzyMatch):
            logger.debug(
                "Fuzzy command matched: phrase=%r, similarity=%.2f",
                result.normalized_phrase,
                result.similarity,
            )
            command.callback(result.normalized_phrase, text, result.similarity, context)
        else:
            logger.debug(
                "Command matched: phrase=%r, parameters=%s",
                result.phrase,
                result.parameters,
            )
            command.callback(*result.parameters, context)
