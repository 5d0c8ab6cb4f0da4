"""Voice command compilation, fuzzy scoring, and dispatch."""

from hearken.commands.dispatcher import CommandDispatcher, compile_command, match_command
from hearken.commands.pattern import match_phrase, phrase_to_regex
from hearken.commands.similarity import compare_two_strings, strip_special_characters
from hearken.commands.types import (
    Command,
    CompiledCommand,
    FuzzyMatch,
    MatchContext,
    MatchKind,
    MatchResult,
    PhraseKind,
    PhraseMatch,
)

__all__ = [
    "Command",
    "CommandDispatcher",
    "CompiledCommand",
    "FuzzyMatch",
    "MatchContext",
    "MatchKind",
    "MatchResult",
    "PhraseKind",
    "PhraseMatch",
    "compare_two_strings",
    "compile_command",
    "match_command",
    "match_phrase",
    "phrase_to_regex",
    "strip_special_characters",
]
