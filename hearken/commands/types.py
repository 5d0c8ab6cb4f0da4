"""Pydantic models and enums for voice commands and their matches."""

import re
from enum import Enum
from typing import Annotated, Any, Callable, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from hearken.config import get_fuzzy_threshold

Phrase = Union[str, re.Pattern]


class PhraseKind(str, Enum):
    """Shape of a command's phrase, resolved once at registration."""

    LITERAL = "literal"
    ANY_OF = "any_of"
    PATTERN = "pattern"


class MatchKind(str, Enum):
    """How an utterance matched a phrase."""

    PHRASE = "phrase"
    FUZZY = "fuzzy"


class Command(BaseModel):
    """A voice command: one or more phrases and the callback they trigger.

    Phrase matches call ``callback(*parameters, context)``. Fuzzy matches
    call ``callback(normalized_phrase, utterance, similarity, context)``.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    phrase: Phrase | list[Phrase]
    callback: Callable[..., Any]
    match_interim: bool = False
    is_fuzzy_match: bool = False
    fuzzy_matching_threshold: float = Field(
        default_factory=get_fuzzy_threshold, ge=0.0, le=1.0
    )
    best_match_only: bool = False


class CompiledPhrase(BaseModel):
    """A single phrase with its regex and its fuzzy-comparison form."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    phrase: Phrase
    matcher: re.Pattern
    normalized: str


class CompiledCommand(BaseModel):
    """A registered command with every phrase compiled ahead of dispatch."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    command: Command
    kind: PhraseKind
    phrases: list[CompiledPhrase]


class PhraseMatch(BaseModel):
    """A structural match carrying the captured parameters."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    kind: Literal[MatchKind.PHRASE] = MatchKind.PHRASE
    phrase: Phrase
    parameters: list[str]


class FuzzyMatch(BaseModel):
    """A similarity match at or above the command's threshold."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    kind: Literal[MatchKind.FUZZY] = MatchKind.FUZZY
    phrase: Phrase
    normalized_phrase: str
    similarity: float = Field(ge=0.0, le=1.0)


MatchResult = Annotated[Union[PhraseMatch, FuzzyMatch], Field(discriminator="kind")]


class MatchContext(BaseModel):
    """Passed as the last argument to every command callback."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    matched_phrase: Phrase
    reset_transcript: Callable[[], None]
