"""Bigram (Dice coefficient) string similarity used for fuzzy commands."""

from __future__ import annotations

import re
from collections import Counter

# Characters removed from a command phrase before it is fuzzy-compared.
_SPECIAL_CHARACTERS = re.compile(r"[&/\\#,+()!$~%.'\":*?<>{}]")
_REPEATED_SPACES = re.compile(r"  +")
_WHITESPACE = re.compile(r"\s+")


def _normalize(text: str) -> str:
    return _WHITESPACE.sub("", text).lower()


def _bigrams(text: str) -> list[str]:
    return [text[i : i + 2] for i in range(len(text) - 1)]


def compare_two_strings(first: str, second: str) -> float:
    """Return the Dice coefficient of the character bigrams of two strings.

    Whitespace is removed and case is folded before comparison. The result
    is always in ``[0, 1]``. Strings shorter than two characters have no
    bigrams and score 0 unless both are empty or identical multi-character
    strings.
    """
    first = _normalize(first)
    second = _normalize(second)

    if not first and not second:
        return 1.0
    if not first or not second:
        return 0.0
    if first == second and len(first) >= 2:
        return 1.0
    if len(first) < 2 or len(second) < 2:
        return 0.0

    remaining = Counter(_bigrams(first))
    intersection = 0
    for bigram in _bigrams(second):
        if remaining[bigram] > 0:
            remaining[bigram] -= 1
            intersection += 1

    return (2.0 * intersection) / (len(first) + len(second) - 2)


def strip_special_characters(phrase: str | re.Pattern) -> str:
    """Return *phrase* as plain words for fuzzy comparison.

    Regex phrases are compared using their source text. Punctuation and
    pattern syntax are dropped, runs of spaces collapse to one, and the
    result is trimmed.
    """
    text = phrase.pattern if isinstance(phrase, re.Pattern) else phrase
    text = _SPECIAL_CHARACTERS.sub("", text)
    text = _REPEATED_SPACES.sub(" ", text)
    return text.strip()
