"""Compiles command phrases into case-insensitive, fully anchored regexes.

Literal phrases use a small route-like syntax:

- ``(word)``   optional words, matched with or without them
- ``:name``    one word, captured
- ``*``        any text, captured (lazily)

Everything else in a literal phrase matches itself. Regex phrases are used
as given, with case-insensitive matching forced on.
"""

from __future__ import annotations

import re

_ESCAPE_CHARACTERS = re.compile(r"[-{}\[\]+?.,\\^$|#]")
_OPTIONAL_PARAM = re.compile(r"\s*\((.*?)\)\s*")
_OPTIONAL_GROUP = re.compile(r"(\(\?:[^)]+\))\?")
_NAMED_PARAM = re.compile(r"(\(\?)?:\w+")
_SPLAT_PARAM = re.compile(r"\*")


def phrase_to_regex(phrase: str | re.Pattern) -> re.Pattern:
    """Compile *phrase* into a regex that must match the whole input."""
    if isinstance(phrase, re.Pattern):
        return re.compile(phrase.pattern, phrase.flags | re.IGNORECASE)

    source = _ESCAPE_CHARACTERS.sub(lambda m: "\\" + m.group(0), phrase)
    source = _OPTIONAL_PARAM.sub(lambda m: f"(?:{m.group(1)})?", source)
    # ``(?:`` left by the previous step also starts with a colon; keep it.
    source = _NAMED_PARAM.sub(
        lambda m: m.group(0) if m.group(1) else r"([^\s]+)", source
    )
    source = _SPLAT_PARAM.sub(lambda m: "(.*?)", source)
    source = _OPTIONAL_GROUP.sub(lambda m: r"\s*" + m.group(1) + r"?\s*", source)
    return re.compile(f"^{source}$", re.IGNORECASE)


def match_phrase(matcher: re.Pattern, text: str) -> list[str] | None:
    """Match the trimmed *text* against *matcher*.

    Returns the captured groups in pattern order (empty strings for groups
    that did not take part), or ``None`` when the whole input does not match.
    """
    result = matcher.fullmatch(text.strip())
    if result is None:
        return None
    return [group if group is not None else "" for group in result.groups()]
