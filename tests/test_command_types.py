"""Tests for hearken.commands.types — command and match models."""

import re

import pytest
from pydantic import TypeAdapter, ValidationError

from hearken.commands.types import (
    Command,
    FuzzyMatch,
    MatchKind,
    MatchResult,
    PhraseMatch,
)


def _noop(*args):
    return None


class TestCommand:
    def test_defaults(self):
        command = Command(phrase="hello", callback=_noop)
        assert command.match_interim is False
        assert command.is_fuzzy_match is False
        assert command.best_match_only is False
        assert command.fuzzy_matching_threshold == 0.8

    def test_accepts_pattern_and_lists(self):
        pattern = re.compile("hi")
        command = Command(phrase=["hello", pattern], callback=_noop)
        assert command.phrase[1] is pattern

    @pytest.mark.parametrize("threshold", [-0.1, 1.1])
    def test_threshold_out_of_range(self, threshold):
        with pytest.raises(ValidationError):
            Command(phrase="x", callback=_noop, fuzzy_matching_threshold=threshold)

    def test_callback_must_be_callable(self):
        with pytest.raises(ValidationError):
            Command(phrase="x", callback="not callable")

    def test_frozen(self):
        command = Command(phrase="x", callback=_noop)
        with pytest.raises(ValidationError):
            command.phrase = "y"


class TestMatchResult:
    def test_discriminated_by_kind(self):
        adapter = TypeAdapter(MatchResult)
        fuzzy = adapter.validate_python(
            {"kind": MatchKind.FUZZY, "phrase": "a", "normalized_phrase": "a", "similarity": 0.9}
        )
        phrase = adapter.validate_python({"kind": MatchKind.PHRASE, "phrase": "a", "parameters": []})
        assert isinstance(fuzzy, FuzzyMatch)
        assert isinstance(phrase, PhraseMatch)
        assert phrase.kind == MatchKind.PHRASE

    def test_similarity_bounded(self):
        with pytest.raises(ValidationError):
            FuzzyMatch(phrase="a", normalized_phrase="a", similarity=1.5)
