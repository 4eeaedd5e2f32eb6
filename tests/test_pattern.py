"""Tests for pattern compilation."""

from __future__ import annotations

import re

import pytest

from minigrep.errors import PatternError
from minigrep.pattern import compile_pattern, wrap_whole_word


def test_whole_word_wraps_alternation_in_group() -> None:
    assert wrap_whole_word("rust|go") == r"\b(?:rust|go)\b"


def test_whole_word_rejects_substring_of_identifier() -> None:
    """`cat` as a whole word does not match inside `category`."""
    m = compile_pattern("cat", whole_word=True)
    assert m.find("category") is None
    assert m.find("the cat sat") == (4, 7)


def test_whole_word_applies_to_each_alternative() -> None:
    m = compile_pattern("foo|bar", whole_word=True)
    assert m.find("foobar") is None
    assert m.find("a bar") == (2, 5)
    assert m.find("foo!") == (0, 3)


def test_ignore_case() -> None:
    assert compile_pattern("rust").find("RUST") is None
    assert compile_pattern("rust", ignore_case=True).find("I love RUST") == (7, 11)


def test_find_all_is_non_overlapping_left_to_right() -> None:
    m = compile_pattern("aa")
    assert list(m.find_all("aaaaa")) == [(0, 2), (2, 4)]


def test_invalid_pattern_raises_pattern_error() -> None:
    with pytest.raises(PatternError) as info:
        compile_pattern("(")
    assert info.value.pattern == "("
    assert isinstance(info.value.cause, re.error)


def test_matcher_is_immutable() -> None:
    m = compile_pattern("x")
    with pytest.raises(AttributeError):
        m.pattern = "y"  # type: ignore[misc]
