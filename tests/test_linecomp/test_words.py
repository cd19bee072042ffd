"""Tests for `linecomp/words.py`.

Covers:
- splitting (all separators vs. first separator only, with fallback)
- cursor location, including separator boundaries and out-of-range offsets
- WordResult contents and the rebuild round-trip
- complete_in_word / match_in_word
- single-character separator validation
"""

from __future__ import annotations

import pytest

from linecomp import words as sut


# -----------------------------
# split_words / locate_cursor
# -----------------------------

def test_split_words_every_separator():
    assert sut.split_words(":", "a:b::c") == ["a", "b", "", "c"]


def test_split_words_once_keeps_rest_together():
    assert sut.split_words(":", "a:b:c", once=True) == ["a", "b:c"]


def test_split_words_once_without_separator_falls_back():
    assert sut.split_words(":", "abc", once=True) == ["abc", ""]


def test_locate_cursor_empty_word_list():
    assert sut.locate_cursor([], 0) == (0, 0)


@pytest.mark.parametrize(
    "offset, expected",
    [
        (0, (0, 0)),
        (2, (0, 2)),   # end of "ab", just before the separator
        (3, (1, 0)),   # just after the separator: start of "cd"
        (5, (1, 2)),
    ],
)
def test_locate_cursor_boundaries(offset, expected):
    assert sut.locate_cursor(["ab", "cd"], offset) == expected


def test_locate_cursor_past_the_end_is_a_bug():
    with pytest.raises(sut.CursorModelError):
        sut.locate_cursor(["ab", "cd"], 6)


def test_cursor_always_lands_inside_a_word():
    line = "a::bc:d"
    words = sut.split_words(":", line)
    for offset in range(len(line) + 1):
        index, inside = sut.locate_cursor(words, offset)
        assert 0 <= index < len(words)
        assert 0 <= inside <= len(words[index])


# -----------------------------
# get_word
# -----------------------------

def test_get_word_empty_line():
    w = sut.get_word(" ", "", "")
    assert w.word == ""
    assert w.index == 0
    assert w.index_inside == 0
    assert w.before == [] and w.after == []
    assert w.rebuild("x", "y") == ("x", "y")


def test_get_word_cursor_in_second_segment():
    w = sut.get_word(":", "abc:de", "f")
    assert w.word == "def"
    assert w.index == 1
    assert w.index_inside == 2
    assert (w.before_inside, w.after_inside) == ("de", "f")
    assert w.before == ["abc"]
    assert w.after == []


def test_get_word_middle_word_with_neighbours():
    w = sut.get_word(" ", "ls fo", "o bar")
    assert w.word == "foo"
    assert w.index == 1
    assert w.before == ["ls"]
    assert w.after == ["bar"]


def test_get_word_once_without_separator_has_single_word():
    w = sut.get_word(":", "ab", "c", once=True)
    assert w.word == "abc"
    assert w.index == 0
    assert w.after == []


@pytest.mark.parametrize(
    "sep, before, after, once",
    [
        (":", "", "", False),
        (":", "abc:de", "f", False),
        (":", "a:", "", False),
        (":", "", ":a", False),
        (" ", "ls  -l", " /tmp x", False),
        (":", "ab", "c", True),
        (":", "a:b", "c:d", True),
        (":", "a:", "", True),
        ("/", "/usr/lo", "cal/bin", False),
    ],
)
def test_rebuild_round_trip(sep, before, after, once):
    w = sut.get_word(sep, before, after, once=once)
    assert w.rebuild(w.before_inside, w.after_inside) == (before, after)


@pytest.mark.parametrize("sep", ["::", "", "  "])
def test_separator_must_be_one_character(sep):
    with pytest.raises(ValueError, match="single character"):
        sut.get_word(sep, "a::b", "")
    with pytest.raises(ValueError, match="single character"):
        sut.split_words(sep, "a::b")


def test_empty_line_still_checks_separator():
    with pytest.raises(ValueError):
        sut.get_word("::", "", "")


# -----------------------------
# complete_in_word / match_in_word
# -----------------------------

def test_complete_in_word_only_touches_cursor_word():
    out = sut.complete_in_word(" ", lambda b, a: ("foo", a), "ls fo", "x bar")
    assert out == ("ls foo", "x bar")


def test_complete_in_word_drop_continuation():
    out = sut.complete_in_word(" ", lambda b, a: ("foo", ""), "ls fo", "x bar", drop_continuation=True)
    assert out == ("ls foo", "")


def test_complete_in_word_once_keeps_later_separators():
    out = sut.complete_in_word(":", lambda b, a: ("Z", a), "a:b", ":c", once=True)
    assert out == ("a:Z", ":c")


def test_match_in_word_sees_only_the_cursor_word():
    seen = []
    result = sut.match_in_word("/", lambda word: seen.append(word) or 42, "usr/lo", "cal")
    assert result == 42
    assert seen == ["local"]
