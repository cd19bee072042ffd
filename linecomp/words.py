# linecomp/words.py
"""
Word/cursor model for the completion engine.

A line is handed to the engine as two halves split at the cursor
(``before`` and ``after``). This module splits the joined line into
separator-delimited words, finds the word under the cursor, and rebuilds the
line after that single word has been edited.

Public API
----------
- split_words(sep, text, once=False): split on every (or only the first) sep.
- locate_cursor(words, offset): index of the cursor word and offset inside it.
- get_word(sep, before, after, once=False): full :class:`WordResult`.
- check_separator(sep): separators are single characters; anything else
  raises ValueError.
- complete_in_word(...): apply an edit to the cursor word only.
- match_in_word(...): apply a matcher to the cursor word only.

Notes
-----
- A cursor sitting right after a separator belongs to the *following* word
  (offset 0); a cursor right before it belongs to the preceding word.
- ``WordResult.rebuild(before_inside, after_inside)`` always reproduces the
  original ``(before, after)`` pair.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, List, Optional, Tuple, TypeVar

__all__ = [
    "CursorModelError",
    "WordResult",
    "check_separator",
    "split_words",
    "locate_cursor",
    "get_word",
    "complete_in_word",
    "match_in_word",
]

T = TypeVar("T")

# (before, after) -> (before, after)
LineEdit = Callable[[str, str], Tuple[str, str]]


class CursorModelError(RuntimeError):
    """Raised when the cursor cannot be placed inside the computed word list.

    Offsets handed in by :func:`get_word` are in range by construction, so
    this signals a bug in the word model rather than bad user input.
    """


@dataclass(frozen=True)
class WordResult:
    """The word under the cursor plus everything needed to rebuild the line.

    Attributes
    ----------
    word : str
        Text of the word containing the cursor.
    before, after : list of str
        Words strictly left/right of the cursor word.
    index : int
        Zero-based position of the cursor word among all words.
    index_inside : int
        Cursor offset within ``word``.
    before_inside, after_inside : str
        ``word`` split at the cursor.
    separator : str
        Separator used to re-join the words.
    """

    word: str = ""
    before: List[str] = field(default_factory=list)
    after: List[str] = field(default_factory=list)
    index: int = 0
    index_inside: int = 0
    before_inside: str = ""
    after_inside: str = ""
    separator: str = ""

    def rebuild(self, prefix: str, suffix: str) -> Tuple[str, str]:
        """Return the whole line's halves with the cursor word replaced by prefix|suffix."""
        sep = self.separator
        return sep.join(self.before + [prefix]), sep.join([suffix] + self.after)


def check_separator(sep: str) -> None:
    """Raise ``ValueError`` unless ``sep`` is exactly one character.

    Cursor offsets are walked one separator character at a time, so longer
    or empty separators cannot be located.
    """
    if len(sep) != 1:
        raise ValueError(f"separator must be a single character, got {sep!r}")


def split_words(sep: str, text: str, once: bool = False) -> List[str]:
    """Split ``text`` on ``sep``.

    With ``once`` the result always has exactly two segments; when ``sep`` is
    absent the whole text is the first one and the second is empty.
    """
    check_separator(sep)
    if not once:
        return text.split(sep)
    head, found, tail = text.partition(sep)
    if not found:
        return [text, ""]
    return [head, tail]


def locate_cursor(words: List[str], offset: int) -> Tuple[int, int]:
    """Return ``(index, index_inside)`` of the word holding ``offset``.

    Word lengths are consumed greedily, each followed by one separator, so an
    offset at the end of a word stays in that word and an offset just past a
    separator lands at the start of the next one.
    """
    if not words:
        return 0, 0
    position = offset
    for index, word in enumerate(words):
        if position <= len(word):
            return index, position
        position -= len(word) + 1
    raise CursorModelError(
        f"cursor offset {offset} is past the end of {len(words)} word(s)"
    )


def get_word(sep: str, before: str, after: str, once: bool = False) -> WordResult:
    """Compute the :class:`WordResult` for a line split at the cursor."""
    check_separator(sep)
    total = before + after
    if not total:
        return WordResult(separator=sep)

    words = split_words(sep, total, once=once)
    # A once-split without separator has no real second word to re-join.
    real_count = 1 if once and sep not in total else len(words)

    index, inside = locate_cursor(words[:real_count], len(before))
    if index >= real_count:
        raise CursorModelError(f"word index {index} out of range ({real_count})")

    word = words[index]
    return WordResult(
        word=word,
        before=words[:index],
        after=words[index + 1:real_count],
        index=index,
        index_inside=inside,
        before_inside=word[:inside],
        after_inside=word[inside:],
        separator=sep,
    )


def complete_in_word(
    sep: str,
    transform: LineEdit,
    before: str,
    after: str,
    drop_continuation: bool = False,
    once: bool = False,
) -> Tuple[str, str]:
    """Apply ``transform`` to the cursor word's halves and rebuild the line.

    With ``drop_continuation`` everything right of the cursor is discarded.
    """
    w = get_word(sep, before, after, once=once)
    new_before, new_after = w.rebuild(*transform(w.before_inside, w.after_inside))
    if drop_continuation:
        return new_before, ""
    return new_before, new_after


def match_in_word(
    sep: str,
    matcher: Callable[[str], Optional[T]],
    before: str,
    after: str = "",
    once: bool = False,
) -> Optional[T]:
    """Run ``matcher`` on the cursor word only, ignoring the rest of the line."""
    return matcher(get_word(sep, before, after, once=once).word)
