# linecomp/matching.py
"""
Matching primitives.

A matcher takes the text being typed and answers either ``None`` (no match)
or a list of :data:`Span` tuples ``(is_match, start, end)`` that partition the
candidate's display text. Front ends use the spans for highlighting.
"""

from __future__ import annotations

from typing import Callable, List, Optional, Tuple

__all__ = ["Span", "Spans", "Matcher", "substring_match", "highlighted_text"]

Span = Tuple[bool, int, int]
Spans = List[Span]
Matcher = Callable[[str], Optional[Spans]]


def substring_match(text: str, query: str) -> Optional[Spans]:
    """Match ``query`` as a literal substring of ``text`` (first occurrence).

    Returns three contiguous spans (prefix, match, suffix) covering ``text``.

    Examples
    --------
    >>> substring_match("readline.so", "read")
    [(False, 0, 0), (True, 0, 4), (False, 4, 11)]
    >>> substring_match("readline.so", "xyz") is None
    True
    """
    start = text.find(query)
    if start < 0:
        return None
    end = start + len(query)
    return [(False, 0, start), (True, start, end), (False, end, len(text))]


def highlighted_text(text: str, spans: Spans) -> List[Tuple[bool, str]]:
    """Slice ``text`` along ``spans``, dropping empty pieces."""
    return [(is_match, text[start:end]) for is_match, start, end in spans if end > start]
