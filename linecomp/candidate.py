# linecomp/candidate.py
"""
Completion candidates.

A :class:`Candidate` is the unit of output of every source: what to show,
what to insert, an optional description, and two per-candidate functions:

- ``matching_function(query)`` → spans over ``display`` or ``None``;
- ``completion_function(before, after)`` → the line after accepting it.

Candidates are immutable; combinators derive new ones with
:func:`dataclasses.replace`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Tuple

from .matching import Matcher, Spans, substring_match

__all__ = ["Candidate", "make_candidate"]

CompletionFunction = Callable[[str, str], Tuple[str, str]]


@dataclass(frozen=True)
class Candidate:
    """One completion suggestion.

    Attributes
    ----------
    display : str
        Text shown to the user.
    real : str
        The value the candidate stands for (e.g. an absolute path).
    completion : str
        Text inserted into the line when the candidate is accepted.
    doc : str
        Optional auxiliary description.
    matching_function : Matcher
        ``query -> spans | None``; spans partition ``display``.
    completion_function : CompletionFunction or None
        ``(before, after) -> (before, after)``; edits the line. ``None``
        replaces the line with ``completion`` and drops what follows the
        cursor.
    """

    display: str
    real: str
    completion: str
    doc: str
    matching_function: Matcher
    completion_function: Optional[CompletionFunction] = None

    def matches(self, query: str) -> Optional[Spans]:
        return self.matching_function(query)

    def apply(self, before: str, after: str) -> Tuple[str, str]:
        """Return the line halves after accepting this candidate."""
        if self.completion_function is None:
            return self.completion, ""
        return self.completion_function(before, after)


def make_candidate(
    display: str,
    real: Optional[str] = None,
    completion: Optional[str] = None,
    doc: str = "",
    matching_function: Optional[Matcher] = None,
    completion_function: Optional[CompletionFunction] = None,
) -> Candidate:
    """Build a :class:`Candidate` with the usual defaults.

    ``real`` defaults to ``display`` and ``completion`` to ``real``. The
    default matcher looks for the query inside ``display``.
    """
    real = display if real is None else real
    completion = real if completion is None else completion

    if matching_function is None:
        def matching_function(query: str) -> Optional[Spans]:
            return substring_match(display, query)

    return Candidate(
        display=display,
        real=real,
        completion=completion,
        doc=doc,
        matching_function=matching_function,
        completion_function=completion_function,
    )
