# linecomp/combinators.py
"""
Combinators over sources.

- concat(sep, left, right): two segments split on the first ``sep``.
- kleene(sep, inner): any number of ``sep``-separated segments, each with
  its own ``inner`` state.
- switch(branches): the first branch whose predicate accepts the line wins;
  its state survives as long as the same branch keeps winning.
- paths(fallback=None): ``switch`` over ``./``, ``~/``, ``/`` and a fallback.
- update_*: rewrite every candidate a source emits.

Nested states are treated as opaque values and are only ever replaced by
what the nested ``compute`` returned.
"""

from __future__ import annotations

import os
from dataclasses import replace
from typing import Any, Callable, Dict, List, NamedTuple, Optional, Sequence, Tuple, Union

from .candidate import Candidate
from .log_manager import get_logger
from .matching import Matcher
from .source import Source
from .sources import files, getenv
from .words import check_separator, complete_in_word, get_word, match_in_word

__all__ = [
    "reindex_candidates",
    "concat",
    "kleene",
    "SwitchState",
    "switch",
    "paths",
    "update_candidates",
    "update_matching",
    "update_real",
    "update_display",
    "update_completion",
]

logger = get_logger(__name__)

Predicate = Callable[[str], bool]
BranchSource = Union[Source[Any], Callable[[], Source[Any]]]


# =============================================================================
# Reindexing
# =============================================================================

def _reindex(sep: str, candidate: Candidate, once: bool) -> Candidate:
    inner_match = candidate.matching_function
    inner_complete = candidate.apply

    def matching_function(query: str):
        return match_in_word(sep, inner_match, query, once=once)

    def completion_function(before: str, after: str) -> Tuple[str, str]:
        return complete_in_word(sep, inner_complete, before, after, once=once)

    return replace(
        candidate,
        matching_function=matching_function,
        completion_function=completion_function,
    )


def reindex_candidates(sep: str, candidates: Sequence[Candidate], once: bool = False) -> List[Candidate]:
    """Make candidates of a nested source act on the cursor segment only."""
    return [_reindex(sep, c, once) for c in candidates]


# =============================================================================
# Sequencing & repetition
# =============================================================================

def concat(sep: str, left: Source[Any], right: Source[Any]) -> Source[Tuple[Any, Any]]:
    """``left`` before the first ``sep``, ``right`` after it.

    Only the branch holding the cursor is computed; the other branch's state
    is carried over untouched.
    """
    check_separator(sep)

    def compute(state: Tuple[Any, Any], before: str, after: str):
        left_state, right_state = state
        w = get_word(sep, before, after, once=True)
        if w.index == 0:
            left_state, candidates = left.compute(left_state, w.before_inside, w.after_inside)
        else:
            right_state, candidates = right.compute(right_state, w.before_inside, w.after_inside)
        return (left_state, right_state), reindex_candidates(sep, candidates, once=True)

    return Source(
        (left.default_state, right.default_state),
        compute,
        name=f"concat({left.name}, {right.name})",
    )


def kleene(sep: str, inner: Source[Any]) -> Source[Dict[int, Any]]:
    """Repeat ``inner`` over every ``sep``-separated segment of the line.

    State maps a segment index to that segment's ``inner`` state; segments
    never seen use ``inner.default_state``. Editing one segment leaves the
    entries of all others as they were.
    """
    check_separator(sep)

    def compute(states: Dict[int, Any], before: str, after: str):
        w = get_word(sep, before, after)
        segment_state = states.get(w.index, inner.default_state)
        segment_state, candidates = inner.compute(segment_state, w.before_inside, w.after_inside)
        new_states = dict(states)
        new_states[w.index] = segment_state
        return new_states, reindex_candidates(sep, candidates)

    return Source({}, compute, name=f"kleene({inner.name})")


# =============================================================================
# Alternation
# =============================================================================

class SwitchState(NamedTuple):
    """The branch source currently in use and its latest state."""

    source: Source[Any]
    state: Any


def _memoized(branch: BranchSource) -> Callable[[], Source[Any]]:
    if isinstance(branch, Source):
        return lambda: branch

    built: List[Source[Any]] = []

    def force() -> Source[Any]:
        if not built:
            built.append(branch())
        return built[0]

    return force


def switch(branches: Sequence[Tuple[Predicate, BranchSource]]) -> Source[Optional[SwitchState]]:
    """Pick the first branch whose predicate accepts the whole line.

    Parameters
    ----------
    branches : sequence of (predicate, source or zero-argument factory)
        Factories are called the first time their branch is selected and
        the resulting source is kept. Put a catch-all predicate last.

    Notes
    -----
    The session state is reused only when the selected source is the very
    same object as the one it was produced by; otherwise the newly selected
    source starts from its default state.
    """
    resolved = [(predicate, _memoized(branch)) for predicate, branch in branches]

    def compute(session: Optional[SwitchState], before: str, after: str):
        query = before + after
        for predicate, force in resolved:
            if predicate(query):
                source = force()
                break
        else:
            logger.debug("No branch accepts %r", query)
            return None, []

        if session is not None and session.source is source:
            state = session.state
        else:
            if session is not None:
                logger.debug("Switching branch to %r", source)
            state = source.default_state
        state, candidates = source.compute(state, before, after)
        return SwitchState(source, state), candidates

    return Source(None, compute, name="switch")


def paths(
    fallback: Optional[BranchSource] = None,
    filter: Optional[Callable[[str], bool]] = None,
) -> Source[Optional[SwitchState]]:
    """Filesystem completion keyed on the line's prefix.

    ``./`` lists from the current directory, ``~/`` from ``$HOME`` and ``/``
    from the filesystem root. Anything else goes to ``fallback``, by default
    a listing of the current directory. ``filter`` is handed to every
    listing built here.
    """
    if fallback is None:
        fallback = lambda: files(os.getcwd(), filter=filter)  # noqa: E731
    return switch(
        [
            (lambda q: q.startswith("./"), lambda: files(os.getcwd(), filter=filter)),
            (lambda q: q.startswith("~/"), lambda: files(getenv("HOME"), filter=filter)),
            (lambda q: q.startswith("/"), lambda: files("/", filter=filter)),
            (lambda _q: True, fallback),
        ]
    )


# =============================================================================
# Field rewriting
# =============================================================================

def update_candidates(f: Callable[[Candidate], Candidate], source: Source[Any]) -> Source[Any]:
    """Post-process every candidate ``source`` emits with ``f``; state passes through."""

    def compute(state: Any, before: str, after: str):
        state, candidates = source.compute(state, before, after)
        return state, [f(c) for c in candidates]

    return Source(source.default_state, compute, name=source.name)


def update_matching(f: Callable[[Matcher], Matcher], source: Source[Any]) -> Source[Any]:
    return update_candidates(lambda c: replace(c, matching_function=f(c.matching_function)), source)


def update_real(f: Callable[[str], str], source: Source[Any]) -> Source[Any]:
    return update_candidates(lambda c: replace(c, real=f(c.real)), source)


def update_display(f: Callable[[str], str], source: Source[Any]) -> Source[Any]:
    return update_candidates(lambda c: replace(c, display=f(c.display)), source)


def update_completion(f: Callable[[str], str], source: Source[Any]) -> Source[Any]:
    """Rewrite the inserted text.

    Apply it to a source before composing it: candidates that were already
    reindexed keep their own completion function.
    """
    return update_candidates(lambda c: replace(c, completion=f(c.completion)), source)
