# linecomp/source.py
"""
The source abstraction.

A :class:`Source` pairs a default state with a ``compute`` function::

    compute(state, before, after) -> (new_state, candidates)

The shape of ``state`` is private to the source that created it. Callers and
combinators only ever pass back what ``compute`` returned (or
``default_state``) and never look inside.

:class:`CompletionSession` binds a source to its current state for a front
end that just wants ``complete(before, after)`` on every keystroke.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, List, Tuple, TypeVar

from .candidate import Candidate

__all__ = ["Source", "CompletionSession", "initialize", "empty"]

S = TypeVar("S")

ComputeFunction = Callable[[S, str, str], Tuple[S, List[Candidate]]]


@dataclass(frozen=True, eq=False)
class Source(Generic[S]):
    """A stateful candidate producer.

    Sources compare by identity: two separately built sources are never
    equal, even if they list the same things.
    """

    default_state: S
    compute_function: ComputeFunction
    name: str = "source"

    def compute(self, state: S, before: str, after: str = "") -> Tuple[S, List[Candidate]]:
        return self.compute_function(state, before, after)

    def __repr__(self) -> str:
        return f"<Source {self.name} at {id(self):#x}>"


class CompletionSession:
    """A source together with the state it produced last.

    Examples
    --------
    >>> session = initialize(empty())
    >>> session.complete("ls ", "")
    []
    """

    __slots__ = ("source", "state")

    def __init__(self, source: Source[Any]) -> None:
        self.source = source
        self.state = source.default_state

    def complete(self, before: str, after: str = "") -> List[Candidate]:
        self.state, candidates = self.source.compute(self.state, before, after)
        return candidates

    def reset(self) -> None:
        self.state = self.source.default_state


def initialize(source: Source[Any]) -> CompletionSession:
    """Start a completion session on ``source`` at its default state."""
    return CompletionSession(source)


def empty() -> Source[None]:
    """A source that never proposes anything."""
    return Source(None, lambda state, _before, _after: (state, []), name="empty")
