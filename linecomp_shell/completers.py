# linecomp_shell/completers.py
"""
Prompt-toolkit adapter for linecomp sources.

Public API
----------
- SourceCompleter: prompt-toolkit Completer driving one completion session.

Notes
-----
- One completer owns one session; call :meth:`SourceCompleter.reset` when a
  new line starts so caches and branch state do not leak between lines.
- Candidates rejected by their own matching function are not offered.
- prompt-toolkit can only replace text left of the cursor, so the part of
  the line a candidate would rewrite right of the cursor is left alone.
"""

from __future__ import annotations

from typing import Any, Iterator, List, Tuple

from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.document import Document

from linecomp.candidate import Candidate
from linecomp.log_manager import get_logger
from linecomp.matching import Spans, highlighted_text
from linecomp.source import Source, initialize

__all__ = ["SourceCompleter", "MATCH_STYLE"]

logger = get_logger("linecomp.shell")

MATCH_STYLE = "class:completion-match"


def _common_prefix_length(a: str, b: str) -> int:
    n = 0
    for x, y in zip(a, b):
        if x != y:
            break
        n += 1
    return n


def _formatted_display(display: str, spans: Spans) -> List[Tuple[str, str]]:
    return [(MATCH_STYLE if is_match else "", piece) for is_match, piece in highlighted_text(display, spans)]


class SourceCompleter(Completer):
    """Offer the candidates of a linecomp :class:`~linecomp.source.Source`.

    Parameters
    ----------
    source : Source
        Composition to run on every completion request.

    Examples
    --------
    >>> from linecomp.sources import from_strings
    >>> comp = SourceCompleter(from_strings(["help", "quit"]))
    >>> [c.display_text for c in comp.get_completions(Document("he", 2), None)]
    ['help']
    """

    __slots__ = ("session",)

    def __init__(self, source: Source[Any]) -> None:
        self.session = initialize(source)

    def reset(self) -> None:
        self.session.reset()

    def _to_completion(self, candidate: Candidate, before: str, after: str) -> Iterator[Completion]:
        spans = candidate.matches(before)
        if spans is None:
            return
        new_before, _new_after = candidate.apply(before, after)
        keep = _common_prefix_length(before, new_before)
        yield Completion(
            text=new_before[keep:],
            start_position=-(len(before) - keep),
            display=_formatted_display(candidate.display, spans),
            display_meta=candidate.doc,
        )

    def get_completions(  # type: ignore[override]
        self, document: Document, complete_event: Any
    ) -> Iterator[Completion]:
        """Yield one Completion per matching candidate, in source order."""
        before = document.text_before_cursor
        after = document.text_after_cursor
        try:
            candidates = self.session.complete(before, after)
            for candidate in candidates:
                yield from self._to_completion(candidate, before, after)
        except Exception:  # noqa: BLE001
            # A failing source must not take the prompt down with it.
            logger.exception("Completion failed for %r", before)
            return
