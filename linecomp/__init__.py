"""
linecomp: composable line-completion sources.

Splits a line at the cursor into words, runs stateful candidate sources over
the word under the cursor, and composes them with sequencing, repetition,
prefix alternation and field-rewriting combinators.
"""

__version__ = "0.1.0"
__license__ = "Apache-2.0"

from .candidate import Candidate, make_candidate
from .combinators import (
    concat,
    kleene,
    paths,
    switch,
    update_candidates,
    update_completion,
    update_display,
    update_matching,
    update_real,
)
from .matching import substring_match
from .source import CompletionSession, Source, empty, initialize
from .sources import (
    binaries,
    files,
    from_list,
    from_list_lazy,
    from_list_rev,
    from_strings,
    from_strings_lazy,
    from_strings_rev,
    stdin,
)
from .words import WordResult, complete_in_word, get_word, match_in_word

__all__ = [
    "Candidate",
    "make_candidate",
    "substring_match",
    "Source",
    "CompletionSession",
    "initialize",
    "empty",
    "files",
    "from_list",
    "from_list_lazy",
    "from_strings",
    "from_strings_lazy",
    "from_list_rev",
    "from_strings_rev",
    "stdin",
    "binaries",
    "concat",
    "kleene",
    "switch",
    "paths",
    "update_candidates",
    "update_matching",
    "update_real",
    "update_display",
    "update_completion",
    "WordResult",
    "get_word",
    "complete_in_word",
    "match_in_word",
]
