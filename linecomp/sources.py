# linecomp/sources.py
"""
Leaf sources: filesystem listings, static and lazy lists, line streams and
executables found on a search path.

Public API
----------
- files(root, filter=None, listdir=os.listdir)
- from_list(items) / from_list_lazy(thunk)
- from_strings(items) / from_strings_lazy(thunk)
- from_list_rev(items) / from_strings_rev(items): same, reversed order
- stdin(sep=None, stream=None)
- binaries(search_path=None)

Notes
-----
- Every filesystem read is best effort: an ``OSError`` means "no entries".
- List sources ignore the query; narrowing happens through each
  candidate's own matching function.
"""

from __future__ import annotations

import functools
import os
import stat
import sys
from typing import Callable, Iterable, List, Optional, Sequence, TextIO, Tuple

from .candidate import Candidate, make_candidate
from .log_manager import get_logger
from .matching import substring_match
from .source import Source
from .words import match_in_word

__all__ = [
    "getenv",
    "dirname",
    "basename",
    "expand_tilde",
    "files",
    "from_list",
    "from_list_lazy",
    "from_strings",
    "from_strings_lazy",
    "from_list_rev",
    "from_strings_rev",
    "stdin",
    "scan_search_path",
    "binaries",
]

logger = get_logger(__name__)

# (display, real, doc)
Entry = Tuple[str, str, str]
FilesState = Tuple[str, List[Candidate]]


# -----------------
# Path helpers
# -----------------

def getenv(var: str) -> str:
    """Environment lookup where a missing variable reads as ``""``."""
    return os.environ.get(var, "")


def dirname(path: str) -> str:
    """Directory part of a query; a trailing ``/`` means the query *is* one."""
    if not path:
        return ""
    if path.endswith("/"):
        return path
    return os.path.dirname(path)


def basename(path: str) -> str:
    """File part of a query; empty when the query ends with ``/``."""
    if not path or path.endswith("/"):
        return ""
    return os.path.basename(path)


def expand_tilde(path: str) -> str:
    """Replace a leading ``~`` with ``$HOME``."""
    if path.startswith("~"):
        return getenv("HOME") + path[1:]
    return path


def _normalise_directory(path: str) -> str:
    return os.path.join(os.path.normpath(path), "")


def _list_directory(directory: str, listdir: Callable[[str], List[str]]) -> List[str]:
    try:
        return list(listdir(directory))
    except OSError as exc:
        logger.debug("Cannot list %s: %s", directory, exc)
        return []


# -----------------
# Filesystem
# -----------------

def _file_matcher(display: str):
    def matching_function(query: str):
        # Only the component after the last "/" is compared.
        return match_in_word("/", lambda word: substring_match(display, word), query)
    return matching_function


def files(
    root: str,
    filter: Optional[Callable[[str], bool]] = None,
    listdir: Callable[[str], List[str]] = os.listdir,
) -> Source[FilesState]:
    """List the directory named by the query, relative to ``root``.

    Parameters
    ----------
    root : str
        Directory that relative queries are resolved against.
    filter : callable, optional
        Predicate on the absolute path; entries it rejects are skipped.
    listdir : callable, default os.listdir
        Directory reader, replaceable for tests.

    Notes
    -----
    State is ``(last_directory, last_candidates)``. Directories are
    normalised with a trailing ``/``, so ``sub/`` and ``sub/n`` share one
    entry: while the user keeps typing inside the same directory the cached
    list is returned as is and the directory is not read again. An empty
    listing is never cached.
    """
    root = _normalise_directory(root)

    def compute(state: FilesState, before: str, _after: str) -> Tuple[FilesState, List[Candidate]]:
        old_directory, cache = state
        query = expand_tilde(before)
        if query.startswith("/"):
            directory = dirname(query)
        else:
            directory = os.path.join(root, dirname(query))
        directory = _normalise_directory(directory)

        if directory == old_directory and cache:
            logger.debug("Directory cache hit: %s", directory)
            return state, cache

        candidates: List[Candidate] = []
        for name in _list_directory(directory, listdir):
            abs_path = os.path.join(directory, name)
            if filter is not None and not filter(abs_path):
                continue
            if os.path.isdir(abs_path):
                real, display = abs_path + "/", name + "/"
            else:
                real, display = abs_path, name
            candidates.append(
                make_candidate(
                    display,
                    real=real,
                    completion=real,
                    doc=abs_path,
                    matching_function=_file_matcher(display),
                )
            )
        return (directory, candidates), candidates

    return Source((root, []), compute, name=f"files({root})")


# -----------------
# Lists
# -----------------

def _candidate_from_entry(entry: Entry) -> Candidate:
    display, real, doc = entry
    return make_candidate(display, real=real, doc=doc)


def from_list_lazy(thunk: Callable[[], Sequence[Entry]]) -> Source[None]:
    """A list source whose ``(display, real, doc)`` entries are built on first use.

    ``thunk`` runs at most once; the resulting candidates are reused for
    the lifetime of the source.
    """

    @functools.lru_cache(maxsize=None)
    def candidates() -> List[Candidate]:
        return [_candidate_from_entry(entry) for entry in thunk()]

    def compute(state: None, _before: str, _after: str) -> Tuple[None, List[Candidate]]:
        return state, candidates()

    return Source(None, compute, name="list")


def from_list(items: Iterable[Entry]) -> Source[None]:
    """A list source over ``(display, real, doc)`` triples."""
    entries = list(items)
    return from_list_lazy(lambda: entries)


def from_strings_lazy(thunk: Callable[[], Sequence[str]]) -> Source[None]:
    """Like :func:`from_list_lazy` for plain strings (display == real)."""
    return from_list_lazy(lambda: [(s, s, "") for s in thunk()])


def from_strings(items: Iterable[str]) -> Source[None]:
    strings = list(items)
    return from_strings_lazy(lambda: strings)


def from_list_rev(items: Iterable[Entry]) -> Source[None]:
    """Like :func:`from_list` with the entries in reverse order."""
    entries = list(items)
    entries.reverse()
    return from_list(entries)


def from_strings_rev(items: Iterable[str]) -> Source[None]:
    return from_list_rev((s, s, "") for s in items)


# -----------------
# Line streams
# -----------------

def _split_line(line: str, sep: Optional[str]) -> Entry:
    if sep is None:
        return line, line, ""
    display, found, real = line.partition(sep)
    if not found:
        return line, line, ""
    return display, real, ""


def stdin(sep: Optional[str] = None, stream: Optional[TextIO] = None) -> Source[None]:
    """Read every line of ``stream`` (default ``sys.stdin``) now and list them.

    With ``sep`` each line is split at its first occurrence into
    ``display`` and ``real``; lines without it are used whole for both.
    """
    stream = sys.stdin if stream is None else stream
    lines = [line.rstrip("\r\n") for line in stream]
    logger.debug("Read %d line(s) from input stream", len(lines))
    return from_list([_split_line(line, sep) for line in lines])


# -----------------
# Executables
# -----------------

def _executables_in(directory: str) -> List[Tuple[str, str]]:
    """Entries of ``directory`` with the others-execute bit set."""
    found: List[Tuple[str, str]] = []
    for name in _list_directory(directory, os.listdir):
        full_path = os.path.join(directory, name)
        try:
            mode = os.stat(full_path).st_mode
        except OSError:
            # Broken symlink or vanished entry.
            continue
        if mode & stat.S_IXOTH:
            found.append((name, full_path))
    return found


def scan_search_path(search_path: str) -> List[Entry]:
    """Executables of every directory in a ``:``-separated path, sorted by name."""
    found: List[Tuple[str, str]] = []
    for directory in search_path.split(":"):
        found.extend(_executables_in(directory))
    found.sort(key=lambda item: item[0].lower())
    logger.debug("Found %d executable(s) on search path", len(found))
    return [(name, full_path, "") for name, full_path in found]


def binaries(search_path: Optional[str] = None) -> Source[None]:
    """Executables reachable from ``search_path`` (default ``$PATH``).

    The scan runs once, on the first ``compute``; the list does not follow
    later changes to the path or its directories.
    """
    return from_list_lazy(lambda: scan_search_path(getenv("PATH") if search_path is None else search_path))
