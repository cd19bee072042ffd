# tests/conftest.py
from __future__ import annotations

from pathlib import Path
from typing import Callable, List, Tuple

import pytest

from linecomp.candidate import make_candidate
from linecomp.source import Source


# -------------------------
# Global guard
# -------------------------
@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Keep user config, colors and log settings out of every test."""
    for var in (
        "LINECOMP_CONFIG",
        "LINECOMP_LOG_LEVEL",
        "LINECOMP_LOG_FILE",
        "LINECOMP_SHOW_HIDDEN",
        "LINECOMP_MAX_CANDIDATES",
        "LINECOMP_FORCE_COLOR",
    ):
        monkeypatch.delenv(var, raising=False)
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    yield


# -------------------------
# Filesystem fixtures
# -------------------------
@pytest.fixture
def tree(tmp_path) -> Path:
    """
    <tmp>/tree
        alpha.txt
        beta.py
        .hidden
        sub/
            notes.md
            deeper/
    """
    root = tmp_path / "tree"
    root.mkdir()
    (root / "alpha.txt").write_text("a")
    (root / "beta.py").write_text("b")
    (root / ".hidden").write_text("h")
    (root / "sub").mkdir()
    (root / "sub" / "notes.md").write_text("n")
    (root / "sub" / "deeper").mkdir()
    return root


class CountingListdir:
    """Directory reader that records every directory it was asked for."""

    def __init__(self, entries: dict[str, List[str]] | None = None):
        self.calls: List[str] = []
        self.entries = entries

    def __call__(self, directory: str) -> List[str]:
        import os

        self.calls.append(directory)
        if self.entries is None:
            return os.listdir(directory)
        if directory not in self.entries:
            raise FileNotFoundError(directory)
        return list(self.entries[directory])


@pytest.fixture
def counting_listdir() -> CountingListdir:
    return CountingListdir()


# -------------------------
# Recording sources
# -------------------------
@pytest.fixture
def recording_source() -> Callable[..., Tuple[Source, list]]:
    """Factory for a source whose state counts its own compute calls.

    Returns ``(source, calls)``; ``calls`` collects ``(state, before, after)``.
    """

    def _make(name: str = "rec", displays=("xyz",)):
        calls: list = []

        def compute(state, before, after):
            calls.append((state, before, after))
            return state + 1, [make_candidate(d) for d in displays]

        return Source(0, compute, name=name), calls

    return _make
