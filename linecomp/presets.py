# linecomp/presets.py
"""
Ready-made source compositions used by the CLI and the interactive shell.

Each preset is a builder taking :class:`~linecomp.config.Settings` and
returning a fresh :class:`~linecomp.source.Source`. Builders are cheap: list
sources defer their scans to the first ``compute``.
"""

from __future__ import annotations

import os
from typing import Any, Callable, Dict, Optional

from .combinators import concat, kleene, paths
from .config import Settings
from .source import Source
from .sources import binaries, stdin

__all__ = ["PRESETS", "hidden_filter", "build_source"]


def hidden_filter(settings: Settings) -> Optional[Callable[[str], bool]]:
    """Return a filter dropping dot-entries, or None when hidden files are shown."""
    if settings.show_hidden:
        return None
    return lambda path: not os.path.basename(path.rstrip("/")).startswith(".")


def _paths(settings: Settings) -> Source[Any]:
    return paths(filter=hidden_filter(settings))


def _shell(settings: Settings) -> Source[Any]:
    """Command name first, then any number of path arguments."""
    sep = settings.command_separator
    return concat(sep, binaries(), kleene(sep, _paths(settings)))


def _stdin(settings: Settings) -> Source[Any]:
    return stdin(sep=settings.stdin_separator)


#: Preset name -> builder. Order is the one shown in ``--help``.
PRESETS: Dict[str, Callable[[Settings], Source[Any]]] = {
    "shell": _shell,
    "paths": _paths,
    "binaries": lambda _settings: binaries(),
    "stdin": _stdin,
}


def build_source(name: str, settings: Settings) -> Source[Any]:
    """Build the preset ``name``; raises ``KeyError`` for unknown names."""
    return PRESETS[name](settings)
