# linecomp_shell/constants.py
"""
Shared constants for the linecomp demo shell.

Public API
----------
- EXIT_COMMANDS: Inputs that end the session.
- CUSTOM_PROMPT_HTML: Prompt markup for prompt_toolkit.
- PROMPT_STYLE: Style rules for the completion menu.
"""

from __future__ import annotations

from typing import Dict, Final, FrozenSet

__all__ = ["EXIT_COMMANDS", "CUSTOM_PROMPT_HTML", "PROMPT_STYLE"]

EXIT_COMMANDS: Final[FrozenSet[str]] = frozenset({"exit", "quit"})

# Prompt (HTML) used by prompt_toolkit.
CUSTOM_PROMPT_HTML: Final[str] = (
    "<ansicyan><b>linecomp</b></ansicyan> "
    "<ansibrightwhite>⮞</ansibrightwhite> "
)

# ``completion-match`` is the class SourceCompleter puts on matched spans.
PROMPT_STYLE: Final[Dict[str, str]] = {
    "completion-menu.completion": "bg:#333333 #ffffff",
    "completion-menu.completion.current": "bg:#00aa00 #000000",
    "completion-menu.meta.completion": "bg:#333333 #888888",
    "completion-match": "bold #ffaf00",
}
