# linecomp_shell/app.py
"""
Interactive linecomp demo shell.

Responsibilities
----------------
- Run a prompt_toolkit session whose Tab completion is driven by the
  ``shell`` preset: a command from ``$PATH`` followed by path arguments.
- Echo every submitted line back through rich. Nothing is executed.
- Start a fresh completion session for every line.
"""

from __future__ import annotations

from typing import Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.formatted_text import HTML
from prompt_toolkit.history import InMemoryHistory
from prompt_toolkit.styles import Style
from rich.console import Console
from rich.text import Text

from linecomp.config import Settings, load_settings
from linecomp.log_manager import get_logger
from linecomp.presets import build_source

from .completers import SourceCompleter
from .constants import CUSTOM_PROMPT_HTML, EXIT_COMMANDS, PROMPT_STYLE

__all__ = ["build_completer", "build_session", "main"]

logger = get_logger("linecomp.shell")
console = Console()


def build_completer(settings: Settings) -> SourceCompleter:
    """Create the completer for the ``shell`` preset."""
    return SourceCompleter(build_source("shell", settings))


def build_session(completer: SourceCompleter) -> PromptSession:
    return PromptSession(
        completer=completer,
        history=InMemoryHistory(),
        style=Style.from_dict(PROMPT_STYLE),
        complete_while_typing=False,
    )


def _goodbye() -> Text:
    return Text("Bye.", style="cyan")


def main(settings: Optional[Settings] = None, session: Optional[PromptSession] = None) -> None:
    """Run the interactive loop until EOF, Ctrl-C or an exit command."""
    settings = settings or load_settings()
    completer = build_completer(settings)
    session = session or build_session(completer)
    prompt = HTML(CUSTOM_PROMPT_HTML)

    console.print(Text("Tab completes commands and paths. Ctrl-D quits.", style="yellow"))
    while True:
        try:
            line = session.prompt(prompt)
        except (EOFError, KeyboardInterrupt):
            console.print(_goodbye())
            break

        completer.reset()
        line = (line or "").strip()
        if not line:
            continue
        if line in EXIT_COMMANDS:
            console.print(_goodbye())
            break

        logger.info("Accepted line: %r", line)
        console.print(Text(line, style="bold"))
