# linecomp/cli.py
"""
linecomp command-line interface.

Commands
--------
- ``complete``: run one completion step for a line and print the candidates.
- ``word``: show how a line is split around the cursor.
- ``shell``: start the interactive prompt_toolkit demo shell.

The cursor is given implicitly: ``BEFORE`` is the text left of it and the
optional ``AFTER`` the text right of it.
"""

from __future__ import annotations

from dataclasses import replace
from typing import List, Optional, Tuple

import click
from rich.console import Console
from rich.table import Table
from rich.text import Text

from .candidate import Candidate
from .config import ConfigNotFoundError, ConfigParseError, Settings, load_settings
from .log_manager import get_logger, set_level
from .matching import Spans, highlighted_text
from .presets import PRESETS, build_source
from .source import initialize
from .words import get_word

logger = get_logger(__name__)

MATCH_STYLE = "bold green"


def _highlight(display: str, spans: Optional[Spans]) -> Text:
    """Render ``display`` with matched spans emphasised."""
    if not spans:
        return Text(display)
    text = Text()
    for is_match, piece in highlighted_text(display, spans):
        text.append(piece, style=MATCH_STYLE if is_match else None)
    return text


def _select(
    candidates: List[Candidate], query: str, show_all: bool, limit: int
) -> List[Tuple[Candidate, Optional[Spans]]]:
    selected: List[Tuple[Candidate, Optional[Spans]]] = []
    for candidate in candidates:
        spans = candidate.matches(query)
        if spans is None and not show_all:
            continue
        selected.append((candidate, spans))
        if len(selected) >= limit:
            break
    return selected


@click.group()
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="YAML settings file (default: $LINECOMP_CONFIG or ~/.config/linecomp/config.yaml).",
)
@click.option("--log-level", default=None, help="Override the log level (DEBUG, INFO, ...).")
@click.pass_context
def cli(ctx: click.Context, config_path: Optional[str], log_level: Optional[str]) -> None:
    """
    linecomp: shell-style completion from composable sources.

    Tip: quote the line halves, e.g. `linecomp complete "ls ./sr"`.
    """
    try:
        settings = load_settings(config_path)
    except (ConfigNotFoundError, ConfigParseError) as exc:
        raise click.ClickException(str(exc)) from exc

    try:
        set_level(log_level or settings.log_level, log_to_file=settings.log_file)
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint="--log-level") from exc

    ctx.obj = settings


@cli.command("complete")
@click.argument("before")
@click.argument("after", required=False, default="")
@click.option(
    "--source",
    "source_name",
    type=click.Choice(list(PRESETS.keys())),
    default="shell",
    show_default=True,
    help="Which source composition to run.",
)
@click.option(
    "--sep",
    "separator",
    default=None,
    help="Command separator for the shell preset (default: command_separator setting).",
)
@click.option(
    "--all/--matching",
    "show_all",
    default=False,
    help="Show every candidate, or only those matching the typed text.",
)
@click.option("--limit", type=int, default=None, help="Maximum rows (default: max_candidates setting).")
@click.pass_obj
def complete(
    settings: Settings,
    before: str,
    after: str,
    source_name: str,
    separator: Optional[str],
    show_all: bool,
    limit: Optional[int],
) -> None:
    """Complete the line BEFORE|AFTER and print the candidates."""
    if separator is not None:
        if len(separator) != 1:
            raise click.BadParameter("must be a single character", param_hint="--sep")
        settings = replace(settings, command_separator=separator)
    session = initialize(build_source(source_name, settings))
    candidates = session.complete(before, after)
    rows = _select(candidates, before, show_all, limit or settings.max_candidates)
    logger.debug("%d candidate(s), %d shown", len(candidates), len(rows))

    console = Console()
    if not rows:
        console.print(Text("No candidates.", style="yellow"))
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("display")
    table.add_column("line after completion")
    table.add_column("doc", style="dim")
    for candidate, spans in rows:
        new_before, new_after = candidate.apply(before, after)
        table.add_row(_highlight(candidate.display, spans), new_before + new_after, candidate.doc)
    console.print(table)


@cli.command("word")
@click.argument("separator")
@click.argument("before")
@click.argument("after", required=False, default="")
@click.option("--once", is_flag=True, help="Split on the first separator only.")
def word(separator: str, before: str, after: str, once: bool) -> None:
    """Show the word under the cursor for BEFORE|AFTER split on SEPARATOR."""
    if len(separator) != 1:
        raise click.BadParameter("must be a single character", param_hint="SEPARATOR")
    w = get_word(separator, before, after, once=once)
    click.echo(f"word:          {w.word!r}")
    click.echo(f"index:         {w.index}")
    click.echo(f"index_inside:  {w.index_inside}")
    click.echo(f"before_inside: {w.before_inside!r}")
    click.echo(f"after_inside:  {w.after_inside!r}")
    click.echo(f"before:        {w.before!r}")
    click.echo(f"after:         {w.after!r}")


@cli.command("shell")
@click.pass_obj
def shell(settings: Settings) -> None:
    """Start the interactive demo shell (Tab completes, Ctrl-D quits)."""
    from linecomp_shell.app import main as shell_main

    shell_main(settings)


if __name__ == "__main__":  # pragma: no cover
    cli()
