# tests/test_linecomp_shell/test_app.py
"""
Hermetic tests for linecomp_shell.app.

The prompt session and the rich console are replaced with recording stubs;
no terminal is needed.
"""

from __future__ import annotations

from typing import Any, Iterable, List

import pytest
from prompt_toolkit import PromptSession
from prompt_toolkit.application import create_app_session
from prompt_toolkit.input import create_pipe_input
from prompt_toolkit.output import DummyOutput
from rich.text import Text

from linecomp.config import Settings
from linecomp_shell import app as sut
from linecomp_shell.completers import SourceCompleter


class DummyConsole:
    """Records the plain text of everything printed."""

    def __init__(self) -> None:
        self.output: List[str] = []

    def print(self, obj: Any) -> None:
        self.output.append(obj.plain if isinstance(obj, Text) else str(obj))


class SessionStub:
    """Returns scripted inputs; exceptions in the script are raised."""

    def __init__(self, inputs: Iterable[Any]) -> None:
        self._inputs = list(inputs)
        self.prompts = 0

    def prompt(self, _message: Any) -> str:
        self.prompts += 1
        item = self._inputs.pop(0)
        if isinstance(item, BaseException):
            raise item
        return item


@pytest.fixture
def console(monkeypatch):
    dummy = DummyConsole()
    monkeypatch.setattr(sut, "console", dummy)
    return dummy


def test_build_completer_uses_shell_preset():
    completer = sut.build_completer(Settings())
    assert isinstance(completer, SourceCompleter)
    assert completer.session.source.name.startswith("concat")


def test_build_session_wires_completer():
    completer = sut.build_completer(Settings())
    with create_pipe_input() as pipe, create_app_session(input=pipe, output=DummyOutput()):
        session = sut.build_session(completer)
    assert isinstance(session, PromptSession)
    assert session.completer is completer


def test_lines_are_echoed_until_eof(console):
    session = SessionStub(["ls ./src", "", "   ", EOFError()])
    sut.main(Settings(), session=session)

    assert "ls ./src" in console.output
    assert console.output[-1] == "Bye."
    assert session.prompts == 4


@pytest.mark.parametrize("command", ["exit", "quit", "  quit  "])
def test_exit_commands_stop_the_loop(console, command):
    session = SessionStub([command, "never read"])
    sut.main(Settings(), session=session)
    assert session.prompts == 1
    assert console.output[-1] == "Bye."


def test_ctrl_c_stops_the_loop(console):
    session = SessionStub([KeyboardInterrupt()])
    sut.main(Settings(), session=session)
    assert console.output[-1] == "Bye."


def test_completer_is_reset_after_each_line(console, monkeypatch):
    resets = []
    monkeypatch.setattr(SourceCompleter, "reset", lambda self: resets.append(1))
    sut.main(Settings(), session=SessionStub(["a", "b", EOFError()]))
    assert len(resets) == 2


def test_settings_default_to_load_settings(console, monkeypatch):
    loaded = []

    def fake_load():
        loaded.append(1)
        return Settings()

    monkeypatch.setattr(sut, "load_settings", fake_load)
    sut.main(session=SessionStub([EOFError()]))
    assert loaded == [1]
