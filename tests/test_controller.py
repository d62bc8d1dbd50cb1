import io
import logging
import os
from pathlib import Path

import pytest

from eshell import InteractiveSession, SessionContext, Shell
from eshell.controller import MAX_CONSECUTIVE_READ_ERRORS
from eshell.exceptions import StartupError
from eshell.terminal import RawTerminal


class FakeTerminal:
    def __init__(self) -> None:
        self.entered = 0
        self.restored = 0

    def enter(self) -> None:
        self.entered += 1

    def restore(self) -> None:
        self.restored += 1


def make_session(tmp_path, monkeypatch, data: bytes):
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.chdir(tmp_path)
    shell = Shell(
        SessionContext.start(home=home),
        stdout=io.StringIO(),
        stderr=io.StringIO(),
        prompt_factory=lambda: "$ ",
    )
    read_fd, write_fd = os.pipe()
    os.write(write_fd, data)
    os.close(write_fd)
    session = InteractiveSession(shell, fd=read_fd, output=io.StringIO())
    session.terminal = FakeTerminal()
    return session


def test_exit_returns_zero_and_restores(tmp_path, monkeypatch):
    session = make_session(tmp_path, monkeypatch, b"echo hi > out\nexit\n")
    assert session.run() == 0
    assert session.terminal.entered == 1
    assert session.terminal.restored == 1
    assert (tmp_path / "out").read_text() == "hi\n"


def test_end_of_input_returns_one_and_restores(tmp_path, monkeypatch):
    session = make_session(tmp_path, monkeypatch, b"echo hi > out\n")
    assert session.run() == 1
    assert session.terminal.restored == 1


def test_blank_lines_reprompt(tmp_path, monkeypatch):
    session = make_session(tmp_path, monkeypatch, b"\n   \nexit\n")
    assert session.run() == 0
    assert session.editor.output.getvalue().count("$ ") == 3


def test_command_errors_do_not_end_session(tmp_path, monkeypatch):
    session = make_session(tmp_path, monkeypatch, b"cd missing\nno-such-command-eshell\nexit\n")
    assert session.run() == 0
    errors = session.shell.stderr.getvalue()
    assert "missing" in errors
    assert "no-such-command-eshell" in errors


def test_read_errors_are_logged_and_loop_continues(tmp_path, monkeypatch, caplog):
    session = make_session(tmp_path, monkeypatch, b"")
    replies = iter([OSError("flaky read"), "exit"])

    def fake_read_line(prompt: str) -> str:
        reply = next(replies)
        if isinstance(reply, Exception):
            raise reply
        return reply

    monkeypatch.setattr(session.editor, "read_line", fake_read_line)
    with caplog.at_level(logging.ERROR, logger="eshell"):
        assert session.run() == 0
    assert "flaky read" in caplog.text
    assert session.terminal.restored == 1


def test_persistent_read_errors_end_session(tmp_path, monkeypatch):
    session = make_session(tmp_path, monkeypatch, b"")
    attempts = []

    def hung_up(prompt: str) -> str:
        attempts.append(prompt)
        raise OSError(5, "Input/output error")

    monkeypatch.setattr(session.editor, "read_line", hung_up)
    assert session.run() == 1
    assert len(attempts) == MAX_CONSECUTIVE_READ_ERRORS
    assert session.terminal.restored == 1


def test_successful_read_resets_error_count(tmp_path, monkeypatch):
    session = make_session(tmp_path, monkeypatch, b"")
    flaky = [OSError("flaky")] * (MAX_CONSECUTIVE_READ_ERRORS - 1)
    replies = iter([*flaky, "", *flaky, "exit"])

    def fake_read_line(prompt: str) -> str:
        reply = next(replies)
        if isinstance(reply, Exception):
            raise reply
        return reply

    monkeypatch.setattr(session.editor, "read_line", fake_read_line)
    assert session.run() == 0


def test_unexpected_exception_still_restores(tmp_path, monkeypatch):
    session = make_session(tmp_path, monkeypatch, b"")

    def boom(prompt: str) -> str:
        raise RuntimeError("boom")

    monkeypatch.setattr(session.editor, "read_line", boom)
    with pytest.raises(RuntimeError):
        session.run()
    assert session.terminal.restored == 1


def test_prompt_tracks_working_directory(tmp_path, monkeypatch):
    session = make_session(tmp_path, monkeypatch, b"cd\nexit\n")
    session.shell.prompt_factory = lambda: f"{Path.cwd().name}$ "
    session.shell.refresh_prompt()
    assert session.run() == 0
    output = session.editor.output.getvalue()
    assert f"{tmp_path.name}$ " in output
    assert "home$ " in output


def test_non_tty_input_is_a_startup_error(tmp_path, monkeypatch):
    session = make_session(tmp_path, monkeypatch, b"exit\n")
    session.terminal = RawTerminal(session.fd)
    with pytest.raises(StartupError):
        session.run()
