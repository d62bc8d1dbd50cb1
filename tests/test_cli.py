import json
import logging
import os
import sys

import pytest

from eshell.cli import main


@pytest.fixture
def home(tmp_path, monkeypatch):
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(tmp_path)
    yield home
    logging.getLogger("eshell").handlers.clear()
    logging.getLogger("eshell").setLevel(logging.NOTSET)


def test_cli_exec_outputs(home, capfd):
    with pytest.raises(SystemExit) as exc:
        main(["exec", "echo hi | cat"])
    assert exc.value.code == 0
    captured = capfd.readouterr()
    assert "hi" in captured.out


def test_cli_exec_creates_default_alias_store(home):
    with pytest.raises(SystemExit):
        main(["exec", "true"])
    assert json.loads((home / ".eshrc").read_text()) == {"ll": "ls -la"}


def test_cli_exec_uses_custom_rc(home, tmp_path, capfd):
    rc = tmp_path / "aliases.json"
    rc.write_text(json.dumps({"hello": "echo hello from rc"}))
    with pytest.raises(SystemExit) as exc:
        main(["exec", "--rc", str(rc), "hello"])
    assert exc.value.code == 0
    assert "hello from rc" in capfd.readouterr().out


def test_cli_exec_reports_failure_status(home, capfd):
    with pytest.raises(SystemExit) as exc:
        main(["exec", "no-such-command-eshell"])
    assert exc.value.code == 1
    assert "no-such-command-eshell" in capfd.readouterr().err


def test_cli_bad_alias_store_is_fatal(home, capfd):
    (home / ".eshrc").write_text("not json")
    with pytest.raises(SystemExit) as exc:
        main(["exec", "true"])
    assert exc.value.code == 1
    assert ".eshrc" in capfd.readouterr().err


def test_cli_shell_without_tty_exits_one(home, monkeypatch, capfd):
    with open(os.devnull) as devnull:
        monkeypatch.setattr(sys, "stdin", devnull)
        with pytest.raises(SystemExit) as exc:
            main(["shell"])
    assert exc.value.code == 1
    assert "eshell:" in capfd.readouterr().err


def test_cli_rejects_unknown_log_level(home):
    with pytest.raises(SystemExit) as exc:
        main(["exec", "--log-level", "chatty", "true"])
    assert exc.value.code == 2
