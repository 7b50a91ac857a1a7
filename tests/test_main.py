"""Tests for the console-script entry point."""

import io
import logging
from unittest.mock import patch

import pytest
import structlog

from cmdkit.main import main, run

from doubles import ReaderAlwaysErr


@pytest.fixture(autouse=True)
def restore_logging(tmp_path, monkeypatch):
    monkeypatch.setenv("CMDKIT_CONFIG_DIR", str(tmp_path))
    root = logging.getLogger()
    saved_handlers = list(root.handlers)
    saved_level = root.level
    yield
    for handler in list(root.handlers):
        if handler not in saved_handlers:
            root.removeHandler(handler)
    root.setLevel(saved_level)
    structlog.reset_defaults()


def test_main_runs_until_quit():
    out = io.StringIO()

    code = main(io.StringIO("greet Ada\nbogus\nquit\n"), out)

    assert code == 0
    assert out.getvalue() == "(cmd) Hello there, Ada\n(cmd) No command bogus\n(cmd) "


def test_main_stops_on_end_of_input():
    out = io.StringIO()
    assert main(io.StringIO("greet\n"), out) == 0
    assert out.getvalue() == "(cmd) Hello there, stranger!\n(cmd) "


def test_main_reads_settings(tmp_path):
    (tmp_path / "settings.yaml").write_text("prompt: '$ '\nquit_commands: [bye]\n")
    out = io.StringIO()

    assert main(io.StringIO("quit\nbye\n"), out) == 0
    assert out.getvalue() == "$ No command quit\n$ "


def test_main_returns_1_on_io_error():
    out = io.StringIO()
    assert main(ReaderAlwaysErr(), out) == 1
    assert out.getvalue() == "(cmd) "


def test_run_exits_with_main_code():
    with patch("cmdkit.main.main", return_value=1):
        with pytest.raises(SystemExit) as exc_info:
            run()
    assert exc_info.value.code == 1


def test_run_handles_keyboard_interrupt():
    with patch("cmdkit.main.main", side_effect=KeyboardInterrupt):
        with pytest.raises(SystemExit) as exc_info:
            run()
    assert exc_info.value.code == 130


def test_main_refuses_invalid_settings(tmp_path):
    (tmp_path / "settings.yaml").write_text("quit_commands: ['two words']\n")
    out = io.StringIO()

    assert main(io.StringIO("quit\n"), out) == 2
    assert out.getvalue() == ""


def test_main_refuses_unreadable_settings(tmp_path):
    (tmp_path / "settings.yaml").write_text("- not\n- a mapping\n")
    assert main(io.StringIO("quit\n"), io.StringIO()) == 2


def test_main_refuses_malformed_settings(tmp_path):
    (tmp_path / "settings.yaml").write_text("prompt: [unclosed\n")
    out = io.StringIO()

    assert main(io.StringIO("quit\n"), out) == 2
    assert out.getvalue() == ""
