"""Tests for the handler capability and the Quit handler."""

import io

import pytest

from cmdkit.command_handler import (
    CommandHandler,
    CommandResult,
    FunctionHandler,
    as_handler,
)
from cmdkit.exceptions import InvalidHandlerError
from cmdkit.handlers import Quit


class Counter(CommandHandler):
    def __init__(self):
        self.calls = 0

    def execute(self, output, args):
        self.calls += 1
        output.write(f"{self.calls}\n")
        return CommandResult.CONTINUE


def test_command_handler_is_abstract():
    with pytest.raises(TypeError):
        CommandHandler()


def test_handler_may_keep_state():
    counter = Counter()
    out = io.StringIO()
    counter.execute(out, [])
    counter.execute(out, [])
    assert out.getvalue() == "1\n2\n"


@pytest.mark.parametrize("args", [[], ["now"], ["a", "b", "c"]])
def test_quit_returns_stop_and_writes_nothing(args):
    out = io.StringIO()
    assert Quit().execute(out, args) is CommandResult.STOP
    assert out.getvalue() == ""


def test_quit_never_touches_output():
    class Untouchable:
        def write(self, s):
            raise AssertionError("Quit must not write")

        def flush(self):
            raise AssertionError("Quit must not flush")

    assert Quit().execute(Untouchable(), ["x"]) is CommandResult.STOP


def test_function_handler_calls_wrapped_function():
    seen = []

    def fn(output, args):
        seen.append(list(args))
        output.write("ok")
        return CommandResult.STOP

    out = io.StringIO()
    handler = FunctionHandler(fn)
    assert handler.execute(out, ["a"]) is CommandResult.STOP
    assert seen == [["a"]]
    assert out.getvalue() == "ok"


def test_as_handler_passes_handlers_through():
    q = Quit()
    assert as_handler(q) is q


def test_as_handler_wraps_lambdas():
    handler = as_handler(lambda output, args: CommandResult.CONTINUE)
    assert isinstance(handler, FunctionHandler)


def test_as_handler_rejects_non_callables():
    with pytest.raises(InvalidHandlerError) as exc_info:
        as_handler("not a handler")
    assert isinstance(exc_info.value, TypeError)
    assert "handler_type=str" in str(exc_info.value)
