"""Handler capability for the cmdkit dispatch loop.

Every command implements ``execute(output, args) -> CommandResult``.
Handlers write their results to ``output`` and tell the loop whether to
keep going. Returning ``CommandResult.STOP`` is the only way a handler
ends the loop; handlers must never exit the process themselves.

Key classes:
    CommandResult: Loop-control signal returned by every handler.
    CommandHandler: ABC that command classes implement.
    FunctionHandler: Adapter so plain functions and closures can be
        registered as handlers.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Callable, Optional, Sequence, TextIO

from .exceptions import InvalidHandlerError

# Type alias for function handlers: (output, args) -> CommandResult
HandlerFunc = Callable[[TextIO, Sequence[str]], Optional["CommandResult"]]


class CommandResult(str, Enum):
    """Whether the dispatch loop should keep reading lines."""
    CONTINUE = "continue"
    STOP = "stop"


class CommandHandler(ABC):
    """Base class for all commands.

    Subclasses may keep their own state (a counter, a base directory)
    but must not depend on module-level globals, so several interpreters
    can run side by side.
    """

    @abstractmethod
    def execute(self, output: TextIO, args: Sequence[str]) -> CommandResult:
        """Run the command.

        Args:
            output: Writable text stream for results and diagnostics.
                Write errors must propagate to the caller.
            args: Argument tokens following the command name (may be empty).

        Returns:
            CommandResult.STOP to end the loop, CONTINUE otherwise.
        """
        ...


class FunctionHandler(CommandHandler):
    """Wraps a callable ``fn(output, args)`` as a CommandHandler."""

    def __init__(self, fn: HandlerFunc):
        self.fn = fn

    def execute(self, output: TextIO, args: Sequence[str]) -> CommandResult:
        return self.fn(output, args)

    def __repr__(self) -> str:
        name = getattr(self.fn, "__qualname__", repr(self.fn))
        return f"FunctionHandler({name})"


def as_handler(obj: Any) -> CommandHandler:
    """Return ``obj`` as a CommandHandler, wrapping plain callables.

    Raises:
        InvalidHandlerError: If ``obj`` is neither a handler nor callable.
    """
    if isinstance(obj, CommandHandler):
        return obj
    if callable(obj):
        return FunctionHandler(obj)
    raise InvalidHandlerError(
        "Handler must be a CommandHandler or a callable",
        handler_type=type(obj).__name__,
    )
