"""Dispatch loop for cmdkit.

Cmd reads one line at a time from its input stream, splits it into a
command name and arguments, and runs the matching handler against its
output stream until a handler returns CommandResult.STOP or the input
runs out.

    (cmd) greet Ada         -> registry.get("greet").execute(out, ["Ada"])
    (cmd) bogus             -> "No command bogus\\n"
    (cmd) quit              -> Quit returns STOP, run() returns

Any OSError raised while writing the prompt, flushing, reading, writing
a diagnostic, or inside a handler propagates out of run() unchanged.
"""

from typing import Any, Optional, TextIO

from .command_handler import CommandResult, CommandHandler, HandlerFunc
from .exceptions import InvalidHandlerResultError
from .logging_config import get_logger
from .parsing import tokenize
from .registry import HandlerRegistry

logger = get_logger("cmdkit.loop")

DEFAULT_PROMPT = "(cmd) "
UNKNOWN_COMMAND = "No command {command}\n"


class Cmd:
    """Line-oriented command interpreter.

    Args:
        stdin: Source with a ``readline()`` method (sys.stdin, a file,
            io.StringIO).
        stdout: Sink with ``write()`` and ``flush()`` methods.
        prompt: Text written before every read, without a newline.
        registry: Optional pre-built registry. A fresh one is created
            when omitted.
    """

    def __init__(
        self,
        stdin: TextIO,
        stdout: TextIO,
        prompt: str = DEFAULT_PROMPT,
        registry: Optional[HandlerRegistry] = None,
    ):
        self.stdin = stdin
        self.stdout = stdout
        self.prompt = prompt
        self._registry = registry if registry is not None else HandlerRegistry()

    @property
    def registry(self) -> HandlerRegistry:
        return self._registry

    def add_cmd(self, name: str, handler: Any) -> None:
        """Register a handler. Existing names are kept, with a warning on stdout."""
        self._registry.register(name, handler, self.stdout)

    def add_cmd_fn(self, name: str, fn: HandlerFunc) -> None:
        """Register a plain function or closure ``fn(output, args)``."""
        self._registry.register(name, fn, self.stdout)

    def get_cmd(self, name: str) -> Optional[CommandHandler]:
        return self._registry.get(name)

    def run(self) -> None:
        """Start the command interpreter.

        Returns once a handler returns CommandResult.STOP or the input
        stream reaches end-of-file. Blank lines re-prompt silently.
        """
        while True:
            # flush so the user types on the same line as the prompt
            self.stdout.write(self.prompt)
            self.stdout.flush()

            line = self.stdin.readline()
            if line == "":
                logger.info("input_exhausted")
                break

            command, args = tokenize(line)
            if not command:
                continue

            handler = self._registry.get(command)
            if handler is None:
                logger.debug("command_unknown", command=command)
                self.stdout.write(UNKNOWN_COMMAND.format(command=command))
                continue

            logger.debug("command_dispatched", command=command, args=args)
            result = handler.execute(self.stdout, args)
            if self._should_stop(command, result):
                break

        logger.info("loop_stopped")

    @staticmethod
    def _should_stop(command: str, result: Any) -> bool:
        if result is None or result is CommandResult.CONTINUE:
            return False
        if result is CommandResult.STOP:
            return True
        raise InvalidHandlerResultError(
            "Handler must return a CommandResult",
            command=command,
            result_type=type(result).__name__,
        )
