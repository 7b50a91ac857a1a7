"""cmdkit - line-oriented command interpreters.

Register named handlers on a Cmd and run it against any pair of text
streams:

    import sys
    from cmdkit import Cmd, CommandResult, Quit

    def greet(output, args):
        output.write("Hello there!")
        return CommandResult.CONTINUE

    cmd = Cmd(sys.stdin, sys.stdout)
    cmd.add_cmd_fn("greet", greet)
    cmd.add_cmd("quit", Quit())
    cmd.run()
"""

import logging

__version__ = "0.3.0"

from .cmd import DEFAULT_PROMPT, Cmd
from .command_handler import CommandHandler, CommandResult, FunctionHandler, as_handler
from .handlers import Quit
from .parsing import split_args, split_command, tokenize
from .registry import HandlerRegistry

# Silent until the application calls setup_logging()
logging.getLogger("cmdkit").addHandler(logging.NullHandler())

__all__ = [
    "Cmd",
    "CommandHandler",
    "CommandResult",
    "DEFAULT_PROMPT",
    "FunctionHandler",
    "HandlerRegistry",
    "Quit",
    "as_handler",
    "split_args",
    "split_command",
    "tokenize",
]
