"""Ready-to-use handlers shipped with cmdkit."""

from typing import Sequence, TextIO

from .command_handler import CommandHandler, CommandResult


class Quit(CommandHandler):
    """Ends the dispatch loop. Writes nothing and ignores its arguments."""

    def execute(self, output: TextIO, args: Sequence[str]) -> CommandResult:
        return CommandResult.STOP

    def __repr__(self) -> str:
        return "Quit()"
