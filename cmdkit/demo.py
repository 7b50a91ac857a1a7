"""Example handlers for the ``cmdkit`` console script.

Handles: help, greet, touch. Together with Quit these make up the demo
interpreter that main.py runs against stdin/stdout.
"""

from pathlib import Path
from typing import Optional, Sequence, TextIO

from .cmd import Cmd
from .command_handler import CommandHandler, CommandResult
from .handlers import Quit
from .logging_config import get_logger
from .registry import HandlerRegistry

logger = get_logger("cmdkit.handlers")


class Help(CommandHandler):
    """Lists the commands registered on a registry."""

    def __init__(self, registry: HandlerRegistry):
        self.registry = registry

    def execute(self, output: TextIO, args: Sequence[str]) -> CommandResult:
        names = ", ".join(sorted(self.registry.command_names))
        output.write("Help message\n")
        output.write(f"Commands: {names}\n")
        return CommandResult.CONTINUE


def greet(output: TextIO, args: Sequence[str]) -> CommandResult:
    """Greets the names given as arguments, or a stranger."""
    if not args:
        output.write("Hello there, stranger!\n")
    else:
        output.write(f"Hello there, {' '.join(args)}\n")
    return CommandResult.CONTINUE


class Touch(CommandHandler):
    """Creates an empty file, like the shell ``touch`` command.

    Only the first argument is used. Filesystem errors are reported on
    the output stream and do not stop the loop; errors writing to the
    output stream itself still propagate.

    Args:
        base_dir: Directory relative filenames are resolved against.
            Defaults to the working directory at call time.
    """

    def __init__(self, base_dir: Optional[Path] = None):
        self.base_dir = base_dir

    def execute(self, output: TextIO, args: Sequence[str]) -> CommandResult:
        if not args:
            output.write("Need to specify a filename\n")
            return CommandResult.CONTINUE

        filename = args[0]
        base = self.base_dir if self.base_dir is not None else Path.cwd()
        path = base / filename
        try:
            path.touch()
        except OSError as e:
            logger.warning("touch_failed", path=str(path), error=str(e))
            output.write(f"Could not create file: {filename}\n")
        else:
            output.write(f"Created file: {path}\n")
        return CommandResult.CONTINUE


def build_demo_cmd(stdin: TextIO, stdout: TextIO, config) -> Cmd:
    """Wire the demo handlers and the configured quit names onto a Cmd."""
    cmd = Cmd(stdin, stdout, prompt=config.prompt)
    cmd.add_cmd("help", Help(cmd.registry))
    cmd.add_cmd_fn("greet", greet)
    cmd.add_cmd("touch", Touch(config.touch_base_dir))
    quit_handler = Quit()
    for name in config.quit_commands:
        cmd.add_cmd(name, quit_handler)
    return cmd
