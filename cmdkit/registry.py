"""Command registry for the dispatch loop.

Maps command names to handlers. Names are case-sensitive and matched
exactly. Once a name is registered it is never replaced: a second
registration writes a warning to the output stream and leaves the
original handler in place.
"""

from typing import Any, Dict, Optional, TextIO

from .command_handler import CommandHandler, as_handler
from .exceptions import InvalidCommandNameError
from .logging_config import get_logger

logger = get_logger("cmdkit.registry")

DUPLICATE_WARNING = "Warning: Command with handle {name} already exists."


class HandlerRegistry:
    """Maps command names to CommandHandler instances.

    Each Cmd owns its own registry; there is no process-wide table.
    Accepts CommandHandler instances and plain callables (wrapped in
    FunctionHandler).
    """

    def __init__(self):
        self._handlers: Dict[str, CommandHandler] = {}

    def register(self, name: str, handler: Any, output: TextIO) -> None:
        """Register ``handler`` under ``name``.

        Args:
            name: Command name. Must be non-empty and contain no whitespace,
                since the tokenizer can never produce such a name.
            handler: CommandHandler instance or callable ``(output, args)``.
            output: Stream that receives the duplicate-name warning.

        Raises:
            InvalidCommandNameError: If ``name`` is empty or has whitespace.
            InvalidHandlerError: If ``handler`` cannot act as a handler.
            OSError: If writing the duplicate-name warning fails.
        """
        if not isinstance(name, str) or not name or name.split() != [name]:
            raise InvalidCommandNameError(
                "Command name must be a non-empty token without whitespace",
                name=name,
            )
        handler = as_handler(handler)

        if name in self._handlers:
            logger.warning(
                "command_handler_conflict",
                command=name,
                existing=type(self._handlers[name]).__name__,
                rejected=type(handler).__name__,
            )
            output.write(DUPLICATE_WARNING.format(name=name))
            return

        self._handlers[name] = handler
        logger.debug(
            "command_registered",
            command=name,
            handler=type(handler).__name__,
        )

    def get(self, name: str) -> Optional[CommandHandler]:
        """Look up a handler by exact name."""
        return self._handlers.get(name)

    @property
    def command_names(self) -> frozenset:
        """All registered command names."""
        return frozenset(self._handlers.keys())

    def __contains__(self, name: object) -> bool:
        return name in self._handlers

    def __len__(self) -> int:
        return len(self._handlers)
