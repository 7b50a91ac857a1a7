"""Exception hierarchy for cmdkit.

Covers programming and configuration mistakes only: bad command names,
objects that cannot act as handlers, handlers that return something other
than a CommandResult, and invalid settings. I/O failures from the input
source or output sink are never wrapped; they surface as the original
OSError so callers see the underlying cause.
"""

from typing import Any, Optional


class CmdkitError(Exception):
    """Base exception for all cmdkit errors.

    Attributes:
        message: Human-readable error description.
        module: Originating module name (e.g. "registry").
        context: Arbitrary key-value pairs for structured logging.
    """

    def __init__(
        self,
        message: str = "",
        *,
        module: Optional[str] = None,
        **context: Any,
    ) -> None:
        self.message = message
        self.module = module
        self.context = context
        super().__init__(message)

    def __str__(self) -> str:
        parts = [self.message or self.__class__.__name__]
        if self.module:
            parts.append(f"[module={self.module}]")
        if self.context:
            ctx = ", ".join(f"{k}={v}" for k, v in self.context.items())
            parts.append(f"({ctx})")
        return " ".join(parts)

    def __repr__(self) -> str:
        cls = self.__class__.__name__
        return f"{cls}({self.message!r}, module={self.module!r})"


# ---------------------------------------------------------------------------
# Registry / handler exceptions
# ---------------------------------------------------------------------------

class InvalidCommandNameError(CmdkitError, ValueError):
    """A command name that the tokenizer could never produce.

    Attributes:
        name: The rejected name.
    """

    def __init__(
        self,
        message: str = "",
        *,
        name: Optional[str] = None,
        module: Optional[str] = None,
        **context: Any,
    ) -> None:
        self.name = name
        super().__init__(message, module=module or "registry", name=name, **context)


class InvalidHandlerError(CmdkitError, TypeError):
    """Object registered as a handler is neither a CommandHandler nor callable."""

    def __init__(
        self,
        message: str = "",
        *,
        module: Optional[str] = None,
        **context: Any,
    ) -> None:
        super().__init__(message, module=module or "command_handler", **context)


class InvalidHandlerResultError(CmdkitError, TypeError):
    """A handler returned something other than a CommandResult.

    Attributes:
        command: Name the handler was dispatched under.
    """

    def __init__(
        self,
        message: str = "",
        *,
        command: Optional[str] = None,
        module: Optional[str] = None,
        **context: Any,
    ) -> None:
        self.command = command
        super().__init__(message, module=module or "cmd", command=command, **context)


# ---------------------------------------------------------------------------
# Configuration exceptions
# ---------------------------------------------------------------------------

class ConfigurationError(CmdkitError):
    """Invalid or missing configuration.

    Attributes:
        setting_name: Dotted path of the offending setting (if known).
    """

    def __init__(
        self,
        message: str = "",
        *,
        setting_name: Optional[str] = None,
        module: Optional[str] = None,
        **context: Any,
    ) -> None:
        self.setting_name = setting_name
        super().__init__(message, module=module or "config", **context)
