"""Logging configuration for cmdkit.

Every cmdkit module logs through ``get_logger``, a structlog logger that
wraps a stdlib logger under the ``cmdkit`` prefix. Until setup_logging()
runs, those records stop at the NullHandler attached in ``cmdkit/__init__``
so a library user's stdout only ever carries the interpreter's own text.

Subsystem hierarchy once setup_logging() has run:
    root              → StreamHandler (stderr)
      └─ cmdkit       → RotatingFileHandler → cmdkit.log (combined)
           ├─ cmdkit.loop     → RFH → loop.log
           ├─ cmdkit.registry → RFH → registry.log
           └─ cmdkit.handlers → RFH → handlers.log
"""

import logging
import logging.handlers
import re
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import structlog

SUBSYSTEMS = ("loop", "registry", "handlers")

LOGGER_PREFIX = "cmdkit"


def get_logger(name: str = LOGGER_PREFIX) -> Any:
    """Return a structlog logger bound to the stdlib logger ``name``."""
    return structlog.wrap_logger(logging.getLogger(name))


# ---------------------------------------------------------------------------
# Argument redaction
# ---------------------------------------------------------------------------

# key=value tokens whose key names a credential
_SECRET_ARG = re.compile(
    r"^(?P<key>[^=\s]*(?:password|passwd|token|secret|key)[^=\s]*)=.+$",
    re.IGNORECASE,
)

_REDACTED = "***REDACTED***"


def _redact_value(value: str) -> str:
    match = _SECRET_ARG.match(value)
    if match:
        return f"{match.group('key')}={_REDACTED}"
    return value


def redact_arguments(
    logger: Any, method_name: str, event_dict: Dict[str, Any]
) -> Dict[str, Any]:
    """structlog processor that masks credential-looking argument tokens.

    Command arguments are logged at debug level; a token such as
    ``password=hunter2`` becomes ``password=***REDACTED***``. Walks
    top-level strings and the items of lists and tuples.
    """
    for key, value in event_dict.items():
        if isinstance(value, str):
            event_dict[key] = _redact_value(value)
        elif isinstance(value, (list, tuple)):
            event_dict[key] = type(value)(
                _redact_value(v) if isinstance(v, str) else v
                for v in value
            )
    return event_dict


# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------

@dataclass
class _LogSettings:
    """Values setup_logging() needs, with the pre-config defaults."""
    level: int = logging.WARNING
    subsystem_levels: Dict[str, str] = field(default_factory=dict)
    log_dir: Optional[Path] = None
    max_bytes: int = 10 * 1024 * 1024
    backup_count: int = 5

    @classmethod
    def from_config(cls, config) -> "_LogSettings":
        return cls(
            level=_level(config.logging_level, logging.WARNING),
            subsystem_levels=dict(config.logging_subsystem_levels),
            log_dir=config.log_dir,
            max_bytes=config.logging_max_file_size_mb * 1024 * 1024,
            backup_count=config.logging_backup_count,
        )

    def level_for(self, subsystem: str) -> int:
        return _level(self.subsystem_levels.get(subsystem), self.level)


def _level(name: Optional[str], default: int) -> int:
    if not name:
        return default
    level = logging.getLevelName(str(name).upper())
    return level if isinstance(level, int) else default


def _usable_log_dir(log_dir: Optional[Path]) -> Optional[Path]:
    """Create ``log_dir``; None (with a stderr notice) if that fails."""
    if log_dir is None:
        return None
    try:
        log_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        print(
            f"WARNING: Cannot create log directory {log_dir}: {exc}. "
            "Falling back to console-only logging.",
            file=sys.stderr,
        )
        return None
    return log_dir


def _file_handler(path: Path, level: int, settings: _LogSettings) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        path,
        maxBytes=settings.max_bytes,
        backupCount=settings.backup_count,
        encoding="utf-8",
    )
    handler.setLevel(level)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.add_logger_name,
                structlog.stdlib.add_log_level,
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                structlog.dev.ConsoleRenderer(colors=False),
            ],
        )
    )
    return handler


def _reset(logger: logging.Logger, level: int) -> None:
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(level)
    logger.propagate = True


def setup_logging(config=None) -> None:
    """Route cmdkit's structlog events through stdlib logging.

    Console output goes to stderr at the configured level; stdout is left
    to the interpreter. With a ``log_dir`` configured, each subsystem also
    gets its own rotating file next to a combined ``cmdkit.log``.

    Args:
        config: Optional Config instance. The first call (before config
            loads) uses defaults and leaves loggers uncached; the second
            call applies the real config and caches loggers.
    """
    settings = _LogSettings.from_config(config) if config is not None else _LogSettings()
    log_dir = _usable_log_dir(settings.log_dir)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)  # handlers filter by level
    root_logger.handlers.clear()
    console = logging.StreamHandler(sys.stderr)
    console.setLevel(settings.level)
    console.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(message)s"))
    root_logger.addHandler(console)

    pkg_logger = logging.getLogger(LOGGER_PREFIX)
    _reset(pkg_logger, logging.DEBUG)
    if log_dir is not None:
        pkg_logger.addHandler(_file_handler(log_dir / "cmdkit.log", settings.level, settings))

    for subsystem in SUBSYSTEMS:
        level = settings.level_for(subsystem)
        sub_logger = logging.getLogger(f"{LOGGER_PREFIX}.{subsystem}")
        _reset(sub_logger, level)
        if log_dir is not None:
            sub_logger.addHandler(_file_handler(log_dir / f"{subsystem}.log", level, settings))

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            redact_arguments,
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=config is not None,
    )
