"""Main entry point for the ``cmdkit`` console script.

Initializes logging in two phases (defaults then config-driven), builds
the demo interpreter on stdin/stdout, and runs it until a quit command
or end of input.

Key functions:
    main: Sets up logging and config, runs the interpreter, returns an
        exit code.
    run: Console-script wrapper that exits with main()'s code.
"""

import sys

from . import __version__
from .exceptions import ConfigurationError
from .logging_config import get_logger, setup_logging


def main(stdin=None, stdout=None) -> int:
    """Run the demo interpreter and return a process exit code."""
    # Phase 1: defaults, cache_logger_on_first_use=False
    setup_logging()
    logger = get_logger("cmdkit")

    logger.info("cmdkit_starting", version=__version__)

    from .config import get_config
    from .demo import build_demo_cmd

    try:
        config = get_config()
    except ConfigurationError as e:
        logger.error("config_load_failed", error=str(e))
        return 2
    if not config.validate():
        # validate() has already logged each problem
        return 2

    # Phase 2: reconfigure with real config, cache_logger_on_first_use=True
    setup_logging(config)

    cmd = build_demo_cmd(
        stdin if stdin is not None else sys.stdin,
        stdout if stdout is not None else sys.stdout,
        config,
    )

    try:
        cmd.run()
    except OSError as e:
        logger.error("cmdkit_io_error", error=str(e), error_type=type(e).__name__)
        return 1

    logger.info("cmdkit_stopped")
    return 0


def run():
    """Synchronous entry point for the ``cmdkit`` console script."""
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        sys.exit(130)


if __name__ == "__main__":
    run()
