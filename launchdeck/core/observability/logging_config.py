"""
Logging setup for the launchdeck CLI.

Modules log through ``logging.getLogger(__name__)``; the CLI calls
``configure_from_env`` once before any command runs.

    WARNING  checks that could not start, per-app launch errors
    INFO     checks executed and their outcome, launches, dry-run notes
    DEBUG    cache hits, chosen branches, resolved command lines

Console level: --debug > --verbose > --quiet > LAUNCHDECK_LOG_LEVEL > WARNING.
LAUNCHDECK_LOG_FILE adds a file log at LAUNCHDECK_LOG_FILE_LEVEL (or the
console level when unset).
"""

from __future__ import annotations

import logging
import os
import sys

LOG_LEVEL_ENV_VAR = "LAUNCHDECK_LOG_LEVEL"
LOG_FILE_ENV_VAR = "LAUNCHDECK_LOG_FILE"
LOG_FILE_LEVEL_ENV_VAR = "LAUNCHDECK_LOG_FILE_LEVEL"

# (format, datefmt) per console verbosity
_CONSOLE_FORMATS = {
    logging.DEBUG: ("%(asctime)s %(levelname)-7s %(name)s: %(message)s", "%H:%M:%S"),
    logging.INFO: ("%(asctime)s %(message)s", "%H:%M:%S"),
}
_CONSOLE_DEFAULT = ("launchdeck: %(message)s", None)

_FILE_FORMAT = "%(asctime)s %(levelname)-7s %(name)s:%(lineno)d %(message)s"


def resolve_level(
    verbose: bool = False,
    debug: bool = False,
    quiet: bool = False,
    env_level: str | None = None,
) -> str:
    """Pick the console log level from CLI flags and the environment."""
    if debug:
        return "DEBUG"
    if verbose:
        return "INFO"
    if quiet:
        return "ERROR"
    return env_level or "WARNING"


def _console_handler(level: int) -> logging.Handler:
    if level <= logging.DEBUG:
        fmt, datefmt = _CONSOLE_FORMATS[logging.DEBUG]
    elif level <= logging.INFO:
        fmt, datefmt = _CONSOLE_FORMATS[logging.INFO]
    else:
        fmt, datefmt = _CONSOLE_DEFAULT

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt, datefmt=datefmt))
    return handler


def _file_handler(path: str, level: int) -> logging.Handler:
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(_FILE_FORMAT))
    return handler


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> None:
    """Replace the root logger's handlers.

    Args:
        level: Console level name.
        log_file: Optional log file path.
        log_file_level: Level for the log file; defaults to ``level``.
    """
    console_level = _parse_level(level)
    handlers = [_console_handler(console_level)]

    if log_file:
        file_level = _parse_level(log_file_level) if log_file_level else console_level
        handlers.append(_file_handler(log_file, file_level))

    root = logging.getLogger()
    root.handlers.clear()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(min(h.level for h in handlers))

    logging.raiseExceptions = False


def configure_from_env(
    verbose: bool = False,
    debug: bool = False,
    quiet: bool = False,
) -> str:
    """Set up logging from CLI flags plus LAUNCHDECK_LOG_* variables.

    Returns:
        The console level that was applied.
    """
    level = resolve_level(
        verbose=verbose,
        debug=debug,
        quiet=quiet,
        env_level=os.environ.get(LOG_LEVEL_ENV_VAR),
    )
    setup_logging(
        level=level,
        log_file=os.environ.get(LOG_FILE_ENV_VAR),
        log_file_level=os.environ.get(LOG_FILE_LEVEL_ENV_VAR),
    )
    return level


def _parse_level(level: str | None) -> int:
    """Level name to number. Unknown names fall back to WARNING."""
    numeric = logging.getLevelName((level or "").upper())
    return numeric if isinstance(numeric, int) else logging.WARNING
