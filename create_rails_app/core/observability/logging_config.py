"""
Logging setup for the create-rails-app process.

``main.py`` calls :func:`configure_logging` once per invocation; every
other module only does ``logger = logging.getLogger(__name__)``.

Console level, highest precedence first:

    --debug > --verbose > --quiet > $CRA_LOG_LEVEL > WARNING

``$CRA_LOG_FILE`` adds a file handler, at ``$CRA_LOG_FILE_LEVEL`` (or
the console level). The console handler writes to stderr: stdout
carries the dry-run commands and JSON output.
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Mapping

LOG_LEVEL_ENV = "CRA_LOG_LEVEL"
LOG_FILE_ENV = "CRA_LOG_FILE"
LOG_FILE_LEVEL_ENV = "CRA_LOG_FILE_LEVEL"

DEFAULT_LEVEL = "WARNING"

_DETAILED = logging.Formatter(
    "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d: %(message)s", datefmt="%H:%M:%S"
)
_TIMESTAMPED = logging.Formatter("%(asctime)s [%(name)s] %(message)s", datefmt="%H:%M:%S")
_PLAIN = logging.Formatter("%(message)s")
_FILE = logging.Formatter(
    "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)


def resolve_level(
    debug: bool = False,
    verbose: bool = False,
    quiet: bool = False,
    env_level: str | None = None,
) -> str:
    """Pick the console level name from CLI flags, then the environment."""
    for enabled, name in ((debug, "DEBUG"), (verbose, "INFO"), (quiet, "ERROR")):
        if enabled:
            return name
    return env_level or DEFAULT_LEVEL


def level_number(name: str | None) -> int:
    """``"info"`` → ``logging.INFO``; unknown names fall back to WARNING."""
    number = logging.getLevelName((name or DEFAULT_LEVEL).upper())
    return number if isinstance(number, int) else logging.WARNING


def _console_formatter(level: int) -> logging.Formatter:
    if level <= logging.DEBUG:
        return _DETAILED
    if level <= logging.INFO:
        return _TIMESTAMPED
    return _PLAIN


def setup_logging(
    level: str = DEFAULT_LEVEL,
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> None:
    """Replace the root logger's handlers with console (+ optional file) output."""
    console_level = level_number(level)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(_console_formatter(console_level))
    handlers: list[logging.Handler] = [console]

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level_number(log_file_level) if log_file_level else console_level)
        file_handler.setFormatter(_FILE)
        handlers.append(file_handler)

    root = logging.getLogger()
    root.handlers.clear()
    for handler in handlers:
        root.addHandler(handler)
    # The root must let through whatever the most verbose handler wants
    root.setLevel(min(handler.level for handler in handlers))

    logging.raiseExceptions = False


def configure_logging(
    debug: bool = False,
    verbose: bool = False,
    quiet: bool = False,
    env: Mapping[str, str] | None = None,
) -> str:
    """Set up logging from CLI flags and ``CRA_LOG_*`` variables.

    Returns the console level name that was applied.
    """
    env = os.environ if env is None else env
    level = resolve_level(debug, verbose, quiet, env.get(LOG_LEVEL_ENV))
    setup_logging(
        level=level,
        log_file=env.get(LOG_FILE_ENV),
        log_file_level=env.get(LOG_FILE_LEVEL_ENV),
    )
    return level
