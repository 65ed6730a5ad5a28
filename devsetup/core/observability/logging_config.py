"""
Logging configuration — set up once by the CLI entrypoint.

Every module does ``logger = logging.getLogger(__name__)`` and inherits
this. Log records are diagnostics on stderr; the install progress the
user watches (status lines, streamed command output) goes through the
Console instead.

Level precedence:
    --debug / --verbose / --quiet  >  DEVSETUP_LOG_LEVEL  >  config verbose  >  WARNING

Optional file output via DEVSETUP_LOG_FILE / DEVSETUP_LOG_FILE_LEVEL.
"""

from __future__ import annotations

import logging
import os
import sys

ENV_LEVEL = "DEVSETUP_LOG_LEVEL"
ENV_FILE = "DEVSETUP_LOG_FILE"
ENV_FILE_LEVEL = "DEVSETUP_LOG_FILE_LEVEL"

# (upper bound, format, datefmt): the first tier the level fits in wins.
_CONSOLE_TIERS: tuple[tuple[int, str, str | None], ...] = (
    (logging.DEBUG, "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d (%(threadName)s) %(message)s", "%H:%M:%S"),
    (logging.INFO, "%(asctime)s [%(name)s] %(message)s", "%H:%M:%S"),
    (logging.CRITICAL, "%(message)s", None),
)

_FILE_FORMAT = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d %(message)s"
_FILE_DATEFMT = "%Y-%m-%d %H:%M:%S"


def resolve_level(
    *,
    debug: bool = False,
    verbose: bool = False,
    quiet: bool = False,
    config_verbose: bool = False,
) -> str:
    """Pick the console log level from flags, environment and config."""
    if debug:
        return "DEBUG"
    if verbose:
        return "INFO"
    if quiet:
        return "ERROR"
    env_level = os.environ.get(ENV_LEVEL)
    if env_level:
        return env_level
    if config_verbose:
        return "INFO"
    return "WARNING"


def setup_logging(
    level: str | None = None,
    *,
    debug: bool = False,
    verbose: bool = False,
    quiet: bool = False,
    config_verbose: bool = False,
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> int:
    """Configure the root logger for the whole process.

    Replaces any handlers already on the root logger, so calling it
    again (one CLI invocation after another in tests) never stacks
    handlers.

    Args:
        level: Explicit console level name. When None it is resolved from
            the flags, ``DEVSETUP_LOG_LEVEL`` and ``config_verbose``.
        log_file: Log file path; defaults to ``DEVSETUP_LOG_FILE``.
        log_file_level: File level; defaults to ``DEVSETUP_LOG_FILE_LEVEL``,
            then to the console level.

    Returns:
        The numeric console level.
    """
    if level is None:
        level = resolve_level(
            debug=debug, verbose=verbose, quiet=quiet, config_verbose=config_verbose,
        )
    console_level = _parse_level(level)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(_console_handler(console_level))
    root_level = console_level

    log_file = log_file or os.environ.get(ENV_FILE)
    if log_file:
        file_level = _parse_level(
            log_file_level or os.environ.get(ENV_FILE_LEVEL) or level
        )
        root.addHandler(_file_handler(log_file, file_level))
        root_level = min(root_level, file_level)

    root.setLevel(root_level)
    logging.raiseExceptions = False
    return console_level


def _console_handler(level: int) -> logging.Handler:
    fmt, datefmt = _CONSOLE_TIERS[-1][1:]
    for bound, tier_fmt, tier_datefmt in _CONSOLE_TIERS:
        if level <= bound:
            fmt, datefmt = tier_fmt, tier_datefmt
            break
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt, datefmt=datefmt))
    return handler


def _file_handler(path: str, level: int) -> logging.Handler:
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt=_FILE_DATEFMT))
    return handler


def _parse_level(name: str | None) -> int:
    """Level name to number; unknown or empty names mean WARNING."""
    numeric = logging.getLevelName(name.upper()) if name else None
    return numeric if isinstance(numeric, int) else logging.WARNING
