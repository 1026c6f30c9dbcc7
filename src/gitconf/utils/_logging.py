"""Logging utilities for gitconf.

Loggers are standalone structlog loggers built with ``wrap_logger``: the
global structlog configuration is never touched, so a host application's
own logging setup keeps working while the provider runs inside it.

Output goes to stderr by default. With a log file, entries are appended to
it, and with both ``max_bytes`` and ``backup_count`` the file is rotated
through the stdlib ``RotatingFileHandler``.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from os import getenv
from pathlib import Path
from typing import Final, Literal, cast

import structlog
from structlog.typing import FilteringBoundLogger, Processor

LogFormatType = Literal["json", "text"]

DEBUG_ENV_VAR: Final = "GITCONF_DEBUG"
LEVEL_ENV_VAR: Final = "GITCONF_LOG_LEVEL"


def resolve_log_level(level: str | None = None, default: str = "info") -> int:
    """Resolve the effective log level.

    Precedence, highest first: a non-empty ``GITCONF_DEBUG`` forces DEBUG,
    then ``level``, then ``GITCONF_LOG_LEVEL``, then ``default``. Unknown
    names give INFO.

    Args:
        level: Level name (debug, info, warning, error), case-insensitive.
        default: Level name used when neither ``level`` nor the
            environment names one.

    Returns:
        The stdlib logging level.
    """
    if getenv(DEBUG_ENV_VAR):
        return logging.DEBUG

    name = level if level is not None else getenv(LEVEL_ENV_VAR, default)
    return logging.getLevelNamesMapping().get(name.upper(), logging.INFO)


def _processors(log_format: LogFormatType) -> list[Processor]:
    chain: list[Processor] = [
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if log_format == "text":
        chain.append(structlog.dev.ConsoleRenderer(colors=False))
    else:
        chain.extend(
            (structlog.processors.dict_tracebacks, structlog.processors.JSONRenderer())
        )
    return chain


def _rotating_logger(
    path: Path, level: int, max_bytes: int, backup_count: int
) -> logging.Logger:
    # One stdlib logger per file; handlers from a previous call are replaced.
    stdlib_logger = logging.getLogger(f"gitconf.files.{path.resolve()}")
    stdlib_logger.handlers.clear()
    stdlib_logger.propagate = False
    stdlib_logger.setLevel(level)

    handler = RotatingFileHandler(path, maxBytes=max_bytes, backupCount=backup_count)
    handler.setFormatter(logging.Formatter("%(message)s"))
    stdlib_logger.addHandler(handler)
    return stdlib_logger


def _output(
    log_file: str,
    level: int,
    max_bytes: int | None,
    backup_count: int | None,
) -> object:
    if not log_file:
        return structlog.PrintLogger(file=sys.stderr)

    path = Path(log_file)
    path.parent.mkdir(parents=True, exist_ok=True)
    if max_bytes is not None and backup_count is not None:
        return _rotating_logger(path, level, max_bytes, backup_count)
    return structlog.WriteLogger(file=path.open("a", encoding="utf-8"))


def create_logger(
    *,
    level: str | None = None,
    default_level: str = "info",
    log_format: LogFormatType = "json",
    log_file: str = "",
    max_bytes: int | None = None,
    backup_count: int | None = None,
    **context: object,
) -> FilteringBoundLogger:
    """Create a logger for provider retrievals.

    Args:
        level: Level name; see ``resolve_log_level`` for the precedence.
        default_level: Level used when neither ``level`` nor the
            environment sets one.
        log_format: "json" for one JSON object per line, "text" for
            ``timestamp [level] event key=value`` lines.
        log_file: File to append to; empty writes to stderr.
        max_bytes: Rotate the file past this size. Needs ``backup_count``.
        backup_count: Rotated files to keep. Needs ``max_bytes``.
        **context: Key/value pairs bound to every entry.

    Returns:
        A FilteringBoundLogger dropping entries below the effective level.
    """
    effective_level = resolve_log_level(level, default_level)
    logger = cast(
        "FilteringBoundLogger",
        structlog.wrap_logger(
            _output(log_file, effective_level, max_bytes, backup_count),
            processors=_processors(log_format),
            wrapper_class=structlog.make_filtering_bound_logger(effective_level),
            context_class=dict,
        ),
    )
    return logger.bind(**context) if context else logger
