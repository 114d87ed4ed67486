"""Logging utilities for the Sightly runtime.

Provides standalone structlog logger factories that write JSON or text
formatted log lines to a file or to stderr. Each logger is self-contained
and does not modify global structlog configuration.
"""

from __future__ import annotations

import logging
import sys
from os import getenv
from pathlib import Path
from typing import TYPE_CHECKING, Literal, cast

import structlog

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger

    from sightly.config import LoggingConfig

LogFormatType = Literal["json", "text"]


def _get_log_level() -> int:
    """Get the log level from environment variables.

    SIGHTLY_DEBUG (any value) selects DEBUG, otherwise SIGHTLY_LOG_LEVEL is
    used. Defaults to INFO.
    """
    if getenv("SIGHTLY_DEBUG", None):
        return logging.DEBUG

    log_levels = logging.getLevelNamesMapping()
    return log_levels.get(getenv("SIGHTLY_LOG_LEVEL", "info").upper(), logging.INFO)


def _log_level_from_string(level: str) -> int:
    """Convert a level name to a logging level; SIGHTLY_DEBUG still wins."""
    if getenv("SIGHTLY_DEBUG", None):
        return logging.DEBUG

    log_levels = logging.getLevelNamesMapping()
    return log_levels.get(level.upper(), logging.INFO)


def create_logger(
    log_file: str = "",
    *,
    level: str | None = None,
    log_format: LogFormatType = "json",
) -> FilteringBoundLogger:
    """Create a standalone structlog logger.

    The log level is determined by (in order of precedence):
    1. SIGHTLY_DEBUG environment variable (if set, enables DEBUG level)
    2. The ``level`` parameter (if provided)
    3. SIGHTLY_LOG_LEVEL environment variable
    4. Default: INFO

    Args:
        log_file: Path of the log file, opened in append mode. Parent
            directories are created. Empty writes to stderr.
        level: Optional level name (debug, info, warning, error).
        log_format: Output format, either "json" or "text".

    Returns:
        A configured FilteringBoundLogger instance.
    """
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        logger_factory = structlog.WriteLoggerFactory(file=log_path.open("a"))
    else:
        logger_factory = structlog.WriteLoggerFactory(file=sys.stderr)

    effective_level = _log_level_from_string(level) if level is not None else _get_log_level()

    processors: list[structlog.typing.Processor] = [
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if log_format == "json":
        processors.append(structlog.processors.dict_tracebacks)
        processors.append(structlog.processors.JSONRenderer())
    else:
        # "timestamp [level] event key=value ..."
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    return cast(
        "FilteringBoundLogger",
        structlog.wrap_logger(
            logger_factory(),
            processors=processors,
            wrapper_class=structlog.make_filtering_bound_logger(effective_level),
            context_class=dict,
        ),
    )


def create_render_logger(config: LoggingConfig) -> FilteringBoundLogger:
    """Create the logger used by render contexts from a logging section.

    Args:
        config: The logging configuration section.

    Returns:
        A FilteringBoundLogger instance.
    """
    return create_logger(
        config.file,
        level=str(config.level),
        log_format="text" if config.format == "text" else "json",
    )
