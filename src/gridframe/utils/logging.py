"""
Logging for gridframe.

All events go to stderr through structlog so that tables printed by the
CLI on stdout are never interleaved with progress output. Module loggers
carry a ``module`` field; the pipeline binds the source ``path`` for the
duration of one ingestion.
"""

import logging
import sys
from typing import Any

import structlog

QUIET_LEVEL = logging.WARNING
VERBOSE_LEVEL = logging.DEBUG


def level_for(verbose: bool, level: str | None = None) -> int:
    """
    Resolve the effective log level.

    An explicit level name wins over the verbose flag; unknown names fall
    back to the quiet level.
    """
    if level is not None:
        return getattr(logging, level.upper(), QUIET_LEVEL)
    return VERBOSE_LEVEL if verbose else QUIET_LEVEL


def configure_logging(
    verbose: bool = False,
    *,
    level: str | None = None,
    json_output: bool = False,
) -> int:
    """
    Route gridframe log events to stderr.

    Quiet runs only show warnings. Verbose runs add column resolution,
    source detection and per-file ingestion events.

    Args:
        verbose: Emit debug events.
        level: Explicit level name (DEBUG, INFO, ...); overrides verbose.
        json_output: Render one JSON object per line instead of console text.

    Returns:
        The numeric level that was applied.
    """
    log_level = level_for(verbose, level)

    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
    ]
    if json_output:
        processors += [
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(sort_keys=True),
        ]
    else:
        processors += [
            structlog.processors.TimeStamper(fmt="%H:%M:%S"),
            structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        # loggers are created at import time, before the CLI picks a level
        cache_logger_on_first_use=False,
    )
    return log_level


def get_logger(name: str | None = None) -> Any:
    """Logger whose events carry the calling module's name."""
    if name is None:
        return structlog.get_logger()
    return structlog.get_logger(module=name)


def log_context(**kwargs: Any) -> Any:
    """
    Bind fields to every event logged inside the block.

    Example:
        with log_context(path="wind.csv"):
            log.info("Ingesting fields")  # includes path
    """
    return structlog.contextvars.bound_contextvars(**kwargs)
