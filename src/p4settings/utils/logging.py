"""Structured logging configuration using structlog.

Until ``setup_logging`` runs, structlog prints to stderr so library callers
never get diagnostics mixed into stdout.
"""

from __future__ import annotations

import logging
import sys

import structlog


def _stderr_logger(*args: object) -> structlog.PrintLogger:
    # Looked up per call so redirected stderr is honoured
    return structlog.PrintLogger(sys.stderr)


def use_stderr_defaults() -> None:
    """Route structlog's default pipeline to stderr."""
    structlog.configure(logger_factory=_stderr_logger)


def setup_logging(level: str = "WARNING", json_logs: bool = False) -> None:
    """Send structlog events through stdlib logging to stderr at ``level``."""
    renderer = (
        structlog.processors.JSONRenderer()
        if json_logs
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # Not cached: module-level loggers must follow later reconfiguration
        cache_logger_on_first_use=False,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, level.upper(), logging.WARNING),
        force=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a named structured logger."""
    return structlog.get_logger(name)


if not structlog.is_configured():
    use_stderr_defaults()
