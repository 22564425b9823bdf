"""Logging configuration shared by the MCP server and the CLI.

Everything goes to stderr: stdout carries the MCP stdio protocol.
"""

from __future__ import annotations

import logging
import sys

import structlog

_LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def resolve_level(level: str | None) -> int:
    return _LOG_LEVELS.get((level or "INFO").upper(), logging.INFO)


def configure_logging(level: str | None = "INFO", *, json_output: bool = True) -> None:
    """Configure stdlib logging and structlog for stderr output."""
    log_level = resolve_level(level)
    logging.basicConfig(
        level=log_level, stream=sys.stderr, format="%(message)s", force=True
    )

    renderer = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    structlog.configure(
        processors=[
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
        cache_logger_on_first_use=False,
    )
