"""Structured logging configuration for trparser."""

from __future__ import annotations

import logging
import sys
from typing import TextIO

import structlog


def configure_logging(
    log_level: str = "WARNING",
    json_format: bool = False,
    stream: TextIO | None = None,
) -> None:
    """
    Configure structured logging with structlog.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        json_format: If True, output JSON format; otherwise, console format.
        stream: Output stream (defaults to sys.stderr, stdout carries results).
    """
    if stream is None:
        stream = sys.stderr

    processors: list = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", key="timestamp"),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if json_format:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, log_level.upper(), logging.WARNING)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream),
        cache_logger_on_first_use=False,  # Reconfiguration must reach module loggers
    )


def get_logger(name: str) -> structlog.BoundLogger:
    """
    Get a configured logger instance.

    Falls back to the settings-driven configuration when the embedding
    application has not configured structlog itself.

    Args:
        name: Logger name (typically module name).

    Returns:
        A lazily configured structlog logger bound to its name.
    """
    if not structlog.is_configured():
        from trparser.config import get_settings

        settings = get_settings()
        configure_logging(log_level=settings.log_level, json_format=settings.log_json_format)
    # Lazy proxy: configuration is looked up on every call, not at import.
    # "logger" would clash with wrap_logger's first parameter.
    return structlog.get_logger(name, logger_name=name)
