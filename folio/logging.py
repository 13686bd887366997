"""Logging configuration for Folio."""

import logging
import sys
from pathlib import Path
from typing import IO

import structlog

from folio.config import get_config


class _TeeWriter:
    """File-like sink that appends each write to a log file and optional echo stream."""

    def __init__(self, path: Path | None, echo: IO[str] | None = None):
        self._path = path
        self._echo = echo

    def write(self, text: str) -> int:
        if self._path is not None:
            with open(self._path, "a", encoding="utf-8") as f:
                f.write(text)
        if self._echo is not None:
            self._echo.write(text)
        return len(text)

    def flush(self) -> None:
        if self._echo is not None:
            self._echo.flush()


def configure_logging(log_file: Path | str | None = None) -> None:
    """Configure structured logging for Folio.

    Args:
        log_file: Optional override for the configured log file path
    """
    config = get_config()

    log_level = getattr(logging, config.logging.level.upper(), logging.INFO)

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if config.logging.format == "console":
        processors.append(structlog.dev.ConsoleRenderer(colors=False))
    else:
        processors.append(structlog.processors.JSONRenderer())

    raw_path = log_file if log_file is not None else config.logging.file
    path = Path(raw_path).expanduser() if raw_path else None
    if path is not None:
        path.parent.mkdir(parents=True, exist_ok=True)
    echo = sys.stderr if (config.logging.echo or path is None) else None

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=_TeeWriter(path, echo)),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    """Get a logger instance.

    Args:
        name: Optional logger name (usually __name__)

    Returns:
        Configured structlog logger
    """
    if name:
        return structlog.get_logger(name)
    return structlog.get_logger()


# Create module-level logger
log = get_logger(__name__)
