"""Logging setup for corrator.

Containers are audited on worker threads, so log lines of different
containers interleave. Loggers obtained through get_logger_with_context
tag every line with fields such as ``container=web`` to keep them apart.
"""

import logging
import sys
from typing import IO, Any

ROOT_LOGGER = "corrator"

PLAIN_FORMAT = "%(levelname)s: %(message)s"
STRUCTURED_FORMAT = "%(asctime)s %(levelname)s %(threadName)s %(name)s %(message)s"


class ContextFormatter(logging.Formatter):
    """Formatter that prefixes messages with the record's context fields."""

    def format(self, record: logging.LogRecord) -> str:
        context = getattr(record, "context", None)
        message = super().format(record)
        if not context:
            return message

        tags = " ".join(f"{key}={value}" for key, value in context.items())
        return f"[{tags}] {message}"


def log_level(verbose: bool = False, quiet: bool = False) -> str:
    """Map the CLI verbosity switches to a level name."""
    if verbose:
        return "DEBUG"
    if quiet:
        return "WARNING"
    return "INFO"


def configure_logging(
    level: str = "INFO",
    structured: bool = False,
    stream: IO[str] | None = None,
) -> None:
    """Configure the corrator logger hierarchy.

    Diagnostics go to stderr unless another stream is given, so they never
    mix with a report printed on stdout.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        structured: Include timestamp, thread and logger name
        stream: Destination stream (default: sys.stderr)
    """
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(ContextFormatter(STRUCTURED_FORMAT if structured else PLAIN_FORMAT))

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(getattr(logging, level.upper()))
    logger.handlers = [handler]
    logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    """Get the logger for a corrator module, e.g. ``get_logger("eol")``."""
    if not name.startswith(ROOT_LOGGER):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)


class ContextAdapter(logging.LoggerAdapter):
    """Logger adapter attaching fixed context fields to every record."""

    def process(self, msg: str, kwargs: dict[str, Any]) -> tuple[str, dict[str, Any]]:
        extra = dict(kwargs.get("extra") or {})
        extra["context"] = {**self.extra, **extra.get("context", {})}
        kwargs["extra"] = extra
        return msg, kwargs

    def bind(self, **context: Any) -> "ContextAdapter":
        """Return an adapter with additional context fields."""
        return ContextAdapter(self.logger, {**self.extra, **context})


def get_logger_with_context(name: str, **context: Any) -> ContextAdapter:
    """Get a module logger that tags every line with context fields.

    Example:
        log = get_logger_with_context("worker", container="web")
        log.warning("Error querying app version for bash on web")
        # WARNING: [container=web] Error querying app version for bash on web
    """
    return ContextAdapter(get_logger(name), context)
