"""Logging configuration for the filmcatalog domain.

Standard library handlers feed a structlog pipeline. Production and staging
render JSON lines; every other environment gets the colored console renderer.
The test environment logs to the console only.

Watched records, reviews and flags are identified by composite keys, so a log
line carrying ``watch_key``, ``review_id`` or ``flag_id`` also gets the parts
of that key as their own fields. Searching logs by ``user_id`` or ``movie_id``
then finds every line about the pair.
"""

import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import Any

import structlog

# Field name -> (separator, names of the parts). Flag ids are expanded first
# so the review id they contain is expanded in turn.
COMPOSITE_KEYS = (
    ("flag_id", "@", ("reporter_id", "review_id")),
    ("watch_key", "::", ("user_id", "movie_id")),
    ("review_id", "::", ("user_id", "movie_id")),
)


def _environment() -> str:
    return (os.getenv("ENV") or os.getenv("ENVIRONMENT") or os.getenv("PROTEAN_ENV") or "development").lower()


def get_log_level() -> str:
    """Get log level based on environment."""
    level_map = {
        "production": "INFO",
        "staging": "INFO",
        "development": "DEBUG",
        "test": "WARNING",
    }

    return os.getenv("LOG_LEVEL", level_map.get(_environment(), "INFO"))


def expand_composite_keys(logger, method_name, event_dict):
    """structlog processor adding the parts of composite identifiers to the event."""
    for field, separator, parts in COMPOSITE_KEYS:
        value = event_dict.get(field)
        if not isinstance(value, str) or separator not in value:
            continue
        for name, part in zip(parts, value.split(separator, 1), strict=True):
            event_dict.setdefault(name, part)
    return event_dict


def _rotating_handler(path: Path, level) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        filename=path,
        maxBytes=10 * 1024 * 1024,
        backupCount=5,
        encoding="utf-8",
    )
    handler.setLevel(level)
    return handler


def setup_stdlib_logging() -> None:
    """Configure standard library logging."""
    log_level = get_log_level()

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers = []

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    root_logger.addHandler(console_handler)

    if _environment() != "test":
        log_dir = Path(os.getenv("LOG_DIR", "logs"))
        log_dir.mkdir(exist_ok=True)
        root_logger.addHandler(_rotating_handler(log_dir / "filmcatalog.log", log_level))
        root_logger.addHandler(_rotating_handler(log_dir / "filmcatalog_error.log", logging.ERROR))

    logging.getLogger("protean").setLevel(logging.WARNING)


def setup_structlog() -> None:
    """Configure structlog for structured logging."""
    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.format_exc_info,
        structlog.contextvars.merge_contextvars,
        expand_composite_keys,
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.FILENAME,
                structlog.processors.CallsiteParameter.LINENO,
            ]
        ),
    ]

    if _environment() in ("production", "staging"):
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=True,
                exception_formatter=structlog.dev.RichTracebackFormatter(max_frames=2),
            )
        )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def configure_logging() -> None:
    """Configure all logging for the application."""
    setup_stdlib_logging()
    setup_structlog()


def add_context(**kwargs: Any) -> None:
    """Add context variables that will be included in all subsequent log messages."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    """Clear all context variables."""
    structlog.contextvars.clear_contextvars()
