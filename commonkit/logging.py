from __future__ import annotations

import logging
import os
from typing import Any

import structlog

from commonkit.core.config import Settings, get_settings


def _get_log_level(settings: Settings) -> int:
    level = settings.log_level.upper()
    return getattr(logging, level, logging.INFO)


def _get_log_format(settings: Settings) -> str:
    log_format = settings.log_format.lower()
    if os.getenv("APP_ENV") == "dev" and "COMMONKIT_LOG_FORMAT" not in os.environ:
        log_format = "console"
    return log_format


def setup_logging(
    log_file: str | os.PathLike | None = None, *, settings: Settings | None = None
) -> None:
    """Configure structlog for JSON structured logging.

    - JSON lines with ISO/UTC timestamp, level, event, and bound fields
    - Includes contextvars so values bound by callers flow automatically
    - Formats exception info in JSON if exc_info is attached
    - Level and renderer come from ``Settings`` (COMMONKIT_LOG_LEVEL / COMMONKIT_LOG_FORMAT)
    """

    settings = settings or get_settings()

    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.format_exc_info,
    ]

    structlog.configure(
        processors=shared_processors
        + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    if _get_log_format(settings) == "console":
        renderer = structlog.dev.ConsoleRenderer()
    else:
        renderer = structlog.processors.JSONRenderer()

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        os.makedirs(os.path.dirname(str(log_file)) or ".", exist_ok=True)
        handlers.append(logging.FileHandler(str(log_file), encoding="utf-8"))

    for handler in handlers:
        handler.setFormatter(formatter)

    logging.basicConfig(
        level=_get_log_level(settings),
        handlers=handlers,
        force=True,
    )


def get_logger(*args: Any, **kwargs: Any) -> structlog.stdlib.BoundLogger:  # convenience
    return structlog.get_logger(*args, **kwargs)
