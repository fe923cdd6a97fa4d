"""Logging configuration: structlog routed through stdlib logging."""

from __future__ import annotations

import logging
from logging.config import dictConfig

import structlog
from structlog.typing import Processor

from fork_tools.core.exceptions import ConfigurationError

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def configure_logging(log_level: str = "WARNING", json_logs: bool = False) -> None:
    """Configure logging for the CLI.

    Logs go to stderr so that reports written to stdout stay parseable.
    """
    level = log_level.upper()
    if level not in LOG_LEVELS:
        raise ConfigurationError(
            f"Invalid log level: {log_level}",
            details={"allowed": list(LOG_LEVELS)},
        )

    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "console": {"format": "%(message)s"},
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "level": level,
                    "formatter": "console",
                    "stream": "ext://sys.stderr",
                },
            },
            "root": {"level": level, "handlers": ["console"]},
        }
    )

    processors: list[Processor] = [
        structlog.stdlib.add_logger_name,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.format_exc_info,
    ]
    if json_logs:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.processors.KeyValueRenderer(key_order=["level", "event"]))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(getattr(logging, level)),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )
