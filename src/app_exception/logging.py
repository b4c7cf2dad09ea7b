"""Structured logging for error records.

The library only asks structlog for a logger, so error records follow
whatever structlog/stdlib setup the host application already has, including
request-scoped context bound through structlog.contextvars.

configure_logging() is an opt-in for applications without a setup of their
own. It is never called implicitly.
"""

import logging
import sys
from datetime import UTC, datetime
from typing import Any

import structlog
from structlog.stdlib import BoundLogger

from app_exception.config import AppExceptionSettings

LOGGER_NAME = "app_exception"


def _add_timestamp(
    _logger: object,
    _method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Add ISO 8601 UTC timestamp with timezone offset."""
    event_dict["timestamp"] = datetime.now(UTC).isoformat()
    return event_dict


def configure_logging(settings: AppExceptionSettings | None = None) -> None:
    """Send JSON error records to stdout.

    Replaces the process-wide structlog configuration, so call it once at
    application startup and only if the app does not configure structlog
    itself. Stdlib handlers are attached to the ``app_exception`` logger only.
    """
    settings = settings or AppExceptionSettings()

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            _add_timestamp,
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(processor=structlog.processors.JSONRenderer())
    )
    library_logger = logging.getLogger(LOGGER_NAME)
    library_logger.handlers = [handler]
    library_logger.setLevel(settings.log_level)
    library_logger.propagate = False


def get_logger(name: str = LOGGER_NAME) -> BoundLogger:
    """Get a structured logger without touching global logging configuration.

    Example:
        logger = get_logger(__name__)
        logger.error("app_exception", error_code="USER_NOT_FOUND", path="/users/1")
    """
    return structlog.get_logger(name)  # type: ignore[no-any-return]
