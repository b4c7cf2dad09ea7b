"""Normalization of any raised exception into the standard error body.

Order of resolution for a caught exception:
1. Custom handler registered for its type (or nearest ancestor) -> it owns the response.
2. AppException -> registry-resolved status, code and message.
3. Framework HTTP errors (Starlette/FastAPI HTTPException, request validation)
   -> their own status, best-effort message, code UNKNOWN_ERROR.
4. Anything else -> 500 with a generic message, no internal details.

ExceptionContextNotInitialized is never resolved: it is re-raised before step 1.
"""

import contextlib
import json
from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any, Protocol

from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app_exception.constants import (
    DEFAULT_ERROR_CODE,
    DEFAULT_ERROR_MESSAGE,
    INTERNAL_SERVER_ERROR,
    UNPROCESSABLE_ENTITY,
)
from app_exception.context import ErrorContext
from app_exception.exceptions import AppException, ExceptionContextNotInitialized
from app_exception.handlers import HandlerRegistry
from app_exception.schemas.error import AppErrorResponse


class ErrorLogger(Protocol):
    """Anything with a structlog-style ``error(event, **fields)``."""

    def error(self, event: str, **fields: Any) -> Any: ...


def _timestamp() -> str:
    """Current UTC time as ISO 8601 with milliseconds, e.g. 2025-01-01T12:00:00.000Z."""
    return datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _to_json(value: Any) -> str:
    # Undecodable bytes (e.g. a rejected non-UTF-8 body) must not fail the response.
    return json.dumps(
        jsonable_encoder(value, custom_encoder={bytes: lambda b: b.decode("utf-8", "replace")})
    )


def _detail_message(detail: Any) -> str:
    if isinstance(detail, str):
        return detail
    if isinstance(detail, Mapping) and detail.get("message"):
        message = detail["message"]
        return message if isinstance(message, str) else _to_json(message)
    return _to_json(detail)


class AppExceptionFilter:
    """Turns a caught exception into a status + AppErrorResponse on the sink."""

    def __init__(
        self,
        is_dev: bool,
        handlers: HandlerRegistry,
        logger: ErrorLogger | None = None,
    ) -> None:
        self.is_dev = is_dev
        self.handlers = handlers
        self.logger = logger

    def catch(self, exc: BaseException, ctx: ErrorContext) -> None:
        # Misconfiguration is a startup bug; no handler, catch-all included, may absorb it.
        if isinstance(exc, ExceptionContextNotInitialized):
            raise exc

        handler = self.handlers.get_handler(exc)
        if handler is not None:
            handler(exc, ctx)
            return

        status_code = INTERNAL_SERVER_ERROR
        error_code = DEFAULT_ERROR_CODE
        message = DEFAULT_ERROR_MESSAGE
        trace: str | None = None

        if isinstance(exc, AppException):
            status_code = exc.status_code
            error_code = exc.code
            message = exc.message
            trace = exc.trace
        elif isinstance(exc, StarletteHTTPException):
            status_code = exc.status_code
            message = _detail_message(exc.detail)
        elif isinstance(exc, RequestValidationError):
            status_code = UNPROCESSABLE_ENTITY
            message = _detail_message(exc.errors())

        error_response = AppErrorResponse(
            status_code=status_code,
            error_code=error_code,
            message=message,
            path=ctx.path,
            timestamp=_timestamp(),
            trace=trace if self.is_dev and trace else None,
        )

        if self.logger is not None:
            # A broken log sink must not cost the client its response.
            with contextlib.suppress(Exception):
                self.logger.error(
                    "app_exception",
                    message=message,
                    error_code=error_code,
                    path=ctx.path,
                    trace=trace,
                )

        ctx.response.status(status_code).json(error_response.to_body())
