"""Wiring for FastAPI applications.

Builds the registry, the handler registry and the filter from plain values or
from AppExceptionSettings, then installs one exception handler that routes
every failure through the filter::

    errors = AppExceptionModule.for_root(
        is_dev=True,
        errors=[ErrorPreset(code="USER_NOT_FOUND", status_code=404, message="User not found")],
        logger=get_logger("app_exception"),
    )
    app = FastAPI()
    errors.install(app)

    @app.get("/users/{user_id}")
    async def get_user(user_id: int) -> dict[str, int]:
        raise AppException("USER_NOT_FOUND")
"""

from collections.abc import Iterable

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import Response

from app_exception.config import AppExceptionSettings
from app_exception.context import BufferedResponse, ErrorContext
from app_exception.exceptions import AppException, ExceptionContext
from app_exception.filter import AppExceptionFilter, ErrorLogger
from app_exception.handlers import ExceptionHandler, HandlerRegistry
from app_exception.logging import get_logger
from app_exception.registry import ErrorPreset, ErrorRegistry


class AppExceptionModule:
    """Owns the process-lifetime error registry, handlers and filter."""

    def __init__(
        self,
        registry: ErrorRegistry,
        handlers: HandlerRegistry,
        exception_filter: AppExceptionFilter,
        context: ExceptionContext,
    ) -> None:
        self.registry = registry
        self.handlers = handlers
        self.filter = exception_filter
        self.context = context

    @classmethod
    def for_root(
        cls,
        *,
        is_dev: bool = False,
        errors: Iterable[ErrorPreset] = (),
        logger: ErrorLogger | None = None,
    ) -> "AppExceptionModule":
        """Build the module and make it the default context for AppException."""
        registry = ErrorRegistry(errors)
        handlers = HandlerRegistry()
        exception_filter = AppExceptionFilter(is_dev=is_dev, handlers=handlers, logger=logger)
        context = AppException.init(registry, is_dev)
        return cls(registry, handlers, exception_filter, context)

    @classmethod
    def from_settings(cls, settings: AppExceptionSettings | None = None) -> "AppExceptionModule":
        """Build the module from environment settings, logging through structlog.

        Uses the host's structlog setup as-is; see logging.configure_logging().
        """
        settings = settings or AppExceptionSettings()
        return cls.for_root(
            is_dev=settings.is_dev,
            errors=settings.errors,
            logger=get_logger("app_exception"),
        )

    def register_error(self, code: str, status_code: int, message: str) -> str:
        return self.registry.register_error(code, status_code, message)

    def register_handler(self, exc_type: type[BaseException], handler: ExceptionHandler) -> None:
        self.handlers.register(exc_type, handler)

    async def handle(self, request: Request, exc: Exception) -> Response:
        """FastAPI exception handler: run the filter and return what it wrote.

        Headers carried by an HTTPException (Allow on 405, WWW-Authenticate on
        401, ...) are kept, as Starlette's default handler does.
        """
        sink = BufferedResponse()
        self.filter.catch(exc, ErrorContext(path=request.url.path, response=sink, request=request))
        return sink.to_response(headers=getattr(exc, "headers", None))

    def install(self, app: FastAPI) -> None:
        """Route every exception raised by ``app`` through the filter.

        Starlette's HTTPException and FastAPI's RequestValidationError have
        default handlers of their own, so they are registered explicitly.
        """
        app.add_exception_handler(StarletteHTTPException, self.handle)  # type: ignore[arg-type]
        app.add_exception_handler(RequestValidationError, self.handle)  # type: ignore[arg-type]
        app.add_exception_handler(Exception, self.handle)
