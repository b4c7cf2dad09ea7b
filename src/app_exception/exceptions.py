"""Domain exceptions raised by services and caught by the filter.

Services raise AppException with a registered error code; the filter
translates it into the standard error body:
{"statusCode": ..., "errorCode": "...", "message": "...", "path": "...", "timestamp": "..."}.

Every AppException is resolved against an ExceptionContext (registry + dev
flag). Pass one explicitly, or set the process default once at startup with
AppException.init(); AppExceptionModule.for_root() does this for you.
"""

import traceback
from dataclasses import dataclass
from typing import ClassVar

from app_exception.constants import DEFAULT_ERROR_CODE, INTERNAL_SERVER_ERROR
from app_exception.registry import ErrorRegistry


class ExceptionContextNotInitialized(RuntimeError):
    """Raised when an AppException is built before AppException.init().

    This is a startup bug. The filter re-raises it instead of turning it into
    an error response.
    """

    def __init__(self) -> None:
        super().__init__(
            "AppException used before initialization: call AppException.init(registry, is_dev) "
            "or pass context=ExceptionContext(...)"
        )


@dataclass(frozen=True)
class ExceptionContext:
    """Registry and dev flag an AppException is resolved against."""

    registry: ErrorRegistry
    is_dev: bool = False

    def exception(self, error_or_code: str, trace: str | None = None) -> "AppException":
        """Shortcut for ``AppException(error_or_code, trace, context=self)``."""
        return AppException(error_or_code, trace, context=self)


class AppException(Exception):
    """Application-level failure identified by a registry code.

    Unregistered codes degrade instead of failing: status 500, code
    UNKNOWN_ERROR, and the string passed in becomes the message. This lets
    callers raise ad hoc messages without registering them first.
    """

    _default_context: ClassVar[ExceptionContext | None] = None

    def __init__(
        self,
        error_or_code: str,
        trace: str | None = None,
        *,
        context: ExceptionContext | None = None,
    ) -> None:
        ctx = context or AppException._default_context
        if ctx is None:
            raise ExceptionContextNotInitialized()

        error = ctx.registry.get_error(error_or_code)
        if error is not None:
            self.status_code = error.status_code
            self.message = error.message
            self.code = error.code
        else:
            self.status_code = INTERNAL_SERVER_ERROR
            self.message = error_or_code
            self.code = DEFAULT_ERROR_CODE

        if ctx.is_dev:
            # Drop this frame so the trace ends at the raising call site.
            self.trace: str | None = trace or "".join(traceback.format_stack()[:-1])
        else:
            self.trace = None

        super().__init__(self.message)

    @classmethod
    def init(cls, registry: ErrorRegistry, is_dev: bool = False) -> ExceptionContext:
        """Set the process-wide default context. Call once at startup."""
        context = ExceptionContext(registry=registry, is_dev=is_dev)
        AppException._default_context = context
        return context

    @classmethod
    def reset(cls) -> None:
        """Forget the process-wide default context."""
        AppException._default_context = None
