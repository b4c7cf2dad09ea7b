"""Type-keyed custom exception handlers.

A handler is looked up along the raised exception's MRO, so a handler for
a base class covers every subclass that has no handler of its own::

    handlers = HandlerRegistry()

    @handlers.handler(PermissionError)
    def forbidden(exc: BaseException, ctx: ErrorContext) -> None:
        ctx.response.status(403).json({"detail": "nope"})

A matched handler owns the response: the filter does no logging and writes
no body of its own.
"""

from collections.abc import Callable
from typing import TypeAlias

from app_exception.context import ErrorContext

ExceptionHandler: TypeAlias = Callable[[BaseException, ErrorContext], None]


class HandlerRegistry:
    """One handler per exact exception type; re-registering replaces it."""

    def __init__(self) -> None:
        self._handlers: dict[type[BaseException], ExceptionHandler] = {}

    def register(self, exc_type: type[BaseException], handler: ExceptionHandler) -> None:
        self._handlers[exc_type] = handler

    def handler(
        self, exc_type: type[BaseException]
    ) -> Callable[[ExceptionHandler], ExceptionHandler]:
        """Decorator form of register()."""

        def decorator(func: ExceptionHandler) -> ExceptionHandler:
            self.register(exc_type, func)
            return func

        return decorator

    def get_handler(self, exc: BaseException) -> ExceptionHandler | None:
        """Return the handler of the most specific registered ancestor, if any."""
        for cls in type(exc).__mro__:
            handler = self._handlers.get(cls)
            if handler is not None:
                return handler
        return None
