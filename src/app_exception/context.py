"""Request context handed to the filter and to custom handlers.

The filter only needs a request path and somewhere to write the response.
BufferedResponse is the Starlette-backed sink used by the FastAPI wiring;
tests substitute their own recording sink.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Protocol, Self

from starlette.responses import JSONResponse, Response

from app_exception.constants import INTERNAL_SERVER_ERROR

# No Content / Not Modified must not carry a body.
BODYLESS_STATUSES = frozenset({204, 304})


class ResponseSink(Protocol):
    """Minimal response surface: set a status, then write a JSON body."""

    def status(self, status_code: int) -> "ResponseSink": ...

    def json(self, body: dict[str, Any]) -> None: ...


@dataclass
class ErrorContext:
    """Where the failure happened and where the response goes."""

    path: str
    response: ResponseSink
    request: object | None = None


class BufferedResponse:
    """Collects status and body until the FastAPI handler returns.

    Custom handlers that want a non-JSON body (redirects, plain text, ...)
    call send() with any Starlette Response; it wins over status()/json().
    """

    def __init__(self) -> None:
        self.status_code: int | None = None
        self.body: dict[str, Any] | None = None
        self._response: Response | None = None

    def status(self, status_code: int) -> Self:
        self.status_code = status_code
        return self

    def json(self, body: dict[str, Any]) -> None:
        self.body = body

    def send(self, response: Response) -> None:
        self._response = response

    def to_response(self, headers: Mapping[str, str] | None = None) -> Response:
        """Starlette response for what was written; ``headers`` are added to it.

        A response passed to send() is returned untouched.
        """
        if self._response is not None:
            return self._response
        status_code = self.status_code or INTERNAL_SERVER_ERROR
        # Nothing usable written still keeps an error status, never a 200.
        if self.body is None or status_code in BODYLESS_STATUSES:
            return Response(status_code=status_code, headers=headers)
        return JSONResponse(status_code=status_code, content=self.body, headers=headers)
