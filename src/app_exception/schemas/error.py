"""Error response schema.

All error responses share one body:
{"statusCode": 400, "errorCode": "...", "message": "...", "path": "...", "timestamp": "...", "trace": "..."}.
``trace`` only appears in dev mode. The filter builds these from exceptions.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class AppErrorResponse(BaseModel):
    """Canonical error body returned for every handled failure."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    status_code: int
    error_code: str
    message: str
    path: str
    timestamp: str
    trace: str | None = None

    def to_body(self) -> dict[str, Any]:
        """camelCase dict for the wire, without ``trace`` when absent."""
        return self.model_dump(by_alias=True, exclude_none=True)
