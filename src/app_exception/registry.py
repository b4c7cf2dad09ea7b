"""Runtime error-code registry.

Maps a human-chosen error code (e.g. "USER_NOT_FOUND") to the status and
message returned to clients. Codes come from presets at startup or from
register_error() at any later point; they are never updated or removed.
"""

import threading
from collections.abc import Iterable
from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field


@dataclass(frozen=True)
class ErrorDefinition:
    """A registered error code. ``id`` is assigned once and never reused."""

    id: str
    code: str
    status_code: int
    message: str


class ErrorPreset(BaseModel):
    """Preset entry as it appears in settings or startup code.

    Accepts both ``status_code`` and ``statusCode`` so presets can be copied
    verbatim from JSON error catalogs.
    """

    model_config = ConfigDict(populate_by_name=True)

    code: str
    status_code: int = Field(alias="statusCode")
    message: str


class ErrorRegistry:
    """In-memory registry of error codes, one per running application."""

    def __init__(self, presets: Iterable[ErrorPreset] = ()) -> None:
        self._errors: dict[str, ErrorDefinition] = {}
        self._lock = threading.Lock()
        for preset in presets:
            self.register_error(preset.code, preset.status_code, preset.message)

    def register_error(self, code: str, status_code: int, message: str) -> str:
        """Register ``code`` and return its id.

        Registering an existing code is a no-op: the previous id is returned
        and the new status_code/message are ignored. There is no update path.
        """
        with self._lock:
            existing = self._errors.get(code)
            if existing is not None:
                return existing.id

            error_id = f"ERR-{len(self._errors) + 1}"
            self._errors[code] = ErrorDefinition(
                id=error_id, code=code, status_code=status_code, message=message
            )
            return error_id

    def get_error(self, code: str) -> ErrorDefinition | None:
        return self._errors.get(code)

    def __contains__(self, code: object) -> bool:
        return code in self._errors

    def __len__(self) -> int:
        return len(self._errors)
