from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from app_exception.registry import ErrorPreset


class AppExceptionSettings(BaseSettings):
    """Error-handling settings loaded from environment variables.

    Every field reads APP_EXCEPTION_<FIELD> (case-insensitive). In development,
    values may also come from a .env file. ``errors`` is a JSON list, e.g.:

        APP_EXCEPTION_ERRORS='[{"code": "USER_NOT_FOUND", "statusCode": 404, "message": "User not found"}]'
    """

    # Include stack traces in error responses. Never enable in production.
    is_dev: bool = False

    # Error codes registered at startup, in order (first duplicate wins)
    errors: list[ErrorPreset] = Field(default_factory=list)

    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="APP_EXCEPTION_",
        env_file=".env",  # Load from .env in development
        env_file_encoding="utf-8",
        extra="ignore",  # Ignore unknown env vars
    )
