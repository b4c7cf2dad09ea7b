"""Defaults shared by the exception type and the filter."""

DEFAULT_ERROR_CODE = "UNKNOWN_ERROR"
DEFAULT_ERROR_MESSAGE = "An unexpected error occurred"

INTERNAL_SERVER_ERROR = 500
UNPROCESSABLE_ENTITY = 422
