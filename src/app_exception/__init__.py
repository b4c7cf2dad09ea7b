"""Registry-driven error responses for FastAPI applications."""

from app_exception.constants import DEFAULT_ERROR_CODE, DEFAULT_ERROR_MESSAGE
from app_exception.context import BufferedResponse, ErrorContext, ResponseSink
from app_exception.exceptions import AppException, ExceptionContext, ExceptionContextNotInitialized
from app_exception.filter import AppExceptionFilter
from app_exception.handlers import ExceptionHandler, HandlerRegistry
from app_exception.module import AppExceptionModule
from app_exception.registry import ErrorDefinition, ErrorPreset, ErrorRegistry
from app_exception.schemas.error import AppErrorResponse

__all__ = [
    "DEFAULT_ERROR_CODE",
    "DEFAULT_ERROR_MESSAGE",
    "AppErrorResponse",
    "AppException",
    "AppExceptionFilter",
    "AppExceptionModule",
    "BufferedResponse",
    "ErrorContext",
    "ErrorDefinition",
    "ErrorPreset",
    "ErrorRegistry",
    "ExceptionContext",
    "ExceptionContextNotInitialized",
    "ExceptionHandler",
    "HandlerRegistry",
    "ResponseSink",
]
