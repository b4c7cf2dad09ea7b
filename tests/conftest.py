from collections.abc import AsyncIterator, Iterator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app_exception.context import ErrorContext
from app_exception.exceptions import AppException, ExceptionContext
from app_exception.handlers import HandlerRegistry
from app_exception.module import AppExceptionModule
from app_exception.registry import ErrorRegistry
from tests.factories import TEST_ERROR, build_app
from tests.fakes import RecordingLogger, RecordingSink


@pytest.fixture(autouse=True)
def reset_default_context() -> Iterator[None]:
    """Every test starts without a process-wide AppException context."""
    AppException.reset()
    yield
    AppException.reset()


@pytest.fixture
def registry() -> ErrorRegistry:
    return ErrorRegistry([TEST_ERROR])


@pytest.fixture
def dev_context(registry: ErrorRegistry) -> ExceptionContext:
    return ExceptionContext(registry=registry, is_dev=True)


@pytest.fixture
def prod_context(registry: ErrorRegistry) -> ExceptionContext:
    return ExceptionContext(registry=registry, is_dev=False)


@pytest.fixture
def handlers() -> HandlerRegistry:
    return HandlerRegistry()


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def error_context(sink: RecordingSink) -> ErrorContext:
    return ErrorContext(path="/test", response=sink)


@pytest.fixture
def logger() -> RecordingLogger:
    return RecordingLogger()


@pytest.fixture
def errors(logger: RecordingLogger) -> AppExceptionModule:
    return AppExceptionModule.for_root(is_dev=True, errors=[TEST_ERROR], logger=logger)


@pytest_asyncio.fixture
async def client(errors: AppExceptionModule) -> AsyncIterator[AsyncClient]:
    """HTTP client against the test app.

    raise_app_exceptions=False: Starlette re-raises exceptions that reach the
    catch-all handler after sending its response; the client should only see
    the response.
    """
    async with AsyncClient(
        transport=ASGITransport(app=build_app(errors), raise_app_exceptions=False),
        base_url="http://test",
    ) as client:
        yield client
