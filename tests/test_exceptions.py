"""Unit tests for AppException resolution against the registry."""

import pytest

from app_exception.exceptions import (
    AppException,
    ExceptionContext,
    ExceptionContextNotInitialized,
)
from app_exception.registry import ErrorRegistry


def test_registered_code_resolves_from_registry(dev_context: ExceptionContext) -> None:
    exc = AppException("TEST_ERROR", context=dev_context)

    assert exc.status_code == 400
    assert exc.message == "Test error message"
    assert exc.code == "TEST_ERROR"
    assert str(exc) == "Test error message"


def test_unregistered_code_degrades_to_unknown_error(dev_context: ExceptionContext) -> None:
    exc = AppException("Custom error message", context=dev_context)

    assert exc.status_code == 500
    assert exc.message == "Custom error message"
    assert exc.code == "UNKNOWN_ERROR"


def test_trace_kept_in_dev_mode(dev_context: ExceptionContext) -> None:
    exc = AppException("TEST_ERROR", "stack-trace", context=dev_context)

    assert exc.trace == "stack-trace"


def test_trace_auto_captured_in_dev_mode(dev_context: ExceptionContext) -> None:
    exc = AppException("TEST_ERROR", context=dev_context)

    assert exc.trace
    assert "test_trace_auto_captured_in_dev_mode" in exc.trace


def test_trace_dropped_outside_dev_mode(prod_context: ExceptionContext) -> None:
    assert AppException("TEST_ERROR", "stack-trace", context=prod_context).trace is None
    assert AppException("TEST_ERROR", context=prod_context).trace is None


def test_dev_mode_only_changes_trace(
    dev_context: ExceptionContext, prod_context: ExceptionContext
) -> None:
    dev = AppException("TEST_ERROR", "stack-trace", context=dev_context)
    prod = AppException("TEST_ERROR", "stack-trace", context=prod_context)

    assert (dev.status_code, dev.code, dev.message) == (prod.status_code, prod.code, prod.message)
    assert dev.trace == "stack-trace"
    assert prod.trace is None


def test_constructing_before_init_is_fatal() -> None:
    with pytest.raises(ExceptionContextNotInitialized):
        AppException("TEST_ERROR")


def test_init_sets_default_context(registry: ErrorRegistry) -> None:
    AppException.init(registry, is_dev=False)

    exc = AppException("TEST_ERROR")

    assert exc.status_code == 400
    assert exc.trace is None


def test_explicit_context_overrides_default(registry: ErrorRegistry) -> None:
    AppException.init(ErrorRegistry(), is_dev=False)
    context = ExceptionContext(registry=registry, is_dev=True)

    exc = AppException("TEST_ERROR", context=context)

    assert exc.code == "TEST_ERROR"
    assert exc.trace is not None


def test_reset_clears_default_context(registry: ErrorRegistry) -> None:
    AppException.init(registry)
    AppException.reset()

    with pytest.raises(ExceptionContextNotInitialized):
        AppException("TEST_ERROR")


def test_context_factory(prod_context: ExceptionContext) -> None:
    exc = prod_context.exception("TEST_ERROR")

    assert isinstance(exc, AppException)
    assert exc.status_code == 400


def test_code_registered_after_construction_does_not_change_instance(
    prod_context: ExceptionContext,
) -> None:
    exc = AppException("LATE_ERROR", context=prod_context)
    prod_context.registry.register_error("LATE_ERROR", 409, "Late")

    assert exc.code == "UNKNOWN_ERROR"
    assert prod_context.exception("LATE_ERROR").status_code == 409
