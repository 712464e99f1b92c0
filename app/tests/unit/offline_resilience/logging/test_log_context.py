"""Unit tests for logging setup and context binding."""

import pytest
import structlog

from offline_resilience.logging import (
    bind_log_context,
    configure_logging,
    get_correlation_id,
    get_module_logger,
)

pytestmark = pytest.mark.unit


def test_configure_logging_returns_logger():
    logger = configure_logging()

    assert logger is not None


def test_get_module_logger_binds_component():
    logger = get_module_logger()

    context = structlog.get_context(logger)
    assert "component" in context
    assert "module_path" in context


def test_bind_log_context_generates_correlation_id():
    with bind_log_context() as correlation_id:
        assert correlation_id
        assert get_correlation_id() == correlation_id

    assert get_correlation_id() is None


def test_bind_log_context_binds_extra_and_skips_none():
    with bind_log_context(correlation_id="c-1", replay_id="r-1", queue_size=None):
        context = structlog.contextvars.get_contextvars()

        assert context["correlation_id"] == "c-1"
        assert context["replay_id"] == "r-1"
        assert "queue_size" not in context


def test_nested_contexts_restore_outer_values():
    with bind_log_context(correlation_id="outer"):
        with bind_log_context(correlation_id="inner"):
            assert get_correlation_id() == "inner"
        assert get_correlation_id() == "outer"
