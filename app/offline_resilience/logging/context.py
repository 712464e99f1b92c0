"""Context binding for structured logging.

Binds operation-scoped context (replay pass ids, operation ids) so every
log entry emitted inside the block carries it.

Usage:
    from offline_resilience.logging import bind_log_context

    with bind_log_context(replay_id="r-1", queue_size=4):
        logger.info("replay_started")

Dependencies:
    - structlog.contextvars
"""

import uuid
from contextlib import contextmanager
from typing import Any, Generator, Optional

import structlog


@contextmanager
def bind_log_context(
    correlation_id: Optional[str] = None,
    **extra_context: Any,
) -> Generator[str, None, None]:
    """Bind context to all logs within the context manager.

    Previously bound values for the same keys are restored on exit so
    nested blocks do not clobber an outer context.

    Args:
        correlation_id: Identifier tying related log entries together.
            Auto-generated if not provided.
        **extra_context: Additional key-value pairs to include in logs.
            None values are skipped.

    Yields:
        The correlation id in effect for the block.
    """
    context: dict[str, Any] = {"correlation_id": correlation_id or str(uuid.uuid4())}
    context.update({k: v for k, v in extra_context.items() if v is not None})

    tokens = structlog.contextvars.bind_contextvars(**context)
    try:
        yield context["correlation_id"]
    finally:
        structlog.contextvars.reset_contextvars(**tokens)


def get_correlation_id() -> Optional[str]:
    """Get the correlation id bound to the current context, if any."""
    return structlog.contextvars.get_contextvars().get("correlation_id")
