"""Structured logging infrastructure.

Centralized logging configuration for the resilience layer using structlog.

Public API:
    - configure_logging(): Initialize logging for the client process
    - get_module_logger(): Get a logger for the calling module
    - bind_log_context(): Context manager for operation-scoped logging
    - get_correlation_id(): Get current correlation ID from context

Example:
    from offline_resilience.logging import configure_logging, get_module_logger

    configure_logging()
    logger = get_module_logger()
    logger.info("module_initialized")
"""

from offline_resilience.logging.context import bind_log_context, get_correlation_id
from offline_resilience.logging.setup import configure_logging, get_module_logger

__all__ = [
    "configure_logging",
    "get_module_logger",
    "bind_log_context",
    "get_correlation_id",
]
