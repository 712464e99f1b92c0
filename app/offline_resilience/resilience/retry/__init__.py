"""Retry engine for operations against intermittently available services.

Architecture:
- RetryPolicy: Immutable backoff configuration, shareable across operations
- RetryEngine: Runs async operations, tracks attempts per operation id
- RetryInfo: Read-only view of an operation's retry state

Usage:
    from offline_resilience.resilience.retry import RetryEngine, get_retry_policy

    engine = RetryEngine()
    result = await engine.execute_with_retry(
        lambda: client.fetch(),
        operation_id="fetch",
        policy=get_retry_policy("api"),
    )
"""

from offline_resilience.resilience.retry.engine import RetryEngine, SleepFunc
from offline_resilience.resilience.retry.models import RetryInfo, RetryState
from offline_resilience.resilience.retry.policy import (
    DEFAULT_RETRY_POLICIES,
    RetryPolicy,
    get_retry_policy,
)

__all__ = [
    # Policy
    "RetryPolicy",
    "DEFAULT_RETRY_POLICIES",
    "get_retry_policy",
    # Engine
    "RetryEngine",
    "SleepFunc",
    # Models
    "RetryInfo",
    "RetryState",
]
