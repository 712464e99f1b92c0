"""Custom exceptions for the resilience layer.

Provides specialized exceptions for retry exhaustion, issue catalog
lookups, queued action routing, and capability gating.
"""

from typing import Optional


class ResilienceError(Exception):
    """Base exception for all resilience-layer errors.

    Example:
        try:
            await engine.execute_with_retry(fetch, "fetch-profile")
        except ResilienceError as e:
            logger.error("resilience_error", error=str(e))
    """

    pass


class RetryExhaustedError(ResilienceError):
    """Raised when an operation is called after its retry budget is spent.

    This is a caller error: the engine never retries it.

    Attributes:
        operation_id: Identifier of the exhausted operation
        max_attempts: The policy limit that was reached

    Example:
        >>> await engine.execute_with_retry(op, "sync")  # attempts already at cap
        Traceback (most recent call last):
        ...
        RetryExhaustedError: Max retry attempts (3) exceeded for operation: sync
    """

    def __init__(self, operation_id: str, max_attempts: int):
        super().__init__(
            f"Max retry attempts ({max_attempts}) exceeded for operation: {operation_id}"
        )
        self.operation_id = operation_id
        self.max_attempts = max_attempts


class UnknownIssueCodeError(ResilienceError):
    """Raised when an issue code has no entry in the issue catalog.

    Example:
        >>> monitor.create_issue("NOT_A_CODE")
        Traceback (most recent call last):
        ...
        UnknownIssueCodeError: Unknown issue code: NOT_A_CODE
    """

    def __init__(self, code: object):
        super().__init__(f"Unknown issue code: {code}")
        self.code = code


class UnknownActionTypeError(ResilienceError):
    """Raised when a queued action has no registered handler.

    Counts as a replay failure, so the action is retried up to the
    queue's ceiling before being dropped.
    """

    def __init__(self, action_type: str):
        super().__init__(f"No handler registered for action type: {action_type}")
        self.action_type = action_type


class CapabilityUnavailableError(ResilienceError):
    """Raised when an action is requested for a capability that is unavailable.

    Attributes:
        capability: The capability that cannot be used or queued
        alternative_action: Optional suggestion from the capability catalog
    """

    def __init__(self, capability: str, alternative_action: Optional[str] = None):
        message = f"Capability unavailable while offline: {capability}"
        if alternative_action:
            message = f"{message} ({alternative_action})"
        super().__init__(message)
        self.capability = capability
        self.alternative_action = alternative_action
