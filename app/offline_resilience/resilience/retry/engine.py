"""Retry engine with exponential backoff and jitter.

Runs a caller-supplied async operation under a retry policy, tracking
attempts per operation id so that display code can show how far along a
retrying operation is and when it will next be tried.
"""

import asyncio
import random
from datetime import datetime, timedelta, timezone
from typing import Awaitable, Callable, Dict, Optional, Protocol, TypeVar

from offline_resilience.exceptions import RetryExhaustedError
from offline_resilience.logging import get_module_logger
from offline_resilience.resilience.retry.models import RetryInfo, RetryState
from offline_resilience.resilience.retry.policy import DEFAULT_RETRY_POLICIES, RetryPolicy

logger = get_module_logger()

T = TypeVar("T")


class SleepFunc(Protocol):
    """Protocol for injectable sleep function."""

    async def __call__(self, seconds: float) -> None: ...


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RetryEngine:
    """Executes async operations with per-operation retry bookkeeping.

    State is keyed by operation id, so concurrent operations with
    different ids back off independently. Waiting only suspends the
    calling task.

    Attributes:
        default_policy: Policy used when execute_with_retry gets none

    Example:
        engine = RetryEngine()
        profile = await engine.execute_with_retry(
            lambda: client.get_profile(user_id),
            operation_id=f"profile:{user_id}",
            policy=get_retry_policy("api"),
        )

    Testing example:
        >>> delays = []
        >>> async def fake_sleep(s): delays.append(s)
        >>> engine = RetryEngine(sleep_func=fake_sleep, clock=lambda: fixed_now)
    """

    def __init__(
        self,
        default_policy: Optional[RetryPolicy] = None,
        *,
        sleep_func: Optional[SleepFunc] = None,
        clock: Optional[Callable[[], datetime]] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        """Initialize the engine.

        Args:
            default_policy: Policy for calls that do not pass one.
                Defaults to the 'api' policy.
            sleep_func: Injectable async sleep for time control in tests.
            clock: Injectable clock returning tz-aware datetimes.
            rng: Injectable Random instance for deterministic jitter.
        """
        self.default_policy = default_policy or DEFAULT_RETRY_POLICIES["api"]
        self._states: Dict[str, RetryState] = {}
        self._sleep = sleep_func or asyncio.sleep
        self._clock = clock or _utcnow
        self._rng = rng or random.Random()

    async def execute_with_retry(
        self,
        operation: Callable[[], Awaitable[T]],
        operation_id: str,
        policy: Optional[RetryPolicy] = None,
    ) -> T:
        """Run an operation, retrying failures with backoff.

        Args:
            operation: Zero-argument async callable (use a lambda for args).
            operation_id: Key for retry bookkeeping.
            policy: Retry policy; defaults to the engine's default policy.

        Returns:
            The operation's result on success.

        Raises:
            RetryExhaustedError: If the operation's attempts are already at
                the policy limit when called.
            Exception: The operation's own exception once the final attempt
                allowed by the policy fails.
        """
        policy = policy or self.default_policy

        while True:
            state = self._states.get(operation_id)
            if state is not None and state.attempts >= policy.max_attempts:
                raise RetryExhaustedError(operation_id, policy.max_attempts)

            if state is not None and state.next_eligible_at is not None:
                wait_seconds = (state.next_eligible_at - self._clock()).total_seconds()
                if wait_seconds > 0:
                    await self._sleep(wait_seconds)

            try:
                result = await operation()
            except Exception as e:
                # reset() during the wait drops the old state; start over from 0
                state = self._states.setdefault(operation_id, RetryState())
                state.attempts += 1

                if state.attempts >= policy.max_attempts:
                    self._clear(operation_id)
                    logger.warning(
                        "operation_retries_exhausted",
                        operation_id=operation_id,
                        attempts=state.attempts,
                        max_attempts=policy.max_attempts,
                        error=str(e),
                    )
                    raise

                delay = self.calculate_delay(state.attempts, policy)
                state.next_eligible_at = self._clock() + timedelta(seconds=delay)
                logger.warning(
                    "operation_retry_scheduled",
                    operation_id=operation_id,
                    attempt=state.attempts,
                    max_attempts=policy.max_attempts,
                    delay_seconds=round(delay, 3),
                    error=str(e),
                )
                continue

            if operation_id in self._states:
                logger.info("operation_recovered", operation_id=operation_id)
            self._clear(operation_id)
            return result

    def calculate_delay(self, attempts: int, policy: RetryPolicy) -> float:
        """Calculate the backoff delay after a given number of failures.

        Uses the formula: base_delay * (backoff_factor ^ (attempts - 1)),
        capped at max_delay, plus up to 10% jitter when enabled.

        Args:
            attempts: Failed attempts so far (>= 1)
            policy: Policy supplying the backoff parameters

        Returns:
            Delay in seconds before the next attempt
        """
        exponent = max(attempts - 1, 0)
        delay = min(policy.base_delay * (policy.backoff_factor**exponent), policy.max_delay)
        if policy.jitter:
            delay += self._rng.uniform(0, 0.1 * delay)
        return delay

    def get_retry_info(self, operation_id: str) -> RetryInfo:
        """Get attempts so far and the next retry time for an operation.

        Args:
            operation_id: Operation to inspect

        Returns:
            RetryInfo; zero attempts and no retry time when untracked
        """
        state = self._states.get(operation_id)
        if state is None:
            return RetryInfo()
        return RetryInfo(attempts=state.attempts, next_retry_at=state.next_eligible_at)

    def reset(self, operation_id: Optional[str] = None) -> None:
        """Clear retry state for one operation, or for all when no id is given.

        An attempt already in flight is not cancelled; its outcome is
        recorded against fresh state.
        """
        if operation_id is None:
            self._states.clear()
            logger.info("retry_state_reset_all")
        else:
            self._clear(operation_id)
            logger.info("retry_state_reset", operation_id=operation_id)

    def tracked_operations(self) -> list[str]:
        """List operation ids that currently have retry state."""
        return list(self._states)

    def _clear(self, operation_id: str) -> None:
        self._states.pop(operation_id, None)
