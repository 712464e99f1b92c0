"""Retry policy configuration.

A policy is a pure value: many operations may share one instance.
"""

from dataclasses import dataclass
from typing import Dict, Optional

from offline_resilience.configuration import RetrySettings, settings


@dataclass(frozen=True)
class RetryPolicy:
    """Backoff parameters for the retry engine.

    Attributes:
        max_attempts: Total attempts, including the first one
        base_delay: Delay in seconds scheduled after the first failure
        max_delay: Cap in seconds for any single delay
        backoff_factor: Multiplier applied per additional failure
        jitter: Add a uniform random 0-10% of the delay

    Example:
        # Fail fast health probe
        policy = RetryPolicy(max_attempts=2, base_delay=0.5, max_delay=5.0)

        # Delays after failures 1, 2, 3 with factor 2: 1s, 2s, 4s
        policy = RetryPolicy(max_attempts=4, base_delay=1.0, max_delay=10.0)
    """

    max_attempts: int = 3
    base_delay: float = 1.0
    max_delay: float = 10.0
    backoff_factor: float = 2.0
    jitter: bool = True

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.base_delay <= 0:
            raise ValueError("base_delay must be greater than 0")
        if self.max_delay < self.base_delay:
            raise ValueError("max_delay must be >= base_delay")
        if self.backoff_factor < 1:
            raise ValueError("backoff_factor must be at least 1")

    @classmethod
    def from_settings(cls, retry_settings: RetrySettings) -> "RetryPolicy":
        """Build a policy from the RETRY_* environment settings."""
        return cls(
            max_attempts=retry_settings.max_attempts,
            base_delay=retry_settings.base_delay_seconds,
            max_delay=retry_settings.max_delay_seconds,
            backoff_factor=retry_settings.backoff_factor,
            jitter=retry_settings.jitter,
        )


# Named policies per operation type
DEFAULT_RETRY_POLICIES: Dict[str, RetryPolicy] = {
    "api": RetryPolicy(
        max_attempts=3,
        base_delay=1.0,
        max_delay=10.0,
        backoff_factor=2.0,
        jitter=True,
    ),
    "websocket": RetryPolicy(
        max_attempts=5,
        base_delay=2.0,
        max_delay=30.0,
        backoff_factor=1.5,
        jitter=True,
    ),
    "health_check": RetryPolicy(
        max_attempts=2,
        base_delay=0.5,
        max_delay=5.0,
        backoff_factor=2.0,
        jitter=False,
    ),
}


def get_retry_policy(
    name: str, retry_settings: Optional[RetrySettings] = None
) -> RetryPolicy:
    """Look up a named retry policy.

    Args:
        name: 'api', 'websocket', 'health_check', or 'default'. The default
            policy is built from settings on each call.
        retry_settings: Optional settings override for the default policy.

    Returns:
        The named RetryPolicy

    Raises:
        KeyError: If no policy has that name
    """
    if name == "default":
        return RetryPolicy.from_settings(retry_settings or settings.retry)
    try:
        return DEFAULT_RETRY_POLICIES[name]
    except KeyError:
        raise KeyError(
            f"Unknown retry policy: {name}. "
            f"Available: default, {', '.join(sorted(DEFAULT_RETRY_POLICIES))}"
        ) from None
