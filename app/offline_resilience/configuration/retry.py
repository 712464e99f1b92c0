"""Retry engine settings."""

from pydantic import Field

from offline_resilience.configuration.base import InfrastructureSettings


class RetrySettings(InfrastructureSettings):
    """Default retry policy for operations wrapped by the retry engine.

    Named policies (``api``, ``websocket``, ``health_check``) are fixed in
    code; these settings build the ``default`` policy.

    Environment Variables:
        RETRY_MAX_ATTEMPTS: Total attempts including the first (default: 3)
        RETRY_BASE_DELAY_SECONDS: Delay before the second attempt (default: 1.0)
        RETRY_MAX_DELAY_SECONDS: Cap for any single delay (default: 10.0)
        RETRY_BACKOFF_FACTOR: Multiplier applied per failure (default: 2.0)
        RETRY_JITTER: Add up to 10% random delay (default: True)

    Exponential Backoff:
        Delay calculation: min(base_delay * factor ^ (attempts - 1), max_delay)

        Example with defaults (base=1s, factor=2, max=10s):
            After failure 1: 1s
            After failure 2: 2s
            After failure 3: 4s (only reachable with max_attempts > 3)
    """

    max_attempts: int = Field(
        default=3,
        alias="RETRY_MAX_ATTEMPTS",
        description="Total attempts per operation before the failure is surfaced",
    )
    base_delay_seconds: float = Field(
        default=1.0,
        alias="RETRY_BASE_DELAY_SECONDS",
        description="Base delay for exponential backoff (seconds)",
    )
    max_delay_seconds: float = Field(
        default=10.0,
        alias="RETRY_MAX_DELAY_SECONDS",
        description="Maximum delay for exponential backoff (seconds)",
    )
    backoff_factor: float = Field(
        default=2.0,
        alias="RETRY_BACKOFF_FACTOR",
        description="Multiplier applied to the delay after each failure",
    )
    jitter: bool = Field(
        default=True,
        alias="RETRY_JITTER",
        description="Add a random 0-10% of the delay to spread out retries",
    )
