"""Retry bookkeeping models."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class RetryState:
    """Per-operation retry bookkeeping, owned by the retry engine.

    Created on the first failure of an operation id and discarded on
    success or once the policy's attempt budget is used up.
    """

    attempts: int = 0
    next_eligible_at: Optional[datetime] = None


@dataclass(frozen=True)
class RetryInfo:
    """Read-only view of an operation's retry state for display.

    Attributes:
        attempts: Failed attempts recorded so far (0 when untracked)
        next_retry_at: When the next attempt may start, if scheduled
    """

    attempts: int = 0
    next_retry_at: Optional[datetime] = None
