"""Resilience patterns for intermittently connected clients.

- retry: Exponential backoff retries for in-flight operations
- queue: Persistent queue of actions deferred while offline
- service: ResilienceService wiring everything together
"""

from offline_resilience.resilience.service import (
    ResilienceService,
    get_resilience_service,
)

__all__ = ["ResilienceService", "get_resilience_service"]
