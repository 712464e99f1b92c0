"""Offline resilience layer for intermittently connected clients.

Tracks connection issues, retries failing operations with backoff, decides
which capabilities work offline, and replays deferred actions when the
network returns.
"""

from offline_resilience.resilience import ResilienceService, get_resilience_service

__all__ = ["ResilienceService", "get_resilience_service"]
