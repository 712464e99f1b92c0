"""Snapshot notification infrastructure."""

from offline_resilience.events.registry import Listener, SubscriberRegistry

__all__ = ["Listener", "SubscriberRegistry"]
