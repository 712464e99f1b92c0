"""Unit tests for the subscriber registry."""

import pytest

from offline_resilience.events import SubscriberRegistry

pytestmark = pytest.mark.unit


class TestSubscriberRegistry:
    """Tests for SubscriberRegistry."""

    def test_notifies_in_subscription_order(self):
        registry = SubscriberRegistry("test")
        calls = []
        registry.subscribe(lambda s: calls.append(("first", s)))
        registry.subscribe(lambda s: calls.append(("second", s)))

        failures = registry.notify((1, 2))

        assert calls == [("first", (1, 2)), ("second", (1, 2))]
        assert failures == 0

    def test_failing_listener_is_isolated(self):
        registry = SubscriberRegistry("test")
        received = []

        def broken(_snapshot):
            raise RuntimeError("boom")

        registry.subscribe(broken)
        registry.subscribe(received.append)

        failures = registry.notify("snapshot")

        assert failures == 1
        assert received == ["snapshot"]

    def test_unsubscribe_is_idempotent(self):
        registry = SubscriberRegistry("test")
        unsubscribe = registry.subscribe(lambda s: None)

        unsubscribe()
        unsubscribe()

        assert len(registry) == 0

    def test_unsubscribe_during_notify(self):
        registry = SubscriberRegistry("test")
        received = []
        unsubscribers = []

        def once(snapshot):
            received.append(("once", snapshot))
            unsubscribers[0]()

        unsubscribers.append(registry.subscribe(once))
        registry.subscribe(lambda s: received.append(("always", s)))

        registry.notify(1)
        registry.notify(2)

        assert received == [("once", 1), ("always", 1), ("always", 2)]

    def test_deliver_to_single_listener(self):
        registry = SubscriberRegistry("test")
        received = []

        assert registry.deliver(received.append, "hello") is True
        assert registry.deliver(lambda s: 1 / 0, "hello") is False
        assert received == ["hello"]

    def test_clear(self):
        registry = SubscriberRegistry("test")
        registry.subscribe(lambda s: None)

        registry.clear()

        assert len(registry) == 0
