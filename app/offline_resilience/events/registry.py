"""Subscriber registry for snapshot notifications.

Components that publish state changes (the connectivity monitor, the
offline queue) keep one registry each. Listeners are called synchronously,
in subscription order, with the snapshot the publisher passes in. If a
listener raises, the exception is caught and logged and the remaining
listeners are still called.
"""

from typing import Callable, Generic, List, TypeVar

from offline_resilience.logging import get_module_logger

logger = get_module_logger()

T = TypeVar("T")

Listener = Callable[[T], None]


class SubscriberRegistry(Generic[T]):
    """Ordered listener registry with isolated delivery.

    Attributes:
        name: Registry name used in log entries
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self._listeners: List[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener.

        Args:
            listener: Callable receiving each snapshot.

        Returns:
            Unsubscribe function. Calling it more than once is a no-op.
        """
        self._listeners.append(listener)
        logger.debug(
            "subscriber_registered",
            registry=self.name,
            listener=getattr(listener, "__name__", "unknown"),
            total_listeners=len(self._listeners),
        )

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)
                logger.debug(
                    "subscriber_removed",
                    registry=self.name,
                    total_listeners=len(self._listeners),
                )

        return unsubscribe

    def notify(self, snapshot: T) -> int:
        """Deliver a snapshot to every listener.

        Iterates over a copy of the listener list, so listeners may
        unsubscribe (or subscribe others) while being notified.

        Args:
            snapshot: Immutable state snapshot to deliver.

        Returns:
            Number of listeners that raised.
        """
        failures = 0
        for listener in list(self._listeners):
            if not self.deliver(listener, snapshot):
                failures += 1
        return failures

    def deliver(self, listener: Listener, snapshot: T) -> bool:
        """Deliver a snapshot to a single listener, isolating its failure.

        Returns:
            True if the listener returned normally.
        """
        try:
            listener(snapshot)
        except Exception as e:
            logger.error(
                "subscriber_notification_failed",
                registry=self.name,
                listener=getattr(listener, "__name__", "unknown"),
                error=str(e),
            )
            return False
        return True

    def clear(self) -> None:
        """Remove all listeners."""
        self._listeners.clear()

    def __len__(self) -> int:
        return len(self._listeners)
