"""Shared fixtures for resilience layer tests."""

from datetime import datetime, timedelta, timezone
from typing import Any, List, Optional

import pytest

from offline_resilience.connectivity import ConnectivityMonitor
from offline_resilience.resilience.queue import (
    ActionHandlerRegistry,
    InMemoryKeyValueStore,
    OfflineActionQueue,
    QueuedAction,
)
from offline_resilience.resilience.retry import RetryEngine, RetryPolicy

FIXED_NOW = datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)


class FakeClock:
    """Manually advanced clock returning tz-aware datetimes."""

    def __init__(self, start: datetime = FIXED_NOW) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


class FakeSignal:
    """Connectivity signal whose state tests flip directly."""

    def __init__(self, is_online: bool = True) -> None:
        self.is_online = is_online


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def recorded_sleep(clock):
    """Async sleep that records requested delays and advances the clock."""

    class RecordedSleep:
        def __init__(self):
            self.delays: List[float] = []

        async def __call__(self, seconds: float) -> None:
            self.delays.append(seconds)
            clock.advance(seconds)

    return RecordedSleep()


@pytest.fixture
def retry_policy_factory():
    """Factory for creating RetryPolicy instances."""

    def _factory(
        max_attempts: int = 3,
        base_delay: float = 1.0,
        max_delay: float = 10.0,
        backoff_factor: float = 2.0,
        jitter: bool = False,
    ) -> RetryPolicy:
        return RetryPolicy(
            max_attempts=max_attempts,
            base_delay=base_delay,
            max_delay=max_delay,
            backoff_factor=backoff_factor,
            jitter=jitter,
        )

    return _factory


@pytest.fixture
def retry_engine(retry_policy_factory, recorded_sleep, clock):
    """RetryEngine with a no-jitter default policy and fake time."""
    return RetryEngine(
        retry_policy_factory(),
        sleep_func=recorded_sleep,
        clock=clock,
    )


@pytest.fixture
def flaky_operation_factory():
    """Factory for async operations that fail a set number of times."""

    def _factory(failures: int, result: Any = "ok", error: Optional[Exception] = None):
        class FlakyOperation:
            def __init__(self):
                self.calls = 0

            async def __call__(self):
                self.calls += 1
                if self.calls <= failures:
                    raise error or ConnectionError(f"failure {self.calls}")
                return result

        return FlakyOperation()

    return _factory


@pytest.fixture
def monitor(clock):
    return ConnectivityMonitor(clock=clock)


@pytest.fixture
def signal():
    return FakeSignal(is_online=True)


@pytest.fixture
def memory_store():
    return InMemoryKeyValueStore()


@pytest.fixture
def offline_queue_factory(memory_store, signal, clock):
    """Factory for OfflineActionQueue instances sharing the fixture store."""

    def _factory(
        store=None,
        connectivity=None,
        handlers: Optional[ActionHandlerRegistry] = None,
        storage_limit: int = 1024,
    ) -> OfflineActionQueue:
        return OfflineActionQueue(
            store if store is not None else memory_store,
            connectivity if connectivity is not None else signal,
            handlers=handlers,
            storage_key="offline-queue",
            storage_limit=storage_limit,
            clock=clock,
        )

    return _factory


@pytest.fixture
def queued_action_factory():
    """Factory for creating QueuedAction instances."""

    def _factory(
        id: str = "action-1",
        type: str = "send_message",
        payload: Any = None,
        enqueued_at: datetime = FIXED_NOW,
        retry_count: int = 0,
        priority: int = 3,
    ) -> QueuedAction:
        if payload is None:
            payload = {"conversation_id": "c-1", "text": "hello"}
        return QueuedAction(
            id=id,
            type=type,
            payload=payload,
            enqueued_at=enqueued_at,
            retry_count=retry_count,
            priority=priority,
        )

    return _factory


@pytest.fixture
def recording_executor():
    """Executor that records action ids and fails for selected ids."""

    class RecordingExecutor:
        def __init__(self):
            self.calls: List[str] = []
            self.failing: dict = {}

        def fail(self, action_id: str, times: int = 1_000) -> None:
            self.failing[action_id] = times

        async def __call__(self, action: QueuedAction) -> None:
            self.calls.append(action.id)
            remaining = self.failing.get(action.id, 0)
            if remaining > 0:
                self.failing[action.id] = remaining - 1
                raise ConnectionError(f"replay failed for {action.id}")

    return RecordingExecutor()
