"""Offline action queue.

Architecture:
- QueuedAction: Immutable deferred action, serialized as JSON
- KeyValueStore: Persistence protocol (memory and file backends)
- ActionHandlerRegistry: Routes replayed actions to handlers by type
- OfflineActionQueue: Ordering, persistence, bounded replay, status snapshots

Usage:
    from offline_resilience.resilience.queue import (
        ActionHandlerRegistry,
        OfflineActionQueue,
        create_key_value_store,
    )

    handlers = ActionHandlerRegistry()
    queue = OfflineActionQueue(create_key_value_store(), monitor, handlers=handlers)
"""

from offline_resilience.resilience.queue.factory import create_key_value_store
from offline_resilience.resilience.queue.handlers import (
    ActionHandler,
    ActionHandlerRegistry,
)
from offline_resilience.resilience.queue.models import (
    DEFAULT_PRIORITY,
    MAX_REPLAY_ATTEMPTS,
    OfflineStatus,
    QueuedAction,
    ReplayStats,
)
from offline_resilience.resilience.queue.queue import Executor, OfflineActionQueue
from offline_resilience.resilience.queue.store import (
    FileKeyValueStore,
    InMemoryKeyValueStore,
    KeyValueStore,
)

__all__ = [
    # Models
    "QueuedAction",
    "ReplayStats",
    "OfflineStatus",
    "MAX_REPLAY_ATTEMPTS",
    "DEFAULT_PRIORITY",
    # Storage
    "KeyValueStore",
    "InMemoryKeyValueStore",
    "FileKeyValueStore",
    "create_key_value_store",
    # Replay
    "ActionHandler",
    "ActionHandlerRegistry",
    "Executor",
    "OfflineActionQueue",
]
