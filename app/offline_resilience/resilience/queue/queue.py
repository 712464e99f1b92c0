"""Persistent queue of user actions deferred while offline.

Actions are kept in replay order (priority ascending, then enqueue time)
and the whole queue is persisted as one JSON document after every
mutation. When connectivity returns, process_queued_actions replays them
through an executor; an action that fails MAX_REPLAY_ATTEMPTS times is
dropped and reported to the caller.
"""

import inspect
import json
import uuid
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, List, Optional, Tuple, Union

from offline_resilience.configuration import settings
from offline_resilience.connectivity.capabilities import (
    ConnectivitySignal,
    evaluate_capabilities,
)
from offline_resilience.events import SubscriberRegistry
from offline_resilience.logging import bind_log_context, get_module_logger
from offline_resilience.resilience.queue.handlers import ActionHandlerRegistry
from offline_resilience.resilience.queue.models import (
    DEFAULT_PRIORITY,
    MAX_REPLAY_ATTEMPTS,
    OfflineStatus,
    QueuedAction,
    ReplayStats,
)
from offline_resilience.resilience.queue.store import KeyValueStore

logger = get_module_logger()

QUEUE_DOCUMENT_VERSION = 1

Executor = Callable[[QueuedAction], Union[Any, Awaitable[Any]]]
StatusListener = Callable[[OfflineStatus], None]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class OfflineActionQueue:
    """Ordered, persisted queue of deferred actions.

    Attributes:
        store: KeyValueStore holding the queue document and timestamps
        signal: Connectivity signal consulted before replaying
        handlers: Executor used when process_queued_actions gets none
        storage_key: Key of the queue document
        storage_limit: Storage budget reported in OfflineStatus

    Example:
        queue = OfflineActionQueue(store, monitor)
        queue.enqueue("send_message", {"text": "hello"}, priority=1)
        ...
        stats = await queue.process_queued_actions(send_via_api)
    """

    def __init__(
        self,
        store: KeyValueStore,
        signal: ConnectivitySignal,
        *,
        handlers: Optional[ActionHandlerRegistry] = None,
        storage_key: Optional[str] = None,
        storage_limit: Optional[int] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self.store = store
        self.signal = signal
        self.handlers = handlers if handlers is not None else ActionHandlerRegistry()
        self.storage_key = storage_key or settings.queue.storage_key
        self.storage_limit = (
            storage_limit if storage_limit is not None else settings.queue.storage_limit_bytes
        )
        self._clock = clock or _utcnow
        self._dropped: List[QueuedAction] = []
        self._replaying = False
        self._subscribers: SubscriberRegistry[OfflineStatus] = SubscriberRegistry(
            "offline_queue"
        )
        self._actions: List[QueuedAction] = self._load()

    @property
    def last_online_key(self) -> str:
        return f"{self.storage_key}-last-online"

    @property
    def last_sync_key(self) -> str:
        return f"{self.storage_key}-last-sync"

    # Mutations

    def enqueue(
        self, action_type: str, payload: Any, priority: int = DEFAULT_PRIORITY
    ) -> str:
        """Add an action to the queue.

        Args:
            action_type: Routing key for the action's handler
            payload: JSON-serializable action data
            priority: Replay order, lower runs first

        Returns:
            The new action's id

        Raises:
            ValueError: If action_type is empty, priority is not an int, or
                payload is not JSON-serializable
        """
        if not action_type:
            raise ValueError("action_type is required")
        if isinstance(priority, bool) or not isinstance(priority, int):
            raise ValueError(f"priority must be an int, got {priority!r}")
        try:
            # stored in its persisted form so a reload yields the same payload
            payload = json.loads(json.dumps(payload))
        except (TypeError, ValueError) as e:
            raise ValueError(f"payload must be JSON-serializable: {e}") from e

        action = QueuedAction(
            id=str(uuid.uuid4()),
            type=action_type,
            payload=payload,
            enqueued_at=self._clock(),
            priority=priority,
        )
        self._actions.append(action)
        self._actions.sort(key=lambda a: a.sort_key)
        self._save()

        logger.info(
            "action_queued",
            action_id=action.id,
            action_type=action_type,
            priority=priority,
            queue_size=len(self._actions),
        )
        self._notify()
        return action.id

    def remove(self, action_id: str) -> bool:
        """Remove an action by id.

        Returns:
            True if the action was queued and has been removed
        """
        if not self._discard(action_id):
            return False
        self._save()
        logger.info("queued_action_removed", action_id=action_id)
        self._notify()
        return True

    def record_last_online(self, when: Optional[datetime] = None) -> None:
        """Persist the last time the runtime was known to be online."""
        self._write_timestamp(self.last_online_key, when or self._clock())

    # Replay

    async def process_queued_actions(self, executor: Optional[Executor] = None) -> ReplayStats:
        """Replay queued actions in order.

        Does nothing while offline or while another pass is running. Each
        action runs once per pass. Success removes it; failure increments
        its retry count, and at MAX_REPLAY_ATTEMPTS it is dropped.

        Args:
            executor: Sync or async callable taking a QueuedAction. Raising
                marks the attempt failed. Defaults to the handler registry.

        Returns:
            ReplayStats for this pass
        """
        stats = ReplayStats()

        if not self.signal.is_online:
            stats.skipped_offline = True
            logger.debug("replay_skipped_offline", queue_size=len(self._actions))
            return stats

        if self._replaying:
            stats.skipped_in_progress = True
            logger.warning("replay_skipped_in_progress", queue_size=len(self._actions))
            return stats

        if executor is None:
            executor = self.handlers
        self._replaying = True
        try:
            with bind_log_context(queue_size=len(self._actions)):
                logger.info("replay_started")
                for action in list(self._actions):
                    await self._replay_one(action, executor, stats)
                self._write_timestamp(self.last_sync_key, self._clock())
                logger.info("replay_completed", **stats.as_log_fields())
        finally:
            self._replaying = False

        self._notify()
        return stats

    async def _replay_one(
        self, action: QueuedAction, executor: Executor, stats: ReplayStats
    ) -> None:
        if self._index_of(action.id) is None:
            # removed while an earlier action was running
            return

        stats.processed += 1
        try:
            result = executor(action)
            if inspect.isawaitable(result):
                await result
        except Exception as e:
            self._record_failure(action, e, stats)
            return

        self._discard(action.id)
        self._save()
        stats.succeeded += 1
        logger.info("queued_action_replayed", action_id=action.id, action_type=action.type)

    def _record_failure(
        self, action: QueuedAction, error: Exception, stats: ReplayStats
    ) -> None:
        if self._index_of(action.id) is None:
            # removed by its own executor
            logger.info("queued_action_cancelled", action_id=action.id, error=str(error))
            return

        failed = action.with_failure()

        if failed.retry_count >= MAX_REPLAY_ATTEMPTS:
            self._discard(action.id)
            self._dropped.append(failed)
            stats.dropped.append(failed)
            logger.warning(
                "queued_action_dropped",
                action_id=action.id,
                action_type=action.type,
                retry_count=failed.retry_count,
                error=str(error),
            )
        else:
            self._actions[self._index_of(action.id)] = failed
            stats.retried += 1
            logger.warning(
                "queued_action_replay_failed",
                action_id=action.id,
                action_type=action.type,
                retry_count=failed.retry_count,
                max_attempts=MAX_REPLAY_ATTEMPTS,
                error=str(error),
            )
        self._save()

    # Queries

    def get_queued_actions(self) -> Tuple[QueuedAction, ...]:
        return tuple(self._actions)

    def get_dropped_actions(self) -> Tuple[QueuedAction, ...]:
        """Actions dropped after reaching the replay ceiling, oldest first."""
        return tuple(self._dropped)

    @property
    def last_online(self) -> Optional[datetime]:
        return self._read_timestamp(self.last_online_key)

    @property
    def data_last_synced(self) -> Optional[datetime]:
        return self._read_timestamp(self.last_sync_key)

    def storage_used(self) -> int:
        """Bytes used by the queue document and its timestamps."""
        total = 0
        for key in (self.storage_key, self.last_online_key, self.last_sync_key):
            value = self.store.get(key)
            if value is not None:
                total += len(value.encode("utf-8"))
        return total

    def get_offline_status(self) -> OfflineStatus:
        is_offline = not self.signal.is_online
        return OfflineStatus(
            is_offline=is_offline,
            last_online=self.last_online,
            queued_actions=tuple(self._actions),
            capabilities=tuple(evaluate_capabilities(is_offline)),
            data_last_synced=self.data_last_synced,
            storage_used=self.storage_used(),
            storage_limit=self.storage_limit,
        )

    def subscribe(self, listener: StatusListener) -> Callable[[], None]:
        """Register a listener for status snapshots.

        The listener immediately receives the current status, then one
        snapshot per change.

        Returns:
            Unsubscribe function
        """
        unsubscribe = self._subscribers.subscribe(listener)
        self._subscribers.deliver(listener, self.get_offline_status())
        return unsubscribe

    def notify_status_changed(self) -> None:
        """Publish the current status, e.g. after a connectivity change."""
        self._notify()

    def __len__(self) -> int:
        return len(self._actions)

    # Internals

    def _index_of(self, action_id: str) -> Optional[int]:
        for index, action in enumerate(self._actions):
            if action.id == action_id:
                return index
        return None

    def _discard(self, action_id: str) -> bool:
        index = self._index_of(action_id)
        if index is None:
            return False
        del self._actions[index]
        return True

    def _notify(self) -> None:
        if len(self._subscribers) == 0:
            return
        self._subscribers.notify(self.get_offline_status())

    def _load(self) -> List[QueuedAction]:
        try:
            raw = self.store.get(self.storage_key)
        except Exception as e:
            logger.error("offline_queue_load_failed", key=self.storage_key, error=str(e))
            return []
        if raw is None:
            return []

        try:
            document = json.loads(raw)
            if not isinstance(document, dict) or document.get("version") != QUEUE_DOCUMENT_VERSION:
                raise ValueError(f"unsupported queue document: {str(raw)[:80]}")
            actions = [QueuedAction.from_dict(item) for item in document["actions"]]
        except (ValueError, KeyError, TypeError) as e:
            logger.error("offline_queue_corrupt", key=self.storage_key, error=str(e))
            return []

        actions.sort(key=lambda a: a.sort_key)
        logger.info("offline_queue_loaded", key=self.storage_key, queue_size=len(actions))
        return actions

    def _save(self) -> None:
        document = {
            "version": QUEUE_DOCUMENT_VERSION,
            "actions": [action.to_dict() for action in self._actions],
        }
        try:
            self.store.set(self.storage_key, json.dumps(document))
        except Exception as e:
            logger.error(
                "offline_queue_save_failed",
                key=self.storage_key,
                queue_size=len(self._actions),
                error=str(e),
            )

    def _write_timestamp(self, key: str, when: datetime) -> None:
        try:
            self.store.set(key, when.isoformat())
        except Exception as e:
            logger.error("offline_queue_timestamp_save_failed", key=key, error=str(e))

    def _read_timestamp(self, key: str) -> Optional[datetime]:
        try:
            raw = self.store.get(key)
            return datetime.fromisoformat(raw) if raw else None
        except (OSError, ValueError) as e:
            logger.error("offline_queue_timestamp_corrupt", key=key, error=str(e))
            return None
