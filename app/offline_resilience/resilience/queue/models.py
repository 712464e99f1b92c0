"""Offline queue models.

This module defines the records the offline queue persists and the
snapshots it hands to subscribers and callers.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

from offline_resilience.connectivity.capabilities import CapabilityStatus

MAX_REPLAY_ATTEMPTS = 3
DEFAULT_PRIORITY = 3


@dataclass(frozen=True)
class QueuedAction:
    """A user action deferred until connectivity returns.

    Fields:
        id: Unique identifier (uuid4 string, assigned on enqueue)
        type: Action type used to route the action to its handler
        payload: JSON-compatible action data
        enqueued_at: When the action was queued (tz-aware UTC)
        retry_count: Replay attempts that have failed so far
        priority: Replay order, lower runs first

    Example:
        action = QueuedAction(
            id=str(uuid.uuid4()),
            type="send_message",
            payload={"conversation_id": "c-1", "text": "hello"},
        )
    """

    id: str
    type: str
    payload: Any
    enqueued_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    retry_count: int = 0
    priority: int = DEFAULT_PRIORITY

    def __post_init__(self) -> None:
        """Validate required fields."""
        if not self.id:
            raise ValueError("id is required")
        if not self.type:
            raise ValueError("type is required")
        if isinstance(self.priority, bool) or not isinstance(self.priority, int):
            raise ValueError(f"priority must be an int, got {self.priority!r}")
        if self.retry_count < 0:
            raise ValueError("retry_count must be >= 0")

    @property
    def sort_key(self) -> Tuple[int, datetime]:
        return (self.priority, self.enqueued_at)

    def with_failure(self) -> "QueuedAction":
        """Return a copy with retry_count incremented."""
        return replace(self, retry_count=self.retry_count + 1)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to a JSON-compatible dict with an ISO-8601 timestamp."""
        return {
            "id": self.id,
            "type": self.type,
            "payload": self.payload,
            "enqueued_at": self.enqueued_at.isoformat(),
            "retry_count": self.retry_count,
            "priority": self.priority,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "QueuedAction":
        """Build an action from its serialized form.

        Raises:
            KeyError: If a required field is missing
            ValueError: If a field has an invalid value
        """
        enqueued_at = datetime.fromisoformat(data["enqueued_at"])
        if enqueued_at.tzinfo is None:
            enqueued_at = enqueued_at.replace(tzinfo=timezone.utc)
        return cls(
            id=data["id"],
            type=data["type"],
            payload=data.get("payload"),
            enqueued_at=enqueued_at,
            retry_count=int(data.get("retry_count", 0)),
            priority=int(data.get("priority", DEFAULT_PRIORITY)),
        )


@dataclass
class ReplayStats:
    """Outcome of one replay pass.

    Fields:
        processed: Actions handed to the executor
        succeeded: Actions that completed and left the queue
        retried: Actions that failed and were written back
        dropped: Actions removed after reaching the replay ceiling
        skipped_offline: True when the pass did nothing because offline
        skipped_in_progress: True when another pass was already running
    """

    processed: int = 0
    succeeded: int = 0
    retried: int = 0
    dropped: List[QueuedAction] = field(default_factory=list)
    skipped_offline: bool = False
    skipped_in_progress: bool = False

    def as_log_fields(self) -> Dict[str, Any]:
        return {
            "processed": self.processed,
            "succeeded": self.succeeded,
            "retried": self.retried,
            "dropped": len(self.dropped),
        }


@dataclass(frozen=True)
class OfflineStatus:
    """Snapshot of offline state delivered to queue subscribers.

    Fields:
        is_offline: Current connectivity
        last_online: Last time the runtime was known to be online
        queued_actions: Pending actions in replay order
        capabilities: Current capability statuses
        data_last_synced: End of the last online replay pass
        storage_used: Bytes used by the persisted queue document
        storage_limit: Configured storage budget in bytes
    """

    is_offline: bool
    last_online: Optional[datetime]
    queued_actions: Tuple[QueuedAction, ...]
    capabilities: Tuple[CapabilityStatus, ...]
    data_last_synced: Optional[datetime]
    storage_used: int
    storage_limit: int
