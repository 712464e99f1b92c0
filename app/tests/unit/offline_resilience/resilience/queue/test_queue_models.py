"""Unit tests for offline queue models."""

import dataclasses
from datetime import datetime, timezone

import pytest

from offline_resilience.resilience.queue import QueuedAction, ReplayStats

pytestmark = pytest.mark.unit


class TestQueuedAction:
    """Tests for QueuedAction."""

    def test_defaults(self):
        action = QueuedAction(id="a-1", type="send_message", payload={"text": "hi"})

        assert action.retry_count == 0
        assert action.priority == 3
        assert action.enqueued_at.tzinfo is not None

    def test_required_fields(self):
        with pytest.raises(ValueError, match="type is required"):
            QueuedAction(id="a-1", type="", payload=None)
        with pytest.raises(ValueError, match="id is required"):
            QueuedAction(id="", type="send_message", payload=None)

    def test_negative_retry_count_rejected(self):
        with pytest.raises(ValueError, match="retry_count"):
            QueuedAction(id="a-1", type="send_message", payload=None, retry_count=-1)

    @pytest.mark.parametrize("priority", [1.5, "1", None, False])
    def test_non_int_priority_rejected(self, priority):
        with pytest.raises(ValueError, match="priority"):
            QueuedAction(id="a-1", type="send_message", payload=None, priority=priority)

    def test_with_failure_returns_new_instance(self, queued_action_factory):
        action = queued_action_factory(retry_count=1)

        failed = action.with_failure()

        assert failed.retry_count == 2
        assert action.retry_count == 1
        assert failed.id == action.id

    def test_is_frozen(self, queued_action_factory):
        action = queued_action_factory()

        with pytest.raises(dataclasses.FrozenInstanceError):
            action.retry_count = 5  # type: ignore[misc]

    def test_sort_key_orders_by_priority_then_time(self, queued_action_factory):
        early = queued_action_factory(
            id="early", priority=3, enqueued_at=datetime(2024, 1, 1, tzinfo=timezone.utc)
        )
        late = queued_action_factory(
            id="late", priority=3, enqueued_at=datetime(2024, 1, 2, tzinfo=timezone.utc)
        )
        urgent = queued_action_factory(
            id="urgent", priority=1, enqueued_at=datetime(2024, 1, 3, tzinfo=timezone.utc)
        )

        ordered = sorted([late, urgent, early], key=lambda a: a.sort_key)

        assert [a.id for a in ordered] == ["urgent", "early", "late"]

    def test_to_dict_uses_iso_timestamp(self, queued_action_factory):
        data = queued_action_factory(id="a-1", retry_count=2, priority=1).to_dict()

        assert data == {
            "id": "a-1",
            "type": "send_message",
            "payload": {"conversation_id": "c-1", "text": "hello"},
            "enqueued_at": "2024-05-01T12:00:00+00:00",
            "retry_count": 2,
            "priority": 1,
        }

    def test_from_dict_restores_action(self, queued_action_factory):
        action = queued_action_factory(retry_count=1, priority=5)

        assert QueuedAction.from_dict(action.to_dict()) == action

    def test_from_dict_assumes_utc_for_naive_timestamp(self):
        action = QueuedAction.from_dict(
            {"id": "a-1", "type": "sync", "enqueued_at": "2024-05-01T12:00:00"}
        )

        assert action.enqueued_at.tzinfo == timezone.utc
        assert action.priority == 3
        assert action.payload is None

    def test_from_dict_missing_field(self):
        with pytest.raises(KeyError):
            QueuedAction.from_dict({"id": "a-1", "type": "sync"})


class TestReplayStats:
    """Tests for ReplayStats."""

    def test_log_fields_count_dropped(self, queued_action_factory):
        stats = ReplayStats(processed=2, succeeded=1, dropped=[queued_action_factory()])

        assert stats.as_log_fields() == {
            "processed": 2,
            "succeeded": 1,
            "retried": 0,
            "dropped": 1,
        }
