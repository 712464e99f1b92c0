"""Unit tests for the connectivity monitor."""

from datetime import timedelta

import pytest

from offline_resilience.connectivity import IssueCode, IssueSeverity
from offline_resilience.exceptions import UnknownIssueCodeError

pytestmark = pytest.mark.unit


@pytest.fixture
def snapshots(monitor):
    received = []
    monitor.subscribe(received.append)
    return received


class TestCreateIssue:
    """Tests for building issues from the catalog."""

    def test_populates_from_catalog(self, monitor, clock):
        issue = monitor.create_issue(IssueCode.API_SERVER_DOWN, "HTTP 502")

        assert issue.code == IssueCode.API_SERVER_DOWN
        assert issue.severity == IssueSeverity.CRITICAL
        assert issue.message == "Service Temporarily Unavailable"
        assert issue.estimated_resolution_minutes == 15
        assert issue.technical_details == "HTTP 502"
        assert issue.created_at == clock()

    def test_does_not_activate_issue(self, monitor):
        monitor.create_issue(IssueCode.API_SERVER_DOWN)

        assert monitor.has_issues() is False

    def test_estimate_override(self, monitor):
        issue = monitor.create_issue(IssueCode.API_SERVER_DOWN, estimate_override=45)

        assert issue.estimated_resolution_minutes == 45

    def test_zero_override_keeps_catalog_estimate(self, monitor):
        issue = monitor.create_issue(IssueCode.API_SERVER_DOWN, estimate_override=0)

        assert issue.estimated_resolution_minutes == 15

    def test_unknown_code_raises(self, monitor):
        with pytest.raises(UnknownIssueCodeError):
            monitor.create_issue("DISK_FULL")


class TestIssueLifecycle:
    """Tests for adding, removing and clearing issues."""

    def test_add_issue_notifies_with_snapshot(self, monitor, snapshots):
        issue = monitor.raise_issue(IssueCode.NETWORK_TIMEOUT)

        assert snapshots == [(issue,)]
        assert isinstance(snapshots[0], tuple)

    def test_same_code_replaces_existing_issue(self, monitor, clock):
        monitor.raise_issue(IssueCode.API_RATE_LIMITED, "first")
        clock.advance(30)
        newest = monitor.raise_issue(IssueCode.API_RATE_LIMITED, "second")

        issues = monitor.get_current_issues()
        assert issues == (newest,)
        assert issues[0].technical_details == "second"
        assert issues[0].created_at == clock()

    def test_remove_issue_notifies_only_on_change(self, monitor, snapshots):
        monitor.raise_issue(IssueCode.NETWORK_TIMEOUT)

        assert monitor.remove_issue(IssueCode.NETWORK_TIMEOUT) is True
        assert monitor.remove_issue(IssueCode.NETWORK_TIMEOUT) is False
        assert len(snapshots) == 2
        assert snapshots[-1] == ()

    def test_remove_issue_accepts_string_code(self, monitor):
        monitor.raise_issue(IssueCode.NETWORK_TIMEOUT)

        assert monitor.remove_issue("NETWORK_TIMEOUT") is True

    def test_clear_all_issues_single_notification(self, monitor, snapshots):
        monitor.raise_issue(IssueCode.NETWORK_TIMEOUT)
        monitor.raise_issue(IssueCode.API_RATE_LIMITED)
        snapshots.clear()

        monitor.clear_all_issues()
        monitor.clear_all_issues()

        assert snapshots == [()]
        assert monitor.has_issues() is False

    def test_snapshot_is_not_affected_by_later_changes(self, monitor):
        monitor.raise_issue(IssueCode.NETWORK_TIMEOUT)
        before = monitor.get_current_issues()

        monitor.raise_issue(IssueCode.API_RATE_LIMITED)

        assert len(before) == 1


class TestMostSevereIssue:
    """Tests for picking the issue shown to users."""

    def test_none_when_empty(self, monitor):
        assert monitor.get_most_severe_issue() is None

    def test_highest_rank_wins(self, monitor):
        monitor.raise_issue(IssueCode.NETWORK_TIMEOUT)  # medium
        monitor.raise_issue(IssueCode.API_SERVER_DOWN)  # critical
        monitor.raise_issue(IssueCode.NETWORK_OFFLINE)  # high

        assert monitor.get_most_severe_issue().code == IssueCode.API_SERVER_DOWN

    def test_ties_go_to_earliest_inserted(self, monitor):
        monitor.raise_issue(IssueCode.NETWORK_TIMEOUT)  # medium
        monitor.raise_issue(IssueCode.API_RATE_LIMITED)  # medium

        assert monitor.get_most_severe_issue().code == IssueCode.NETWORK_TIMEOUT


class TestSubscribers:
    """Tests for subscriber delivery."""

    def test_failing_subscriber_does_not_block_others(self, monitor):
        received = []

        def broken(_issues):
            raise RuntimeError("render failed")

        monitor.subscribe(broken)
        monitor.subscribe(received.append)

        monitor.raise_issue(IssueCode.NETWORK_TIMEOUT)

        assert len(received) == 1
        assert monitor.has_issue(IssueCode.NETWORK_TIMEOUT)

    def test_unsubscribe_stops_delivery(self, monitor):
        received = []
        unsubscribe = monitor.subscribe(received.append)

        unsubscribe()
        unsubscribe()
        monitor.raise_issue(IssueCode.NETWORK_TIMEOUT)

        assert received == []


class TestOnlineSignal:
    """Tests for the online state and service health reconciliation."""

    def test_online_by_default(self, monitor):
        assert monitor.is_online is True

    def test_going_offline_raises_network_offline(self, monitor):
        monitor.set_online(False)

        assert monitor.is_online is False
        assert monitor.has_issue(IssueCode.NETWORK_OFFLINE)

    def test_going_online_removes_network_offline(self, monitor):
        monitor.set_online(False)
        monitor.set_online(True)

        assert monitor.is_online is True
        assert not monitor.has_issue(IssueCode.NETWORK_OFFLINE)

    def test_repeated_offline_keeps_original_issue(self, monitor, clock):
        monitor.set_online(False)
        first = monitor.get_current_issues()[0]
        clock.advance(60)

        monitor.set_online(False)

        assert monitor.get_current_issues() == (first,)
        assert first.created_at == clock() - timedelta(seconds=60)

    def test_unhealthy_api_raises_server_down(self, monitor):
        monitor.update_service_health(api_healthy=False, websocket_connected=False)

        assert monitor.has_issue(IssueCode.API_SERVER_DOWN)
        assert not monitor.has_issue(IssueCode.WEBSOCKET_CONNECTION_FAILED)

    def test_websocket_issue_only_when_api_healthy(self, monitor):
        monitor.update_service_health(api_healthy=True, websocket_connected=False)

        assert monitor.has_issue(IssueCode.WEBSOCKET_CONNECTION_FAILED)
        assert not monitor.has_issue(IssueCode.API_SERVER_DOWN)

    def test_no_service_issues_while_offline(self, monitor):
        monitor.set_online(False)

        monitor.update_service_health(api_healthy=False, websocket_connected=False)

        codes = [issue.code for issue in monitor.get_current_issues()]
        assert codes == [IssueCode.NETWORK_OFFLINE]

    def test_healthy_services_clear_issues(self, monitor):
        monitor.update_service_health(api_healthy=False, websocket_connected=False)

        monitor.update_service_health(api_healthy=True, websocket_connected=True)

        assert monitor.has_issues() is False
