"""Connectivity monitor.

Holds the set of active connection issues (at most one per code), tracks
whether the runtime is online, and publishes a snapshot of the active set
to subscribers whenever it changes.
"""

from datetime import datetime, timezone
from typing import Callable, List, Optional, Tuple, Union

from offline_resilience.connectivity.catalog import get_issue_definition
from offline_resilience.connectivity.models import ConnectionIssue, IssueCode
from offline_resilience.events import SubscriberRegistry
from offline_resilience.logging import get_module_logger

logger = get_module_logger()

IssueSnapshot = Tuple[ConnectionIssue, ...]
IssueListener = Callable[[IssueSnapshot], None]


class ConnectivityMonitor:
    """Tracks active connection issues and the online state.

    The monitor is also a connectivity signal: anything that needs to know
    whether the network is reachable (the capability gate, the offline
    queue) reads ``is_online``.

    Example:
        monitor = ConnectivityMonitor()
        unsubscribe = monitor.subscribe(render_banner)
        monitor.raise_issue(IssueCode.API_RATE_LIMITED)
        worst = monitor.get_most_severe_issue()
    """

    def __init__(
        self,
        *,
        online: bool = True,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self._issues: List[ConnectionIssue] = []
        self._online = online
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._subscribers: SubscriberRegistry[IssueSnapshot] = SubscriberRegistry(
            "connectivity_monitor"
        )

    # Issue lifecycle

    def create_issue(
        self,
        code: Union[IssueCode, str],
        technical_details: Optional[str] = None,
        estimate_override: Optional[int] = None,
    ) -> ConnectionIssue:
        """Build an issue from the catalog without activating it.

        Args:
            code: IssueCode or its string value
            technical_details: Raw diagnostic text to attach
            estimate_override: Replacement resolution estimate in minutes.
                Falsy values (None, 0) keep the catalog estimate.

        Returns:
            A new ConnectionIssue stamped with the current time

        Raises:
            UnknownIssueCodeError: If the code is not in the catalog
        """
        definition = get_issue_definition(code)
        return ConnectionIssue(
            code=definition.code,
            severity=definition.severity,
            message=definition.message,
            description=definition.description,
            estimated_resolution_minutes=(
                estimate_override or definition.estimated_resolution_minutes
            ),
            retryable=definition.retryable,
            affected_capabilities=definition.affected_capabilities,
            user_actions=definition.user_actions,
            created_at=self._clock(),
            technical_details=technical_details,
        )

    def add_issue(self, issue: ConnectionIssue) -> None:
        """Activate an issue, replacing any active issue with the same code."""
        replaced = any(existing.code == issue.code for existing in self._issues)
        self._issues = [e for e in self._issues if e.code != issue.code]
        self._issues.append(issue)
        logger.info(
            "connection_issue_added",
            code=issue.code.value,
            severity=issue.severity.value,
            replaced=replaced,
            active_issues=len(self._issues),
        )
        self._notify()

    def raise_issue(
        self,
        code: Union[IssueCode, str],
        technical_details: Optional[str] = None,
        estimate_override: Optional[int] = None,
    ) -> ConnectionIssue:
        """Create an issue from the catalog and activate it."""
        issue = self.create_issue(code, technical_details, estimate_override)
        self.add_issue(issue)
        return issue

    def remove_issue(self, code: Union[IssueCode, str]) -> bool:
        """Deactivate the issue with the given code.

        Returns:
            True if an issue was removed. Subscribers are only notified
            when the active set changed.
        """
        initial = len(self._issues)
        self._issues = [e for e in self._issues if e.code != code]
        if len(self._issues) == initial:
            return False

        logger.info(
            "connection_issue_removed",
            code=str(getattr(code, "value", code)),
            active_issues=len(self._issues),
        )
        self._notify()
        return True

    def clear_all_issues(self) -> None:
        """Drop every active issue with a single notification."""
        if not self._issues:
            return
        cleared = len(self._issues)
        self._issues = []
        logger.info("connection_issues_cleared", cleared=cleared)
        self._notify()

    # Queries

    def get_current_issues(self) -> IssueSnapshot:
        return tuple(self._issues)

    def has_issues(self) -> bool:
        return bool(self._issues)

    def has_issue(self, code: Union[IssueCode, str]) -> bool:
        return any(issue.code == code for issue in self._issues)

    def get_most_severe_issue(self) -> Optional[ConnectionIssue]:
        """Return the highest-severity active issue.

        Ties go to the issue that was added first. None when no issues
        are active.
        """
        most_severe: Optional[ConnectionIssue] = None
        for issue in self._issues:
            if most_severe is None or issue.severity.rank > most_severe.severity.rank:
                most_severe = issue
        return most_severe

    # Online signal

    @property
    def is_online(self) -> bool:
        return self._online

    def set_online(self, online: bool) -> None:
        """Record a connectivity change reported by the runtime.

        Going offline activates NETWORK_OFFLINE; coming back removes it.
        """
        if online != self._online:
            logger.info("connectivity_changed", is_online=online)
        self._online = online
        if online:
            self.remove_issue(IssueCode.NETWORK_OFFLINE)
        elif not self.has_issue(IssueCode.NETWORK_OFFLINE):
            self.raise_issue(IssueCode.NETWORK_OFFLINE)

    def update_service_health(self, api_healthy: bool, websocket_connected: bool) -> None:
        """Reconcile service-level issues with health check results.

        API_SERVER_DOWN is only active while online. The real-time channel
        issue is only active while online with a healthy API, since a down
        API already explains a dropped channel.
        """
        if self._online and not api_healthy:
            if not self.has_issue(IssueCode.API_SERVER_DOWN):
                self.raise_issue(IssueCode.API_SERVER_DOWN)
        else:
            self.remove_issue(IssueCode.API_SERVER_DOWN)

        if self._online and api_healthy and not websocket_connected:
            if not self.has_issue(IssueCode.WEBSOCKET_CONNECTION_FAILED):
                self.raise_issue(IssueCode.WEBSOCKET_CONNECTION_FAILED)
        else:
            self.remove_issue(IssueCode.WEBSOCKET_CONNECTION_FAILED)

    # Subscriptions

    def subscribe(self, listener: IssueListener) -> Callable[[], None]:
        """Register a listener for issue-set snapshots.

        Returns:
            Unsubscribe function
        """
        return self._subscribers.subscribe(listener)

    def _notify(self) -> None:
        self._subscribers.notify(tuple(self._issues))
