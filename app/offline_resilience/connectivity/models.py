"""Connection issue data models and enums."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import FrozenSet, Optional, Tuple

from offline_resilience.connectivity.capabilities import Capability


class IssueCode(str, Enum):
    """Stable identifiers for classes of connectivity and service failure."""

    # Network issues
    NETWORK_OFFLINE = "NETWORK_OFFLINE"
    NETWORK_TIMEOUT = "NETWORK_TIMEOUT"
    DNS_RESOLUTION_FAILED = "DNS_RESOLUTION_FAILED"

    # API issues
    API_SERVER_DOWN = "API_SERVER_DOWN"
    API_RATE_LIMITED = "API_RATE_LIMITED"
    API_AUTHENTICATION_FAILED = "API_AUTHENTICATION_FAILED"
    API_SERVICE_UNAVAILABLE = "API_SERVICE_UNAVAILABLE"
    API_MAINTENANCE_MODE = "API_MAINTENANCE_MODE"

    # Real-time channel issues
    WEBSOCKET_CONNECTION_FAILED = "WEBSOCKET_CONNECTION_FAILED"
    WEBSOCKET_AUTHENTICATION_FAILED = "WEBSOCKET_AUTHENTICATION_FAILED"
    WEBSOCKET_SERVER_OVERLOADED = "WEBSOCKET_SERVER_OVERLOADED"
    WEBSOCKET_PROTOCOL_ERROR = "WEBSOCKET_PROTOCOL_ERROR"

    # Third-party AI provider issues
    AI_PROVIDER_DOWN = "AI_PROVIDER_DOWN"
    AI_QUOTA_EXCEEDED = "AI_QUOTA_EXCEEDED"
    AI_RATE_LIMITED = "AI_RATE_LIMITED"

    # Generic issues
    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"


class IssueSeverity(str, Enum):
    """How badly an issue degrades the client.

    Values:
        LOW: Minor degradation, most features work
        MEDIUM: Some features unavailable
        HIGH: Major functionality impacted
        CRITICAL: Service unusable
    """

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @property
    def rank(self) -> int:
        """Numeric order, LOW=1 through CRITICAL=4."""
        return _SEVERITY_RANK[self]


_SEVERITY_RANK = {
    IssueSeverity.LOW: 1,
    IssueSeverity.MEDIUM: 2,
    IssueSeverity.HIGH: 3,
    IssueSeverity.CRITICAL: 4,
}


@dataclass(frozen=True)
class IssueDefinition:
    """Static catalog entry for an issue code."""

    code: IssueCode
    severity: IssueSeverity
    message: str
    description: str
    estimated_resolution_minutes: int
    retryable: bool
    affected_capabilities: FrozenSet[Capability]
    user_actions: Tuple[str, ...] = ()


@dataclass(frozen=True)
class ConnectionIssue:
    """An active connectivity or service problem.

    Attributes:
        code: Unique key within the active-issue set
        severity: IssueSeverity used to pick the issue shown to users
        message: Short user-facing headline
        description: User-facing explanation
        estimated_resolution_minutes: Rough time until resolved
        retryable: Whether to offer a retry affordance
        affected_capabilities: Capabilities degraded by this issue
        user_actions: Suggested steps for the user
        created_at: When the issue was raised
        technical_details: Raw diagnostic text, secondary to the message
    """

    code: IssueCode
    severity: IssueSeverity
    message: str
    description: str
    estimated_resolution_minutes: int
    retryable: bool
    affected_capabilities: FrozenSet[Capability] = frozenset()
    user_actions: Tuple[str, ...] = ()
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    technical_details: Optional[str] = None
