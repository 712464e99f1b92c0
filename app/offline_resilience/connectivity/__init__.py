"""Connectivity state: issues, capabilities, and failure classification.

Public API:
    - ConnectivityMonitor: Active issue set plus the online signal
    - CapabilityGate / evaluate_capabilities: What works offline
    - classify_exception / classify_status_code: Raw failure -> IssueCode
    - format_time_estimate, build_support_url, build_support_email
    - StatusPageService: Cached service status from the public status page
"""

from offline_resilience.connectivity.capabilities import (
    CAPABILITY_CATALOG,
    OFFLINE_BEHAVIOR,
    Capability,
    CapabilityGate,
    CapabilityState,
    CapabilityStatus,
    ConnectivitySignal,
    evaluate_capabilities,
)
from offline_resilience.connectivity.catalog import ISSUE_CATALOG, get_issue_definition
from offline_resilience.connectivity.classifiers import (
    classify_exception,
    classify_status_code,
)
from offline_resilience.connectivity.models import (
    ConnectionIssue,
    IssueCode,
    IssueDefinition,
    IssueSeverity,
)
from offline_resilience.connectivity.monitor import ConnectivityMonitor
from offline_resilience.connectivity.status_page import (
    ServiceStatus,
    ServiceStatusInfo,
    StatusPageService,
)
from offline_resilience.connectivity.support import (
    build_support_email,
    build_support_url,
    format_time_estimate,
)

__all__ = [
    # Issues
    "IssueCode",
    "IssueSeverity",
    "IssueDefinition",
    "ConnectionIssue",
    "ISSUE_CATALOG",
    "get_issue_definition",
    "ConnectivityMonitor",
    # Capabilities
    "Capability",
    "CapabilityState",
    "CapabilityStatus",
    "CapabilityGate",
    "ConnectivitySignal",
    "CAPABILITY_CATALOG",
    "OFFLINE_BEHAVIOR",
    "evaluate_capabilities",
    # Classification and display
    "classify_exception",
    "classify_status_code",
    "format_time_estimate",
    "build_support_url",
    "build_support_email",
    # Status page
    "ServiceStatus",
    "ServiceStatusInfo",
    "StatusPageService",
]
