"""Static issue catalog.

Maps every IssueCode to its severity, user-facing text, retryability,
affected capabilities, and resolution estimate. A code missing from the
catalog is a build-time defect; lookups fail with UnknownIssueCodeError.
"""

from typing import Dict, FrozenSet, Union

from offline_resilience.connectivity.capabilities import Capability
from offline_resilience.connectivity.models import (
    IssueCode,
    IssueDefinition,
    IssueSeverity,
)
from offline_resilience.exceptions import UnknownIssueCodeError

CHAT: FrozenSet[Capability] = frozenset(
    {Capability.SEND_MESSAGES, Capability.AI_RESPONSES}
)
VOICE: FrozenSet[Capability] = frozenset({Capability.VOICE_CHAT})
SYNC: FrozenSet[Capability] = frozenset({Capability.REAL_TIME_SYNC})
ACCOUNT: FrozenSet[Capability] = frozenset({Capability.ACCOUNT_MANAGEMENT})
NETWORK_DEPENDENT: FrozenSet[Capability] = CHAT | VOICE | SYNC | ACCOUNT


ISSUE_CATALOG: Dict[IssueCode, IssueDefinition] = {
    IssueCode.NETWORK_OFFLINE: IssueDefinition(
        code=IssueCode.NETWORK_OFFLINE,
        severity=IssueSeverity.HIGH,
        message="No Internet Connection",
        description=(
            "Your device is not connected to the internet. "
            "Please check your connection and try again."
        ),
        estimated_resolution_minutes=5,
        retryable=True,
        affected_capabilities=CHAT | VOICE | SYNC,
        user_actions=(
            "Check your WiFi or mobile data connection",
            "Try switching between WiFi and mobile data",
            "Restart your router or modem",
            "Contact your internet service provider if issues persist",
        ),
    ),
    IssueCode.NETWORK_TIMEOUT: IssueDefinition(
        code=IssueCode.NETWORK_TIMEOUT,
        severity=IssueSeverity.MEDIUM,
        message="Connection Timeout",
        description=(
            "The request is taking longer than expected. "
            "This might be due to a slow connection or server load."
        ),
        estimated_resolution_minutes=5,
        retryable=True,
        affected_capabilities=NETWORK_DEPENDENT,
        user_actions=(
            "Check your internet connection speed",
            "Try again in a moment",
            "Switch to a more stable network if available",
        ),
    ),
    IssueCode.DNS_RESOLUTION_FAILED: IssueDefinition(
        code=IssueCode.DNS_RESOLUTION_FAILED,
        severity=IssueSeverity.HIGH,
        message="Cannot Reach Our Servers",
        description=(
            "Your network could not look up our service address. "
            "This is usually a temporary network or DNS problem."
        ),
        estimated_resolution_minutes=10,
        retryable=True,
        affected_capabilities=NETWORK_DEPENDENT,
        user_actions=(
            "Check that other websites load",
            "Try a different network",
            "Restart your router or modem",
        ),
    ),
    IssueCode.API_SERVER_DOWN: IssueDefinition(
        code=IssueCode.API_SERVER_DOWN,
        severity=IssueSeverity.CRITICAL,
        message="Service Temporarily Unavailable",
        description=(
            "Our servers are experiencing issues. "
            "We're working to restore service as quickly as possible."
        ),
        estimated_resolution_minutes=15,
        retryable=True,
        affected_capabilities=CHAT | SYNC | ACCOUNT,
        user_actions=(
            "Try refreshing in a few minutes",
            "Check our status page for updates",
            "Switch to offline mode to continue working",
        ),
    ),
    IssueCode.API_RATE_LIMITED: IssueDefinition(
        code=IssueCode.API_RATE_LIMITED,
        severity=IssueSeverity.MEDIUM,
        message="Rate Limit Exceeded",
        description=(
            "You've made too many requests. "
            "Please wait a moment before trying again."
        ),
        estimated_resolution_minutes=1,
        retryable=True,
        affected_capabilities=CHAT | VOICE,
        user_actions=(
            "Wait 60 seconds before making another request",
            "Consider upgrading to a higher tier for increased limits",
        ),
    ),
    IssueCode.API_AUTHENTICATION_FAILED: IssueDefinition(
        code=IssueCode.API_AUTHENTICATION_FAILED,
        severity=IssueSeverity.HIGH,
        message="Session Expired",
        description=(
            "We couldn't verify your session. "
            "Please sign in again to continue."
        ),
        estimated_resolution_minutes=1,
        retryable=False,
        affected_capabilities=NETWORK_DEPENDENT,
        user_actions=(
            "Sign out and sign back in",
            "Contact support if signing in keeps failing",
        ),
    ),
    IssueCode.API_SERVICE_UNAVAILABLE: IssueDefinition(
        code=IssueCode.API_SERVICE_UNAVAILABLE,
        severity=IssueSeverity.HIGH,
        message="Service Overloaded",
        description=(
            "Our service is temporarily unable to handle requests. "
            "Please try again shortly."
        ),
        estimated_resolution_minutes=10,
        retryable=True,
        affected_capabilities=CHAT | SYNC,
        user_actions=(
            "Try again in a few minutes",
            "Check our status page for updates",
        ),
    ),
    IssueCode.API_MAINTENANCE_MODE: IssueDefinition(
        code=IssueCode.API_MAINTENANCE_MODE,
        severity=IssueSeverity.MEDIUM,
        message="Scheduled Maintenance",
        description=(
            "We're performing scheduled maintenance to improve our service. "
            "Most features remain available in offline mode."
        ),
        estimated_resolution_minutes=60,
        retryable=True,
        affected_capabilities=SYNC | ACCOUNT,
        user_actions=(
            "Continue using offline features",
            "Check our status page for maintenance updates",
            "Try again after the maintenance window",
        ),
    ),
    IssueCode.WEBSOCKET_CONNECTION_FAILED: IssueDefinition(
        code=IssueCode.WEBSOCKET_CONNECTION_FAILED,
        severity=IssueSeverity.MEDIUM,
        message="Real-time Features Unavailable",
        description=(
            "Voice features and real-time updates are temporarily unavailable. "
            "Text chat continues to work normally."
        ),
        estimated_resolution_minutes=10,
        retryable=True,
        affected_capabilities=VOICE | SYNC,
        user_actions=(
            "Use text chat while we restore voice features",
            "Check if a firewall or proxy is blocking connections",
            "Try using a different network",
        ),
    ),
    IssueCode.WEBSOCKET_AUTHENTICATION_FAILED: IssueDefinition(
        code=IssueCode.WEBSOCKET_AUTHENTICATION_FAILED,
        severity=IssueSeverity.MEDIUM,
        message="Real-time Session Rejected",
        description=(
            "The real-time channel rejected your session. "
            "Text chat may still work; sign in again to restore voice."
        ),
        estimated_resolution_minutes=1,
        retryable=False,
        affected_capabilities=VOICE | SYNC,
        user_actions=("Sign out and sign back in",),
    ),
    IssueCode.WEBSOCKET_SERVER_OVERLOADED: IssueDefinition(
        code=IssueCode.WEBSOCKET_SERVER_OVERLOADED,
        severity=IssueSeverity.MEDIUM,
        message="Real-time Service Busy",
        description=(
            "Our real-time service is handling unusually high traffic. "
            "Voice and live updates may be delayed."
        ),
        estimated_resolution_minutes=15,
        retryable=True,
        affected_capabilities=VOICE | SYNC,
        user_actions=(
            "Use text chat for now",
            "Try voice again in a few minutes",
        ),
    ),
    IssueCode.WEBSOCKET_PROTOCOL_ERROR: IssueDefinition(
        code=IssueCode.WEBSOCKET_PROTOCOL_ERROR,
        severity=IssueSeverity.LOW,
        message="Real-time Connection Interrupted",
        description=(
            "The real-time connection received unexpected data and was reset."
        ),
        estimated_resolution_minutes=2,
        retryable=True,
        affected_capabilities=VOICE | SYNC,
        user_actions=("Reload the application if the problem repeats",),
    ),
    IssueCode.AI_PROVIDER_DOWN: IssueDefinition(
        code=IssueCode.AI_PROVIDER_DOWN,
        severity=IssueSeverity.HIGH,
        message="AI Services Temporarily Down",
        description=(
            "Our AI provider is experiencing issues. "
            "AI responses may be delayed or unavailable."
        ),
        estimated_resolution_minutes=30,
        retryable=True,
        affected_capabilities=CHAT | VOICE,
        user_actions=(
            "Try again in a few minutes",
            "Check the provider's status page",
            "Review previous conversations while waiting",
        ),
    ),
    IssueCode.AI_QUOTA_EXCEEDED: IssueDefinition(
        code=IssueCode.AI_QUOTA_EXCEEDED,
        severity=IssueSeverity.HIGH,
        message="AI Usage Limit Reached",
        description=(
            "Your AI usage limit has been reached for this billing period. "
            "Service will resume when your limit resets."
        ),
        estimated_resolution_minutes=1440,
        retryable=False,
        affected_capabilities=CHAT | VOICE,
        user_actions=(
            "Upgrade to a higher plan for more usage",
            "Wait for your usage limit to reset",
            "Contact support to discuss your usage needs",
        ),
    ),
    IssueCode.AI_RATE_LIMITED: IssueDefinition(
        code=IssueCode.AI_RATE_LIMITED,
        severity=IssueSeverity.MEDIUM,
        message="AI Requests Throttled",
        description=(
            "The AI provider is limiting how quickly requests are accepted. "
            "Responses will resume shortly."
        ),
        estimated_resolution_minutes=1,
        retryable=True,
        affected_capabilities=CHAT | VOICE,
        user_actions=("Wait a minute before sending another message",),
    ),
    IssueCode.UNKNOWN_ERROR: IssueDefinition(
        code=IssueCode.UNKNOWN_ERROR,
        severity=IssueSeverity.MEDIUM,
        message="Unexpected Error",
        description=(
            "Something unexpected happened. "
            "Our team has been notified and is investigating."
        ),
        estimated_resolution_minutes=20,
        retryable=True,
        affected_capabilities=NETWORK_DEPENDENT,
        user_actions=(
            "Try again",
            "Restart the application",
            "Contact support if the issue persists",
        ),
    ),
    IssueCode.CONFIGURATION_ERROR: IssueDefinition(
        code=IssueCode.CONFIGURATION_ERROR,
        severity=IssueSeverity.CRITICAL,
        message="Client Misconfigured",
        description=(
            "The application is missing configuration it needs to reach our "
            "services. Retrying will not help."
        ),
        estimated_resolution_minutes=60,
        retryable=False,
        affected_capabilities=NETWORK_DEPENDENT,
        user_actions=(
            "Update to the latest version of the application",
            "Contact support",
        ),
    ),
}


def get_issue_definition(code: Union[IssueCode, str]) -> IssueDefinition:
    """Look up the catalog entry for an issue code.

    Args:
        code: IssueCode member or its string value

    Returns:
        The IssueDefinition for the code

    Raises:
        UnknownIssueCodeError: If the code is not registered
    """
    try:
        issue_code = IssueCode(code)
    except ValueError:
        raise UnknownIssueCodeError(code) from None
    definition = ISSUE_CATALOG.get(issue_code)
    if definition is None:
        raise UnknownIssueCodeError(code)
    return definition
