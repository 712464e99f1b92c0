"""User-facing helpers for connection issues: time estimates and support links."""

from typing import Optional
from urllib.parse import quote, urlencode

from offline_resilience.configuration import settings
from offline_resilience.connectivity.models import ConnectionIssue


def format_time_estimate(minutes: float) -> str:
    """Render a resolution estimate for display.

    Examples:
        >>> format_time_estimate(0.5)
        'Less than a minute'
        >>> format_time_estimate(1)
        '1 minute'
        >>> format_time_estimate(90)
        '2 hours'
        >>> format_time_estimate(1440)
        '1 day'
    """
    if minutes < 1:
        return "Less than a minute"
    if minutes < 60:
        count = int(minutes)
        return f"{count} {'minute' if count == 1 else 'minutes'}"
    if minutes < 1440:
        hours = _round_half_up(minutes / 60)
        return f"{hours} {'hour' if hours == 1 else 'hours'}"
    days = _round_half_up(minutes / 1440)
    return f"{days} {'day' if days == 1 else 'days'}"


def _round_half_up(value: float) -> int:
    # half-up: 90 minutes reads as "2 hours"
    return int(value + 0.5)


def _affected(issue: ConnectionIssue) -> list:
    return sorted(capability.value for capability in issue.affected_capabilities)


def build_support_url(issue: ConnectionIssue, base_url: Optional[str] = None) -> str:
    """Build a support page link pre-filled with the issue's details.

    Args:
        issue: The issue the user needs help with
        base_url: Support page; defaults to SUPPORT_URL

    Returns:
        URL with the issue details as query parameters
    """
    params = {
        "subject": f"Connection Issue: {issue.message}",
        "error_code": issue.code.value,
        "severity": issue.severity.value,
        "timestamp": issue.created_at.isoformat(),
        "affected_services": ",".join(_affected(issue)),
    }
    if issue.technical_details:
        params["technical_details"] = issue.technical_details
    return f"{base_url or settings.support.url}?{urlencode(params)}"


def build_support_email(issue: ConnectionIssue, address: Optional[str] = None) -> str:
    """Build a mailto link with a pre-written support request.

    Args:
        issue: The issue the user needs help with
        address: Support mailbox; defaults to SUPPORT_EMAIL

    Returns:
        mailto URL with encoded subject and body
    """
    subject = f"Connection Issue: {issue.message}"
    lines = [
        "Hello Support Team,",
        "",
        "I'm experiencing a connection issue:",
        "",
        f"Issue: {issue.message}",
        f"Description: {issue.description}",
        f"Error Code: {issue.code.value}",
        f"Severity: {issue.severity.value}",
        f"Affected Services: {', '.join(_affected(issue))}",
        f"Time: {issue.created_at.isoformat()}",
    ]
    if issue.technical_details:
        lines.extend(["", f"Technical Details: {issue.technical_details}"])
    lines.extend(["", "Please help me resolve this issue.", "", "Thank you!"])
    body = "\n".join(lines)

    return (
        f"mailto:{address or settings.support.email}"
        f"?subject={quote(subject)}&body={quote(body)}"
    )
