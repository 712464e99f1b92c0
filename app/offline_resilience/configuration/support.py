"""Support contact settings."""

from pydantic import Field

from offline_resilience.configuration.base import InfrastructureSettings


class SupportSettings(InfrastructureSettings):
    """Where users are sent when a connection issue needs human help."""

    url: str = Field(
        default="https://example.com/support",
        alias="SUPPORT_URL",
        description="Support page that accepts issue details as query parameters",
    )
    email: str = Field(
        default="support@example.com",
        alias="SUPPORT_EMAIL",
        description="Support mailbox used for mailto links",
    )
    status_page_url: str = Field(
        default="https://status.example.com",
        alias="SUPPORT_STATUS_PAGE_URL",
        description="Public status page linked from connection issue details",
    )
    status_cache_seconds: float = Field(
        default=60.0,
        alias="SUPPORT_STATUS_CACHE_SECONDS",
        description="How long fetched service status is reused before refetching",
    )
