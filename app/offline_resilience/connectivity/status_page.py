"""Cached view of the public status page.

The fetch itself is supplied by the caller; this module only caches the
result and answers whether any service currently reports a problem.
"""

import inspect
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Awaitable, Callable, List, Optional, Tuple, Union

from offline_resilience.configuration import settings
from offline_resilience.logging import get_module_logger

logger = get_module_logger()


class ServiceStatus(str, Enum):
    """Status reported by the status page for one service."""

    OPERATIONAL = "operational"
    DEGRADED = "degraded"
    PARTIAL_OUTAGE = "partial_outage"
    MAJOR_OUTAGE = "major_outage"
    MAINTENANCE = "maintenance"


@dataclass(frozen=True)
class ServiceStatusInfo:
    """One row of the status page.

    Attributes:
        service: Display name of the service
        status: Current ServiceStatus
        last_checked: When the status page last checked the service
        response_time_ms: Last measured response time, if reported
        uptime: Uptime percentage, if reported
        incidents: Titles of open incidents
    """

    service: str
    status: ServiceStatus
    last_checked: datetime
    response_time_ms: Optional[float] = None
    uptime: Optional[float] = None
    incidents: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def has_problem(self) -> bool:
        return self.status != ServiceStatus.OPERATIONAL or bool(self.incidents)


StatusFetcher = Callable[[], Union[List[ServiceStatusInfo], Awaitable[List[ServiceStatusInfo]]]]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class StatusPageService:
    """Caches service status from a caller-supplied fetcher.

    A fresh cache (younger than cache_seconds and non-empty) is returned
    without fetching. A failed fetch logs a warning and returns the last
    cached result, stale or empty.

    Example:
        status_page = StatusPageService(fetch_from_status_api)
        if await status_page.has_active_incidents():
            show_banner(status_page.status_page_url)
    """

    def __init__(
        self,
        fetcher: StatusFetcher,
        *,
        status_page_url: Optional[str] = None,
        cache_seconds: Optional[float] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self._fetcher = fetcher
        self.status_page_url = status_page_url or settings.support.status_page_url
        self.cache_seconds = (
            cache_seconds if cache_seconds is not None else settings.support.status_cache_seconds
        )
        self._clock = clock or _utcnow
        self._cached: List[ServiceStatusInfo] = []
        self._fetched_at: Optional[datetime] = None

    def _is_fresh(self, now: datetime) -> bool:
        if not self._cached or self._fetched_at is None:
            return False
        return (now - self._fetched_at).total_seconds() < self.cache_seconds

    async def get_service_status(self) -> List[ServiceStatusInfo]:
        now = self._clock()
        if self._is_fresh(now):
            return list(self._cached)

        try:
            result: Any = self._fetcher()
            if inspect.isawaitable(result):
                result = await result
        except Exception as e:
            logger.warning(
                "status_page_fetch_failed",
                error=str(e),
                cached_services=len(self._cached),
            )
            return list(self._cached)

        self._cached = list(result)
        self._fetched_at = now
        logger.debug("status_page_fetched", services=len(self._cached))
        return list(self._cached)

    async def has_active_incidents(self) -> bool:
        """True if any service is not operational or has open incidents."""
        return any(info.has_problem for info in await self.get_service_status())

    def invalidate(self) -> None:
        self._fetched_at = None
