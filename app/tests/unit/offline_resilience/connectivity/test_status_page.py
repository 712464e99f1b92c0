"""Unit tests for the cached status page view."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from offline_resilience.connectivity import (
    ServiceStatus,
    ServiceStatusInfo,
    StatusPageService,
)

pytestmark = pytest.mark.unit


@pytest.fixture
def status_info_factory(clock):
    """Factory for ServiceStatusInfo rows."""

    def _factory(service="API Server", status=ServiceStatus.OPERATIONAL, incidents=()):
        return ServiceStatusInfo(
            service=service,
            status=status,
            last_checked=clock(),
            incidents=tuple(incidents),
        )

    return _factory


@pytest.fixture
def status_page_factory(clock):
    def _factory(fetcher, cache_seconds=60.0):
        return StatusPageService(
            fetcher,
            status_page_url="https://status.test",
            cache_seconds=cache_seconds,
            clock=clock,
        )

    return _factory


class TestGetServiceStatus:
    """Tests for fetching and caching."""

    @pytest.mark.asyncio
    async def test_fresh_cache_skips_fetch(self, status_page_factory, status_info_factory, clock):
        fetcher = AsyncMock(return_value=[status_info_factory()])
        status_page = status_page_factory(fetcher)

        first = await status_page.get_service_status()
        clock.advance(59)
        second = await status_page.get_service_status()

        assert first == second
        fetcher.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_expired_cache_refetches(self, status_page_factory, status_info_factory, clock):
        fetcher = MagicMock(return_value=[status_info_factory()])
        status_page = status_page_factory(fetcher)

        await status_page.get_service_status()
        clock.advance(60)
        await status_page.get_service_status()

        assert fetcher.call_count == 2

    @pytest.mark.asyncio
    async def test_empty_result_is_not_cached(self, status_page_factory):
        fetcher = MagicMock(return_value=[])
        status_page = status_page_factory(fetcher)

        await status_page.get_service_status()
        await status_page.get_service_status()

        assert fetcher.call_count == 2

    @pytest.mark.asyncio
    async def test_failed_fetch_returns_stale_cache(
        self, status_page_factory, status_info_factory, clock
    ):
        row = status_info_factory()
        fetcher = MagicMock(side_effect=[[row], ConnectionError("unreachable")])
        status_page = status_page_factory(fetcher)
        await status_page.get_service_status()
        clock.advance(120)

        result = await status_page.get_service_status()

        assert result == [row]

    @pytest.mark.asyncio
    async def test_failed_first_fetch_returns_empty(self, status_page_factory):
        status_page = status_page_factory(MagicMock(side_effect=TimeoutError()))

        assert await status_page.get_service_status() == []

    @pytest.mark.asyncio
    async def test_invalidate_forces_refetch(self, status_page_factory, status_info_factory):
        fetcher = MagicMock(return_value=[status_info_factory()])
        status_page = status_page_factory(fetcher)
        await status_page.get_service_status()

        status_page.invalidate()
        await status_page.get_service_status()

        assert fetcher.call_count == 2


class TestHasActiveIncidents:
    """Tests for incident detection."""

    @pytest.mark.asyncio
    async def test_all_operational(self, status_page_factory, status_info_factory):
        status_page = status_page_factory(
            MagicMock(return_value=[status_info_factory(), status_info_factory("WebSocket")])
        )

        assert await status_page.has_active_incidents() is False

    @pytest.mark.asyncio
    async def test_degraded_service(self, status_page_factory, status_info_factory):
        status_page = status_page_factory(
            MagicMock(
                return_value=[
                    status_info_factory(),
                    status_info_factory("WebSocket", status=ServiceStatus.DEGRADED),
                ]
            )
        )

        assert await status_page.has_active_incidents() is True

    @pytest.mark.asyncio
    async def test_open_incident_on_operational_service(
        self, status_page_factory, status_info_factory
    ):
        status_page = status_page_factory(
            MagicMock(return_value=[status_info_factory(incidents=["Elevated latency"])])
        )

        assert await status_page.has_active_incidents() is True


def test_status_page_url_defaults_to_settings(monkeypatch):
    from offline_resilience.connectivity import status_page as status_page_module

    monkeypatch.setattr(
        status_page_module.settings.support, "status_page_url", "https://status.configured"
    )

    status_page = StatusPageService(MagicMock(return_value=[]))

    assert status_page.status_page_url == "https://status.configured"
    assert status_page.cache_seconds == status_page_module.settings.support.status_cache_seconds
