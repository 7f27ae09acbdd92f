"""
Pytest configuration and fixtures for SEOLens tests.
"""
from unittest.mock import AsyncMock, MagicMock

import pytest

from seolens.integrations.cache import InMemoryReportStore, reset_report_store
from seolens.schemas.analysis import ProbeResult
from tests.fixtures.sample_pages import PAGE_URL, PERFECT_PAGE_HTML, POOR_SEO_PAGE_HTML


async def async_iter(items):
    """Wrap a list as an async iterator (for redis scan_iter mocks)."""
    for item in items:
        yield item


# ============================================================================
# Store Fixtures
# ============================================================================

@pytest.fixture(autouse=True)
def reset_default_store():
    """Each test starts without a process-wide report store."""
    reset_report_store()
    yield
    reset_report_store()


@pytest.fixture
def memory_store() -> InMemoryReportStore:
    """Empty in-memory report store."""
    return InMemoryReportStore()


@pytest.fixture
def mock_redis():
    """Mock Redis client for report store tests."""
    mock = AsyncMock()
    mock.get = AsyncMock(return_value=None)
    mock.set = AsyncMock(return_value=True)
    mock.delete = AsyncMock(return_value=1)
    mock.scan_iter = MagicMock(return_value=async_iter([]))
    mock.aclose = AsyncMock()
    return mock


# ============================================================================
# Retrieval Fixtures
# ============================================================================

@pytest.fixture
def page_url() -> str:
    return PAGE_URL


@pytest.fixture
def perfect_page_html() -> str:
    return PERFECT_PAGE_HTML


@pytest.fixture
def poor_page_html() -> str:
    return POOR_SEO_PAGE_HTML


@pytest.fixture
def mock_fetcher(perfect_page_html):
    """Fetcher that always returns the perfect page."""
    fetcher = MagicMock()
    fetcher.fetch = AsyncMock(return_value=perfect_page_html)
    return fetcher


@pytest.fixture
def slow_probe_result() -> ProbeResult:
    """Probe measurements for a heavy, slow page."""
    return ProbeResult(
        load_time_ms=5200,
        page_size_bytes=2_000_000,
        request_count=60,
        oversized_resources=("/images/hero.jpg", "/images/banner.jpg"),
        total_image_bytes=1_400_000,
    )
