"""
External collaborators for SEOLens.

- fetcher: httpx client that retrieves page HTML
- cache: URL-keyed report stores (in-memory or Redis)
"""

from seolens.integrations.fetcher import PageFetcher
from seolens.integrations.cache import (
    ReportStore,
    InMemoryReportStore,
    RedisReportStore,
    get_report_store,
    reset_report_store,
)

__all__ = [
    "PageFetcher",
    "ReportStore",
    "InMemoryReportStore",
    "RedisReportStore",
    "get_report_store",
    "reset_report_store",
]
