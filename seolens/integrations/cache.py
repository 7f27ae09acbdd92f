"""
Report cache stores.

Supports two backends, selected by settings.CACHE_BACKEND:
- memory: a dict owned by the store instance (process-scoped)
- redis: reports serialized as JSON under a key prefix
"""

import logging
from abc import ABC, abstractmethod
from typing import Dict, Optional

import redis.asyncio as redis
from pydantic import ValidationError

from seolens.config import settings
from seolens.schemas.analysis import SEOAnalysis

logger = logging.getLogger(__name__)


class ReportStore(ABC):
    """Abstract URL -> report store."""

    @abstractmethod
    async def get(self, url: str) -> Optional[SEOAnalysis]:
        pass

    @abstractmethod
    async def set(self, url: str, report: SEOAnalysis) -> None:
        pass

    @abstractmethod
    async def delete(self, url: str) -> bool:
        pass

    @abstractmethod
    async def clear(self) -> int:
        pass

    async def close(self) -> None:
        pass


class InMemoryReportStore(ReportStore):
    """Dict-backed store; entries live until deleted or the process ends."""

    def __init__(self):
        self._reports: Dict[str, SEOAnalysis] = {}

    async def get(self, url: str) -> Optional[SEOAnalysis]:
        return self._reports.get(url)

    async def set(self, url: str, report: SEOAnalysis) -> None:
        self._reports[url] = report

    async def delete(self, url: str) -> bool:
        return self._reports.pop(url, None) is not None

    async def clear(self) -> int:
        count = len(self._reports)
        self._reports.clear()
        return count

    def __len__(self) -> int:
        return len(self._reports)


class RedisReportStore(ReportStore):
    """Redis-backed store. Reports are kept as camelCase JSON."""

    def __init__(self, redis_url: str = None, key_prefix: str = None, ttl_seconds: int = None):
        self.redis_url = redis_url or settings.REDIS_URL
        self.key_prefix = key_prefix if key_prefix is not None else settings.CACHE_KEY_PREFIX
        self.ttl_seconds = ttl_seconds if ttl_seconds is not None else settings.CACHE_TTL_SECONDS
        self._redis: Optional[redis.Redis] = None

    async def get_redis(self) -> redis.Redis:
        """Get or create Redis connection."""
        if self._redis is None:
            self._redis = redis.from_url(
                self.redis_url,
                encoding="utf-8",
                decode_responses=True,
            )
        return self._redis

    async def close(self) -> None:
        if self._redis:
            await self._redis.aclose()
            self._redis = None

    def _key(self, url: str) -> str:
        return f"{self.key_prefix}{url}"

    async def get(self, url: str) -> Optional[SEOAnalysis]:
        client = await self.get_redis()
        payload = await client.get(self._key(url))
        if payload is None:
            return None
        try:
            return SEOAnalysis.model_validate_json(payload)
        except ValidationError as e:
            logger.warning(f"Discarding unreadable cached report for {url}: {e}")
            await client.delete(self._key(url))
            return None

    async def set(self, url: str, report: SEOAnalysis) -> None:
        client = await self.get_redis()
        payload = report.model_dump_json(by_alias=True)
        if self.ttl_seconds > 0:
            await client.set(self._key(url), payload, ex=self.ttl_seconds)
        else:
            await client.set(self._key(url), payload)

    async def delete(self, url: str) -> bool:
        client = await self.get_redis()
        return bool(await client.delete(self._key(url)))

    async def clear(self) -> int:
        client = await self.get_redis()
        keys = [key async for key in client.scan_iter(match=f"{self.key_prefix}*")]
        if not keys:
            return 0
        return await client.delete(*keys)


_default_store: Optional[ReportStore] = None


def get_report_store() -> ReportStore:
    """Get or create the default report store based on settings."""
    global _default_store

    if _default_store is None:
        backend = settings.CACHE_BACKEND
        logger.info(f"Initializing report store with backend: {backend}")

        if backend == "redis":
            _default_store = RedisReportStore()
        elif backend == "memory":
            _default_store = InMemoryReportStore()
        else:
            raise ValueError(f"Unknown CACHE_BACKEND: {backend!r}")

    return _default_store


def reset_report_store():
    """Reset the default store (useful for testing or config changes)."""
    global _default_store
    _default_store = None
