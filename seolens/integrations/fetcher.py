"""
HTML retrieval client.

Fetches one page with a bounded total timeout and turns every failure into
a RetrievalError subclass. Cancelling the awaiting task cancels the request.
"""
import asyncio
import logging
import time

import httpx

from seolens.config import settings
from seolens.core.exceptions import (
    FetchStatusError,
    FetchTimeoutError,
    FetchTransportError,
)

logger = logging.getLogger(__name__)


class PageFetcher:
    """HTTP client that returns the raw HTML of a URL."""

    def __init__(
        self,
        timeout: float | None = None,
        user_agent: str | None = None,
        max_redirects: int | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.timeout = timeout or settings.FETCH_TIMEOUT_SECONDS
        self.user_agent = user_agent or settings.FETCH_USER_AGENT
        self.max_redirects = max_redirects if max_redirects is not None else settings.FETCH_MAX_REDIRECTS
        self.transport = transport

    async def fetch(self, url: str) -> str:
        """Return the HTML body of `url`.

        Raises:
            FetchTimeoutError: no complete response within `timeout` seconds.
            FetchStatusError: the final response was not 2xx.
            FetchTransportError: connection, TLS, redirect or URL errors.
        """
        logger.info(f"[FETCH] Starting: {url}")
        start_time = time.time()
        try:
            response = await asyncio.wait_for(self._get(url), timeout=self.timeout)
        except (asyncio.TimeoutError, httpx.TimeoutException):
            logger.warning(f"[FETCH] Timeout after {self.timeout}s: {url}")
            raise FetchTimeoutError(url, self.timeout)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.warning(f"[FETCH] Transport error for {url}: {type(e).__name__}: {e}")
            raise FetchTransportError(url, f"{type(e).__name__}: {e}") from e

        elapsed = time.time() - start_time
        logger.info(f"[FETCH] Response received: status={response.status_code}, elapsed={elapsed:.2f}s")

        if not response.is_success:
            raise FetchStatusError(url, response.status_code)
        return response.text

    async def _get(self, url: str) -> httpx.Response:
        async with httpx.AsyncClient(
            timeout=self.timeout,
            follow_redirects=True,
            max_redirects=self.max_redirects,
            headers={"User-Agent": self.user_agent},
            transport=self.transport,
        ) as client:
            return await client.get(url)
