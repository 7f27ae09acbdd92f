"""
SEOLens Analyzer Service

Pipeline for one page:
- HTML retrieval (the only await point, bounded by a timeout)
- Fact extraction
- Technical issues and sub-scores
- Recommendations
- Report assembly

Reports are cached per URL in an injectable ReportStore. Concurrent callers
for the same URL share one computation.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Protocol

from seolens.core.exceptions import RetrievalError
from seolens.integrations.cache import ReportStore, get_report_store
from seolens.integrations.fetcher import PageFetcher
from seolens.schemas.analysis import PerformanceMetrics, ProbeResult, SEOAnalysis
from seolens.services.audit_engine import PageAuditEngine, calculate_overall_score
from seolens.services.document import HTMLDocument
from seolens.services.extractors import extract_page_facts
from seolens.services.seo_recommendations import generate_recommendations

logger = logging.getLogger(__name__)


class HTMLSource(Protocol):
    """Anything that can turn a URL into HTML or raise RetrievalError."""

    async def fetch(self, url: str) -> str:
        ...


class PageProbe(Protocol):
    """External page-weight / rendering probe."""

    async def probe(self, url: str, html: str) -> ProbeResult:
        ...


def build_performance_metrics(probe: ProbeResult | None) -> PerformanceMetrics:
    if probe is None or not probe.has_performance_data:
        return PerformanceMetrics()
    return PerformanceMetrics(
        measured=True,
        load_time_ms=probe.load_time_ms,
        page_size_bytes=probe.page_size_bytes,
        request_count=probe.request_count,
    )


def analyze_html(html: str | bytes | None, url: str, probe: ProbeResult | None = None) -> SEOAnalysis:
    """Build the full report for an HTML document served at `url`.

    Never raises for bad HTML: an empty or unparseable document yields a
    complete, low-scored report with `parse_degraded` set.
    """
    doc = HTMLDocument(html)
    if doc.is_empty:
        logger.warning(f"No HTML elements found for {url}, report will be degraded")

    facts = extract_page_facts(doc, url, probe)
    engine = PageAuditEngine(facts, probe)
    issues = engine.check_technical_issues()
    scores = engine.calculate_detailed_scores(issues)
    recommendations = generate_recommendations(facts, issues, scores)

    return SEOAnalysis(
        url=url,
        **dict(facts),
        performance=build_performance_metrics(probe),
        technical_issues=issues,
        scores=scores,
        score=calculate_overall_score(scores),
        recommendations=tuple(recommendations),
        parse_degraded=doc.is_empty,
    )


@dataclass
class _InFlight:
    task: asyncio.Task
    waiters: int = 0


class SEOAnalyzer:
    """Fetches, analyzes and caches page reports."""

    def __init__(
        self,
        fetcher: HTMLSource | None = None,
        store: ReportStore | None = None,
        probe: PageProbe | None = None,
    ):
        self.fetcher = fetcher or PageFetcher()
        self.store = store if store is not None else get_report_store()
        self.probe = probe
        self._in_flight: dict[str, _InFlight] = {}

    async def analyze(self, url: str, fallback_html: str | None = None) -> SEOAnalysis:
        """Return the report for `url`, from cache when available.

        Args:
            url: Page to analyze.
            fallback_html: HTML to analyze if retrieval fails. The resulting
                report is tagged `degraded` and is not cached.

        Raises:
            RetrievalError: the page could not be fetched and no fallback was given.
        """
        entry = self._in_flight.get(url)
        if entry is None or entry.task.done() or entry.task.cancelling():
            entry = self._start(url)

        entry.waiters += 1
        try:
            return await asyncio.shield(entry.task)
        except asyncio.CancelledError:
            # Last interested caller gone: stop the fetch
            if entry.waiters == 1:
                if self._in_flight.get(url) is entry:
                    del self._in_flight[url]
                entry.task.cancel()
            raise
        except RetrievalError as e:
            if fallback_html is None:
                raise
            logger.warning(f"Retrieval failed for {url}, analyzing caller fallback: {e}")
            report = analyze_html(fallback_html, url)
            return report.model_copy(update={"degraded": True, "error": str(e)})
        finally:
            entry.waiters -= 1

    def _start(self, url: str) -> _InFlight:
        entry = _InFlight(task=asyncio.create_task(self._compute(url)))
        self._in_flight[url] = entry

        def _forget(_):
            if self._in_flight.get(url) is entry:
                del self._in_flight[url]

        entry.task.add_done_callback(_forget)
        return entry

    async def _compute(self, url: str) -> SEOAnalysis:
        cached = await self._cache_get(url)
        if cached is not None:
            logger.debug(f"Cache hit: {url}")
            return cached

        html = await self.fetcher.fetch(url)
        probe_result = await self._run_probe(url, html)
        report = analyze_html(html, url, probe_result)
        await self._cache_set(url, report)
        logger.info(f"Analyzed {url}: score={report.score}, {len(report.recommendations)} recommendations")
        return report

    async def _cache_get(self, url: str) -> SEOAnalysis | None:
        try:
            return await self.store.get(url)
        except Exception as e:
            logger.warning(f"Cache read failed for {url}, analyzing uncached: {type(e).__name__}: {e}")
            return None

    async def _cache_set(self, url: str, report: SEOAnalysis) -> None:
        try:
            await self.store.set(url, report)
        except Exception as e:
            logger.warning(f"Cache write failed for {url}, report not cached: {type(e).__name__}: {e}")

    async def _run_probe(self, url: str, html: str) -> ProbeResult | None:
        if self.probe is None:
            return None
        try:
            return await self.probe.probe(url, html)
        except Exception as e:
            logger.warning(f"Probe failed for {url}, measured facets stay unknown: {type(e).__name__}: {e}")
            return None

    async def invalidate(self, url: str) -> bool:
        """Drop the cached report for `url`."""
        return await self.store.delete(url)

    async def clear_cache(self) -> int:
        return await self.store.clear()
