"""
SEOLens Audit Engine - technical issues and weighted sub-scores

Sub-scores (each a 100-point deduction ladder, floored at 0):
1. Technical
2. Content
3. Performance (from an external probe)
4. Accessibility
5. Social

The overall score is the rounded mean of the five.
"""

import logging

from seolens.config import settings
from seolens.schemas.analysis import (
    DetailedScores,
    PageFacts,
    ProbeResult,
    TechnicalIssues,
)
from seolens.services.extractors import EMPTY_PROBE, round_half_up

logger = logging.getLogger(__name__)

TITLE_MAX_LENGTH = 60
META_DESCRIPTION_MAX_LENGTH = 160
MIN_WORD_COUNT = 300
MIN_READABILITY = 60


class PageAuditEngine:
    """Issue checker and scorer for one page's extracted facts."""

    TECHNICAL_DEDUCTIONS = {
        "missing_title": 25,
        "missing_meta_description": 20,
        "duplicate_h1": 15,
        "missing_canonical": 10,
        "title_too_long": 10,
        "meta_description_too_long": 10,
    }

    # (threshold, deduction) pairs, checked worst first
    LOAD_TIME_MS_STEPS = [(4000, 30), (2500, 15)]
    PAGE_SIZE_BYTES_STEPS = [(3_000_000, 20), (1_500_000, 10)]
    REQUEST_COUNT_STEPS = [(100, 15), (50, 5)]
    OVERSIZED_PENALTY = 5
    OVERSIZED_PENALTY_CAP = 20

    def __init__(self, facts: PageFacts, probe: ProbeResult | None = None):
        self.facts = facts
        self.probe = probe or EMPTY_PROBE

    def check_technical_issues(self) -> TechnicalIssues:
        facts = self.facts
        robots = facts.robots.lower()

        return TechnicalIssues(
            missing_title=not facts.title,
            missing_meta_description=not facts.meta_description,
            duplicate_h1=len(facts.headings.h1) > 1,
            images_missing_alt=facts.images.without_alt > 0,
            title_too_long=len(facts.title) > TITLE_MAX_LENGTH,
            meta_description_too_long=len(facts.meta_description) > META_DESCRIPTION_MAX_LENGTH,
            missing_canonical=not facts.canonical_url,
            no_index="noindex" in robots,
            no_follow="nofollow" in robots,
        )

    def technical_score(self, issues: TechnicalIssues) -> int:
        score = 100
        for issue, deduction in self.TECHNICAL_DEDUCTIONS.items():
            if getattr(issues, issue):
                score -= deduction
        return max(0, score)

    def content_score(self) -> int:
        content = self.facts.content
        score = 100
        if content.word_count < MIN_WORD_COUNT:
            score -= 20
        if content.readability_score < MIN_READABILITY:
            score -= 15
        if not self.facts.headings.h1:
            score -= 20
        # None means not measured
        if content.duplicate_content is True:
            score -= 25
        return max(0, score)

    @staticmethod
    def _step_deduction(value: int | None, steps: list[tuple[int, int]]) -> int:
        if value is None:
            return 0
        for threshold, deduction in steps:
            if value > threshold:
                return deduction
        return 0

    def performance_score(self) -> int:
        probe = self.probe
        if probe.performance_score is not None:
            return max(0, min(100, probe.performance_score))
        if not probe.has_performance_data:
            return max(0, min(100, settings.UNMEASURED_PERFORMANCE_SCORE))

        score = 100
        score -= self._step_deduction(probe.load_time_ms, self.LOAD_TIME_MS_STEPS)
        score -= self._step_deduction(probe.page_size_bytes, self.PAGE_SIZE_BYTES_STEPS)
        score -= self._step_deduction(probe.request_count, self.REQUEST_COUNT_STEPS)
        if probe.oversized_resources:
            score -= min(len(probe.oversized_resources) * self.OVERSIZED_PENALTY, self.OVERSIZED_PENALTY_CAP)
        return max(0, score)

    def accessibility_score(self) -> int:
        facts = self.facts
        score = 100
        if not facts.accessibility.heading_structure:
            score -= 20
        if facts.accessibility.color_contrast is False:
            score -= 15
        if facts.images.without_alt > 0:
            score -= min(facts.images.without_alt * 5, 30)
        if not facts.mobile.responsive:
            score -= 25
        return max(0, score)

    def social_score(self) -> int:
        social = self.facts.social_media
        score = 100
        if not social.has_open_graph:
            score -= 30
        if not social.has_twitter_card:
            score -= 20
        if not social.has_google_analytics:
            score -= 15
        return max(0, score)

    def calculate_detailed_scores(self, issues: TechnicalIssues | None = None) -> DetailedScores:
        if issues is None:
            issues = self.check_technical_issues()
        scores = DetailedScores(
            technical=self.technical_score(issues),
            content=self.content_score(),
            performance=self.performance_score(),
            accessibility=self.accessibility_score(),
            social=self.social_score(),
        )
        logger.debug(f"Sub-scores: {scores.to_dict()}")
        return scores


def calculate_overall_score(scores: DetailedScores) -> int:
    """Rounded mean of the five sub-scores."""
    values = scores.values()
    return round_half_up(sum(values) / len(values))


def check_technical_issues(facts: PageFacts) -> TechnicalIssues:
    return PageAuditEngine(facts).check_technical_issues()


def calculate_detailed_scores(
    facts: PageFacts,
    issues: TechnicalIssues | None = None,
    probe: ProbeResult | None = None,
) -> DetailedScores:
    return PageAuditEngine(facts, probe).calculate_detailed_scores(issues)
