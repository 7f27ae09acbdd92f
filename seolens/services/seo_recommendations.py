"""
SEO Recommendations

Maps triggered issues and score thresholds to severity-tagged remediation
lines. Order is fixed: technical, content, images, links, performance,
social, accessibility.
"""

from typing import Dict, List

from seolens.schemas.analysis import DetailedScores, PageFacts, TechnicalIssues
from seolens.services.audit_engine import MIN_READABILITY, MIN_WORD_COUNT

CRITICAL = "CRITICAL"
IMPORTANT = "IMPORTANT"
INFO = "INFO"

SCORE_THRESHOLD = 70
MIN_INTERNAL_LINKS = 3

RECOMMENDATIONS: Dict[str, Dict[str, str]] = {
    # =========================================================================
    # Technical
    # =========================================================================
    "missing_title": {
        "severity": CRITICAL,
        "message": "Add a unique, descriptive title tag (50-60 characters)",
    },
    "missing_meta_description": {
        "severity": CRITICAL,
        "message": "Add a meta description of 150-160 characters",
    },
    "no_index": {
        "severity": CRITICAL,
        "message": "Remove the noindex robots directive so the page can appear in search results",
    },
    "duplicate_h1": {
        "severity": IMPORTANT,
        "message": "Use only one H1 per page ({count} found)",
    },
    "missing_canonical": {
        "severity": IMPORTANT,
        "message": "Add a canonical URL",
    },
    "no_follow": {
        "severity": IMPORTANT,
        "message": "Remove the nofollow robots directive so crawlers follow the page's links",
    },
    "title_too_long": {
        "severity": IMPORTANT,
        "message": "Shorten the title to 60 characters or fewer (currently {length})",
    },
    "meta_description_too_long": {
        "severity": IMPORTANT,
        "message": "Shorten the meta description to 160 characters or fewer (currently {length})",
    },
    "invalid_structured_data": {
        "severity": INFO,
        "message": "Fix {count} invalid JSON-LD block(s)",
    },
    # =========================================================================
    # Content
    # =========================================================================
    "thin_content": {
        "severity": IMPORTANT,
        "message": "Expand the content to at least 300 words (currently {count})",
    },
    "low_readability": {
        "severity": INFO,
        "message": "Improve readability with shorter sentences (score {score})",
    },
    "duplicate_content": {
        "severity": IMPORTANT,
        "message": "Review duplicated content",
    },
    # =========================================================================
    # Images
    # =========================================================================
    "images_missing_alt": {
        "severity": IMPORTANT,
        "message": "Add alt text to {count} image(s)",
    },
    "oversized_images": {
        "severity": INFO,
        "message": "Compress {count} oversized image(s)",
    },
    # =========================================================================
    # Links
    # =========================================================================
    "few_internal_links": {
        "severity": INFO,
        "message": "Add more internal links ({count} found)",
    },
    "unbalanced_links": {
        "severity": INFO,
        "message": "Balance external links ({external}) against internal links ({internal})",
    },
    "broken_links": {
        "severity": IMPORTANT,
        "message": "Fix {count} broken link(s)",
    },
    # =========================================================================
    # Score thresholds
    # =========================================================================
    "low_performance": {
        "severity": IMPORTANT,
        "message": "Improve page load speed (performance score {score})",
    },
    "low_social": {
        "severity": INFO,
        "message": "Implement Open Graph and Twitter Card tags (social score {score})",
    },
    "low_accessibility": {
        "severity": IMPORTANT,
        "message": "Improve web accessibility (accessibility score {score})",
    },
}


def format_recommendation(key: str, **details) -> str:
    """Render one recommendation line as 'SEVERITY: message'."""
    entry = RECOMMENDATIONS[key]
    return f"{entry['severity']}: {entry['message'].format(**details)}"


def generate_recommendations(
    facts: PageFacts,
    issues: TechnicalIssues,
    scores: DetailedScores,
) -> List[str]:
    """Ordered recommendation lines for every triggered condition."""
    lines: List[str] = []

    def add(key: str, **details):
        lines.append(format_recommendation(key, **details))

    # Technical
    if issues.missing_title:
        add("missing_title")
    if issues.missing_meta_description:
        add("missing_meta_description")
    if issues.no_index:
        add("no_index")
    if issues.duplicate_h1:
        add("duplicate_h1", count=len(facts.headings.h1))
    if issues.missing_canonical:
        add("missing_canonical")
    if issues.no_follow:
        add("no_follow")
    if issues.title_too_long:
        add("title_too_long", length=len(facts.title))
    if issues.meta_description_too_long:
        add("meta_description_too_long", length=len(facts.meta_description))
    if facts.structured_data.errors:
        add("invalid_structured_data", count=len(facts.structured_data.errors))

    # Content
    content = facts.content
    if content.word_count < MIN_WORD_COUNT:
        add("thin_content", count=content.word_count)
    if content.readability_score < MIN_READABILITY:
        add("low_readability", score=content.readability_score)
    if content.duplicate_content is True:
        add("duplicate_content")

    # Images
    images = facts.images
    if images.without_alt > 0:
        add("images_missing_alt", count=images.without_alt)
    if images.oversized:
        add("oversized_images", count=len(images.oversized))

    # Links
    links = facts.links
    if links.internal < MIN_INTERNAL_LINKS:
        add("few_internal_links", count=links.internal)
    if links.external > links.internal * 2:
        add("unbalanced_links", external=links.external, internal=links.internal)
    if links.broken:
        add("broken_links", count=links.broken)

    # Score thresholds
    if scores.performance < SCORE_THRESHOLD:
        add("low_performance", score=scores.performance)
    if scores.social < SCORE_THRESHOLD:
        add("low_social", score=scores.social)
    if scores.accessibility < SCORE_THRESHOLD:
        add("low_accessibility", score=scores.accessibility)

    return lines
