"""
Unit tests for SEO recommendations.
"""
import pytest

from seolens.schemas.analysis import DetailedScores, ProbeResult
from seolens.services.audit_engine import PageAuditEngine
from seolens.services.document import HTMLDocument
from seolens.services.extractors import extract_page_facts
from seolens.services.seo_recommendations import (
    RECOMMENDATIONS,
    format_recommendation,
    generate_recommendations,
)
from tests.fixtures.sample_pages import (
    DUPLICATE_H1_HTML,
    LONG_TITLE_HTML,
    MALFORMED_JSON_LD_HTML,
    NOINDEX_HTML,
    PAGE_URL,
    PERFECT_PAGE_HTML,
    POOR_SEO_PAGE_HTML,
)


def recommendations_for(html, probe=None):
    facts = extract_page_facts(HTMLDocument(html), PAGE_URL, probe)
    engine = PageAuditEngine(facts, probe)
    issues = engine.check_technical_issues()
    return generate_recommendations(facts, issues, engine.calculate_detailed_scores(issues))


class TestFormatting:
    """Test recommendation formatting."""

    def test_severity_prefix(self):
        """Test lines start with their severity."""
        assert format_recommendation("missing_canonical") == "IMPORTANT: Add a canonical URL"

    def test_details_interpolated(self):
        """Test counts are filled into the message."""
        assert format_recommendation("duplicate_h1", count=3) == "IMPORTANT: Use only one H1 per page (3 found)"

    def test_length_warnings_are_important(self):
        """Test over-long title and description share the important tier."""
        assert format_recommendation("title_too_long", length=70).startswith("IMPORTANT: ")
        assert format_recommendation("meta_description_too_long", length=200) == (
            "IMPORTANT: Shorten the meta description to 160 characters or fewer (currently 200)"
        )

    def test_every_entry_has_a_known_severity(self):
        """Test the recommendation table."""
        for entry in RECOMMENDATIONS.values():
            assert entry["severity"] in ("CRITICAL", "IMPORTANT", "INFO")


class TestGenerateRecommendations:
    """Test which recommendations fire and in what order."""

    def test_perfect_page_has_none(self):
        """Test a complete page needs no changes."""
        assert recommendations_for(PERFECT_PAGE_HTML) == []

    def test_poor_page(self):
        """Test the full ordered list for a poor page."""
        assert recommendations_for(POOR_SEO_PAGE_HTML) == [
            "CRITICAL: Add a meta description of 150-160 characters",
            "IMPORTANT: Add a canonical URL",
            "IMPORTANT: Expand the content to at least 300 words (currently 3)",
            "IMPORTANT: Add alt text to 1 image(s)",
            "INFO: Add more internal links (1 found)",
            "INFO: Implement Open Graph and Twitter Card tags (social score 35)",
        ]

    def test_technical_before_title_length(self):
        """Test the missing description precedes the long title note."""
        lines = recommendations_for(LONG_TITLE_HTML)
        description = lines.index("CRITICAL: Add a meta description of 150-160 characters")
        title = lines.index("IMPORTANT: Shorten the title to 60 characters or fewer (currently 70)")

        assert description < title

    def test_duplicate_h1_count(self):
        """Test the H1 count is reported."""
        assert "IMPORTANT: Use only one H1 per page (2 found)" in recommendations_for(DUPLICATE_H1_HTML)

    def test_robots_directives(self):
        """Test noindex is critical and nofollow important."""
        lines = recommendations_for(NOINDEX_HTML)

        assert lines[0] == "CRITICAL: Add a meta description of 150-160 characters"
        assert lines[1].startswith("CRITICAL: Remove the noindex")
        assert any(line.startswith("IMPORTANT: Remove the nofollow") for line in lines)

    def test_invalid_structured_data(self):
        """Test unparseable JSON-LD is reported."""
        assert "INFO: Fix 1 invalid JSON-LD block(s)" in recommendations_for(MALFORMED_JSON_LD_HTML)

    def test_probe_driven_recommendations(self):
        """Test recommendations that depend on measured facets."""
        probe = ProbeResult(
            performance_score=40,
            broken_links=2,
            duplicate_content=True,
            oversized_resources=("/images/hero.jpg",),
        )
        lines = recommendations_for(PERFECT_PAGE_HTML, probe)

        assert lines == [
            "IMPORTANT: Review duplicated content",
            "INFO: Compress 1 oversized image(s)",
            "IMPORTANT: Fix 2 broken link(s)",
            "IMPORTANT: Improve page load speed (performance score 40)",
        ]

    def test_unmeasured_facets_stay_silent(self):
        """Test unknown facets never trigger recommendations."""
        lines = recommendations_for(PERFECT_PAGE_HTML, ProbeResult())

        assert lines == []

    def test_unbalanced_links(self):
        """Test many external links against few internal ones."""
        html = PERFECT_PAGE_HTML.replace(
            "</body>",
            "".join(f'<a href="https://site{i}.org/">s{i}</a>' for i in range(8)) + "</body>",
        )

        assert "INFO: Balance external links (9) against internal links (4)" in recommendations_for(html)

    @pytest.mark.parametrize(
        "scores,expected",
        [
            (
                DetailedScores(technical=100, content=100, performance=69, accessibility=100, social=100),
                ["IMPORTANT: Improve page load speed (performance score 69)"],
            ),
            (
                DetailedScores(technical=100, content=100, performance=100, accessibility=69, social=69),
                [
                    "INFO: Implement Open Graph and Twitter Card tags (social score 69)",
                    "IMPORTANT: Improve web accessibility (accessibility score 69)",
                ],
            ),
            (
                DetailedScores(technical=100, content=100, performance=70, accessibility=70, social=70),
                [],
            ),
        ],
    )
    def test_score_thresholds(self, scores, expected):
        """Test score thresholds are strict less-than 70, in order."""
        facts = extract_page_facts(HTMLDocument(PERFECT_PAGE_HTML), PAGE_URL)
        issues = PageAuditEngine(facts).check_technical_issues()

        assert generate_recommendations(facts, issues, scores) == expected
