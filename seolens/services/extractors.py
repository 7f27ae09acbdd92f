"""
SEOLens extractors

Each extractor turns an HTMLDocument into one facet of PageFacts:
- OpenGraph / Twitter Card meta tags
- JSON-LD structured data
- Headings, images and links
- Keyword density and content statistics
- Mobile, accessibility, security and social signals

Facets that need rendering, timing or a corpus (oversized images, broken
links, touch targets, color contrast, mixed content, duplicate content,
language) are taken from an optional ProbeResult and stay None without one.
"""

import json
import logging
import math
import re
from collections import Counter
from urllib.parse import urlparse

from seolens.config import settings
from seolens.schemas.analysis import (
    AccessibilityAnalysis,
    ContentAnalysis,
    HeadingEntry,
    HeadingsStructure,
    ImagesAnalysis,
    KeywordsAnalysis,
    LinksAnalysis,
    MobileAnalysis,
    OpenGraphData,
    PageFacts,
    ProbeResult,
    SecurityAnalysis,
    SocialMediaAnalysis,
    StructuredDataAnalysis,
    TwitterCardData,
)
from seolens.services.document import HTMLDocument

logger = logging.getLogger(__name__)

INVALID_JSON_LD = "Invalid JSON-LD structure"
UNKNOWN_IMAGE = "Unknown image"

KEYWORD_SUGGESTIONS = 15
KEYWORD_PRIMARY = 3
KEYWORD_SECONDARY_END = 10

_PUNCTUATION_RE = re.compile(r"[^\w\s]")
_SENTENCE_SPLIT_RE = re.compile(r"[.!?]+")

EMPTY_PROBE = ProbeResult()


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up (round() would give 82 for 82.5)."""
    return math.floor(value + 0.5)


def extract_open_graph(doc: HTMLDocument) -> OpenGraphData:
    return OpenGraphData(
        title=doc.meta_content(property="og:title"),
        description=doc.meta_content(property="og:description"),
        image=doc.meta_content(property="og:image"),
        url=doc.meta_content(property="og:url"),
        type=doc.meta_content(property="og:type"),
        site_name=doc.meta_content(property="og:site_name"),
    )


def extract_twitter_card(doc: HTMLDocument) -> TwitterCardData:
    return TwitterCardData(
        card=doc.meta_content(name="twitter:card"),
        title=doc.meta_content(name="twitter:title"),
        description=doc.meta_content(name="twitter:description"),
        image=doc.meta_content(name="twitter:image"),
        site=doc.meta_content(name="twitter:site"),
    )


def _schema_types(data) -> list[str]:
    """@type values of a parsed JSON-LD payload (object, array or @graph)."""
    if isinstance(data, list):
        return [t for item in data for t in _schema_types(item)]
    if not isinstance(data, dict):
        return []

    types = []
    schema_type = data.get("@type")
    if isinstance(schema_type, str) and schema_type:
        types.append(schema_type)
    elif isinstance(schema_type, list):
        types.extend(t for t in schema_type if isinstance(t, str) and t)

    graph = data.get("@graph")
    if isinstance(graph, list):
        types.extend(_schema_types(graph))
    return types


def extract_structured_data(doc: HTMLDocument) -> StructuredDataAnalysis:
    scripts = doc.select('script[type="application/ld+json"]')
    types: list[str] = []
    errors: list[str] = []

    for script in scripts:
        try:
            data = json.loads(doc.text(script))
        except (json.JSONDecodeError, TypeError) as e:
            logger.debug(f"Unparseable JSON-LD block: {e}")
            errors.append(INVALID_JSON_LD)
            continue
        types.extend(_schema_types(data))

    return StructuredDataAnalysis(
        has_schema=len(scripts) > 0,
        types=tuple(types),
        errors=tuple(errors),
    )


def extract_headings(doc: HTMLDocument) -> HeadingsStructure:
    sequence = [HeadingEntry(level=level, text=text) for level, text in doc.heading_sequence()]
    by_level: dict[int, list[str]] = {level: [] for level in range(1, 7)}
    for entry in sequence:
        by_level[entry.level].append(entry.text)

    return HeadingsStructure(
        h1=tuple(by_level[1]),
        h2=tuple(by_level[2]),
        h3=tuple(by_level[3]),
        h4=tuple(by_level[4]),
        h5=tuple(by_level[5]),
        h6=tuple(by_level[6]),
        sequence=tuple(sequence),
    )


def analyze_images(doc: HTMLDocument, probe: ProbeResult = EMPTY_PROBE) -> ImagesAnalysis:
    images = doc.select("img")
    missing_alt = []
    for img in images:
        # Presence of the attribute counts, alt="" marks a decorative image
        if doc.attr(img, "alt") is None:
            missing_alt.append(doc.attr(img, "src") or UNKNOWN_IMAGE)

    return ImagesAnalysis(
        total=len(images),
        with_alt=len(images) - len(missing_alt),
        without_alt=len(missing_alt),
        missing_alt=tuple(missing_alt),
        oversized=probe.oversized_resources,
        total_size=probe.total_image_bytes,
    )


def _bare_host(parsed) -> str:
    host = parsed.hostname or ""
    return host[4:] if host.startswith("www.") else host


def classify_link(href: str, page_url: str) -> str:
    """Bucket a raw href as "internal", "external" or "other".

    Relative hrefs (root-relative, path-relative, query-only) point at the
    page's own host and count as internal. Fragment-only hrefs and non-http
    schemes (mailto:, tel:, javascript:) are "other".
    """
    href = href.strip()
    if not href or href.startswith("#"):
        return "other"

    try:
        parsed = urlparse(href)
        if parsed.scheme and parsed.scheme.lower() not in ("http", "https"):
            return "other"
        if not parsed.scheme and not parsed.netloc:
            return "internal"
        page_host = _bare_host(urlparse(page_url))
        link_host = _bare_host(parsed)
    except ValueError:
        logger.debug(f"Unparseable href: {href!r}")
        return "other"

    return "internal" if link_host == page_host else "external"


def analyze_links(doc: HTMLDocument, page_url: str, probe: ProbeResult = EMPTY_PROBE) -> LinksAnalysis:
    counts = Counter()
    nofollow = 0
    anchors = doc.select("a[href]")

    for anchor in anchors:
        counts[classify_link(doc.attr(anchor, "href") or "", page_url)] += 1
        rel_tokens = (doc.attr(anchor, "rel") or "").lower().split()
        if "nofollow" in rel_tokens:
            nofollow += 1

    return LinksAnalysis(
        total=len(anchors),
        internal=counts["internal"],
        external=counts["external"],
        other=counts["other"],
        broken=probe.broken_links,
        nofollow=nofollow,
        dofollow=len(anchors) - nofollow,
    )


def analyze_keywords(text: str) -> KeywordsAnalysis:
    limited = text[: settings.KEYWORD_TEXT_LIMIT].lower()
    words = [
        word
        for word in _PUNCTUATION_RE.sub("", limited).split()
        if len(word) > settings.KEYWORD_MIN_LENGTH
    ]
    if not words:
        return KeywordsAnalysis()

    # Counter keeps first-seen order, sorted() is stable
    frequencies = Counter(words)
    total = len(words)
    density = {word: count / total * 100 for word, count in frequencies.items()}
    ranked = [word for word, _ in sorted(density.items(), key=lambda item: item[1], reverse=True)]
    top = ranked[:KEYWORD_SUGGESTIONS]

    return KeywordsAnalysis(
        density=density,
        suggestions=tuple(top),
        primary=tuple(top[:KEYWORD_PRIMARY]),
        secondary=tuple(top[KEYWORD_PRIMARY:KEYWORD_SECONDARY_END]),
        total_words=total,
    )


def analyze_content(text: str, probe: ProbeResult = EMPTY_PROBE) -> ContentAnalysis:
    word_count = len(text.split())
    sentence_count = sum(1 for s in _SENTENCE_SPLIT_RE.split(text) if s.strip())
    avg_words_per_sentence = word_count / sentence_count if sentence_count else 0
    readability = max(0.0, min(100.0, 100 - avg_words_per_sentence * 2))

    return ContentAnalysis(
        word_count=word_count,
        sentence_count=sentence_count,
        readability_score=round_half_up(readability),
        duplicate_content=probe.duplicate_content,
        language_detected=probe.language,
    )


def analyze_mobile(doc: HTMLDocument, probe: ProbeResult = EMPTY_PROBE) -> MobileAnalysis:
    has_viewport = doc.select_one('meta[name="viewport"]') is not None
    return MobileAnalysis(
        responsive=has_viewport,
        viewport_meta=has_viewport,
        touch_friendly=probe.touch_friendly,
    )


def has_valid_heading_structure(headings: HeadingsStructure) -> bool:
    """False when any heading skips a level relative to the one before it.

    The first heading is compared against level 0, so a page that opens
    with an h2 or deeper is flagged.
    """
    last_level = 0
    for entry in headings.sequence:
        if entry.level > last_level + 1:
            return False
        last_level = entry.level
    return True


def analyze_accessibility(
    headings: HeadingsStructure,
    images: ImagesAnalysis,
    probe: ProbeResult = EMPTY_PROBE,
) -> AccessibilityAnalysis:
    return AccessibilityAnalysis(
        alt_images=images.with_alt,
        heading_structure=has_valid_heading_structure(headings),
        color_contrast=probe.color_contrast,
    )


def analyze_security(url: str, probe: ProbeResult = EMPTY_PROBE) -> SecurityAnalysis:
    return SecurityAnalysis(
        https=urlparse(url).scheme.lower() == "https",
        mixed_content=probe.mixed_content,
    )


def _has_script_matching(doc: HTMLDocument, patterns: list[str]) -> bool:
    for script in doc.select("script[src]"):
        src = doc.attr(script, "src") or ""
        if any(pattern in src for pattern in patterns):
            return True
    return False


def analyze_social_media(doc: HTMLDocument) -> SocialMediaAnalysis:
    return SocialMediaAnalysis(
        has_open_graph=doc.select_one('meta[property^="og:"]') is not None,
        has_twitter_card=doc.select_one('meta[name^="twitter:"]') is not None,
        has_facebook_pixel=_has_script_matching(doc, settings.pixel_tracker_patterns_list),
        has_google_analytics=_has_script_matching(doc, settings.analytics_patterns_list),
    )


def _run_extractor(extractor, fallback, *args):
    """Call one extractor; a failure is logged and replaced by an empty facet."""
    try:
        return extractor(*args)
    except Exception as e:
        logger.error(f"{extractor.__name__} failed, using an empty result: {type(e).__name__}: {e}")
        return fallback


def extract_page_facts(doc: HTMLDocument, url: str, probe: ProbeResult | None = None) -> PageFacts:
    """Run every extractor over one document."""
    probe = probe or EMPTY_PROBE
    body_text = doc.body_text()
    headings = _run_extractor(extract_headings, HeadingsStructure(), doc)
    images = _run_extractor(analyze_images, ImagesAnalysis(), doc, probe)

    return PageFacts(
        title=doc.text(doc.select_one("title")).strip(),
        meta_description=doc.meta_content(name="description"),
        meta_keywords=doc.meta_content(name="keywords"),
        canonical_url=doc.attr(doc.select_one('link[rel~="canonical"]'), "href") or "",
        robots=doc.meta_content(name="robots"),
        declared_language=doc.html_lang(),
        open_graph=_run_extractor(extract_open_graph, OpenGraphData(), doc),
        twitter_card=_run_extractor(extract_twitter_card, TwitterCardData(), doc),
        structured_data=_run_extractor(extract_structured_data, StructuredDataAnalysis(), doc),
        headings=headings,
        images=images,
        links=_run_extractor(analyze_links, LinksAnalysis(), doc, url, probe),
        keywords=_run_extractor(analyze_keywords, KeywordsAnalysis(), body_text),
        content=_run_extractor(analyze_content, ContentAnalysis(), body_text, probe),
        mobile=_run_extractor(analyze_mobile, MobileAnalysis(), doc, probe),
        accessibility=_run_extractor(analyze_accessibility, AccessibilityAnalysis(), headings, images, probe),
        security=_run_extractor(analyze_security, SecurityAnalysis(), url, probe),
        social_media=_run_extractor(analyze_social_media, SocialMediaAnalysis(), doc),
    )
