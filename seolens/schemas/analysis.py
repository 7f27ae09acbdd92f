"""
Report records produced by one analysis run.

Facets that cannot be measured from static HTML (rendering, timing,
corpus-wide comparisons) are Optional and stay None unless a probe
supplies them.
"""
from pydantic import Field

from seolens.schemas.common import BaseSchema


class OpenGraphData(BaseSchema):
    title: str = ""
    description: str = ""
    image: str = ""
    url: str = ""
    type: str = ""
    site_name: str = ""


class TwitterCardData(BaseSchema):
    card: str = ""
    title: str = ""
    description: str = ""
    image: str = ""
    site: str = ""


class StructuredDataAnalysis(BaseSchema):
    has_schema: bool = False
    types: tuple[str, ...] = ()
    errors: tuple[str, ...] = ()


class HeadingEntry(BaseSchema):
    level: int = Field(ge=1, le=6)
    text: str = ""


class HeadingsStructure(BaseSchema):
    """Heading text grouped by level; `sequence` keeps the document order across levels."""

    h1: tuple[str, ...] = ()
    h2: tuple[str, ...] = ()
    h3: tuple[str, ...] = ()
    h4: tuple[str, ...] = ()
    h5: tuple[str, ...] = ()
    h6: tuple[str, ...] = ()
    sequence: tuple[HeadingEntry, ...] = ()


class ImagesAnalysis(BaseSchema):
    total: int = 0
    with_alt: int = 0
    without_alt: int = 0
    missing_alt: tuple[str, ...] = ()
    oversized: tuple[str, ...] | None = None
    total_size: int | None = None


class LinksAnalysis(BaseSchema):
    total: int = 0
    internal: int = 0
    external: int = 0
    other: int = 0
    broken: int | None = None
    nofollow: int = 0
    dofollow: int = 0


class KeywordsAnalysis(BaseSchema):
    density: dict[str, float] = Field(default_factory=dict)
    suggestions: tuple[str, ...] = ()
    primary: tuple[str, ...] = ()
    secondary: tuple[str, ...] = ()
    total_words: int = 0


class ContentAnalysis(BaseSchema):
    word_count: int = 0
    sentence_count: int = 0
    readability_score: int = Field(default=0, ge=0, le=100)
    duplicate_content: bool | None = None
    language_detected: str | None = None


class MobileAnalysis(BaseSchema):
    responsive: bool = False
    viewport_meta: bool = False
    touch_friendly: bool | None = None


class AccessibilityAnalysis(BaseSchema):
    alt_images: int = 0
    heading_structure: bool = True
    color_contrast: bool | None = None


class SecurityAnalysis(BaseSchema):
    https: bool = False
    mixed_content: bool | None = None


class SocialMediaAnalysis(BaseSchema):
    has_open_graph: bool = False
    has_twitter_card: bool = False
    has_facebook_pixel: bool = False
    has_google_analytics: bool = False


class PerformanceMetrics(BaseSchema):
    measured: bool = False
    load_time_ms: int | None = None
    page_size_bytes: int | None = None
    request_count: int | None = None


class ProbeResult(BaseSchema):
    """Measurements supplied by an external page-weight/rendering probe.

    Every field is optional; None means the probe did not measure it.
    """

    load_time_ms: int | None = None
    page_size_bytes: int | None = None
    request_count: int | None = None
    performance_score: int | None = None
    oversized_resources: tuple[str, ...] | None = None
    total_image_bytes: int | None = None
    broken_links: int | None = None
    mixed_content: bool | None = None
    touch_friendly: bool | None = None
    color_contrast: bool | None = None
    duplicate_content: bool | None = None
    language: str | None = None

    @property
    def has_performance_data(self) -> bool:
        return any(
            value is not None
            for value in (
                self.performance_score,
                self.load_time_ms,
                self.page_size_bytes,
                self.request_count,
                self.oversized_resources,
            )
        )


class PageFacts(BaseSchema):
    title: str = ""
    meta_description: str = ""
    meta_keywords: str = ""
    canonical_url: str = ""
    robots: str = ""
    declared_language: str = ""
    open_graph: OpenGraphData = Field(default_factory=OpenGraphData)
    twitter_card: TwitterCardData = Field(default_factory=TwitterCardData)
    structured_data: StructuredDataAnalysis = Field(default_factory=StructuredDataAnalysis)
    headings: HeadingsStructure = Field(default_factory=HeadingsStructure)
    images: ImagesAnalysis = Field(default_factory=ImagesAnalysis)
    links: LinksAnalysis = Field(default_factory=LinksAnalysis)
    keywords: KeywordsAnalysis = Field(default_factory=KeywordsAnalysis)
    content: ContentAnalysis = Field(default_factory=ContentAnalysis)
    mobile: MobileAnalysis = Field(default_factory=MobileAnalysis)
    accessibility: AccessibilityAnalysis = Field(default_factory=AccessibilityAnalysis)
    security: SecurityAnalysis = Field(default_factory=SecurityAnalysis)
    social_media: SocialMediaAnalysis = Field(default_factory=SocialMediaAnalysis)


class TechnicalIssues(BaseSchema):
    missing_title: bool = False
    missing_meta_description: bool = False
    duplicate_h1: bool = False
    images_missing_alt: bool = False
    title_too_long: bool = False
    meta_description_too_long: bool = False
    missing_canonical: bool = False
    no_index: bool = False
    no_follow: bool = False


class DetailedScores(BaseSchema):
    technical: int = Field(ge=0, le=100)
    content: int = Field(ge=0, le=100)
    performance: int = Field(ge=0, le=100)
    accessibility: int = Field(ge=0, le=100)
    social: int = Field(ge=0, le=100)

    def values(self) -> list[int]:
        return [self.technical, self.content, self.performance, self.accessibility, self.social]


class SEOAnalysis(PageFacts):
    """The assembled report for one URL."""

    url: str
    performance: PerformanceMetrics = Field(default_factory=PerformanceMetrics)
    technical_issues: TechnicalIssues = Field(default_factory=TechnicalIssues)
    scores: DetailedScores
    score: int = Field(ge=0, le=100)
    recommendations: tuple[str, ...] = ()

    # The document held no elements at all (empty or unparseable HTML)
    parse_degraded: bool = False
    # The HTML came from a caller-supplied fallback after a retrieval failure
    degraded: bool = False
    error: str | None = None

    @property
    def facts(self) -> PageFacts:
        return PageFacts(**{name: getattr(self, name) for name in PageFacts.model_fields})
