"""
Pydantic schemas for SEOLens reports.
"""
from seolens.schemas.common import BaseSchema
from seolens.schemas.analysis import (
    AccessibilityAnalysis,
    ContentAnalysis,
    DetailedScores,
    HeadingEntry,
    HeadingsStructure,
    ImagesAnalysis,
    KeywordsAnalysis,
    LinksAnalysis,
    MobileAnalysis,
    OpenGraphData,
    PageFacts,
    PerformanceMetrics,
    ProbeResult,
    SecurityAnalysis,
    SEOAnalysis,
    SocialMediaAnalysis,
    StructuredDataAnalysis,
    TechnicalIssues,
    TwitterCardData,
)

__all__ = [
    "BaseSchema",
    "AccessibilityAnalysis",
    "ContentAnalysis",
    "DetailedScores",
    "HeadingEntry",
    "HeadingsStructure",
    "ImagesAnalysis",
    "KeywordsAnalysis",
    "LinksAnalysis",
    "MobileAnalysis",
    "OpenGraphData",
    "PageFacts",
    "PerformanceMetrics",
    "ProbeResult",
    "SecurityAnalysis",
    "SEOAnalysis",
    "SocialMediaAnalysis",
    "StructuredDataAnalysis",
    "TechnicalIssues",
    "TwitterCardData",
]
