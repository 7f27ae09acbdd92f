"""
SEOLens: heuristic SEO quality reports for single web pages.
"""
from seolens.core.exceptions import RetrievalError
from seolens.schemas.analysis import ProbeResult, SEOAnalysis
from seolens.services.analyzer import SEOAnalyzer, analyze_html

__version__ = "0.1.0"

__all__ = [
    "RetrievalError",
    "ProbeResult",
    "SEOAnalysis",
    "SEOAnalyzer",
    "analyze_html",
]
