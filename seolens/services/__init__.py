"""
Analysis services for SEOLens.
"""
from seolens.services.analyzer import SEOAnalyzer, analyze_html

__all__ = ["SEOAnalyzer", "analyze_html"]
