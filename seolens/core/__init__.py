"""
Core utilities for SEOLens.
"""
from seolens.core.exceptions import (
    SEOLensError,
    RetrievalError,
    FetchTimeoutError,
    FetchTransportError,
    FetchStatusError,
)
from seolens.core.logging import configure_logging

__all__ = [
    "SEOLensError",
    "RetrievalError",
    "FetchTimeoutError",
    "FetchTransportError",
    "FetchStatusError",
    "configure_logging",
]
