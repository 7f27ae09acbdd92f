"""
Error types for SEOLens.

Only retrieval failures are fatal to an analysis. Parse problems and
malformed structured data are reported inside the report itself.
"""


class SEOLensError(Exception):
    """Base class for SEOLens errors."""


class RetrievalError(SEOLensError):
    """The HTML for a URL could not be obtained."""

    def __init__(self, url: str, reason: str, status_code: int | None = None):
        self.url = url
        self.reason = reason
        self.status_code = status_code
        super().__init__(f"Could not retrieve {url}: {reason}")


class FetchTimeoutError(RetrievalError):
    """The request did not complete within the configured timeout."""

    def __init__(self, url: str, timeout: float):
        self.timeout = timeout
        super().__init__(url, f"timed out after {timeout}s")


class FetchTransportError(RetrievalError):
    """Connection, DNS, TLS or protocol failure."""


class FetchStatusError(RetrievalError):
    """The server answered with a non-2xx status."""

    def __init__(self, url: str, status_code: int):
        super().__init__(url, f"HTTP {status_code}", status_code=status_code)
