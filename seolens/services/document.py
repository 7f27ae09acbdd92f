"""
HTML document accessor.

Wraps BeautifulSoup so the extractors only ever see four kinds of query:
first match, all matches, attribute value and text content. Parsing and
selector failures are logged and turned into empty results.
"""

import logging

from bs4 import BeautifulSoup, Comment, Tag
from soupsieve import SelectorSyntaxError

logger = logging.getLogger(__name__)

HEADING_SELECTOR = "h1, h2, h3, h4, h5, h6"

# Elements whose text is never page copy
NON_CONTENT_TAGS = {"script", "style", "noscript", "template"}


class HTMLDocument:
    """Read-only query interface over one parsed HTML document."""

    def __init__(self, html: str | bytes | None):
        self._soup = self._parse(html)

    @staticmethod
    def _parse(html: str | bytes | None) -> BeautifulSoup:
        if not html:
            return BeautifulSoup("", "lxml")
        try:
            return BeautifulSoup(html, "lxml")
        except Exception as e:
            logger.warning(f"HTML parsing failed, continuing with an empty document: {e}")
            return BeautifulSoup("", "lxml")

    @property
    def is_empty(self) -> bool:
        return self._soup.find() is None

    def select_one(self, selector: str) -> Tag | None:
        try:
            return self._soup.select_one(selector)
        except SelectorSyntaxError as e:
            logger.warning(f"Invalid selector {selector!r}: {e}")
            return None

    def select(self, selector: str) -> list[Tag]:
        try:
            return list(self._soup.select(selector))
        except SelectorSyntaxError as e:
            logger.warning(f"Invalid selector {selector!r}: {e}")
            return []

    @staticmethod
    def attr(element: Tag | None, name: str) -> str | None:
        """Attribute value, or None when the attribute is absent.

        Multi-valued attributes (rel, class) come back space-joined.
        """
        if element is None:
            return None
        value = element.get(name)
        if value is None:
            return None
        if isinstance(value, list):
            return " ".join(value)
        return value

    @staticmethod
    def text(element: Tag | None) -> str:
        if element is None:
            return ""
        return element.get_text()

    def meta_content(self, name: str | None = None, property: str | None = None) -> str:
        """Content of the first <meta> with the given name or property, "" if absent."""
        if name is not None:
            selector = f'meta[name="{name}"]'
        elif property is not None:
            selector = f'meta[property="{property}"]'
        else:
            raise ValueError("meta_content needs a name or a property")
        return self.attr(self.select_one(selector), "content") or ""

    def body_text(self) -> str:
        """Visible body copy, text nodes joined by single spaces. "" without a <body>."""
        body = self._soup.body
        if body is None:
            return ""
        parts = []
        for string in body.find_all(string=True):
            if isinstance(string, Comment):
                continue
            if string.parent is not None and string.parent.name in NON_CONTENT_TAGS:
                continue
            parts.append(str(string))
        return " ".join(parts)

    def heading_sequence(self) -> list[tuple[int, str]]:
        """Every h1-h6 in document order as (level, text)."""
        return [(int(h.name[1]), self.text(h)) for h in self.select(HEADING_SELECTOR)]

    def html_lang(self) -> str:
        return self.attr(self.select_one("html"), "lang") or ""
