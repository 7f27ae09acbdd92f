"""
Unit tests for the HTML document accessor.
"""
from seolens.services.document import HTMLDocument
from tests.fixtures.sample_pages import MALFORMED_HTML, SCRIPT_AND_STYLE_HTML


class TestParsing:
    """Test tolerant parsing."""

    def test_malformed_html_is_parsed(self):
        """Test unclosed tags still yield a usable document."""
        doc = HTMLDocument(MALFORMED_HTML)

        assert doc.is_empty is False
        assert doc.text(doc.select_one("title")) == "Broken"
        assert "Unclosed" in doc.body_text()

    def test_empty_input(self):
        """Test empty and missing HTML give an empty document."""
        assert HTMLDocument("").is_empty is True
        assert HTMLDocument(None).is_empty is True

    def test_bytes_input(self):
        """Test raw bytes are accepted."""
        doc = HTMLDocument(b"<html><head><title>Bytes</title></head></html>")

        assert doc.text(doc.select_one("title")) == "Bytes"


class TestQueries:
    """Test selector, attribute and text queries."""

    def test_invalid_selector_returns_empty(self):
        """Test a bad selector is absorbed."""
        doc = HTMLDocument("<p>text</p>")

        assert doc.select("a[") == []
        assert doc.select_one("a[") is None

    def test_attr_absent(self):
        """Test missing attributes and elements give None."""
        doc = HTMLDocument('<img src="a.jpg">')
        img = doc.select_one("img")

        assert doc.attr(img, "alt") is None
        assert doc.attr(None, "src") is None
        assert doc.attr(img, "src") == "a.jpg"

    def test_attr_multi_valued(self):
        """Test rel tokens come back space-joined."""
        doc = HTMLDocument('<a href="/" rel="nofollow noopener">x</a>')

        assert doc.attr(doc.select_one("a"), "rel") == "nofollow noopener"

    def test_text_of_missing_element(self):
        """Test text of None is empty."""
        assert HTMLDocument.text(None) == ""

    def test_meta_content(self):
        """Test meta lookups by name and property."""
        doc = HTMLDocument(
            '<head><meta name="description" content="Desc">'
            '<meta property="og:title" content="OG"></head>'
        )

        assert doc.meta_content(name="description") == "Desc"
        assert doc.meta_content(property="og:title") == "OG"
        assert doc.meta_content(name="keywords") == ""


class TestBodyText:
    """Test visible copy extraction."""

    def test_excludes_scripts_styles_and_comments(self):
        """Test only visible body text is returned."""
        doc = HTMLDocument(SCRIPT_AND_STYLE_HTML)

        assert doc.body_text().split() == ["Hello"]

    def test_text_nodes_are_space_separated(self):
        """Test adjacent elements do not glue words together."""
        doc = HTMLDocument("<body><p>one</p><p>two</p></body>")

        assert doc.body_text().split() == ["one", "two"]


    def test_no_body(self):
        """Test head-only documents have no body copy."""
        doc = HTMLDocument("<html><head><title>Alpha beta</title></head></html>")

        assert doc.body_text() == ""


class TestHeadingSequence:
    """Test heading order."""

    def test_document_order(self):
        """Test headings are returned in document order with levels."""
        doc = HTMLDocument("<h2>B</h2><h1>A</h1><h3>C</h3>")

        assert doc.heading_sequence() == [(2, "B"), (1, "A"), (3, "C")]

    def test_html_lang(self):
        """Test the declared document language."""
        assert HTMLDocument('<html lang="de"><body></body></html>').html_lang() == "de"
        assert HTMLDocument("<html><body></body></html>").html_lang() == ""
