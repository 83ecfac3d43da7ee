"""
Tests for url_text_processor module
"""

import pytest

from core.processor.url_text_processor import (
    UrlTextProcessor,
    extractURLsFromText,
    hasFileExtensionHost,
    isURL,
    repairCharacters,
    stitchWrappedLines,
    stripTrailingPunctuation
)


class TestIsURL:
    """URL-likeness check used for QR payloads"""

    @pytest.mark.parametrize("value", [
        "http://x",
        "https://x",
        "www.example.com",
        "example.com",
        "sub-domain.io/path",
    ])
    def test_url_like(self, value):
        assert isURL(value) is True

    @pytest.mark.parametrize("value", [
        "hello world",
        "just text",
        "",
        "WIFI:S:home;T:WPA;P:secret;;",
        "example.c",
    ])
    def test_not_url_like(self, value):
        assert isURL(value) is False


class TestRepairCharacters:
    """OCR character substitutions"""

    def test_dashes_become_hyphens(self):
        assert repairCharacters("my—site–name") == "my-site-name"

    def test_ligatures_expanded(self):
        assert repairCharacters("ﬁle ﬂow") == "file flow"

    def test_hyphen_runs_collapsed(self):
        assert repairCharacters("a---b -- c") == "a-b - c"


class TestStitchWrappedLines:
    """Re-joining URLs split across lines"""

    def test_joins_continuation(self):
        text = "see https://example.com/path-to-sp\nlit-content more text"
        stitched = stitchWrappedLines(text)
        assert "https://example.com/path-to-split-content" in stitched
        assert stitched.split("\n")[1].strip() == "more text"

    def test_keeps_line_count(self):
        text = "https://a.com/x\ny\nz"
        assert len(stitchWrappedLines(text).split("\n")) == 3

    def test_does_not_join_new_url(self):
        text = "https://a.com/first\nhttps://b.com/second"
        assert stitchWrappedLines(text) == text

    def test_does_not_join_after_terminal_punctuation(self):
        text = "go to https://a.com/page.\nnext sentence"
        assert stitchWrappedLines(text) == text


class TestStripTrailingPunctuation:
    """Trailing punctuation cleanup"""

    def test_strips_period(self):
        assert stripTrailingPunctuation("https://a.com.") == "https://a.com"

    def test_keeps_balanced_paren(self):
        url = "https://en.wikipedia.org/wiki/Foo_(bar)"
        assert stripTrailingPunctuation(url) == url

    def test_strips_unbalanced_paren(self):
        assert stripTrailingPunctuation("https://a.com/page)") == "https://a.com/page"

    def test_strips_only_one_character(self):
        assert stripTrailingPunctuation("https://a.com/x?!") == "https://a.com/x?"


class TestFileExtensionHost:
    """Filename-like hosts"""

    def test_pdf_host(self):
        assert hasFileExtensionHost("https://report.pdf") is True

    def test_file_in_path_is_fine(self):
        assert hasFileExtensionHost("https://example.com/report.pdf") is False

    def test_case_insensitive(self):
        assert hasFileExtensionHost("https://SLIDES.PPTX/x") is True


class TestExtractURLsFromText:
    """End-to-end URL extraction"""

    def test_complete_urls_without_bare_duplicates(self):
        urls = extractURLsFromText("Visit https://a.com and http://b.org today")
        assert urls == ["https://a.com", "http://b.org"]

    def test_bare_domains_get_https(self):
        urls = extractURLsFromText("Visit www.example.com or example.org")
        assert len(urls) == 2
        assert any("example.com" in url for url in urls)
        assert any("example.org" in url for url in urls)
        assert all(url.startswith("https://") for url in urls)

    def test_no_urls(self):
        assert extractURLsFromText("nothing to see here, move along") == []

    def test_empty_text(self):
        assert extractURLsFromText("") == []

    def test_idempotent_on_own_output(self):
        text = (
            "Links: https://a.com/x, www.example.com and\n"
            "docs at https://example.org/guide-to-sp\nlit-pages."
        )
        first = extractURLsFromText(text)
        second = extractURLsFromText("\n".join(first))
        assert set(second) == set(first)

    def test_wrapped_url(self):
        text = "see https://example.com/path-to-sp\nlit-content more text"
        assert extractURLsFromText(text) == ["https://example.com/path-to-split-content"]

    def test_balanced_paren_preserved(self):
        urls = extractURLsFromText("See https://en.wikipedia.org/wiki/Foo_(bar) now")
        assert urls == ["https://en.wikipedia.org/wiki/Foo_(bar)"]

    def test_unbalanced_paren_stripped(self):
        urls = extractURLsFromText("(see https://example.com/page)")
        assert urls == ["https://example.com/page"]

    def test_trailing_period_stripped(self):
        assert extractURLsFromText("Go to https://example.com.") == ["https://example.com"]

    @pytest.mark.parametrize("text", [
        "Download https://report.pdf now",
        "Open https://minutes.docx/view",
        "attached: report.pdf",
    ])
    def test_filename_hosts_rejected(self, text):
        assert extractURLsFromText(text) == []

    def test_ocr_dash_repaired_in_url(self):
        assert extractURLsFromText("https://my—site.com") == ["https://my-site.com"]

    def test_order_is_first_seen(self):
        urls = extractURLsFromText("https://b.com https://a.com https://b.com")
        assert urls == ["https://b.com", "https://a.com"]


class TestUrlTextProcessor:
    """Object wrapper used by the OCR service"""

    def test_extract_urls(self):
        processor = UrlTextProcessor()
        assert processor.extractUrls("visit example.org") == ["https://example.org"]

    def test_none_text(self):
        assert UrlTextProcessor().extractUrls(None) == []
