"""Unit tests for the allow-list HTML sanitizer."""

import pytest

from folio.adapter.html import Nh3HtmlSanitizer
from folio.adapter.html.sanitizer import filter_style


@pytest.fixture
def sanitizer():
    return Nh3HtmlSanitizer()


class TestClean:
    """Tests for Nh3HtmlSanitizer.clean."""

    def test_allowed_markup_survives(self, sanitizer):
        html = "<h2>Title</h2><p><strong>bold</strong> <em>it</em></p><ul><li>a</li></ul>"

        assert sanitizer.clean(html) == html

    def test_scripts_and_handlers_are_removed(self, sanitizer):
        cleaned = sanitizer.clean('<p onmouseover="steal()">x</p><script>alert(1)</script>')

        assert cleaned == "<p>x</p>"

    def test_disallowed_tags_are_stripped_but_text_kept(self, sanitizer):
        cleaned = sanitizer.clean("<div><table><tr><td>cell</td></tr></table></div>")

        assert "cell" in cleaned
        assert "<div" not in cleaned
        assert "<table" not in cleaned

    def test_links_open_in_new_tab_safely(self, sanitizer):
        cleaned = sanitizer.clean('<a href="https://example.com">site</a>')

        assert 'href="https://example.com"' in cleaned
        assert 'target="_blank"' in cleaned
        assert 'rel="noopener noreferrer"' in cleaned

    def test_javascript_urls_are_dropped(self, sanitizer):
        cleaned = sanitizer.clean('<a href="javascript:alert(1)">x</a>')

        assert "javascript" not in cleaned

    def test_image_attributes_are_kept(self, sanitizer):
        cleaned = sanitizer.clean(
            '<img src="/api/uploads/blog/2025/01/a.webp" alt="A" width="300" onerror="x()">'
        )

        assert 'src="/api/uploads/blog/2025/01/a.webp"' in cleaned
        assert 'alt="A"' in cleaned
        assert 'width="300"' in cleaned
        assert "onerror" not in cleaned

    def test_only_allowed_styles_survive(self, sanitizer):
        cleaned = sanitizer.clean(
            '<p style="text-align: center; position: fixed; background: url(x)">x</p>'
        )

        assert 'style="text-align:center"' in cleaned


class TestFilterStyle:
    """Tests for inline style filtering."""

    @pytest.mark.parametrize(
        ("style", "expected"),
        [
            ("text-align: right", "text-align:right"),
            ("font-size: 1.5em; color: red", "font-size:1.5em"),
            ("FONT-FAMILY: Georgia, serif", "font-family:Georgia, serif"),
            ("text-align: expression(alert(1))", None),
            ("position: absolute", None),
            ("", None),
        ],
    )
    def test_filter_style(self, style, expected):
        assert filter_style(style) == expected
