"""HTML sanitization."""

from folio.adapter.html.sanitizer import Nh3HtmlSanitizer

__all__ = ["Nh3HtmlSanitizer"]
