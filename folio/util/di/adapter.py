"""Adapter DI providers (non-mockable)."""

from dishka import Scope, provide

from folio.adapter.html import Nh3HtmlSanitizer
from folio.domain.service import HtmlSanitizer
from folio.util.di.base import ProviderBase


class ProdAdapterProvider(ProviderBase):
    """Stateless adapters shared across the app."""

    scope = Scope.APP

    @provide
    def get_html_sanitizer(self) -> HtmlSanitizer:
        """Provide the allow-list HTML sanitizer."""
        return Nh3HtmlSanitizer()
