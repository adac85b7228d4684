"""Remote fetch infrastructure providers."""

from dishka import Scope, provide

from folio.adapter.remote import RemoteImageFetcher
from folio.config import UploadSettings
from folio.util.di.base import ProviderBase


class RemoteProvider(ProviderBase):
    """Remote fetch component base."""

    __mock_component__ = "remote"


class ProdRemoteProvider(RemoteProvider):
    """Production remote fetcher using real DNS and network access."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_remote_fetcher(self, upload_settings: UploadSettings) -> RemoteImageFetcher:
        """Provide SSRF-guarded remote image fetcher."""
        return RemoteImageFetcher(upload_settings=upload_settings)
