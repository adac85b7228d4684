"""Mock remote provider: public DNS answers and canned HTTP responses."""

import httpx
from dishka import Scope, provide

from folio.adapter.remote import RemoteImageFetcher
from folio.config import UploadSettings
from folio.util.di.infrastructure.remote import RemoteProvider
from tests.images import make_png

PUBLIC_ADDRESS = "93.184.216.34"


async def resolve_public(hostname: str) -> list[str]:
    """Resolve every hostname to the same public address."""
    return [PUBLIC_ADDRESS]


def serve_remote(request: httpx.Request) -> httpx.Response:
    """Canned remote server.

    /photo.png    an 800x600 PNG
    /page.html    an HTML page
    anything else 404
    """
    if request.url.path == "/photo.png":
        return httpx.Response(
            200, headers={"content-type": "image/png"}, content=make_png(800, 600)
        )
    if request.url.path == "/page.html":
        return httpx.Response(
            200, headers={"content-type": "text/html"}, content=b"<html></html>"
        )
    return httpx.Response(404)


class MockRemoteProvider(RemoteProvider):
    """Remote fetcher that never touches the network."""

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_remote_fetcher(self, upload_settings: UploadSettings) -> RemoteImageFetcher:
        """Provide a fetcher backed by httpx.MockTransport."""
        return RemoteImageFetcher(
            upload_settings=upload_settings,
            resolver=resolve_public,
            transport=httpx.MockTransport(serve_remote),
        )
