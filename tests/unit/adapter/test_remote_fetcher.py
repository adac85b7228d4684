"""Unit tests for RemoteImageFetcher and the address checks."""

import asyncio

import dns.resolver
import httpx
import pytest

from folio.adapter.error import (
    BlockedHostError,
    FetchFailedError,
    FetchTimeoutError,
    ImageTooLargeDuringDownloadError,
    ImageTooLargeError,
    InvalidUrlError,
    NotAnImageError,
    UnsupportedImageTypeError,
    UnsupportedSchemeError,
)
from folio.adapter.remote import RemoteImageFetcher, is_blocked_address
from folio.config import UploadSettings
from tests.images import make_png

PUBLIC = "93.184.216.34"


def resolver_for(*addresses: str):
    async def resolve(hostname: str) -> list[str]:
        return list(addresses)

    return resolve


def forbidden(request: httpx.Request) -> httpx.Response:
    raise AssertionError(f"no request may be sent, got {request.url}")


def make_fetcher(handler, resolver=None, **settings) -> RemoteImageFetcher:
    return RemoteImageFetcher(
        upload_settings=UploadSettings(**settings),
        resolver=resolver or resolver_for(PUBLIC),
        transport=httpx.MockTransport(handler),
    )


class TestIsBlockedAddress:
    """Tests for the internal range check."""

    @pytest.mark.parametrize(
        "address",
        [
            "127.0.0.1",
            "10.0.0.5",
            "172.16.4.1",
            "192.168.1.1",
            "169.254.169.254",
            "100.64.0.1",
            "0.0.0.0",
            "::1",
            "fd00::1",
            "fe80::1",
            "::ffff:127.0.0.1",
            "224.0.0.251",
            "239.255.255.250",
            "255.255.255.255",
            "198.18.0.1",
            "64:ff9b::a00:5",
            "not-an-ip",
        ],
    )
    def test_internal_addresses_are_blocked(self, address):
        assert is_blocked_address(address) is True

    @pytest.mark.parametrize("address", [PUBLIC, "1.1.1.1", "2606:4700:4700::1111"])
    def test_public_addresses_are_allowed(self, address):
        assert is_blocked_address(address) is False


class TestSsrfGuard:
    """No request may reach an internal address."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "url",
        [
            "http://127.0.0.1/a.png",
            "http://10.0.0.5/a.png",
            "http://192.168.1.1/a.png",
            "http://169.254.169.254/latest/meta-data",
            "http://localhost/a.png",
            "http://LOCALHOST:8080/a.png",
            "http://api.localhost/a.png",
            "http://[::1]/a.png",
        ],
    )
    async def test_internal_targets_are_blocked_before_connecting(self, url):
        fetcher = make_fetcher(forbidden)

        with pytest.raises(BlockedHostError) as exc_info:
            await fetcher.fetch(url)

        assert exc_info.value.reason == "blocked host"
        assert exc_info.value.extra == {"reason": "private or internal address"}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("internal", ["127.0.0.1", "10.0.0.5", "169.254.169.254"])
    async def test_hostname_resolving_to_internal_address_is_blocked(self, internal):
        fetcher = make_fetcher(forbidden, resolver=resolver_for(PUBLIC, internal))

        with pytest.raises(BlockedHostError):
            await fetcher.fetch("http://rebind.example.com/a.png")

    @pytest.mark.asyncio
    async def test_unresolvable_hostname_is_blocked(self):
        async def nxdomain(hostname):
            raise dns.resolver.NXDOMAIN()

        fetcher = make_fetcher(forbidden, resolver=nxdomain)

        with pytest.raises(BlockedHostError):
            await fetcher.fetch("http://nowhere.invalid/a.png")

    @pytest.mark.asyncio
    async def test_hostname_without_addresses_is_blocked(self):
        fetcher = make_fetcher(forbidden, resolver=resolver_for())

        with pytest.raises(BlockedHostError):
            await fetcher.fetch("http://empty.example.com/a.png")

    @pytest.mark.asyncio
    async def test_connection_is_pinned_to_checked_address(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append((request.url.host, request.headers["host"]))
            return httpx.Response(
                200, headers={"content-type": "image/png"}, content=make_png(10, 10)
            )

        fetcher = make_fetcher(handler)

        await fetcher.fetch("http://images.example.com/a.png")

        assert seen == [(PUBLIC, "images.example.com")]

    @pytest.mark.asyncio
    async def test_redirects_are_not_followed(self):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request.url)
            return httpx.Response(302, headers={"location": "http://127.0.0.1/"})

        fetcher = make_fetcher(handler)

        with pytest.raises(FetchFailedError) as exc_info:
            await fetcher.fetch("http://images.example.com/a.png")

        assert len(calls) == 1
        assert exc_info.value.extra == {"status": 302}


class TestUrlValidation:
    """Tests for URL parsing."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("url", ["not a url", "//example.com/a.png", "http://"])
    async def test_malformed_urls_are_rejected(self, url):
        fetcher = make_fetcher(forbidden)

        with pytest.raises(InvalidUrlError):
            await fetcher.fetch(url)

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "url", ["ftp://example.com/a.png", "file:///etc/passwd", "gopher://example.com/"]
    )
    async def test_non_http_schemes_are_rejected(self, url):
        fetcher = make_fetcher(forbidden)

        with pytest.raises(UnsupportedSchemeError):
            await fetcher.fetch(url)


class TestResponseChecks:
    """Tests for status, type and size checks."""

    @pytest.mark.asyncio
    async def test_image_bytes_are_returned(self):
        body = make_png(20, 20)

        def handler(request):
            return httpx.Response(200, headers={"content-type": "image/png"}, content=body)

        fetcher = make_fetcher(handler)

        assert await fetcher.fetch("https://images.example.com/a.png") == body

    @pytest.mark.asyncio
    async def test_error_status_is_reported(self):
        fetcher = make_fetcher(lambda request: httpx.Response(404))

        with pytest.raises(FetchFailedError) as exc_info:
            await fetcher.fetch("http://images.example.com/missing.png")

        assert exc_info.value.extra == {"status": 404}

    @pytest.mark.asyncio
    async def test_non_image_content_type_is_rejected(self):
        def handler(request):
            return httpx.Response(200, headers={"content-type": "text/html"}, content=b"<p>")

        fetcher = make_fetcher(handler)

        with pytest.raises(NotAnImageError) as exc_info:
            await fetcher.fetch("http://images.example.com/page")

        assert exc_info.value.extra == {"contentType": "text/html"}

    @pytest.mark.asyncio
    async def test_unaccepted_image_type_is_rejected(self):
        def handler(request):
            return httpx.Response(200, headers={"content-type": "image/svg+xml"}, content=b"<svg/>")

        fetcher = make_fetcher(handler)

        with pytest.raises(UnsupportedImageTypeError):
            await fetcher.fetch("http://images.example.com/a.svg")

    @pytest.mark.asyncio
    async def test_declared_length_over_limit_is_rejected(self):
        def handler(request):
            return httpx.Response(200, headers={"content-type": "image/png"}, content=b"x" * 2000)

        fetcher = make_fetcher(handler, max_upload_bytes=1000)

        with pytest.raises(ImageTooLargeError) as exc_info:
            await fetcher.fetch("http://images.example.com/big.png")

        assert not isinstance(exc_info.value, ImageTooLargeDuringDownloadError)

    @pytest.mark.asyncio
    async def test_streamed_body_over_limit_is_aborted(self):
        async def chunks():
            for _ in range(10):
                yield b"x" * 300

        def handler(request):
            return httpx.Response(200, headers={"content-type": "image/png"}, content=chunks())

        fetcher = make_fetcher(handler, max_upload_bytes=1000)

        with pytest.raises(ImageTooLargeDuringDownloadError) as exc_info:
            await fetcher.fetch("http://images.example.com/stream.png")

        assert exc_info.value.reason == "image too large during download"

    @pytest.mark.asyncio
    async def test_slow_server_times_out(self):
        async def handler(request):
            await asyncio.sleep(5)
            return httpx.Response(200)

        fetcher = make_fetcher(handler)

        with pytest.raises(FetchTimeoutError) as exc_info:
            await fetcher.fetch("http://slow.example.com/a.png", timeout=0.05)

        assert exc_info.value.status_code == 408

    @pytest.mark.asyncio
    async def test_network_error_is_reported(self):
        def handler(request):
            raise httpx.ConnectError("connection refused")

        fetcher = make_fetcher(handler)

        with pytest.raises(FetchFailedError):
            await fetcher.fetch("http://down.example.com/a.png")
