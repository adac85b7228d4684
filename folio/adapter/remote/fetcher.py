"""SSRF-safe remote image fetching.

The host is resolved here, every resolved address is checked against the
internal ranges, and the connection is then pinned to a checked address
so a second DNS answer cannot redirect the request (DNS rebinding).
"""

import asyncio
import ipaddress
from collections.abc import Awaitable, Callable

import dns.asyncresolver
import dns.exception
import dns.resolver
import httpx
import logfire

from folio.adapter.error import (
    BlockedHostError,
    FetchFailedError,
    FetchTimeoutError,
    ImageTooLargeDuringDownloadError,
    ImageTooLargeError,
    InvalidUrlError,
    NotAnImageError,
    ResponseReadError,
    UnsupportedImageTypeError,
    UnsupportedSchemeError,
)
from folio.config import UploadSettings

Resolver = Callable[[str], Awaitable[list[str]]]

BLOCKED_HOSTNAMES = frozenset({"localhost", "127.0.0.1", "0.0.0.0", "::1"})

BLOCKED_NETWORKS = tuple(
    ipaddress.ip_network(network)
    for network in (
        "0.0.0.0/8",  # unspecified
        "10.0.0.0/8",
        "100.64.0.0/10",  # CGNAT
        "127.0.0.0/8",
        "169.254.0.0/16",  # link-local, cloud metadata
        "172.16.0.0/12",
        "192.0.0.0/24",  # IETF protocol assignments
        "192.168.0.0/16",
        "198.18.0.0/15",  # benchmarking
        "224.0.0.0/4",  # multicast
        "240.0.0.0/4",  # reserved, broadcast
        "::/128",
        "::1/128",
        "64:ff9b::/96",  # NAT64, embeds an IPv4 address
        "fc00::/7",  # unique local
        "fe80::/10",  # link-local
    )
)


def _megabytes(size: int) -> str:
    return f"{size // (1024 * 1024)}MB"


def is_blocked_address(address: str) -> bool:
    """Check whether an IP address is internal.

    Unparseable addresses count as blocked. IPv4-mapped IPv6 addresses
    are checked as their IPv4 form.
    """
    try:
        ip = ipaddress.ip_address(address)
    except ValueError:
        return True

    if isinstance(ip, ipaddress.IPv6Address) and ip.ipv4_mapped is not None:
        ip = ip.ipv4_mapped

    return any(ip in network for network in BLOCKED_NETWORKS)


def is_blocked_hostname(hostname: str) -> bool:
    """Check a hostname against the literal block list."""
    host = hostname.lower().strip("[]").rstrip(".")
    return host in BLOCKED_HOSTNAMES or host.endswith(".localhost")


async def resolve_host(hostname: str) -> list[str]:
    """Resolve a hostname to its A and AAAA addresses.

    Args:
        hostname: DNS name to resolve

    Returns:
        All addresses found (possibly empty)

    Raises:
        dns.exception.DNSException: If the lookup itself fails
    """
    resolver = dns.asyncresolver.Resolver()
    addresses: list[str] = []
    for rdtype in ("A", "AAAA"):
        try:
            answer = await resolver.resolve(hostname, rdtype)
        except (dns.resolver.NoAnswer, dns.resolver.NXDOMAIN):
            continue
        addresses.extend(rdata.address for rdata in answer)
    return addresses


class RemoteImageFetcher:
    """Downloads images from user-supplied URLs under SSRF and size limits."""

    def __init__(
        self,
        upload_settings: UploadSettings,
        resolver: Resolver = resolve_host,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize remote image fetcher.

        Args:
            upload_settings: Upload settings (size cap, timeout, accepted types)
            resolver: Async hostname resolver returning IP address strings
            transport: Optional httpx transport (tests use httpx.MockTransport)
        """
        self.settings = upload_settings
        self.resolver = resolver
        self.transport = transport

    async def fetch(self, url: str, timeout: float | None = None) -> bytes:
        """Fetch an image from a remote URL.

        Args:
            url: Absolute http(s) URL of the image
            timeout: Overall deadline in seconds (defaults to the configured one)

        Returns:
            Raw image bytes, at most max_upload_bytes long

        Raises:
            RemoteFetchError: One subclass per failure reason
        """
        timeout = timeout if timeout is not None else self.settings.fetch_timeout_seconds
        with logfire.span("remote_fetcher.fetch", url=url, timeout=timeout):
            target = self._parse_url(url)
            try:
                data = await asyncio.wait_for(self._fetch(target, timeout), timeout)
            except (asyncio.TimeoutError, httpx.TimeoutException) as e:
                logfire.warn("Remote image fetch timed out", url=url, timeout=timeout)
                raise FetchTimeoutError() from e

            logfire.info("Remote image fetched", url=url, size_bytes=len(data))
            return data

    @staticmethod
    def _parse_url(url: str) -> httpx.URL:
        try:
            target = httpx.URL(url)
        except (httpx.InvalidURL, TypeError) as e:
            raise InvalidUrlError() from e

        if not target.scheme:
            raise InvalidUrlError()
        if target.scheme not in ("http", "https"):
            raise UnsupportedSchemeError()
        if not target.host:
            raise InvalidUrlError()
        return target

    async def _resolve_allowed_address(self, hostname: str) -> str:
        """Resolve hostname and return an address safe to connect to.

        Raises:
            BlockedHostError: If the host is blocked, unresolvable, or any
                resolved address is internal
        """
        if is_blocked_hostname(hostname):
            self._log_blocked(hostname, "blocked hostname")
            raise BlockedHostError(reason="private or internal address")

        try:
            ipaddress.ip_address(hostname)
        except ValueError:
            pass
        else:
            if is_blocked_address(hostname):
                self._log_blocked(hostname, "internal address literal")
                raise BlockedHostError(reason="private or internal address")
            return hostname

        try:
            addresses = await self.resolver(hostname)
        except dns.exception.DNSException as e:
            self._log_blocked(hostname, f"dns failure: {e}")
            raise BlockedHostError(reason="private or internal address") from e

        if not addresses:
            self._log_blocked(hostname, "no addresses")
            raise BlockedHostError(reason="private or internal address")

        blocked = [address for address in addresses if is_blocked_address(address)]
        if blocked:
            self._log_blocked(hostname, "resolves to internal address", addresses=blocked)
            raise BlockedHostError(reason="private or internal address")

        return addresses[0]

    async def _fetch(self, target: httpx.URL, timeout: float) -> bytes:
        address = await self._resolve_allowed_address(target.host)

        headers = {
            "Host": target.netloc.decode("ascii"),
            "User-Agent": self.settings.fetch_user_agent,
            "Accept": "image/*",
        }
        extensions = {}
        if target.scheme == "https":
            # Certificate and SNI must match the original hostname
            extensions["sni_hostname"] = target.host

        pinned = target.copy_with(host=address)
        max_bytes = self.settings.max_upload_bytes

        async with httpx.AsyncClient(
            transport=self.transport, timeout=timeout, follow_redirects=False
        ) as client:
            try:
                async with client.stream(
                    "GET", pinned, headers=headers, extensions=extensions
                ) as response:
                    self._check_response(response)

                    chunks: list[bytes] = []
                    total = 0
                    try:
                        async for chunk in response.aiter_bytes():
                            total += len(chunk)
                            if total > max_bytes:
                                logfire.warn(
                                    "Remote image exceeded size limit during download",
                                    host=target.host,
                                    received_bytes=total,
                                    max_bytes=max_bytes,
                                )
                                raise ImageTooLargeDuringDownloadError(maxSize=_megabytes(max_bytes))
                            chunks.append(chunk)
                    except httpx.TimeoutException:
                        raise
                    except httpx.HTTPError as e:
                        raise ResponseReadError() from e

                    return b"".join(chunks)
            except httpx.TimeoutException:
                raise
            except httpx.HTTPError as e:
                logfire.warn("Remote image request failed", host=target.host, error=str(e))
                raise FetchFailedError() from e

    def _check_response(self, response: httpx.Response) -> None:
        if not response.is_success:
            logfire.warn(
                "Remote image request returned non-success status",
                status=response.status_code,
            )
            raise FetchFailedError(status=response.status_code)

        content_type = response.headers.get("content-type", "")
        if not content_type.lower().startswith("image/"):
            raise NotAnImageError(contentType=content_type)

        mime_type = content_type.split(";", 1)[0].strip().lower()
        if mime_type not in self.settings.accepted_mime_types:
            raise UnsupportedImageTypeError(allowed=list(self.settings.accepted_mime_types))

        declared = response.headers.get("content-length")
        if declared and declared.isdigit() and int(declared) > self.settings.max_upload_bytes:
            raise ImageTooLargeError(maxSize=_megabytes(self.settings.max_upload_bytes))

    @staticmethod
    def _log_blocked(hostname: str, detail: str, **extra) -> None:
        logfire.warn(
            "Remote fetch blocked",
            host=hostname,
            detail=detail,
            security_event="ssrf_blocked",
            **extra,
        )
