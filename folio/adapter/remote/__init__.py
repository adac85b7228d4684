"""Remote image fetching."""

from folio.adapter.remote.fetcher import RemoteImageFetcher, is_blocked_address, resolve_host

__all__ = ["RemoteImageFetcher", "is_blocked_address", "resolve_host"]
