"""Infrastructure layer errors."""


class AdapterError(Exception):
    """Base infrastructure error."""

    pass


class RemoteFetchError(AdapterError):
    """Remote image fetch failed.

    Each subclass carries a machine-readable reason and the HTTP status
    the API reports it with. Keyword arguments end up in the error
    response next to the reason.
    """

    reason = "failed to fetch image"
    status_code = 400

    def __init__(self, message: str | None = None, **extra):
        self.extra = extra
        super().__init__(message or self.reason)


class InvalidUrlError(RemoteFetchError):
    """URL is not well-formed."""

    reason = "invalid url format"


class UnsupportedSchemeError(RemoteFetchError):
    """URL scheme is not http or https."""

    reason = "only http/https allowed"


class BlockedHostError(RemoteFetchError):
    """Host is, or resolves to, an internal address."""

    reason = "blocked host"


class FetchTimeoutError(RemoteFetchError):
    """Remote server did not answer in time."""

    reason = "request timeout"
    status_code = 408


class FetchFailedError(RemoteFetchError):
    """Network error or non-success response."""

    reason = "failed to fetch image"


class NotAnImageError(RemoteFetchError):
    """Response Content-Type is not image/*."""

    reason = "not an image"


class UnsupportedImageTypeError(RemoteFetchError):
    """Image type is not in the accepted set."""

    reason = "unsupported image type"


class ImageTooLargeError(RemoteFetchError):
    """Declared Content-Length exceeds the upload limit."""

    reason = "image too large"


class ImageTooLargeDuringDownloadError(ImageTooLargeError):
    """Streamed body exceeded the upload limit."""

    reason = "image too large during download"


class ResponseReadError(RemoteFetchError):
    """Body could not be read to completion."""

    reason = "failed to read response"
    status_code = 500
