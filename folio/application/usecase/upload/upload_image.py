"""Upload image use cases: from a multipart file or a remote URL."""

from typing import Any

import logfire
from pydantic import BaseModel

from folio.adapter.remote import RemoteImageFetcher
from folio.application.usecase.base import ApiModel
from folio.domain.error import UploadRejectedError
from folio.domain.model.image import UploadedImage
from folio.domain.service import ImageUploadService
from folio.domain.value import CompressionOutcome, ImageKind


class UploadImageRequest(BaseModel):
    """Upload image request (multipart file)."""

    data: bytes | None  # None when no file part was sent
    content_type: str | None = None
    kind: ImageKind = ImageKind.COVER


class UploadFromUrlRequest(BaseModel):
    """Upload image from URL request."""

    payload: Any = None  # Decoded JSON body, expected {"url": "..."}
    kind: ImageKind = ImageKind.COVER


class UploadImageResponse(ApiModel):
    """Stored image details."""

    ok: bool = True
    url: str
    width: int
    height: int
    size_bytes: int
    outcome: CompressionOutcome

    @classmethod
    def from_uploaded(cls, image: UploadedImage) -> "UploadImageResponse":
        return cls(
            url=image.url,
            width=image.width,
            height=image.height,
            size_bytes=image.size_bytes,
            outcome=image.outcome,
        )


class UploadImageUseCase:
    """Use case for uploading an image file."""

    def __init__(self, upload_service: ImageUploadService) -> None:
        """Initialize upload image use case.

        Args:
            upload_service: Image upload domain service
        """
        self.upload_service = upload_service

    async def execute(self, request: UploadImageRequest) -> UploadImageResponse:
        """Execute upload image flow.

        Steps:
        1. Reject missing, oversized or non-image files
        2. Compress and store the image

        Raises:
            UploadRejectedError: If the file is refused before processing
            ImageDecodeError: If the file cannot be decoded
        """
        with logfire.span(
            "upload_image.execute",
            kind=request.kind.value,
            content_type=request.content_type,
        ):
            if not request.data:
                raise UploadRejectedError("no file provided")

            max_bytes = self.upload_service.max_upload_bytes
            if len(request.data) > max_bytes:
                logfire.info("Upload too large", size_bytes=len(request.data))
                raise UploadRejectedError("file too large", maxSize=max_bytes)

            if not self.upload_service.accepts_mime_type(request.content_type):
                logfire.info("Upload type rejected", content_type=request.content_type)
                raise UploadRejectedError(
                    "invalid file type",
                    allowed=self.upload_service.settings.accepted_mime_types,
                )

            image = await self.upload_service.save_image(request.data, request.kind)
            return UploadImageResponse.from_uploaded(image)


class UploadFromUrlUseCase:
    """Use case for importing an image from a remote URL."""

    def __init__(
        self, upload_service: ImageUploadService, fetcher: RemoteImageFetcher
    ) -> None:
        """Initialize upload from URL use case.

        Args:
            upload_service: Image upload domain service
            fetcher: SSRF-guarded remote fetcher
        """
        self.upload_service = upload_service
        self.fetcher = fetcher

    async def execute(self, request: UploadFromUrlRequest) -> UploadImageResponse:
        """Execute upload from URL flow.

        Raises:
            UploadRejectedError: If no URL was supplied
            RemoteFetchError: If the remote fetch is refused or fails
            ImageDecodeError: If the downloaded bytes cannot be decoded
        """
        url = request.payload.get("url") if isinstance(request.payload, dict) else None
        if not url or not isinstance(url, str):
            raise UploadRejectedError("url is required")

        with logfire.span("upload_from_url.execute", url=url, kind=request.kind.value):
            data = await self.fetcher.fetch(url)
            image = await self.upload_service.save_image(data, request.kind)
            return UploadImageResponse.from_uploaded(image)
