"""Image upload domain service."""

import asyncio
from abc import ABC, abstractmethod
from pathlib import Path

import logfire

from folio.config import UploadSettings
from folio.domain.model.image import StoredImage, UploadedImage
from folio.domain.value import ImageKind

from .base import Service
from .image_processor import ImageProcessor


class ImageStorage(ABC):
    """Storage interface for processed images."""

    @abstractmethod
    async def save(self, buffer: bytes, extension: str) -> StoredImage:
        """Write an encoded image under a fresh, collision-resistant name.

        Args:
            buffer: Encoded image bytes
            extension: File extension without the dot (e.g. "webp")

        Returns:
            Public URL and filename of the stored image
        """
        pass

    @abstractmethod
    def locate(self, relative_path: str) -> Path | None:
        """Map a public relative path back to a stored file.

        Args:
            relative_path: Path below the uploads root (e.g. "blog/2025/03/x.webp")

        Returns:
            Filesystem path of the file, or None if it does not exist

        Raises:
            StoragePathError: If the path is unsafe or has a disallowed extension
        """
        pass


class ImageUploadService(Service):
    """Domain service that turns raw image bytes into a stored WebP."""

    def __init__(
        self,
        processor: ImageProcessor,
        storage: ImageStorage,
        upload_settings: UploadSettings,
    ) -> None:
        """Initialize image upload service.

        Args:
            processor: Image processor
            storage: Image storage
            upload_settings: Upload settings
        """
        self.processor = processor
        self.storage = storage
        self.settings = upload_settings

    @property
    def max_upload_bytes(self) -> int:
        """Largest accepted raw upload."""
        return self.settings.max_upload_bytes

    def accepts_mime_type(self, mime_type: str | None) -> bool:
        """Check a declared content type against the accepted image types."""
        if not mime_type:
            return False
        base = mime_type.split(";", 1)[0].strip().lower()
        return base in self.settings.accepted_mime_types

    async def save_image(self, data: bytes, kind: ImageKind) -> UploadedImage:
        """Process and store an image.

        Nothing is written if processing fails.

        Args:
            data: Raw image bytes
            kind: Image kind selecting the byte budget

        Returns:
            The stored image with its final dimensions and size

        Raises:
            ImageDecodeError: If the bytes are not a decodable image
        """
        with logfire.span(
            "upload_service.save_image", kind=kind.value, input_bytes=len(data)
        ):
            processed = await asyncio.to_thread(self.processor.process, data, kind)
            stored = await self.storage.save(processed.buffer, processed.format)

            logfire.info(
                "Image uploaded",
                url=stored.url,
                kind=kind.value,
                input_bytes=len(data),
                size_bytes=processed.size_bytes,
                outcome=processed.outcome.value,
            )
            return UploadedImage(
                url=stored.url,
                filename=stored.filename,
                kind=kind,
                width=processed.width,
                height=processed.height,
                size_bytes=processed.size_bytes,
                outcome=processed.outcome,
            )
