"""Image processing domain service.

Normalizes uploaded images into bounded-size WebP: caps the width,
walks a descending quality ladder until the byte target is met and, as a
last resort, shrinks the image once more to fit the hard maximum.
"""

import io
import math

import logfire
from PIL import Image

from folio.config import ImageBudget, UploadSettings
from folio.domain.error import ImageDecodeError
from folio.domain.model.image import ProcessedImage
from folio.domain.value import CompressionOutcome, ImageKind

from .base import Service

_ALPHA_MODES = ("RGBA", "LA", "PA")


class ImageProcessor(Service):
    """Domain service that compresses images to their kind's byte budget.

    Processing is CPU-bound and synchronous; async callers should run it
    in a worker thread.
    """

    def __init__(self, upload_settings: UploadSettings) -> None:
        """Initialize image processor.

        Args:
            upload_settings: Upload settings (width cap, quality ladder, budgets)
        """
        self.settings = upload_settings

    def budget_for(self, kind: ImageKind) -> ImageBudget:
        """Return the byte budget for an image kind."""
        if kind is ImageKind.INLINE:
            return self.settings.inline
        return self.settings.cover

    def process(self, data: bytes, kind: ImageKind = ImageKind.COVER) -> ProcessedImage:
        """Compress an image to WebP within the budget for its kind.

        Args:
            data: Raw bytes of any decodable raster image
            kind: Image kind selecting the byte budget

        Returns:
            The last encoding attempt, tagged with how well it met the budget

        Raises:
            ImageDecodeError: If the bytes cannot be decoded as an image
        """
        budget = self.budget_for(kind)
        with logfire.span(
            "image_processor.process",
            kind=kind.value,
            input_bytes=len(data),
            target_bytes=budget.target_bytes,
            max_bytes=budget.max_bytes,
        ):
            image = self._decode(data)
            width = min(image.width, self.settings.max_width)
            frame = self._resize(image, width)

            buffer = b""
            quality = self.settings.quality_steps[0]
            for quality in self.settings.quality_steps:
                buffer = self._encode(frame, quality)
                if len(buffer) <= budget.target_bytes:
                    break

            if len(buffer) > budget.max_bytes:
                # Bytes scale roughly with area, so shrink width by sqrt of the ratio
                scale = math.sqrt(budget.max_bytes / len(buffer))
                width = max(1, math.floor(width * scale))
                frame = self._resize(image, width)
                quality = self.settings.final_quality
                buffer = self._encode(frame, quality)

            outcome = self._classify(len(buffer), budget)
            result = ProcessedImage(
                buffer=buffer,
                width=frame.width,
                height=frame.height,
                size_bytes=len(buffer),
                quality=quality,
                outcome=outcome,
            )

            if outcome is CompressionOutcome.OVER_LIMIT:
                logfire.warn(
                    "Image still exceeds maximum size after compression",
                    kind=kind.value,
                    size_bytes=result.size_bytes,
                    max_bytes=budget.max_bytes,
                    width=result.width,
                )
            else:
                logfire.info(
                    "Image processed",
                    kind=kind.value,
                    size_bytes=result.size_bytes,
                    width=result.width,
                    height=result.height,
                    quality=quality,
                    outcome=outcome.value,
                )
            return result

    @staticmethod
    def _decode(data: bytes) -> Image.Image:
        try:
            image = Image.open(io.BytesIO(data))
            image.load()
        except (Image.DecompressionBombError, OSError, SyntaxError, ValueError) as e:
            logfire.warn("Image decode failed", error=str(e), input_bytes=len(data))
            raise ImageDecodeError(f"Cannot decode image: {e}") from e

        # WebP only encodes RGB and RGBA
        if image.mode not in ("RGB", "RGBA"):
            has_alpha = image.mode in _ALPHA_MODES or (
                image.mode == "P" and "transparency" in image.info
            )
            image = image.convert("RGBA" if has_alpha else "RGB")
        return image

    @staticmethod
    def _resize(image: Image.Image, width: int) -> Image.Image:
        """Scale to width keeping aspect ratio; never enlarges."""
        if width >= image.width:
            return image
        height = max(1, round(image.height * width / image.width))
        return image.resize((width, height), Image.Resampling.LANCZOS)

    @staticmethod
    def _encode(image: Image.Image, quality: int) -> bytes:
        output = io.BytesIO()
        image.save(output, format="WEBP", quality=quality)
        return output.getvalue()

    @staticmethod
    def _classify(size: int, budget: ImageBudget) -> CompressionOutcome:
        if size <= budget.target_bytes:
            return CompressionOutcome.WITHIN_TARGET
        if size <= budget.max_bytes:
            return CompressionOutcome.WITHIN_LIMIT
        return CompressionOutcome.OVER_LIMIT
