"""Upload use cases."""

from .upload_image import (
    UploadFromUrlRequest,
    UploadFromUrlUseCase,
    UploadImageRequest,
    UploadImageResponse,
    UploadImageUseCase,
)

__all__ = [
    "UploadFromUrlRequest",
    "UploadFromUrlUseCase",
    "UploadImageRequest",
    "UploadImageResponse",
    "UploadImageUseCase",
]
