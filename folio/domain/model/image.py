"""Image results produced by the upload pipeline."""

from dataclasses import dataclass

from folio.domain.value import CompressionOutcome, ImageKind


@dataclass(frozen=True)
class ProcessedImage:
    """Encoded output of the image processor.

    Dimensions, size and quality describe the encoding attempt that was
    actually kept.
    """

    buffer: bytes
    width: int
    height: int
    size_bytes: int
    quality: int
    outcome: CompressionOutcome
    format: str = "webp"


@dataclass(frozen=True)
class StoredImage:
    """Location of a written image."""

    url: str
    filename: str


@dataclass(frozen=True)
class UploadedImage:
    """A processed image that has been written to storage."""

    url: str
    filename: str
    kind: ImageKind
    width: int
    height: int
    size_bytes: int
    outcome: CompressionOutcome
