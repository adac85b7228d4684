"""Domain value objects."""

from folio.domain.value.identifiers import CommentId, PostId
from folio.domain.value.types import CompressionOutcome, ImageKind, Slug

__all__ = [
    # Identifiers
    "PostId",
    "CommentId",
    # Types
    "Slug",
    "ImageKind",
    "CompressionOutcome",
]
