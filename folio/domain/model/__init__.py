"""Domain model entities."""

from folio.domain.model.comment import Comment, CommentNode
from folio.domain.model.image import ProcessedImage, StoredImage, UploadedImage
from folio.domain.model.post import Post

__all__ = [
    "Post",
    "Comment",
    "CommentNode",
    "ProcessedImage",
    "StoredImage",
    "UploadedImage",
]
