"""Repository interfaces.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from folio.domain.repository.comment import CommentRepository
from folio.domain.repository.post import PostRepository

__all__ = [
    "PostRepository",
    "CommentRepository",
]
