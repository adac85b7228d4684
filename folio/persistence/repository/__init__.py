"""PostgreSQL repository implementations."""

from folio.persistence.repository.comment import PostgresCommentRepository
from folio.persistence.repository.post import PostgresPostRepository

__all__ = [
    "PostgresPostRepository",
    "PostgresCommentRepository",
]
