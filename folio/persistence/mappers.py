"""Mappers for converting between database rows and domain models.

Domain models are immutable pydantic models, so rows are mapped by hand
rather than through SQLAlchemy's ORM.
"""

from typing import Any, Dict

from folio.domain.model import Comment, Post
from folio.domain.value import CommentId, PostId, Slug


def row_to_post(row: Dict[str, Any]) -> Post:
    """Convert database row to Post domain model.

    Args:
        row: Database row as dict

    Returns:
        Post domain model
    """
    return Post(
        id=PostId(row["id"]),
        slug=Slug(row["slug"]),
        title=row["title"],
        content=row["content"],
        image_url=row.get("image_url"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def row_to_comment(row: Dict[str, Any]) -> Comment:
    """Convert database row to Comment domain model.

    Args:
        row: Database row as dict

    Returns:
        Comment domain model
    """
    parent_id = row.get("parent_id")
    return Comment(
        id=CommentId(row["id"]),
        post_id=PostId(row["post_id"]),
        parent_id=CommentId(parent_id) if parent_id is not None else None,
        name=row["name"],
        email=row["email"],
        content=row["content"],
        created_at=row["created_at"],
    )
