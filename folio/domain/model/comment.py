"""Comment entity.

Comments are public, threaded replies on posts. Threading is a plain
parent reference; the reply tree is rebuilt on every read and never
stored.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

from pydantic import Field

from folio.domain.model.common import DomainModel
from folio.domain.value import CommentId, PostId


class Comment(DomainModel):
    """Comment entity.

    The email is collected for the site owner and is never rendered to
    other readers.
    """

    id: CommentId
    post_id: PostId
    parent_id: Optional[CommentId] = None
    name: str
    email: str
    content: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass
class CommentNode:
    """Node in a post's reply tree.

    Built fresh from the flat comment list for each read.
    """

    id: CommentId
    name: str
    content: str
    created_at: datetime
    parent_id: Optional[CommentId]
    replies: list["CommentNode"] = field(default_factory=list)

    @classmethod
    def from_comment(cls, comment: Comment) -> "CommentNode":
        """Create a leaf node from a comment."""
        return cls(
            id=comment.id,
            name=comment.name,
            content=comment.content,
            created_at=comment.created_at,
            parent_id=comment.parent_id,
        )
