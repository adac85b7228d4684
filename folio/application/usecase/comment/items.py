"""Comment response items shared by the comment use cases."""

from datetime import datetime

from folio.application.usecase.base import ApiModel
from folio.domain.model.comment import Comment, CommentNode


class CommentNodeItem(ApiModel):
    """Comment with its nested replies. The author email is never exposed."""

    id: int
    name: str
    content: str
    created_at: datetime
    parent_id: int | None
    replies: list["CommentNodeItem"] = []

    @classmethod
    def from_node(cls, node: CommentNode) -> "CommentNodeItem":
        """Convert a tree node (and its replies) to a response item."""
        return cls(
            id=node.id,
            name=node.name,
            content=node.content,
            created_at=node.created_at,
            parent_id=node.parent_id,
            replies=[cls.from_node(reply) for reply in node.replies],
        )

    @classmethod
    def from_comment(cls, comment: Comment) -> "CommentNodeItem":
        """Convert a freshly created comment to a leaf item."""
        return cls.from_node(CommentNode.from_comment(comment))
