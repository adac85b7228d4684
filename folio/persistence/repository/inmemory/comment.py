"""In-memory comment repository for testing."""

import itertools
from datetime import datetime, timezone
from typing import Optional

from folio.domain.model.comment import Comment
from folio.domain.repository.comment import CommentRepository
from folio.domain.value import CommentId, PostId


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing."""

    def __init__(self) -> None:
        self._comments: dict[CommentId, Comment] = {}
        self._ids = itertools.count(1)

    def add(self, comment: Comment) -> Comment:
        """Store a fully-built comment as-is (test seeding)."""
        self._comments[comment.id] = comment
        return comment

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        return self._comments.get(comment_id)

    async def find_by_post(self, post_id: PostId) -> list[Comment]:
        """Find all comments for a post, oldest first."""
        comments = [c for c in self._comments.values() if c.post_id == post_id]
        comments.sort(key=lambda c: (c.created_at, c.id))
        return comments

    async def create(
        self,
        post_id: PostId,
        parent_id: Optional[CommentId],
        name: str,
        email: str,
        content: str,
    ) -> Comment:
        """Store a comment with the next free id."""
        comment_id = next(self._ids)
        while comment_id in self._comments:
            comment_id = next(self._ids)

        comment = Comment(
            id=CommentId(comment_id),
            post_id=post_id,
            parent_id=parent_id,
            name=name,
            email=email,
            content=content,
            created_at=datetime.now(timezone.utc),
        )
        self._comments[comment.id] = comment
        return comment

    async def count_by_post(self, post_id: PostId) -> int:
        """Count comments for a post."""
        return sum(1 for c in self._comments.values() if c.post_id == post_id)

    def delete_by_post(self, post_id: PostId) -> None:
        """Drop every comment of a post."""
        for comment_id in [c.id for c in self._comments.values() if c.post_id == post_id]:
            del self._comments[comment_id]
