"""Comment repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from folio.domain.model.comment import Comment
from folio.domain.value import CommentId, PostId


class CommentRepository(ABC):
    """Repository for Comment entity.

    Defines the contract for comment persistence operations.
    Implementations live in the persistence layer.
    """

    @abstractmethod
    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID.

        Args:
            comment_id: The comment's unique identifier

        Returns:
            The comment if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_post(self, post_id: PostId) -> List[Comment]:
        """Find all comments for a post.

        Args:
            post_id: The post ID

        Returns:
            Flat list of comments ordered by creation time (then id)
        """
        pass

    @abstractmethod
    async def create(
        self,
        post_id: PostId,
        parent_id: Optional[CommentId],
        name: str,
        email: str,
        content: str,
    ) -> Comment:
        """Persist a new comment.

        The store assigns the id and creation timestamp.

        Returns:
            The created comment
        """
        pass

    @abstractmethod
    async def count_by_post(self, post_id: PostId) -> int:
        """Count comments for a post.

        Args:
            post_id: The post ID

        Returns:
            Number of comments
        """
        pass
