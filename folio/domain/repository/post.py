"""Post repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from folio.domain.model.post import Post
from folio.domain.value import PostId, Slug


class PostRepository(ABC):
    """Repository for Post aggregate.

    Defines the contract for post persistence operations.
    Implementations live in the persistence layer.
    """

    @abstractmethod
    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID."""
        pass

    @abstractmethod
    async def find_by_slug(self, slug: Slug) -> Optional[Post]:
        """Find a post by its slug.

        Args:
            slug: The post slug

        Returns:
            The post if found, None otherwise
        """
        pass

    @abstractmethod
    async def slug_exists(self, slug: Slug) -> bool:
        """Check whether any post already uses this slug."""
        pass

    @abstractmethod
    async def find_all(self, limit: int = 12, offset: int = 0) -> List[Post]:
        """Find posts, newest first.

        Args:
            limit: Maximum number of posts to return
            offset: Number of posts to skip

        Returns:
            Page of posts ordered by created_at descending
        """
        pass

    @abstractmethod
    async def count(self) -> int:
        """Count all posts."""
        pass

    @abstractmethod
    async def create(
        self,
        slug: Slug,
        title: str,
        content: str,
        image_url: Optional[str],
    ) -> Post:
        """Persist a new post; the store assigns id and timestamps."""
        pass

    @abstractmethod
    async def update(self, post: Post) -> Optional[Post]:
        """Update title, content and image of an existing post.

        Returns:
            The updated post, or None if it no longer exists
        """
        pass

    @abstractmethod
    async def delete(self, post_id: PostId) -> bool:
        """Delete a post and its comments.

        Returns:
            True if a post was deleted
        """
        pass
