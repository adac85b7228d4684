"""In-memory post repository for testing."""

import itertools
from datetime import datetime, timezone
from typing import Optional

from folio.domain.model.post import Post
from folio.domain.repository.post import PostRepository
from folio.domain.value import PostId, Slug

from .comment import InMemoryCommentRepository


class InMemoryPostRepository(PostRepository):
    """In-memory implementation of PostRepository for testing.

    Deleting a post also deletes its comments when a comment repository
    is linked, mirroring the cascading foreign key.
    """

    def __init__(self, comments: InMemoryCommentRepository | None = None) -> None:
        self._posts: dict[PostId, Post] = {}
        self._ids = itertools.count(1)
        self._comments = comments

    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID."""
        return self._posts.get(post_id)

    async def find_by_slug(self, slug: Slug) -> Optional[Post]:
        """Find a post by slug."""
        for post in self._posts.values():
            if post.slug == slug:
                return post
        return None

    async def slug_exists(self, slug: Slug) -> bool:
        """Check if a slug is taken."""
        return any(post.slug == slug for post in self._posts.values())

    async def find_all(self, limit: int = 12, offset: int = 0) -> list[Post]:
        """Find posts, newest first."""
        posts = sorted(
            self._posts.values(), key=lambda p: (p.created_at, p.id), reverse=True
        )
        return posts[offset : offset + limit]

    async def count(self) -> int:
        """Count all posts."""
        return len(self._posts)

    async def create(
        self,
        slug: Slug,
        title: str,
        content: str,
        image_url: Optional[str],
    ) -> Post:
        """Store a post with the next id."""
        now = datetime.now(timezone.utc)
        post = Post(
            id=PostId(next(self._ids)),
            slug=slug,
            title=title,
            content=content,
            image_url=image_url,
            created_at=now,
            updated_at=now,
        )
        self._posts[post.id] = post
        return post

    async def update(self, post: Post) -> Optional[Post]:
        """Replace a stored post."""
        if post.id not in self._posts:
            return None
        updated = post.model_copy(update={"updated_at": datetime.now(timezone.utc)})
        self._posts[post.id] = updated
        return updated

    async def delete(self, post_id: PostId) -> bool:
        """Delete a post and, if linked, its comments."""
        if self._posts.pop(post_id, None) is None:
            return False
        if self._comments is not None:
            self._comments.delete_by_post(post_id)
        return True
