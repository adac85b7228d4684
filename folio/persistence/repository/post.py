"""PostgreSQL implementation of Post repository."""

from typing import List, Optional

import logfire
from sqlalchemy import delete, desc, func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from folio.domain.model import Post
from folio.domain.repository.post import PostRepository
from folio.domain.value import PostId, Slug
from folio.persistence.mappers import row_to_post
from folio.persistence.tables import posts_table


class PostgresPostRepository(PostRepository):
    """PostgreSQL implementation of PostRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID."""
        stmt = select(posts_table).where(posts_table.c.id == post_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_post(row._asdict()) if row else None

    async def find_by_slug(self, slug: Slug) -> Optional[Post]:
        """Find a post by slug."""
        with logfire.span("post_repository.find_by_slug", slug=str(slug)):
            stmt = select(posts_table).where(posts_table.c.slug == str(slug))
            result = await self.session.execute(stmt)
            row = result.fetchone()

            if not row:
                logfire.info("Post not found by slug", slug=str(slug))
                return None

            return row_to_post(row._asdict())

    async def slug_exists(self, slug: Slug) -> bool:
        """Check if a slug is taken."""
        stmt = (
            select(func.count())
            .select_from(posts_table)
            .where(posts_table.c.slug == str(slug))
        )
        result = await self.session.execute(stmt)
        return (result.scalar() or 0) > 0

    async def find_all(self, limit: int = 12, offset: int = 0) -> List[Post]:
        """Find posts, newest first."""
        stmt = (
            select(posts_table)
            .order_by(desc(posts_table.c.created_at), desc(posts_table.c.id))
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return [row_to_post(row._asdict()) for row in result.fetchall()]

    async def count(self) -> int:
        """Count all posts."""
        stmt = select(func.count()).select_from(posts_table)
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def create(
        self,
        slug: Slug,
        title: str,
        content: str,
        image_url: Optional[str],
    ) -> Post:
        """Insert a post and return it with database-assigned fields."""
        stmt = (
            insert(posts_table)
            .values(slug=str(slug), title=title, content=content, image_url=image_url)
            .returning(*posts_table.c)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return row_to_post(result.one()._asdict())

    async def update(self, post: Post) -> Optional[Post]:
        """Update title, content and image of a post."""
        stmt = (
            update(posts_table)
            .where(posts_table.c.id == post.id)
            .values(
                title=post.title,
                content=post.content,
                image_url=post.image_url,
                updated_at=func.now(),
            )
            .returning(*posts_table.c)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        await self.session.flush()
        return row_to_post(row._asdict()) if row else None

    async def delete(self, post_id: PostId) -> bool:
        """Delete a post; comments go with it through the foreign key."""
        stmt = delete(posts_table).where(posts_table.c.id == post_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0
