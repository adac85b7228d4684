"""PostgreSQL implementation of Comment repository."""

from typing import List, Optional

from sqlalchemy import func, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from folio.domain.model import Comment
from folio.domain.repository import CommentRepository
from folio.domain.value import CommentId, PostId
from folio.persistence.mappers import row_to_comment
from folio.persistence.tables import comments_table


class PostgresCommentRepository(CommentRepository):
    """PostgreSQL implementation of CommentRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        stmt = select(comments_table).where(comments_table.c.id == comment_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_comment(row._asdict()) if row else None

    async def find_by_post(self, post_id: PostId) -> List[Comment]:
        """Find all comments for a post, oldest first."""
        stmt = (
            select(comments_table)
            .where(comments_table.c.post_id == post_id)
            .order_by(comments_table.c.created_at, comments_table.c.id)
        )
        result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def create(
        self,
        post_id: PostId,
        parent_id: Optional[CommentId],
        name: str,
        email: str,
        content: str,
    ) -> Comment:
        """Insert a comment and return it with database-assigned fields."""
        stmt = (
            insert(comments_table)
            .values(
                post_id=post_id,
                parent_id=parent_id,
                name=name,
                email=email,
                content=content,
            )
            .returning(*comments_table.c)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return row_to_comment(result.one()._asdict())

    async def count_by_post(self, post_id: PostId) -> int:
        """Count comments for a post."""
        stmt = (
            select(func.count())
            .select_from(comments_table)
            .where(comments_table.c.post_id == post_id)
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0
