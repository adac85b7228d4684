"""Comment domain service."""

import logfire

from folio.domain.error import ParentNotFoundError
from folio.domain.model.comment import Comment, CommentNode
from folio.domain.repository import CommentRepository
from folio.domain.value import CommentId, PostId

from .base import Service
from .comment_tree import build_comment_tree


class CommentService(Service):
    """Domain service for comment operations.

    Reply trees are capped at max_depth levels (a root has depth 0). A
    reply aimed at a comment that is already on the deepest allowed level
    is re-homed onto that comment's ancestor one level up, so the new
    comment lands on the deepest level instead of below it.
    """

    def __init__(self, comment_repository: CommentRepository, max_depth: int = 4) -> None:
        """Initialize comment service.

        Args:
            comment_repository: Comment repository
            max_depth: Maximum number of levels in a reply tree
        """
        self.comment_repository = comment_repository
        self.max_depth = max_depth

    async def create_comment(
        self,
        post_id: PostId,
        name: str,
        email: str,
        content: str,
        parent_id: CommentId | None = None,
    ) -> Comment:
        """Create a comment on a post or reply to another comment.

        Args:
            post_id: Post ID
            name: Display name
            email: Contact email (stored lowercased)
            content: Comment text
            parent_id: Requested parent comment ID (None for top-level)

        Returns:
            Created comment, carrying the resolved parent

        Raises:
            ParentNotFoundError: If the parent is missing or on another post
        """
        with logfire.span(
            "comment_service.create_comment",
            post_id=post_id,
            parent_id=parent_id,
        ):
            resolved_parent_id = None
            if parent_id is not None:
                resolved_parent_id = await self.resolve_parent(post_id, parent_id)

            comment = await self.comment_repository.create(
                post_id=post_id,
                parent_id=resolved_parent_id,
                name=name.strip(),
                email=email.strip().lower(),
                content=content.strip(),
            )
            logfire.info(
                "Comment created",
                comment_id=comment.id,
                post_id=post_id,
                parent_id=resolved_parent_id,
                reparented=resolved_parent_id != parent_id,
            )
            return comment

    async def resolve_parent(self, post_id: PostId, parent_id: CommentId) -> CommentId | None:
        """Pick the comment a reply to parent_id should attach to.

        Args:
            post_id: Post the reply is submitted to
            parent_id: Requested parent comment ID

        Returns:
            parent_id itself when the reply fits under it, otherwise the
            ancestor on the second-deepest level

        Raises:
            ParentNotFoundError: If the parent is missing or on another post
        """
        parent = await self.comment_repository.find_by_id(parent_id)
        if parent is None or parent.post_id != post_id:
            logfire.warn(
                "Parent comment not found on post",
                parent_id=parent_id,
                post_id=post_id,
            )
            raise ParentNotFoundError(parent_id, post_id)

        chain = await self._ancestor_chain(parent)
        depth = len(chain) - 1
        if depth < self.max_depth - 1:
            return parent.id

        target_depth = self.max_depth - 2
        if target_depth < 0:
            return None

        # chain[i] sits at depth (depth - i)
        ancestor = chain[depth - target_depth]
        logfire.info(
            "Reply re-homed to shallower ancestor",
            requested_parent_id=parent_id,
            parent_depth=depth,
            resolved_parent_id=ancestor.id,
        )
        return ancestor.id

    async def _ancestor_chain(self, comment: Comment) -> list[Comment]:
        """Return [comment, parent, grandparent, ..., root].

        Stops early at a missing parent or a reference cycle.
        """
        chain = [comment]
        seen = {comment.id}
        current = comment
        while current.parent_id is not None:
            parent = await self.comment_repository.find_by_id(current.parent_id)
            if parent is None or parent.id in seen:
                break
            chain.append(parent)
            seen.add(parent.id)
            current = parent
        return chain

    async def get_comments_for_post(self, post_id: PostId) -> list[Comment]:
        """Get all comments for a post, oldest first."""
        with logfire.span("comment_service.get_comments_for_post", post_id=post_id):
            comments = await self.comment_repository.find_by_post(post_id)
            logfire.info("Comments retrieved for post", post_id=post_id, count=len(comments))
            return comments

    async def get_comment_tree(self, post_id: PostId) -> list[CommentNode]:
        """Get a post's comments as reply trees.

        Args:
            post_id: Post ID

        Returns:
            Root nodes sorted by creation time, replies nested and sorted
        """
        comments = await self.get_comments_for_post(post_id)
        return build_comment_tree(comments)
