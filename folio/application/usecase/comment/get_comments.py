"""Get comments use case."""

import logfire
from pydantic import BaseModel

from folio.application.usecase.base import ApiModel
from folio.domain.error import NotFoundError
from folio.domain.service import CommentService, PostService, count_nodes

from .items import CommentNodeItem


class GetCommentsRequest(BaseModel):
    """Get comments request."""

    slug: str


class GetCommentsResponse(ApiModel):
    """Get comments response."""

    items: list[CommentNodeItem]
    total: int


class GetCommentsUseCase:
    """Use case for reading a post's comments as nested reply trees."""

    def __init__(self, comment_service: CommentService, post_service: PostService) -> None:
        """Initialize get comments use case.

        Args:
            comment_service: Comment domain service
            post_service: Post domain service
        """
        self.comment_service = comment_service
        self.post_service = post_service

    async def execute(self, request: GetCommentsRequest) -> GetCommentsResponse:
        """Execute get comments flow.

        Args:
            request: Get comments request

        Returns:
            Root comments with nested replies and the total comment count

        Raises:
            NotFoundError: If the post does not exist
        """
        with logfire.span("get_comments.execute", slug=request.slug):
            post = await self.post_service.get_by_slug(request.slug)
            if post is None:
                raise NotFoundError("post", request.slug)

            roots = await self.comment_service.get_comment_tree(post.id)
            return GetCommentsResponse(
                items=[CommentNodeItem.from_node(node) for node in roots],
                total=count_nodes(roots),
            )
