"""List posts use case."""

import logfire
from pydantic import BaseModel, Field

from folio.application.usecase.base import ApiModel
from folio.domain.service import PostService

from .items import PostItem


class ListPostsRequest(BaseModel):
    """List posts request. Page size is clamped by the route."""

    page: int = Field(default=1, ge=1)
    page_size: int = Field(default=12, ge=1)


class ListPostsResponse(ApiModel):
    """Public post listing."""

    items: list[PostItem]
    total: int
    page: int
    page_count: int


class AdminPostsResponse(ApiModel):
    """Admin post listing."""

    items: list[PostItem]
    total: int
    page: int
    pages: int


class ListPostsUseCase:
    """Use case for paging through posts, newest first."""

    def __init__(self, post_service: PostService) -> None:
        """Initialize list posts use case.

        Args:
            post_service: Post domain service
        """
        self.post_service = post_service

    async def execute(self, request: ListPostsRequest) -> ListPostsResponse:
        """Execute list posts flow.

        Returns:
            One page of posts; page_count is at least 1
        """
        with logfire.span("list_posts.execute", page=request.page, page_size=request.page_size):
            posts, total = await self.post_service.list_posts(request.page, request.page_size)
            return ListPostsResponse(
                items=[PostItem.from_post(post) for post in posts],
                total=total,
                page=request.page,
                page_count=max(1, -(-total // request.page_size)),
            )

    async def execute_admin(self, request: ListPostsRequest) -> AdminPostsResponse:
        """List posts for the admin dashboard (pages may be 0 when empty)."""
        with logfire.span("list_posts.execute_admin", page=request.page):
            posts, total = await self.post_service.list_posts(request.page, request.page_size)
            return AdminPostsResponse(
                items=[PostItem.from_post(post) for post in posts],
                total=total,
                page=request.page,
                pages=-(-total // request.page_size),
            )
