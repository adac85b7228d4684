"""Get post use case."""

from pydantic import BaseModel

from folio.domain.service import PostService

from .items import PostItem


class GetPostRequest(BaseModel):
    """Get post request."""

    slug: str


class GetPostUseCase:
    """Use case for reading a single post by slug."""

    def __init__(self, post_service: PostService) -> None:
        self.post_service = post_service

    async def execute(self, request: GetPostRequest) -> PostItem:
        """Execute get post flow.

        Raises:
            NotFoundError: If no post has this slug
        """
        post = await self.post_service.require_by_slug(request.slug)
        return PostItem.from_post(post)
