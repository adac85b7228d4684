"""Admin post management use cases: create, update, delete."""

from typing import Any

import logfire
from pydantic import BaseModel

from folio.application.usecase.base import ApiModel, validate_payload
from folio.domain.service import PostService

from .items import PostInput, PostItem


class CreatePostRequest(BaseModel):
    """Create post request."""

    payload: Any = None  # Decoded JSON body


class UpdatePostRequest(BaseModel):
    """Update post request."""

    slug: str
    payload: Any = None  # Decoded JSON body


class DeletePostRequest(BaseModel):
    """Delete post request."""

    slug: str


class PostMutationResponse(ApiModel):
    """Response for create and update."""

    ok: bool = True
    post: PostItem


class DeletePostResponse(ApiModel):
    """Response for delete."""

    ok: bool = True


class CreatePostUseCase:
    """Use case for publishing a new post."""

    def __init__(self, post_service: PostService) -> None:
        """Initialize create post use case.

        Args:
            post_service: Post domain service
        """
        self.post_service = post_service

    async def execute(self, request: CreatePostRequest) -> PostMutationResponse:
        """Validate input, then create the post with a unique slug.

        Raises:
            ValidationError: If the input is invalid
        """
        with logfire.span("create_post.execute"):
            data = validate_payload(PostInput, request.payload)
            post = await self.post_service.create_post(
                title=data.title, content=data.content, image_url=data.image_url
            )
            return PostMutationResponse(post=PostItem.from_post(post))


class UpdatePostUseCase:
    """Use case for editing an existing post."""

    def __init__(self, post_service: PostService) -> None:
        self.post_service = post_service

    async def execute(self, request: UpdatePostRequest) -> PostMutationResponse:
        """Validate input, then replace title, content and image.

        Raises:
            ValidationError: If the input is invalid
            NotFoundError: If no post has this slug
        """
        with logfire.span("update_post.execute", slug=request.slug):
            data = validate_payload(PostInput, request.payload)
            post = await self.post_service.update_post(
                slug=request.slug,
                title=data.title,
                content=data.content,
                image_url=data.image_url,
            )
            return PostMutationResponse(post=PostItem.from_post(post))


class DeletePostUseCase:
    """Use case for deleting a post together with its comments."""

    def __init__(self, post_service: PostService) -> None:
        self.post_service = post_service

    async def execute(self, request: DeletePostRequest) -> DeletePostResponse:
        """Raises NotFoundError if no post has this slug."""
        with logfire.span("delete_post.execute", slug=request.slug):
            await self.post_service.delete_post(request.slug)
            return DeletePostResponse()
