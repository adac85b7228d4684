"""Post use cases."""

from .get_post import GetPostRequest, GetPostUseCase
from .items import PostInput, PostItem
from .list_posts import (
    AdminPostsResponse,
    ListPostsRequest,
    ListPostsResponse,
    ListPostsUseCase,
)
from .manage_post import (
    CreatePostRequest,
    CreatePostUseCase,
    DeletePostRequest,
    DeletePostResponse,
    DeletePostUseCase,
    PostMutationResponse,
    UpdatePostRequest,
    UpdatePostUseCase,
)

__all__ = [
    "AdminPostsResponse",
    "CreatePostRequest",
    "CreatePostUseCase",
    "DeletePostRequest",
    "DeletePostResponse",
    "DeletePostUseCase",
    "GetPostRequest",
    "GetPostUseCase",
    "ListPostsRequest",
    "ListPostsResponse",
    "ListPostsUseCase",
    "PostInput",
    "PostItem",
    "PostMutationResponse",
    "UpdatePostRequest",
    "UpdatePostUseCase",
]
