"""Public post routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Query

from folio.application.usecase.post import (
    GetPostRequest,
    GetPostUseCase,
    ListPostsRequest,
    ListPostsResponse,
    ListPostsUseCase,
    PostItem,
)
from folio.config import Settings
from folio.domain.error import NotFoundError
from folio.interface.error import ApiError

router = APIRouter(prefix="/api/posts", tags=["posts"], route_class=DishkaRoute)


def parse_positive_int(value: str | None, default: int) -> int:
    """Parse a query parameter, falling back to default when not a number."""
    try:
        return int(value) if value is not None else default
    except ValueError:
        return default


@router.get("", response_model=ListPostsResponse)
async def list_posts(
    list_posts_use_case: FromDishka[ListPostsUseCase],
    settings: FromDishka[Settings],
    page: str | None = Query(default=None),
    page_size: str | None = Query(default=None, alias="pageSize"),
) -> ListPostsResponse:
    """List posts, newest first.

    Args:
        page: 1-based page number (values below 1 count as 1)
        page_size: Posts per page, clamped to [1, max_page_size]
    """
    size = parse_positive_int(page_size, settings.posts.page_size)
    size = min(settings.posts.max_page_size, max(1, size))
    request = ListPostsRequest(page=max(1, parse_positive_int(page, 1)), page_size=size)
    return await list_posts_use_case.execute(request)


@router.get("/{slug}", response_model=PostItem)
async def get_post(slug: str, get_post_use_case: FromDishka[GetPostUseCase]) -> PostItem:
    """Get a post by slug."""
    try:
        return await get_post_use_case.execute(GetPostRequest(slug=slug))
    except NotFoundError:
        raise ApiError(404, "not_found")
