"""Admin post management routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Query, Request

from folio.application.usecase.post import (
    AdminPostsResponse,
    CreatePostRequest,
    CreatePostUseCase,
    DeletePostRequest,
    DeletePostResponse,
    DeletePostUseCase,
    GetPostRequest,
    GetPostUseCase,
    ListPostsRequest,
    ListPostsUseCase,
    PostItem,
    PostMutationResponse,
    UpdatePostRequest,
    UpdatePostUseCase,
)
from folio.config import Settings
from folio.domain.error import NotFoundError, ValidationError
from folio.domain.service import JWTService
from folio.interface.api.dependencies import read_json, require_admin, validation_error
from folio.interface.api.routes.posts import parse_positive_int
from folio.interface.error import ApiError

router = APIRouter(prefix="/api/admin/posts", tags=["admin"], route_class=DishkaRoute)


@router.get("", response_model=AdminPostsResponse)
async def list_admin_posts(
    request: Request,
    list_posts_use_case: FromDishka[ListPostsUseCase],
    jwt_service: FromDishka[JWTService],
    settings: FromDishka[Settings],
    page: str | None = Query(default=None),
) -> AdminPostsResponse:
    """List posts for the admin dashboard."""
    require_admin(request, jwt_service)
    return await list_posts_use_case.execute_admin(
        ListPostsRequest(
            page=max(1, parse_positive_int(page, 1)),
            page_size=settings.posts.admin_page_size,
        )
    )


@router.post("", response_model=PostMutationResponse)
async def create_post(
    request: Request,
    create_post_use_case: FromDishka[CreatePostUseCase],
    jwt_service: FromDishka[JWTService],
) -> PostMutationResponse:
    """Create a post. Body: {title, content, imageUrl?}."""
    require_admin(request, jwt_service)
    try:
        return await create_post_use_case.execute(
            CreatePostRequest(payload=await read_json(request))
        )
    except ValidationError as e:
        raise validation_error(e)


@router.get("/{slug}", response_model=PostItem)
async def get_admin_post(
    slug: str,
    request: Request,
    get_post_use_case: FromDishka[GetPostUseCase],
    jwt_service: FromDishka[JWTService],
) -> PostItem:
    """Get a post for editing."""
    require_admin(request, jwt_service)
    try:
        return await get_post_use_case.execute(GetPostRequest(slug=slug))
    except NotFoundError:
        raise ApiError(404, "not_found")


@router.put("/{slug}", response_model=PostMutationResponse)
async def update_post(
    slug: str,
    request: Request,
    update_post_use_case: FromDishka[UpdatePostUseCase],
    jwt_service: FromDishka[JWTService],
) -> PostMutationResponse:
    """Replace a post's title, content and image. The slug never changes."""
    require_admin(request, jwt_service)
    try:
        return await update_post_use_case.execute(
            UpdatePostRequest(slug=slug, payload=await read_json(request))
        )
    except ValidationError as e:
        raise validation_error(e)
    except NotFoundError:
        raise ApiError(404, "not_found")


@router.delete("/{slug}", response_model=DeletePostResponse)
async def delete_post(
    slug: str,
    request: Request,
    delete_post_use_case: FromDishka[DeletePostUseCase],
    jwt_service: FromDishka[JWTService],
) -> DeletePostResponse:
    """Delete a post and its comments."""
    require_admin(request, jwt_service)
    try:
        return await delete_post_use_case.execute(DeletePostRequest(slug=slug))
    except NotFoundError:
        raise ApiError(404, "not_found")
