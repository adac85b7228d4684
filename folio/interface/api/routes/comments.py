"""Comment routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Request

from folio.application.usecase.comment import (
    GetCommentsRequest,
    GetCommentsResponse,
    GetCommentsUseCase,
    SubmitCommentRequest,
    SubmitCommentResponse,
    SubmitCommentUseCase,
)
from folio.domain.error import (
    NotFoundError,
    ParentNotFoundError,
    RateLimitedError,
    ValidationError,
)
from folio.interface.api.dependencies import get_client_ip, read_json, validation_error
from folio.interface.error import ApiError

router = APIRouter(prefix="/api/posts", tags=["comments"], route_class=DishkaRoute)


@router.get("/{slug}/comments", response_model=GetCommentsResponse)
async def get_comments(
    slug: str,
    get_comments_use_case: FromDishka[GetCommentsUseCase],
) -> GetCommentsResponse:
    """Get a post's comments as nested reply trees.

    Returns:
        Root comments with nested replies; total counts every comment
    """
    try:
        return await get_comments_use_case.execute(GetCommentsRequest(slug=slug))
    except NotFoundError:
        raise ApiError(404, "post not found")


@router.post("/{slug}/comments", response_model=SubmitCommentResponse)
async def submit_comment(
    slug: str,
    request: Request,
    submit_comment_use_case: FromDishka[SubmitCommentUseCase],
) -> SubmitCommentResponse:
    """Post a comment or a reply.

    Public, rate limited per client IP. Body:
    {name, email, content, honeypot?, parentId?}
    """
    use_case_request = SubmitCommentRequest(
        slug=slug,
        client_ip=get_client_ip(request),
        payload=await read_json(request),
    )
    try:
        return await submit_comment_use_case.execute(use_case_request)
    except RateLimitedError as e:
        raise ApiError(
            429,
            "rate limit exceeded",
            headers={"Retry-After": str(e.retry_after)},
            retryAfter=e.retry_after,
        )
    except NotFoundError:
        raise ApiError(404, "post not found")
    except ValidationError as e:
        raise validation_error(e)
    except ParentNotFoundError:
        raise ApiError(400, "parent comment not found")
