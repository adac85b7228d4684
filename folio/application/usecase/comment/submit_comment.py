"""Submit comment use case."""

from typing import Any

import logfire
from pydantic import (
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    ValidatorFunctionWrapHandler,
    field_validator,
)
from pydantic import ValidationError as PydanticValidationError
from pydantic_core import PydanticCustomError

from folio.application.usecase.base import ApiModel, validate_payload
from folio.config import CommentSettings
from folio.domain.error import NotFoundError, RateLimitedError, ValidationError
from folio.domain.service import CommentService, PostService, RateLimitConfig, RateLimiter
from folio.domain.value import CommentId

from .items import CommentNodeItem


class CommentSubmission(BaseModel):
    """Untrusted comment form input. Whitespace is trimmed before checks."""

    model_config = ConfigDict(str_strip_whitespace=True, populate_by_name=True)

    name: str
    email: EmailStr
    content: str
    honeypot: str | None = None
    parent_id: int | None = Field(default=None, alias="parentId")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if len(v) < 2:
            raise PydanticCustomError("name_too_short", "Name min 2 chars")
        if len(v) > 60:
            raise PydanticCustomError("name_too_long", "Name max 60 chars")
        return v

    @field_validator("email", mode="wrap")
    @classmethod
    def validate_email(cls, v: Any, handler: ValidatorFunctionWrapHandler) -> str:
        try:
            return handler(v)
        except PydanticValidationError as e:
            raise PydanticCustomError("email_invalid", "Invalid email") from e

    @field_validator("content")
    @classmethod
    def validate_content(cls, v: str) -> str:
        if len(v) < 3:
            raise PydanticCustomError("content_too_short", "Comment min 3 chars")
        if len(v) > 2000:
            raise PydanticCustomError("content_too_long", "Comment max 2000 chars")
        return v

    @field_validator("honeypot", mode="before")
    @classmethod
    def validate_honeypot(cls, v: Any) -> Any:
        # Checked on the raw value: whitespace alone still counts as filled
        if v is not None and v != "":
            raise PydanticCustomError("honeypot_filled", "Bot detected")
        return v

    @field_validator("parent_id")
    @classmethod
    def validate_parent_id(cls, v: int | None) -> int | None:
        if v is not None and v <= 0:
            raise PydanticCustomError("parent_invalid", "Parent id must be positive")
        return v


class SubmitCommentRequest(BaseModel):
    """Submit comment request."""

    slug: str
    client_ip: str
    payload: Any = None  # Decoded JSON body, validated by the use case


class SubmitCommentResponse(ApiModel):
    """Submit comment response."""

    ok: bool = True
    comment: CommentNodeItem
    reparented: bool = False  # True when the reply was attached to an ancestor


class SubmitCommentUseCase:
    """Use case for posting a comment or a reply."""

    def __init__(
        self,
        comment_service: CommentService,
        post_service: PostService,
        rate_limiter: RateLimiter,
        comment_settings: CommentSettings,
    ) -> None:
        """Initialize submit comment use case.

        Args:
            comment_service: Comment domain service
            post_service: Post domain service
            rate_limiter: Shared per-client rate limiter
            comment_settings: Rate limit policy and depth cap
        """
        self.comment_service = comment_service
        self.post_service = post_service
        self.rate_limiter = rate_limiter
        self.rate_limit = RateLimitConfig(
            window_seconds=comment_settings.rate_limit_window_seconds,
            max_requests=comment_settings.rate_limit_max_requests,
        )

    async def execute(self, request: SubmitCommentRequest) -> SubmitCommentResponse:
        """Execute submit comment flow.

        Steps:
        1. Count the request against the client's rate limit
        2. Resolve the post by slug
        3. Validate the form input (honeypot included)
        4. Create the comment; replies past the depth cap are re-homed

        Raises:
            RateLimitedError: If the client exceeded its budget
            NotFoundError: If the post does not exist
            ValidationError: If the input is invalid
            ParentNotFoundError: If the parent is not a comment on this post
        """
        with logfire.span(
            "submit_comment.execute", slug=request.slug, client_ip=request.client_ip
        ):
            limit = self.rate_limiter.check(request.client_ip, self.rate_limit)
            if not limit.allowed:
                retry_after = limit.retry_after(self.rate_limiter.now())
                logfire.warn(
                    "Comment rate limit exceeded",
                    client_ip=request.client_ip,
                    retry_after=retry_after,
                )
                raise RateLimitedError(retry_after)

            post = await self.post_service.get_by_slug(request.slug)
            if post is None:
                raise NotFoundError("post", request.slug)

            try:
                submission = validate_payload(CommentSubmission, request.payload)
            except ValidationError as e:
                if "honeypot" in e.issues:
                    logfire.warn(
                        "Comment honeypot filled",
                        client_ip=request.client_ip,
                        security_event="honeypot",
                    )
                raise

            requested_parent = (
                CommentId(submission.parent_id) if submission.parent_id is not None else None
            )
            comment = await self.comment_service.create_comment(
                post_id=post.id,
                name=submission.name,
                email=submission.email,
                content=submission.content,
                parent_id=requested_parent,
            )

            reparented = requested_parent is not None and comment.parent_id != requested_parent
            return SubmitCommentResponse(
                comment=CommentNodeItem.from_comment(comment),
                reparented=reparented,
            )
