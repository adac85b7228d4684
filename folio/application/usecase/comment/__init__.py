"""Comment use cases."""

from .get_comments import GetCommentsRequest, GetCommentsResponse, GetCommentsUseCase
from .items import CommentNodeItem
from .submit_comment import (
    CommentSubmission,
    SubmitCommentRequest,
    SubmitCommentResponse,
    SubmitCommentUseCase,
)

__all__ = [
    "CommentNodeItem",
    "CommentSubmission",
    "GetCommentsRequest",
    "GetCommentsResponse",
    "GetCommentsUseCase",
    "SubmitCommentRequest",
    "SubmitCommentResponse",
    "SubmitCommentUseCase",
]
