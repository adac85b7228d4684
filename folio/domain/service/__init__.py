"""Domain services."""

from .base import Service
from .comment_service import CommentService
from .comment_tree import build_comment_tree, count_nodes
from .image_processor import ImageProcessor
from .jwt_service import JWTService
from .post_service import HtmlSanitizer, PostService, slugify
from .rate_limiter import RateLimitConfig, RateLimiter, RateLimitResult
from .upload_service import ImageStorage, ImageUploadService

__all__ = [
    "CommentService",
    "HtmlSanitizer",
    "ImageProcessor",
    "ImageStorage",
    "ImageUploadService",
    "JWTService",
    "PostService",
    "RateLimitConfig",
    "RateLimitResult",
    "RateLimiter",
    "Service",
    "build_comment_tree",
    "count_nodes",
    "slugify",
]
