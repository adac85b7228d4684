"""Domain layer DI providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide

from folio.config import AuthSettings, CommentSettings, UploadSettings
from folio.domain.repository import CommentRepository, PostRepository
from folio.domain.service import (
    CommentService,
    HtmlSanitizer,
    ImageProcessor,
    ImageStorage,
    ImageUploadService,
    JWTService,
    PostService,
    RateLimiter,
)
from folio.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    The image processor and the rate limiter hold no per-request state and
    live for the whole app.
    """

    scope = Scope.REQUEST

    @provide(scope=Scope.APP)
    async def get_rate_limiter(
        self, comment_settings: CommentSettings
    ) -> AsyncIterator[RateLimiter]:
        """Provide the shared rate limiter; its sweep stops with the container."""
        limiter = RateLimiter(
            sweep_interval_seconds=comment_settings.rate_limit_sweep_seconds
        )
        limiter.start()
        yield limiter
        await limiter.stop()

    @provide(scope=Scope.APP)
    def get_image_processor(self, upload_settings: UploadSettings) -> ImageProcessor:
        """Provide image processor."""
        return ImageProcessor(upload_settings=upload_settings)

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_comment_service(
        self, comment_repository: CommentRepository, comment_settings: CommentSettings
    ) -> CommentService:
        """Provide comment domain service."""
        return CommentService(
            comment_repository=comment_repository,
            max_depth=comment_settings.max_depth,
        )

    @provide
    def get_post_service(
        self, post_repository: PostRepository, sanitizer: HtmlSanitizer
    ) -> PostService:
        """Provide post domain service."""
        return PostService(post_repository=post_repository, sanitizer=sanitizer)

    @provide
    def get_upload_service(
        self,
        processor: ImageProcessor,
        storage: ImageStorage,
        upload_settings: UploadSettings,
    ) -> ImageUploadService:
        """Provide image upload domain service."""
        return ImageUploadService(
            processor=processor, storage=storage, upload_settings=upload_settings
        )
