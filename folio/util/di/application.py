"""Application layer DI providers."""

from dishka import Scope, provide

from folio.adapter.remote import RemoteImageFetcher
from folio.application.usecase.comment import GetCommentsUseCase, SubmitCommentUseCase
from folio.application.usecase.post import (
    CreatePostUseCase,
    DeletePostUseCase,
    GetPostUseCase,
    ListPostsUseCase,
    UpdatePostUseCase,
)
from folio.application.usecase.upload import UploadFromUrlUseCase, UploadImageUseCase
from folio.config import CommentSettings
from folio.domain.service import (
    CommentService,
    ImageUploadService,
    PostService,
    RateLimiter,
)
from folio.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Post use cases
    @provide(scope=Scope.REQUEST)
    def get_list_posts_use_case(self, post_service: PostService) -> ListPostsUseCase:
        """Provide list posts use case."""
        return ListPostsUseCase(post_service=post_service)

    @provide(scope=Scope.REQUEST)
    def get_get_post_use_case(self, post_service: PostService) -> GetPostUseCase:
        """Provide get post use case."""
        return GetPostUseCase(post_service=post_service)

    @provide(scope=Scope.REQUEST)
    def get_create_post_use_case(self, post_service: PostService) -> CreatePostUseCase:
        """Provide create post use case."""
        return CreatePostUseCase(post_service=post_service)

    @provide(scope=Scope.REQUEST)
    def get_update_post_use_case(self, post_service: PostService) -> UpdatePostUseCase:
        """Provide update post use case."""
        return UpdatePostUseCase(post_service=post_service)

    @provide(scope=Scope.REQUEST)
    def get_delete_post_use_case(self, post_service: PostService) -> DeletePostUseCase:
        """Provide delete post use case."""
        return DeletePostUseCase(post_service=post_service)

    # Comment use cases
    @provide(scope=Scope.REQUEST)
    def get_get_comments_use_case(
        self, comment_service: CommentService, post_service: PostService
    ) -> GetCommentsUseCase:
        """Provide get comments use case."""
        return GetCommentsUseCase(
            comment_service=comment_service, post_service=post_service
        )

    @provide(scope=Scope.REQUEST)
    def get_submit_comment_use_case(
        self,
        comment_service: CommentService,
        post_service: PostService,
        rate_limiter: RateLimiter,
        comment_settings: CommentSettings,
    ) -> SubmitCommentUseCase:
        """Provide submit comment use case."""
        return SubmitCommentUseCase(
            comment_service=comment_service,
            post_service=post_service,
            rate_limiter=rate_limiter,
            comment_settings=comment_settings,
        )

    # Upload use cases
    @provide(scope=Scope.REQUEST)
    def get_upload_image_use_case(
        self, upload_service: ImageUploadService
    ) -> UploadImageUseCase:
        """Provide upload image use case."""
        return UploadImageUseCase(upload_service=upload_service)

    @provide(scope=Scope.REQUEST)
    def get_upload_from_url_use_case(
        self, upload_service: ImageUploadService, fetcher: RemoteImageFetcher
    ) -> UploadFromUrlUseCase:
        """Provide upload from URL use case."""
        return UploadFromUrlUseCase(upload_service=upload_service, fetcher=fetcher)
