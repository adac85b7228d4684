"""Mock persistence providers for testing."""

from dishka import Scope, provide

from folio.domain.repository import CommentRepository, PostRepository
from folio.persistence.repository.inmemory import (
    InMemoryCommentRepository,
    InMemoryPostRepository,
)
from folio.util.di.infrastructure.persistence import PersistenceProvider


class MockPersistenceProvider(PersistenceProvider):
    """Mock persistence provider using in-memory repositories.

    Repositories are APP-scoped so data survives across the requests of
    one test app; every test builds its own container, which keeps tests
    isolated.
    """

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_inmemory_comment_repository(self) -> InMemoryCommentRepository:
        """Provide the shared in-memory comment store."""
        return InMemoryCommentRepository()

    @provide(scope=Scope.APP)
    def get_comment_repository(
        self, comments: InMemoryCommentRepository
    ) -> CommentRepository:
        """Provide in-memory comment repository."""
        return comments

    @provide(scope=Scope.APP)
    def get_post_repository(self, comments: InMemoryCommentRepository) -> PostRepository:
        """Provide in-memory post repository; deletes cascade to comments."""
        return InMemoryPostRepository(comments=comments)
