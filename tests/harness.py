"""Test harness for unit, integration and E2E tests.

Settings are loaded from environment variables; tests/conftest.py sets
test defaults. Integration tests that unmock persistence assume a
PostgreSQL database at DATABASE__URL with migrations applied.
"""

import pytest_asyncio

from folio.config import Settings
from folio.util.di import Component
from folio.util.jwt import create_token
from tests.di import build_test_container


def create_env_fixture(unmock: set[Component] | None = None):
    """Factory for creating test environment fixtures.

    Creates a pytest fixture that:
    - Builds a test container with specified unmocking
    - Yields request-scoped container for service access
    - Closes the container afterwards (stops the rate limiter sweep)

    Args:
        unmock: Components to use real implementations for

    Returns:
        Pytest fixture function that yields AsyncContainer

    Usage:
        # Unit tests - everything mocked
        unit_env = create_env_fixture()

        # Integration tests - real persistence, assumes postgres running
        integration_env = create_env_fixture(unmock={"persistence"})

        @pytest.mark.asyncio
        async def test_create_post(unit_env):
            service = await unit_env.get(PostService)
            post = await service.create_post("Hello", "<p>Hi</p>", None)
            assert post.slug.root == "hello"
    """

    @pytest_asyncio.fixture
    async def _test_environment():
        container = build_test_container(unmock=unmock or set())

        async with container() as request_container:
            yield request_container

        await container.close()

    return _test_environment


def make_admin_token(email: str | None = None, role: str = "admin") -> str:
    """Issue a token signed with the test secret.

    Args:
        email: Token subject (defaults to the configured admin email)
        role: Role claim
    """
    settings = Settings().auth
    return create_token(email or settings.admin_email, settings, role=role)
