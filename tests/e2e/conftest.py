"""E2E fixtures: the real app served from a mocked container."""

import pytest
from fastapi.testclient import TestClient

from folio.interface.api.app import create_app
from tests.di import build_test_container
from tests.harness import make_admin_token


@pytest.fixture
def client():
    """Test client for a fresh app with in-memory persistence."""
    app = create_app(build_test_container())
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def admin_headers():
    """Authorization header carrying an admin token."""
    return {"Authorization": f"Bearer {make_admin_token()}"}


@pytest.fixture
def published(client, admin_headers):
    """A published post."""
    response = client.post(
        "/api/admin/posts",
        json={"title": "Hello World", "content": "<p>First post</p>"},
        headers=admin_headers,
    )
    assert response.status_code == 200
    return response.json()["post"]
