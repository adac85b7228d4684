"""Unit tests for JWTService."""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from folio.config import AuthSettings
from folio.domain.service import JWTService
from folio.util.jwt import JWTError

SECRET = "unit-test-secret-with-at-least-32-bytes"


@pytest.fixture
def service():
    return JWTService(AuthSettings(jwt_secret=SECRET, admin_email="Admin@Example.com"))


class TestIsAdmin:
    """Tests for the admin capability check."""

    def test_token_for_admin_email_is_admin(self, service):
        token = service.create_token("admin@example.com")

        assert service.is_admin(token) is True

    def test_token_for_other_email_is_not_admin(self, service):
        token = service.create_token("someone@example.com")

        assert service.is_admin(token) is False

    def test_missing_token_is_not_admin(self, service):
        assert service.is_admin(None) is False
        assert service.is_admin("") is False

    def test_garbage_token_is_not_admin(self, service):
        assert service.is_admin("not.a.jwt") is False

    def test_token_signed_with_other_secret_is_not_admin(self, service):
        other = JWTService(
            AuthSettings(jwt_secret="another-secret-with-at-least-32-bytes", admin_email="admin@example.com")
        )

        assert service.is_admin(other.create_token("admin@example.com")) is False

    def test_wrong_role_is_not_admin(self, service):
        token = jwt.encode(
            {
                "sub": "admin@example.com",
                "role": "reader",
                "exp": datetime.now(timezone.utc) + timedelta(hours=1),
            },
            SECRET,
            algorithm="HS256",
        )

        assert service.is_admin(token) is False

    def test_expired_token_is_not_admin(self, service):
        token = jwt.encode(
            {
                "sub": "admin@example.com",
                "role": "admin",
                "exp": datetime.now(timezone.utc) - timedelta(seconds=5),
            },
            SECRET,
            algorithm="HS256",
        )

        assert service.is_admin(token) is False
        with pytest.raises(JWTError, match="expired"):
            service.verify_token(token)

    def test_no_admin_configured_means_no_admin(self):
        service = JWTService(AuthSettings(jwt_secret=SECRET, admin_email=""))

        assert service.is_admin(service.create_token("admin@example.com")) is False
