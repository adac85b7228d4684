"""JWT token domain service."""

import logfire

from folio.config import AuthSettings
from folio.util.jwt import ADMIN_ROLE, JWTError, TokenPayload, create_token, verify_token

from .base import Service


class JWTService(Service):
    """Domain service for JWT token operations and the admin check."""

    def __init__(self, auth_settings: AuthSettings) -> None:
        """Initialize JWT service.

        Args:
            auth_settings: Authentication settings
        """
        self.auth_settings = auth_settings

    def create_token(self, email: str) -> str:
        """Create an admin JWT token for an email.

        Args:
            email: Email of the token holder

        Returns:
            JWT token string
        """
        with logfire.span("jwt_service.create_token"):
            token = create_token(email, self.auth_settings)
            logfire.info("JWT token created")
            return token

    def verify_token(self, token: str) -> TokenPayload:
        """Verify JWT token and extract payload.

        Raises:
            JWTError: If token is invalid or expired
        """
        with logfire.span("jwt_service.verify_token"):
            try:
                return verify_token(token, self.auth_settings)
            except JWTError as e:
                logfire.warn("JWT token verification failed", error=str(e))
                raise

    def is_admin(self, token: str | None) -> bool:
        """Check whether a token grants the admin capability.

        The token must verify, carry the admin role, and belong to the
        configured admin email. Never raises.
        """
        admin_email = self.auth_settings.admin_email.strip().lower()
        if not token or not admin_email:
            return False

        try:
            payload = self.verify_token(token)
        except JWTError:
            return False

        return payload.role == ADMIN_ROLE and payload.sub.strip().lower() == admin_email
