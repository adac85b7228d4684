"""Request helpers shared by the routes."""

from fastapi import Request

from folio.domain.error import ValidationError
from folio.domain.service import JWTService
from folio.interface.error import ApiError


def get_client_ip(request: Request) -> str:
    """Identify the client for rate limiting.

    Uses the first X-Forwarded-For entry, then X-Real-IP, then the
    socket peer.
    """
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first

    real_ip = request.headers.get("x-real-ip")
    if real_ip and real_ip.strip():
        return real_ip.strip()

    if request.client and request.client.host:
        return request.client.host
    return "unknown"


def get_auth_token(request: Request) -> str | None:
    """Read the JWT from the auth cookie or a bearer Authorization header."""
    token = request.cookies.get("auth_token")
    if token:
        return token

    authorization = request.headers.get("authorization", "")
    scheme, _, credentials = authorization.partition(" ")
    if scheme.lower() == "bearer" and credentials.strip():
        return credentials.strip()
    return None


def require_admin(request: Request, jwt_service: JWTService) -> None:
    """Raise 401 unless the request carries an admin token."""
    if not jwt_service.is_admin(get_auth_token(request)):
        raise ApiError(401, "unauthorized")


async def read_json(request: Request):
    """Decode the request body as JSON, or None if it is not JSON."""
    try:
        return await request.json()
    except ValueError:
        return None


def validation_error(error: ValidationError) -> ApiError:
    """Translate a domain validation error into the API envelope."""
    return ApiError(400, "validation", issues=error.issues)
