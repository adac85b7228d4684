"""Interface layer errors and the JSON error envelope.

Every API failure is rendered as {"error": <reason>, ...extra} with the
error's status code.
"""

import logfire
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse


class InterfaceError(Exception):
    """Base interface error."""

    pass


class ApiError(InterfaceError):
    """Error rendered to the client with a machine-readable reason."""

    def __init__(
        self,
        status_code: int,
        error: str,
        headers: dict[str, str] | None = None,
        **extra,
    ):
        self.status_code = status_code
        self.error = error
        self.headers = headers
        self.extra = extra
        super().__init__(error)

    def to_content(self) -> dict:
        return {"error": self.error, **self.extra}


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    """Render an ApiError."""
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_content(),
        headers=exc.headers,
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Render unexpected exceptions without leaking internals."""
    logfire.exception(
        "Unhandled error", path=request.url.path, method=request.method
    )
    return JSONResponse(status_code=500, content={"error": "internal error"})


def register_error_handlers(app: FastAPI) -> None:
    """Install the error envelope on an app."""
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
