"""Logfire setup and instrumentation.

Services log through logfire directly:

    logfire.info("Image stored", url=stored.url, size_bytes=size)

    with logfire.span("image_processor.process", kind=kind.value):
        ...

Security rejections add a security_event attribute so they can be
filtered apart from ordinary validation failures.
"""

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from folio.config import Settings

SERVICE_NAME = "folio-backend"

# Attribute names whose values never leave the process
SCRUBBED_ATTRIBUTES = ["email", "auth_token", "jwt"]


def should_send_to_logfire(settings: Settings) -> bool:
    """Decide whether spans go to Logfire cloud.

    An explicit OBSERVABILITY__SEND_TO_LOGFIRE wins; otherwise sending is
    on exactly when a token is configured.
    """
    explicit = settings.observability.send_to_logfire
    if explicit is not None:
        return explicit
    return bool(settings.observability.logfire_token)


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire for the running environment.

    Args:
        settings: Application settings
    """
    send_to_logfire = should_send_to_logfire(settings)

    logfire.configure(
        service_name=SERVICE_NAME,
        service_version=settings.git_sha,
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
        token=settings.observability.logfire_token,
        scrubbing=logfire.ScrubbingOptions(extra_patterns=SCRUBBED_ATTRIBUTES),
        console=logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
    )

    logfire.info(
        "Observability configured",
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
    )


def _request_attributes(request, attributes):
    result = {**attributes}
    if getattr(request, "client", None):
        result["client_host"] = request.client.host

    # Upload routes take the image kind as ?type=
    kind = request.query_params.get("type") if hasattr(request, "query_params") else None
    if kind:
        result["image_kind"] = kind
    return result


def instrument_fastapi(app: FastAPI) -> None:
    """Trace every API request except health checks.

    Headers are not captured: they carry the admin auth cookie.
    """
    logfire.instrument_fastapi(
        app,
        capture_headers=False,
        request_attributes_mapper=_request_attributes,
        excluded_urls="/health",
    )


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace SQL issued through the async engine."""
    logfire.instrument_sqlalchemy(engine=engine.sync_engine)


def instrument_httpx() -> None:
    """Trace outbound requests, i.e. remote image fetches."""
    logfire.instrument_httpx()
