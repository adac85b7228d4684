#!/usr/bin/env python3
"""Serve the API with uvicorn."""

import sys

import logfire
import uvicorn

from folio.config import Settings
from folio.util.logging import setup_logging
from folio.util.observability import configure_logfire


def main() -> int:
    settings = Settings()

    setup_logging(settings)
    # Before uvicorn imports the app, so startup errors are captured
    configure_logfire(settings)

    logfire.info(
        "Starting API",
        port=settings.port,
        environment=settings.environment,
        git_sha=settings.git_sha,
    )
    try:
        uvicorn.run(
            "folio.interface.api.app:app",
            host="0.0.0.0",
            port=settings.port,
            log_level="debug" if settings.debug else "info",
            # Comment rate limits key on the client IP behind the proxy
            proxy_headers=True,
            forwarded_allow_ips="*",
        )
    except Exception:
        logfire.exception("API startup failed")
        raise
    return 0


if __name__ == "__main__":
    sys.exit(main())
