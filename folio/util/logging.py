"""Stdlib logging for uvicorn and third-party libraries.

Application events go through logfire (see folio.util.observability);
this only sets levels and a format for libraries that use ``logging``.
"""

import logging
import sys

from folio.config import Settings

# Libraries that are chatty at INFO
QUIET_LOGGERS = ("httpx", "httpcore", "PIL", "asyncio", "multipart")


def log_level(settings: Settings) -> int:
    """Level for the current environment: DEBUG when debugging, quieter in tests."""
    if settings.debug:
        return logging.DEBUG
    if settings.environment == "test":
        return logging.WARNING
    return logging.INFO


def setup_logging(settings: Settings) -> None:
    """Configure the root logger.

    Args:
        settings: Application settings
    """
    level = log_level(settings)

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,
    )

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    # SQL echo is controlled by the engine, not by this level
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    logging.getLogger(__name__).info(
        "Logging configured: environment=%s level=%s",
        settings.environment,
        logging.getLevelName(level),
    )
