#!/usr/bin/env python3
"""Serve the forum API with uvicorn.

Logging and Logfire are configured before the app module is imported so
that errors raised while building the app are reported too.
"""

import sys

import logfire
import uvicorn

from forum.config import Settings
from forum.util.logging import setup_logging
from forum.util.observability import configure_logfire

APP_PATH = "forum.interface.api.app:app"


def main() -> int:
    """Start the API server."""
    settings = Settings()
    setup_logging(settings)
    configure_logfire(settings)

    logfire.info(
        "Starting forum API",
        host=settings.host,
        port=settings.port,
        environment=settings.environment,
        git_sha=settings.git_sha,
    )
    try:
        uvicorn.run(
            APP_PATH,
            host=settings.host,
            port=settings.port,
            log_level="debug" if settings.debug else "info",
            reload=settings.environment == "development" and settings.debug,
        )
    except Exception as e:
        logfire.error(
            "Application startup failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise
    return 0


if __name__ == "__main__":
    sys.exit(main())
