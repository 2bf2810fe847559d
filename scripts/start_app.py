#!/usr/bin/env python3
"""Serve the blog API with uvicorn."""

import sys

import logfire
import uvicorn

from blog.config import Settings
from blog.util.logging import setup_logging
from blog.util.observability import configure_logfire


def main() -> int:
    settings = Settings()
    # Before uvicorn imports the app, so import errors are traced too
    setup_logging(settings)
    configure_logfire(settings)

    logfire.info(
        "Starting blog API",
        base_url=settings.api.base_url,
        environment=settings.environment,
    )
    try:
        uvicorn.run(
            "blog.interface.api.app:app",
            host="0.0.0.0",
            port=settings.api.port,
            log_level="debug" if settings.debug else "info",
        )
    except Exception:
        logfire.exception("Blog API failed to start")
        raise
    return 0


if __name__ == "__main__":
    sys.exit(main())
