"""Logfire setup for the blog API.

Services, repositories and use cases open spans named
``<component>.<operation>`` and attach ids as keyword attributes, e.g.::

    with logfire.span("post_service.like", post_id=str(post_id)):
        logfire.info("Post liked", like_count=like_count)

Everything below wires those spans to a backend and adds request and
query traces around them.
"""

from typing import Any

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from blog.config import Settings

SERVICE_NAME = "blog-api"

# Load balancers poll this every few seconds
UNTRACED_URLS = [r".*/health$"]


def _sends_to_logfire(settings: Settings) -> bool:
    explicit = settings.observability.send_to_logfire
    if explicit is not None:
        return explicit
    return bool(settings.observability.logfire_token)


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire once at process start.

    Output always goes to the console. It is also shipped to Logfire when
    ``observability.send_to_logfire`` is true, or when it is unset and a
    token is configured.
    """
    send = _sends_to_logfire(settings)
    logfire.configure(
        service_name=SERVICE_NAME,
        environment=settings.environment,
        send_to_logfire=send,
        token=settings.observability.logfire_token or None,
        console=logfire.ConsoleOptions(
            span_style="show-parents",
            verbose=settings.debug,
        ),
    )
    logfire.info(
        "Logfire configured",
        environment=settings.environment,
        send_to_logfire=send,
    )


def _request_attributes(request: Any, attributes: dict[str, Any]) -> dict[str, Any]:
    # Body and query values are already captured; add who and what was hit
    route = request.scope.get("route")
    return {
        **attributes,
        "route": getattr(route, "path", request.url.path),
        "authenticated": "auth_token" in request.cookies,
    }


def instrument_fastapi(app: FastAPI) -> None:
    """Trace every request except health checks."""
    logfire.instrument_fastapi(
        app,
        excluded_urls=UNTRACED_URLS,
        request_attributes_mapper=_request_attributes,
    )


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace every statement run through ``engine``."""
    logfire.instrument_sqlalchemy(engine=engine.sync_engine)
    logfire.info("SQLAlchemy instrumented", dialect=engine.dialect.name)
