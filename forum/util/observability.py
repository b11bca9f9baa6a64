"""Logfire setup for the forum API.

Services log and trace through ``logfire`` directly:

    logfire.info("Vote recorded", votable_type="answer", delta=-2)

    with logfire.span("vote_service.add_vote", votable_type="question"):
        ...

This module only wires Logfire up at startup and instruments the web and
storage layers.
"""

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from forum.config import Settings

SERVICE_NAME = "forum-api"
SERVICE_VERSION = "0.1.0"


def _should_send(settings: Settings) -> bool:
    """An explicit setting wins, otherwise send only when a token is configured."""
    if settings.observability.send_to_logfire is not None:
        return settings.observability.send_to_logfire
    return bool(settings.observability.logfire_token)


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire for the running environment.

    Console output is always on; ``debug`` makes it verbose. Spans are
    shipped to Logfire only when ``_should_send`` allows it. Cookie and
    token values are scrubbed from every record.

    Args:
        settings: Application settings
    """
    send_to_logfire = _should_send(settings)

    config_kwargs = {
        "service_name": SERVICE_NAME,
        "service_version": SERVICE_VERSION,
        "environment": settings.environment,
        "send_to_logfire": send_to_logfire,
        "console": logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
        "scrubbing": logfire.ScrubbingOptions(extra_patterns=["auth_token"]),
    }
    if settings.observability.logfire_token:
        config_kwargs["token"] = settings.observability.logfire_token

    logfire.configure(**config_kwargs)

    logfire.info(
        "Observability configured",
        environment=settings.environment,
        debug=settings.debug,
        send_to_logfire=send_to_logfire,
    )


def _request_attributes(request, attributes):
    """Tag each request span with method, path and votable kind."""
    result = {**attributes, "method": request.method, "path": request.url.path}
    kind = request.path_params.get("kind")
    if kind:
        result["votable_kind"] = kind
    if request.client:
        result["client_host"] = request.client.host
    return result


def instrument_fastapi(app: FastAPI) -> None:
    """Trace every HTTP request handled by ``app``."""
    logfire.instrument_fastapi(
        app,
        capture_headers=False,
        request_attributes_mapper=_request_attributes,
    )
    logfire.info("FastAPI instrumented")


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace every SQL statement run on ``engine``.

    Args:
        engine: SQLAlchemy async engine
    """
    logfire.instrument_sqlalchemy(
        engine=engine.sync_engine,
        enable_commenter=True,
    )
    logfire.info("SQLAlchemy instrumented")
