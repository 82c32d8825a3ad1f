"""Logfire setup and instrumentation.

Services log and trace through logfire directly:

    logfire.info("Comment created", comment_id=comment.id, entity_id=entity_id)

    with logfire.span("comment_service.delete_comment", comment_id=comment_id):
        ...
"""

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from canopy.config import Settings

SERVICE_NAME = "canopy-comments"


def _should_send(settings: Settings) -> bool:
    """Send to Logfire cloud if told to, otherwise only when a token exists."""
    observability = settings.observability
    if observability.send_to_logfire is not None:
        return observability.send_to_logfire
    return observability.logfire_token is not None


def configure_logfire(settings: Settings) -> None:
    """Configure logfire for the comments service.

    Without a token or ``OBSERVABILITY__SEND_TO_LOGFIRE`` everything goes to
    the console only. The ``auth_token`` cookie is scrubbed from attributes.
    """
    send = _should_send(settings)

    logfire.configure(
        service_name=SERVICE_NAME,
        service_version=settings.git_sha,
        environment=settings.environment,
        send_to_logfire=send,
        token=settings.observability.logfire_token,
        console=logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
        scrubbing=logfire.ScrubbingOptions(extra_patterns=["auth_token"]),
    )
    logfire.info(
        "Observability configured",
        environment=settings.environment,
        send_to_logfire=send,
    )


def instrument_fastapi(app: FastAPI) -> None:
    """Trace every request handled by ``app``, without headers."""

    def _request_attributes(request, attributes):
        return {**attributes, "method": request.method, "path": request.url.path}

    logfire.instrument_fastapi(
        app,
        capture_headers=False,
        request_attributes_mapper=_request_attributes,
    )


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace queries issued through ``engine``."""
    logfire.instrument_sqlalchemy(engine=engine.sync_engine)


def instrument_httpx() -> None:
    """Trace outbound requests of the webhook sink and the comments client."""
    logfire.instrument_httpx()
