"""Logfire setup for the guestbook API.

Application code talks to logfire directly; this module only wires the
SDK and the FastAPI / SQLAlchemy instrumentation:

    with logfire.span("entry_service.create_entry", parent_id=str(parent_id)):
        ...
        logfire.info("Entry created", entry_id=str(entry.id))
"""

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from guestbook.config import Settings

SERVICE_NAME = "guestbook-api"

# Visitor keys act as anonymous credentials and must not reach traces
_SCRUB_PATTERNS = ["visitor_key", "visitor-id", "auth_token"]


def _send_to_logfire(settings: Settings) -> bool:
    """An explicit flag wins; otherwise ship telemetry only when a token exists."""
    explicit = settings.observability.send_to_logfire
    if explicit is not None:
        return explicit
    return bool(settings.observability.logfire_token)


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire once per process.

    Args:
        settings: Application settings
    """
    send = _send_to_logfire(settings)

    logfire.configure(
        service_name=SERVICE_NAME,
        service_version=settings.git_sha,
        environment=settings.environment,
        send_to_logfire=send,
        token=settings.observability.logfire_token,
        scrubbing=logfire.ScrubbingOptions(extra_patterns=_SCRUB_PATTERNS),
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
        send_to_logfire=send,
    )


def _request_attributes(request, attributes):
    """Keep method and path on request spans, nothing from headers."""
    mapped = dict(attributes)
    mapped["method"] = getattr(request, "method", None)
    url = getattr(request, "url", None)
    if url is not None:
        mapped["path"] = url.path
    return mapped


def instrument_fastapi(app: FastAPI) -> None:
    """Trace every HTTP request handled by the app."""
    # Headers carry bearer tokens and visitor keys
    logfire.instrument_fastapi(
        app,
        capture_headers=False,
        request_attributes_mapper=_request_attributes,
    )
    logfire.debug("FastAPI instrumented")


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace SQL issued through the entry store engine."""
    logfire.instrument_sqlalchemy(engine=engine.sync_engine, enable_commenter=True)
    logfire.debug("SQLAlchemy instrumented")
