"""FastAPI application."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from guestbook.config import Settings
from guestbook.interface.api.errors import register_error_handlers
from guestbook.interface.api.routes import entries, health, me, moderation, reactions
from guestbook.util.di.container import create_container, setup_di
from guestbook.util.observability import instrument_fastapi


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    # Disposes the engine and any other APP-scoped resources
    await app.state.dishka_container.close()


def create_app() -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.
    """
    settings = Settings()

    app_instance = FastAPI(
        title="Guestbook API",
        description="Threaded guestbook with reactions and a moderation overlay",
        version="0.1.0",
        lifespan=lifespan,
    )

    instrument_fastapi(app_instance)

    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "DELETE", "PATCH", "OPTIONS"],
        allow_headers=[
            "Authorization",
            "Content-Type",
            "Accept",
            "Origin",
            "X-Visitor-Id",
        ],
        max_age=600,
    )

    container = create_container()
    setup_di(app_instance, container)

    register_error_handlers(app_instance)

    app_instance.include_router(health.router)
    app_instance.include_router(me.router)
    app_instance.include_router(entries.router)
    app_instance.include_router(reactions.router)
    app_instance.include_router(moderation.router)

    return app_instance


# Create app instance for uvicorn
# Note: Logfire must be configured before this module is imported
app = create_app()
