"""FastAPI application factory.

Served with ``uvicorn --factory canopy.interface.api.app:create_app``.
Logfire must be configured first (``scripts/start_app.py`` does this).
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from dishka import AsyncContainer
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from canopy.config import Settings
from canopy.interface.api.routes import comments, health
from canopy.util.di.container import create_container, setup_di
from canopy.util.observability import instrument_fastapi, instrument_httpx

# Origins of the local front-end dev servers (CRA and Vite)
_DEV_ORIGINS = ["http://localhost:3000", "http://localhost:5173"]


@asynccontextmanager
async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
    yield
    # Disposes the engine and any other APP-scoped resources
    await app.state.dishka_container.close()


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Build the comments API.

    Args:
        container: DI container to serve from, the production one by default
    """
    settings = Settings()

    app = FastAPI(
        title="Canopy Comments API",
        description="Threaded comments on Canopy articles, posts, pitches and ideas",
        version="0.1.0",
        lifespan=_lifespan,
    )

    instrument_httpx()
    instrument_fastapi(app)

    # The auth_token cookie is only sent cross-origin with credentials allowed
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.api.frontend_url, *_DEV_ORIGINS],
        allow_credentials=True,
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Accept", "Origin", "Cache-Control"],
        max_age=600,
    )

    setup_di(app, container or create_container())

    app.include_router(health.router)
    app.include_router(comments.router)
    return app
