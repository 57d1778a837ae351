"""FastAPI application for Thought Threads."""

from __future__ import annotations

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ..config import ThoughtThreadsConfig, load_config
from ..logging import get_logger
from ..service import ThoughtService
from .routes import router

LOGGER = get_logger(__name__)


def create_app(config: Optional[ThoughtThreadsConfig] = None, service: Optional[ThoughtService] = None) -> FastAPI:
    """Create the application; a service passed in is used as-is and left open."""
    config = config or load_config()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        owned = getattr(app.state, "service", None) is None
        if owned:
            app.state.service = ThoughtService.from_config(config)
            LOGGER.info("Serving thoughts from %s", config.store.path)
        yield
        if owned:
            app.state.service.close()
            app.state.service = None

    app = FastAPI(
        title="Thought Threads",
        description="Groups free-text thoughts by topic and links related ones",
        lifespan=lifespan,
    )
    if service is not None:
        app.state.service = service

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.server.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(router)

    return app
