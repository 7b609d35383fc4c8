"""FastAPI application wiring for Guildhall."""

from __future__ import annotations

from collections.abc import Callable
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from guildhall.api import routes
from guildhall.api.errors import install_error_handlers
from guildhall.api.runtime import ApiState, build_state
from guildhall.config import get_settings
from guildhall.logging_config import configure_logging


def create_app(*, state_factory: Callable[[], ApiState] = build_state) -> FastAPI:
    """Instantiate the FastAPI application with routing and lifecycle hooks."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        state = state_factory()
        app.state.api_state = state
        try:
            yield
        finally:
            state.shutdown()

    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(title="Guildhall API", version="0.1.0", lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    install_error_handlers(app)
    app.include_router(routes.router)
    return app


app = create_app()
