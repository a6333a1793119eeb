"""FastAPI application wiring for the conquest engine."""

from __future__ import annotations

import logging
from collections.abc import Callable
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from conquest.api import routes
from conquest.api.runtime import ApiState, build_state
from conquest.config import Settings, get_settings

logger = logging.getLogger(__name__)


def create_app(
    *,
    state_factory: Callable[[], ApiState] = build_state,
    settings: Settings | None = None,
) -> FastAPI:
    """Instantiate the FastAPI application with routing and lifecycle hooks.

    ``settings`` only drives the HTTP layer (CORS); services get theirs from
    the state built by ``state_factory``.
    """

    http_settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        state = state_factory()
        app.state.api_state = state
        logger.info(
            "serving rules %s (court power modifier %s)",
            state.settings.rules_version,
            "on" if state.config.apply_court_power_modifier else "off",
        )
        try:
            yield
        finally:
            await state.shutdown()

    app = FastAPI(title="Conquest Engine API", version="0.1.0", lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=http_settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )
    app.include_router(routes.router)
    return app


app = create_app()
