"""FastAPI application factory."""
from __future__ import annotations
import logging

from fastapi import FastAPI

from app.api.routes import router
from app.api.websocket import ws_router
from app.config import get_settings


def create_app() -> FastAPI:
    settings = get_settings()
    logging.getLogger("app").setLevel(settings.log_level)

    app = FastAPI(
        title="Viper Duel",
        description="Room and steering server for two-player snake duels",
        version="1.0.0",
    )

    # Routers
    app.include_router(router)
    app.include_router(ws_router)

    return app


app = create_app()
