"""FastAPI application entry point."""

from __future__ import annotations

from contextlib import asynccontextmanager
import logging
from typing import AsyncGenerator

from fastapi import FastAPI

from zwave_cards.api import routes
from zwave_cards.core.config import get_settings
from zwave_cards.logic.profiles import ProfileRegistry, default_registry
from zwave_cards.services.card_state import CardStore

logger = logging.getLogger("zwave_cards")

settings = get_settings()
logging.basicConfig(level=getattr(logging, settings.log_level, logging.INFO))


def build_app(registry: ProfileRegistry | None = None) -> FastAPI:
    registry = registry or default_registry()
    cards = CardStore(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        logger.info(
            "Starting %s (%s) with %d device profiles",
            settings.app_name,
            settings.environment,
            len(registry),
        )
        yield
        cards.close()
        logger.info("Stopping %s", settings.app_name)

    app = FastAPI(title=settings.app_name, version="1.0.0", lifespan=lifespan)
    # routes resolve the registry and card holders from app.state
    app.state.registry = registry
    app.state.cards = cards
    app.include_router(routes.router, prefix="/api")
    return app


app = build_app()
