from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from flowrelay.config import get_settings
from flowrelay.core.app_state import AppState
from flowrelay.infra.logging_config import LoggingConfig, get_logger
from flowrelay.routers import system, webhooks

logger = get_logger("main")


def create_app(testing: bool = False) -> FastAPI:
    """
    Build the FastAPI app.

    Outside of testing the lifespan starts the chat channels and the reminder
    poller, and stops them again when uvicorn shuts down (SIGINT/SIGTERM).
    """
    settings = get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if testing:
            yield
            return
        LoggingConfig()
        state = AppState(settings)
        await state.start()
        app.state.relay = state
        logger.info("%s started (%s)", settings.app_name, settings.environment)
        try:
            yield
        finally:
            await state.stop()
            logger.info("%s stopped", settings.app_name)

    app = FastAPI(title=settings.app_name, lifespan=lifespan)
    app.state.relay = None
    app.include_router(system.router)
    app.include_router(webhooks.router)
    return app
