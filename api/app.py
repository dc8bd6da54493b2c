"""FastAPI application factory."""
from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from api.routes import router
from chains.providers import RPCProvider
from config import Settings
from core.logging import get_logger
from watcher.service import ParserService

LOGGER = get_logger("txwatch.app")


def build_service(settings: Settings) -> ParserService:
    """Wire the provider and service for one process."""

    provider = RPCProvider(settings.rpc_url, timeout_seconds=settings.rpc_timeout_seconds)
    return ParserService(provider)


def create_app(service: ParserService) -> FastAPI:
    """Create the application around an already wired service."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        LOGGER.info(
            "txwatch started",
            extra={"context": {"rpc_url": service.provider.rpc_url}},
        )
        try:
            yield
        finally:
            await service.provider.close()
            LOGGER.info("txwatch stopped")

    app = FastAPI(title="txwatch", version="0.1.0", lifespan=lifespan)
    app.state.parser_service = service
    app.include_router(router)
    return app
