"""Fleet Monitor service main application."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shared.config import get_fleet_monitor_settings
from shared.observability import get_logger, setup_logging

from .api import fleet, health
from .clients.cluster_api import ClusterAPIClient
from .services.poller import create_fleet_poller

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Owns the cluster API client and the fleet poller.
    """
    settings = get_fleet_monitor_settings()
    setup_logging()

    logger.info(
        "Starting Fleet Monitor service",
        version=settings.app_version,
        clusters=sorted(settings.clusters),
    )

    client = ClusterAPIClient(
        timeout=settings.fetch_timeout_seconds,
        build_listing_path=settings.build_listing_path,
    )
    poller = create_fleet_poller(settings, client=client)
    app.state.poller = poller
    await poller.start()

    logger.info("Fleet Monitor service started successfully")

    yield

    # Cleanup
    logger.info("Shutting down Fleet Monitor service")
    await poller.aclose()
    await client.close()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_fleet_monitor_settings()

    app = FastAPI(
        title="Fleet Monitor",
        description="Game server build totals across clusters",
        version=settings.app_version,
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.is_development else [],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router, tags=["Health"])
    app.include_router(fleet.router, prefix="/api/v1", tags=["Fleet"])

    return app


app = create_app()
