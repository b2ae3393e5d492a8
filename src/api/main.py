"""
FastAPI application factory and configuration.

This module creates the FastAPI application instance,
configures routes and lifespan events.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from psycopg_pool import ConnectionPool

from src.adapters.repository.memory import InMemoryStakingRepository
from src.adapters.repository.postgres import PostgresStakingRepository, run_migrations
from src.api.v1 import router as v1_router
from src.config.settings import get_settings

logger = logging.getLogger(__name__)

# OpenAPI tags for documentation grouping
tags_metadata = [
    {
        "name": "v1",
        "description": "Stake-Gated Email Registry API v1 - Mint, stake and register emails",
    },
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    FastAPI lifespan context manager.

    Manages application startup and shutdown:
    - Creates the configured storage backend on startup
    - Runs migrations on startup (PostgreSQL only)
    - Seeds the minimum stake duration if unset
    - Closes connection pool on shutdown
    """
    settings = get_settings()

    logger.info("Starting application...")

    pool: ConnectionPool | None = None
    if settings.storage_backend == "postgres":
        logger.info("Connecting to database...")
        pool = ConnectionPool(
            conninfo=settings.database_url,
            min_size=settings.pool_min_size,
            max_size=settings.pool_max_size,
        )

        logger.info("Running database migrations...")
        run_migrations(pool)
        repository = PostgresStakingRepository(pool)
    else:
        logger.info("Using in-memory storage; state will not survive restart")
        repository = InMemoryStakingRepository()

    repository.ensure_min_stake_duration(settings.min_stake_duration_seconds)

    # Store repository in app state for dependency injection
    app.state.repository = repository

    logger.info("Application startup complete")

    yield

    # Shutdown
    logger.info("Shutting down application...")
    if pool is not None:
        pool.close()
        logger.info("Database connection pool closed")


app = FastAPI(
    title="stakegate",
    description="Stake-Gated Email Registry API - Email registration gated on continuous NFT staking",
    version="0.1.0",
    openapi_tags=tags_metadata,
    lifespan=lifespan,
)

# Include v1 API routes
app.include_router(v1_router, prefix="/v1")


@app.get("/health")
async def health_check(request: Request) -> dict[str, str]:
    """
    Health check endpoint with storage validation.

    Returns 200 OK if application and storage backend are healthy.
    Raises exception if the database connection fails.
    """
    request.app.state.repository.ping()
    return {"status": "healthy"}
