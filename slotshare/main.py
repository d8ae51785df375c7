"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from alembic import command
from alembic.config import Config
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from slotshare.api import availabilities_router, health_router, search_router
from slotshare.config import get_settings
from slotshare.database import SessionLocal
from slotshare.services.lookup import get_lookup_index

logger = logging.getLogger(__name__)
settings = get_settings()


def run_migrations() -> None:
    """Run alembic migrations on startup."""
    # Skip migrations during testing
    if settings.is_testing:
        logger.info("Skipping migrations in test mode")
        return

    try:
        alembic_cfg = Config("alembic.ini")
        command.upgrade(alembic_cfg, "head")
        logger.info("Database migrations completed successfully")
    except Exception as e:
        logger.error(f"Failed to run migrations: {e}")
        raise


def rebuild_lookup_indices() -> None:
    """Re-derive the in-memory email/username indices from the store."""
    if settings.is_testing:
        return

    db = SessionLocal()
    try:
        get_lookup_index().rebuild(db)
    finally:
        db.close()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler."""
    # Startup
    run_migrations()
    rebuild_lookup_indices()
    yield
    # Shutdown


app = FastAPI(
    title="Slotshare API",
    description="Shareable weekly availability documents with owner lookup",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware for share-link pages
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # In production, restrict to specific origins
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(health_router)
app.include_router(availabilities_router)
app.include_router(search_router)


@app.get("/")
def root() -> dict[str, str]:
    """Root endpoint."""
    return {
        "name": "Slotshare API",
        "version": "0.1.0",
        "docs": "/docs",
    }
