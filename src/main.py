"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from alembic import command
from alembic.config import Config
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.api import (
    agenda_invites_router,
    agenda_items_router,
    agenda_sources_router,
    health_router,
    users_router,
    view_invite_router,
)
from src.config import get_settings

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


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


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler."""
    # Startup - run migrations
    run_migrations()
    yield
    # Shutdown


app = FastAPI(
    title="Agenda Share API",
    description="Aggregates calendars and shares free time through agenda invites",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware so invite links can be viewed from any site
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(health_router)
app.include_router(users_router)
app.include_router(agenda_sources_router)
app.include_router(agenda_items_router)
app.include_router(agenda_invites_router)
app.include_router(view_invite_router)


@app.get("/")
def root() -> dict[str, str]:
    """Root endpoint."""
    return {
        "name": "Agenda Share API",
        "version": "0.1.0",
        "docs": "/docs",
    }
