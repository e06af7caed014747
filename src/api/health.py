"""Health check endpoints."""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from src.config import get_settings
from src.database import get_db

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health")
def health_check() -> dict[str, str]:
    """Basic health check endpoint."""
    return {"status": "healthy", "environment": get_settings().environment}


@router.get("/health/db", response_model=None)
def db_health_check(db: Session = Depends(get_db)) -> dict[str, str] | JSONResponse:
    """Database health check endpoint. Responds 503 when the database is unreachable."""
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error(f"Database health check failed: {e}")
        return JSONResponse(
            status_code=503, content={"status": "unhealthy", "database": "unreachable"}
        )
    return {"status": "healthy", "database": "connected"}
