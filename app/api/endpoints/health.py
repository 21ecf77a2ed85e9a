"""
Health endpoint.

Reports liveness together with a real round trip to the database.
"""

import datetime

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlmodel import Session

from app.core.config import settings
from app.db.session import get_db

router = APIRouter()


@router.get("/health", summary="Service and database health.")
def health_check(db: Session = Depends(get_db)):
    """Health check endpoint for monitoring; 503 when the database is unreachable."""
    db.exec(text("SELECT 1"))
    return {
        "status": "healthy",
        "service": "userbase-api",
        "version": settings.VERSION,
        "timestamp": datetime.datetime.now(datetime.timezone.utc).isoformat(),
        "database": "connected",
    }
