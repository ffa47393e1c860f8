"""
Health check endpoint.
"""
from datetime import datetime, timezone
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from practice_analytics import __version__
from practice_analytics.database.connection import check_db_connection, get_db

router = APIRouter(prefix="/api/v1", tags=["health"])


@router.get("/health")
async def health_check(db: Session = Depends(get_db)):
    """Report service and database status."""
    database_ok = check_db_connection(db)
    return JSONResponse(
        status_code=200 if database_ok else 503,
        content={
            "status": "healthy" if database_ok else "unhealthy",
            "database": "connected" if database_ok else "unavailable",
            "version": __version__,
            "timestamp": datetime.now(timezone.utc).isoformat()
        }
    )
