"""
Analytics API endpoints.

Read the stored per-user snapshot or force a recompute from interview history.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from practice_analytics.database.connection import get_db
from practice_analytics.exceptions import AnalyticsError
from practice_analytics.models.analytics_models import AnalyticsRefreshResponse, UserAnalyticsResponse
from practice_analytics.services.analytics_service import UserAnalyticsService
from practice_analytics.utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/api/v1/analytics", tags=["analytics"])


def get_analytics_service(db: Session = Depends(get_db)) -> UserAnalyticsService:
    """Dependency to get analytics service."""
    return UserAnalyticsService(db)


@router.get("/{user_id}", response_model=UserAnalyticsResponse)
async def get_user_analytics(
    user_id: str,
    analytics_service: UserAnalyticsService = Depends(get_analytics_service)
):
    """
    Get the stored analytics snapshot for a user.
    
    Returns 404 when the user has not completed any interview yet.
    """
    try:
        analytics = analytics_service.get_user_analytics(user_id)
    except AnalyticsError as e:
        logger.error(f"Error reading analytics for user {user_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Analytics are temporarily unavailable"
        )
    
    if analytics is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No analytics found for user {user_id}"
        )
    return analytics


@router.post("/{user_id}/refresh", response_model=AnalyticsRefreshResponse)
async def refresh_user_analytics(
    user_id: str,
    analytics_service: UserAnalyticsService = Depends(get_analytics_service)
):
    """Recompute the user's snapshot from their full interview history."""
    try:
        snapshot = analytics_service.update_user_analytics(user_id)
    except AnalyticsError as e:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=f"Failed to refresh analytics: {e}"
        )
    
    return AnalyticsRefreshResponse(
        user_id=user_id,
        updated=snapshot is not None,
        analytics=snapshot
    )
