"""
Interview completion endpoint.

Stores a finished interview and refreshes the user's analytics. The interview
write never fails because of analytics.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError

from practice_analytics.models.interview_models import InterviewCreate, InterviewResponse
from practice_analytics.routers.analytics import get_analytics_service
from practice_analytics.services.analytics_service import UserAnalyticsService
from practice_analytics.utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/api/v1/interviews", tags=["interviews"])


@router.post("", response_model=InterviewResponse, status_code=status.HTTP_201_CREATED)
async def complete_interview(
    request: InterviewCreate,
    analytics_service: UserAnalyticsService = Depends(get_analytics_service)
):
    """Record a completed interview and its report."""
    try:
        interview, snapshot = analytics_service.record_interview(request)
    except SQLAlchemyError as e:
        logger.error(f"Error storing interview for user {request.user_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to store interview"
        )
    
    return InterviewResponse(
        id=str(interview.id),
        user_id=interview.user_id,
        score=interview.marks,
        category=interview.category,
        interview_date=interview.interview_date,
        created_at=interview.created_at,
        analytics_updated=snapshot is not None,
        analytics=snapshot
    )
