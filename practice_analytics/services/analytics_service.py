"""
User Analytics Service.

Runs the refresh pipeline for one user: fetch the full interview history,
compute the snapshot, upsert it. Called after every completed interview.
"""
from datetime import date
from functools import wraps
from typing import Callable, Optional, Tuple
from sqlalchemy.orm import Session
from practice_analytics.config import get_settings
from practice_analytics.database.models import Interview
from practice_analytics.exceptions import AnalyticsComputationError, AnalyticsError
from practice_analytics.models.analytics_models import AnalyticsSnapshot, UserAnalyticsResponse
from practice_analytics.models.interview_models import InterviewCreate
from practice_analytics.services.analytics_engine import AnalyticsEngine, utc_today
from practice_analytics.services.analytics_repository import AnalyticsRepository, to_analytics_response
from practice_analytics.utils.logger import get_logger

logger = get_logger(__name__)


def handle_analytics_errors(operation_name: str):
    """Decorator for consistent error handling in analytics operations."""
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except Exception as e:
                logger.error(f"Error in {operation_name}: {e}")
                raise
        return wrapper
    return decorator


class UserAnalyticsService:
    """Service for refreshing and reading per-user analytics snapshots."""
    
    def __init__(
        self,
        db: Session,
        engine: Optional[AnalyticsEngine] = None,
        repository: Optional[AnalyticsRepository] = None,
        today_provider: Callable[[], date] = utc_today
    ):
        self.db = db
        self.engine = engine or AnalyticsEngine(**get_settings().analytics_engine_config)
        self.repository = repository or AnalyticsRepository(db)
        self.today_provider = today_provider
    
    @handle_analytics_errors("updating user analytics")
    def update_user_analytics(self, user_id: str) -> Optional[AnalyticsSnapshot]:
        """
        Recompute and store the user's snapshot.
        
        Returns None without writing when the user has no interviews.
        
        Raises:
            AnalyticsFetchError: history could not be read
            AnalyticsComputationError: history could not be summarised
            AnalyticsUpsertError: snapshot could not be written
        """
        records = self.repository.fetch_history(user_id)
        
        if not records:
            logger.info(f"No interviews found for user {user_id}, skipping analytics update")
            return None
        
        try:
            snapshot = self.engine.compute(records, today=self.today_provider())
        except Exception as e:
            raise AnalyticsComputationError(
                f"Failed to compute analytics: {e}",
                context={"user_id": user_id}
            ) from e
        
        self.repository.upsert_snapshot(user_id, snapshot)
        logger.info(
            f"User analytics updated for {user_id}: {snapshot.total_interviews} interviews, "
            f"avg {snapshot.avg_score}, streak {snapshot.current_streak}"
        )
        return snapshot
    
    def update_user_analytics_safely(self, user_id: str) -> Optional[AnalyticsSnapshot]:
        """Refresh analytics without ever failing the caller; stale analytics are tolerated."""
        try:
            return self.update_user_analytics(user_id)
        except AnalyticsError as e:
            logger.warning(f"Analytics refresh failed for user {user_id}, snapshot left stale: {e}")
            return None
    
    def get_user_analytics(self, user_id: str) -> Optional[UserAnalyticsResponse]:
        """Get the stored snapshot for a user."""
        row = self.repository.get_snapshot(user_id)
        return to_analytics_response(row) if row is not None else None
    
    def record_interview(self, request: InterviewCreate) -> Tuple[Interview, Optional[AnalyticsSnapshot]]:
        """Store a completed interview, then refresh the user's analytics."""
        interview = self.repository.add_interview(
            user_id=request.user_id,
            score=request.score,
            interview_date=request.interview_date or self.today_provider(),
            category=request.category,
            difficulty=request.difficulty,
            feedback=request.feedback
        )
        logger.info(f"Stored interview {interview.id} for user {request.user_id}")
        # detach so the analytics commit or rollback cannot expire the stored row
        self.db.expunge(interview)
        
        snapshot = self.update_user_analytics_safely(request.user_id)
        return interview, snapshot
