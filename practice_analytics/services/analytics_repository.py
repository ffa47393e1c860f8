"""
Persistence adapter for interview history and analytics snapshots.
"""
from datetime import date
from typing import Any, Dict, List, Optional, Union
from sqlalchemy import asc
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.sql import func
from practice_analytics.database.models import Interview, UserAnalytics
from practice_analytics.exceptions import AnalyticsFetchError, AnalyticsUpsertError
from practice_analytics.models.analytics_models import (
    AnalyticsSnapshot, CategoryStat, InterviewRecord, UserAnalyticsResponse
)
from practice_analytics.utils.logger import get_logger

logger = get_logger(__name__)


def to_interview_record(interview: Interview) -> InterviewRecord:
    return InterviewRecord(
        id=str(interview.id),
        score=interview.marks,
        category=interview.category,
        interview_date=interview.interview_date,
        created_at=interview.created_at,
        feedback_payload=interview.script
    )


def to_analytics_response(row: UserAnalytics) -> UserAnalyticsResponse:
    return UserAnalyticsResponse(
        user_id=row.user_id,
        total_interviews=row.total_interviews,
        avg_score=row.avg_score,
        best_score=row.best_score,
        latest_score=row.latest_score,
        score_improvement=row.score_improvement,
        current_streak=row.current_streak,
        last_interview_date=row.last_interview_date,
        category_stats={
            category: CategoryStat(**stats)
            for category, stats in (row.category_stats or {}).items()
        },
        top_strengths=list(row.top_strengths or []),
        top_weaknesses=list(row.top_weaknesses or []),
        pro_tip=row.pro_tip,
        skipped_feedback_count=row.skipped_feedback_count,
        updated_at=row.updated_at
    )


class AnalyticsRepository:
    """Reads interview history and writes the per-user analytics row."""
    
    def __init__(self, db: Session):
        self.db = db
    
    def fetch_history(self, user_id: str) -> List[InterviewRecord]:
        """
        All interviews for a user, oldest first.
        
        Raises:
            AnalyticsFetchError: if the history could not be read
        """
        try:
            interviews = self.db.query(Interview).filter(
                Interview.user_id == user_id
            ).order_by(asc(Interview.created_at), asc(Interview.id)).all()
        except SQLAlchemyError as e:
            logger.error(f"Failed to fetch interviews for analytics (user {user_id}): {e}")
            raise AnalyticsFetchError(
                "Failed to fetch interview history",
                context={"user_id": user_id}
            ) from e
        
        return [to_interview_record(interview) for interview in interviews]
    
    def upsert_snapshot(self, user_id: str, snapshot: AnalyticsSnapshot) -> UserAnalytics:
        """
        Replace the user's analytics row with ``snapshot``; one row per user, last write wins.
        
        Raises:
            AnalyticsUpsertError: if the snapshot could not be written
        """
        values = snapshot.model_dump()
        try:
            row = self.db.query(UserAnalytics).filter(UserAnalytics.user_id == user_id).first()
            if row is None:
                row = UserAnalytics(user_id=user_id)
                self.db.add(row)
            
            for field, value in values.items():
                setattr(row, field, value)
            row.updated_at = func.now()
            
            self.db.commit()
            self.db.refresh(row)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to update user_analytics for user {user_id}: {e}")
            raise AnalyticsUpsertError(
                "Failed to persist analytics snapshot",
                context={"user_id": user_id}
            ) from e
        
        return row
    
    def get_snapshot(self, user_id: str) -> Optional[UserAnalytics]:
        """Get the stored analytics row for a user."""
        try:
            return self.db.query(UserAnalytics).filter(UserAnalytics.user_id == user_id).first()
        except SQLAlchemyError as e:
            logger.error(f"Failed to read user_analytics for user {user_id}: {e}")
            raise AnalyticsFetchError(
                "Failed to read analytics snapshot",
                context={"user_id": user_id}
            ) from e
    
    def add_interview(
        self,
        user_id: str,
        score: int,
        interview_date: date,
        category: Optional[str] = None,
        difficulty: Optional[str] = None,
        feedback: Union[Dict[str, Any], str, None] = None
    ) -> Interview:
        """Store a completed interview."""
        interview = Interview(
            user_id=user_id,
            marks=score,
            category=category,
            difficulty=difficulty,
            interview_date=interview_date,
            script=feedback
        )
        try:
            self.db.add(interview)
            self.db.commit()
            self.db.refresh(interview)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to store interview for user {user_id}: {e}")
            raise
        
        return interview
