"""
SQLAlchemy models for the Practice Analytics database schema.
"""
import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, String, Text, Integer, Date, DateTime, JSON, Index, Uuid
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()

# JSONB on PostgreSQL, plain JSON elsewhere (SQLite in tests)
JSONType = JSON().with_variant(JSONB(), "postgresql")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Interview(Base):
    """A completed practice interview. Written once by the interview flow, never mutated here."""
    __tablename__ = "interviews"
    
    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(String(64), nullable=False, index=True)
    marks = Column(Integer, nullable=True)
    category = Column(String(100), nullable=True)
    difficulty = Column(String(20), nullable=True)
    interview_date = Column(Date, nullable=False)
    script = Column(JSONType, nullable=True)  # report generator output, or its JSON text
    created_at = Column(DateTime(timezone=True), default=_utcnow, server_default=func.now(), nullable=False)
    
    __table_args__ = (
        Index("ix_interviews_user_created", "user_id", "created_at"),
    )
    
    def __repr__(self):
        return f"<Interview(id={self.id}, user_id={self.user_id}, marks={self.marks}, category={self.category})>"


class UserAnalytics(Base):
    """Aggregated analytics snapshot, one row per user, replaced on every refresh."""
    __tablename__ = "user_analytics"
    
    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(String(64), nullable=False, unique=True, index=True)
    total_interviews = Column(Integer, default=0, nullable=False)
    avg_score = Column(Integer, default=0, nullable=False)
    best_score = Column(Integer, default=0, nullable=False)
    latest_score = Column(Integer, default=0, nullable=False)
    score_improvement = Column(Integer, default=0, nullable=False)
    current_streak = Column(Integer, default=0, nullable=False)
    last_interview_date = Column(Date, nullable=True)
    category_stats = Column(JSONType, nullable=False, default=dict)
    top_strengths = Column(JSONType, nullable=False, default=list)
    top_weaknesses = Column(JSONType, nullable=False, default=list)
    pro_tip = Column(Text, nullable=False, default="")
    skipped_feedback_count = Column(Integer, default=0, nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
    
    def __repr__(self):
        return f"<UserAnalytics(user_id={self.user_id}, total_interviews={self.total_interviews}, avg_score={self.avg_score})>"
