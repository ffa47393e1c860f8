"""
Analytics data models.

Pydantic models for the engine's input (one interview record) and output
(the per-user analytics snapshot).
"""
from pydantic import BaseModel, Field
from typing import List, Dict, Any, Optional
from datetime import date, datetime


class InterviewRecord(BaseModel):
    """One completed interview as seen by the analytics engine."""
    id: str = Field(..., description="Interview identifier")
    score: Optional[int] = Field(None, description="Interview score, conventionally 0-100")
    category: Optional[str] = Field(None, description="Free-text interview category")
    interview_date: date = Field(..., description="Calendar date the interview was taken")
    created_at: Optional[datetime] = Field(None, description="Creation timestamp, used only for ordering")
    # Any shape is accepted here; the feedback parser decides what is usable
    feedback_payload: Any = Field(None, description="Report generator output, structured or JSON text")


class CategoryStat(BaseModel):
    """Score statistics for one category bucket."""
    avg_score: int = Field(..., description="Rounded average score in this category")
    count: int = Field(..., description="Number of interviews in this category")


class AnalyticsSnapshot(BaseModel):
    """Aggregated performance snapshot for a user."""
    total_interviews: int = Field(..., description="Total number of interviews")
    avg_score: int = Field(..., description="Rounded average score across all interviews")
    best_score: int = Field(..., description="Highest interview score")
    latest_score: int = Field(..., description="Score of the most recent interview")
    score_improvement: int = Field(..., description="Latest score minus the previous score")
    current_streak: int = Field(..., description="Consecutive practice days ending today or yesterday")
    last_interview_date: Optional[date] = Field(None, description="Most recent interview date")
    category_stats: Dict[str, CategoryStat] = Field(default_factory=dict, description="Per-category statistics")
    top_strengths: List[str] = Field(default_factory=list, description="Most frequent strengths")
    top_weaknesses: List[str] = Field(default_factory=list, description="Most frequent weaknesses")
    pro_tip: str = Field(..., description="Guidance chosen by average score band")
    skipped_feedback_count: int = Field(0, description="Interviews whose feedback could not be parsed")


class UserAnalyticsResponse(AnalyticsSnapshot):
    """Stored snapshot returned by the API."""
    user_id: str = Field(..., description="User identifier")
    updated_at: Optional[datetime] = Field(None, description="When the snapshot was last written")


class AnalyticsRefreshResponse(BaseModel):
    """Result of an explicit analytics refresh."""
    user_id: str = Field(..., description="User identifier")
    updated: bool = Field(..., description="Whether a snapshot was written")
    analytics: Optional[AnalyticsSnapshot] = Field(None, description="The new snapshot, if any")
