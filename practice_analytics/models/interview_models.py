"""
Request and response models for recording completed interviews.
"""
from pydantic import BaseModel, Field
from typing import Dict, Any, Optional, Union
from datetime import date, datetime
from practice_analytics.models.analytics_models import AnalyticsSnapshot


class InterviewCreate(BaseModel):
    """A finished interview together with its generated report."""
    user_id: str = Field(..., min_length=1, max_length=64, description="User identifier")
    score: int = Field(..., description="Overall score from the report generator")
    category: Optional[str] = Field(None, max_length=100, description="Interview category")
    difficulty: Optional[str] = Field(None, max_length=20, description="Interview difficulty")
    interview_date: Optional[date] = Field(None, description="Date taken; defaults to today (UTC)")
    feedback: Optional[Union[Dict[str, Any], str]] = Field(
        None, description="Report generator output, structured or JSON text"
    )


class InterviewResponse(BaseModel):
    """Stored interview plus the outcome of the analytics refresh."""
    id: str = Field(..., description="Interview identifier")
    user_id: str = Field(..., description="User identifier")
    score: Optional[int] = Field(None, description="Interview score")
    category: Optional[str] = Field(None, description="Interview category")
    interview_date: date = Field(..., description="Date taken")
    created_at: Optional[datetime] = Field(None, description="Creation timestamp")
    analytics_updated: bool = Field(..., description="Whether the analytics snapshot was refreshed")
    analytics: Optional[AnalyticsSnapshot] = Field(None, description="Refreshed snapshot, if any")
