"""
Test configuration for the Practice Analytics tests.

This module provides database, service and API client fixtures.
"""
# Set test environment variables BEFORE any imports that might use them
import os
os.environ.setdefault("DATABASE_URL", "sqlite:///./test_practice_analytics.db")
os.environ.setdefault("ENVIRONMENT", "test")

import pytest
from datetime import date, datetime, timedelta, timezone
from pathlib import Path
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from practice_analytics.database.connection import engine, get_db
from practice_analytics.database.models import Base, Interview
from practice_analytics.main import app

# Fixed reference date so streak assertions do not depend on the wall clock
TODAY = date(2024, 6, 15)


@pytest.fixture(scope="session", autouse=True)
def setup_test_environment():
    """Set up basic test environment."""
    from practice_analytics.config import get_settings
    get_settings.cache_clear()
    
    yield
    
    # Cleanup
    engine.dispose()
    test_db_path = Path("test_practice_analytics.db")
    if test_db_path.exists():
        test_db_path.unlink()


# Database fixtures
@pytest.fixture
def db_session():
    """Create a clean test database session."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
        session.rollback()
    finally:
        session.close()


# FastAPI client fixture
@pytest.fixture
def client(db_session):
    """Create FastAPI test client with database dependency override."""
    client = TestClient(app)
    client.app.dependency_overrides[get_db] = lambda: db_session
    yield client
    client.app.dependency_overrides.clear()


@pytest.fixture
def create_interview(db_session):
    """Factory that stores an interview with an explicit creation order."""
    base_time = datetime(2024, 1, 1, tzinfo=timezone.utc)
    counter = {"n": 0}
    
    def _create(user_id="user-1", marks=70, category="technical", interview_date=TODAY, script=None):
        counter["n"] += 1
        interview = Interview(
            user_id=user_id,
            marks=marks,
            category=category,
            interview_date=interview_date,
            script=script,
            created_at=base_time + timedelta(minutes=counter["n"])
        )
        db_session.add(interview)
        db_session.commit()
        db_session.refresh(interview)
        return interview
    
    return _create


@pytest.fixture
def sample_report():
    """Report generator output for one interview."""
    return {
        "score": 72,
        "feedback": "Solid answers overall with room to add more detail.",
        "strengths": ["Clear communication", "Good use of examples"],
        "weaknesses": ["Answers lacked measurable outcomes"],
        "questionFeedback": [
            {
                "questionNumber": 1,
                "question": "Tell me about yourself.",
                "answer": "I am a backend developer...",
                "feedback": "Good structure.",
                "rating": "good"
            }
        ]
    }
