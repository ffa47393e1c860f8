"""
Integration tests for interview completion and analytics endpoints.
"""
import pytest
from datetime import date, timedelta
from unittest.mock import patch
from practice_analytics.exceptions import AnalyticsFetchError, AnalyticsUpsertError
from practice_analytics.services.analytics_repository import AnalyticsRepository


def _iso_today():
    return date.today().isoformat()


class TestInterviewEndpoints:

    @pytest.mark.integration
    def test_complete_interview_refreshes_analytics(self, client, sample_report):
        response = client.post("/api/v1/interviews", json={
            "user_id": "user-1",
            "score": 72,
            "category": "Technical",
            "interview_date": _iso_today(),
            "feedback": sample_report
        })

        assert response.status_code == 201
        data = response.json()
        assert data["user_id"] == "user-1"
        assert data["score"] == 72
        assert data["analytics_updated"] is True
        assert data["analytics"]["total_interviews"] == 1
        assert data["analytics"]["category_stats"] == {"technical": {"avg_score": 72, "count": 1}}
        assert data["analytics"]["top_strengths"] == sample_report["strengths"]

    @pytest.mark.integration
    def test_complete_interview_with_text_feedback(self, client):
        response = client.post("/api/v1/interviews", json={
            "user_id": "user-1",
            "score": 55,
            "feedback": '{"feedback": {"weaknesses": ["Too brief"]}}'
        })

        assert response.status_code == 201
        assert response.json()["analytics"]["top_weaknesses"] == ["Too brief"]

    @pytest.mark.integration
    def test_analytics_failure_does_not_fail_interview(self, client):
        with patch.object(AnalyticsRepository, "upsert_snapshot", side_effect=AnalyticsUpsertError("locked")):
            response = client.post("/api/v1/interviews", json={"user_id": "user-1", "score": 40})

        assert response.status_code == 201
        assert response.json()["analytics_updated"] is False
        assert response.json()["analytics"] is None

    @pytest.mark.integration
    def test_invalid_request(self, client):
        response = client.post("/api/v1/interviews", json={"user_id": "user-1"})
        assert response.status_code == 422


class TestAnalyticsEndpoints:

    @pytest.mark.integration
    def test_get_missing_analytics(self, client):
        response = client.get("/api/v1/analytics/nobody")
        assert response.status_code == 404

    @pytest.mark.integration
    def test_get_after_interviews(self, client):
        yesterday = (date.today() - timedelta(days=1)).isoformat()
        client.post("/api/v1/interviews", json={"user_id": "user-1", "score": 50, "interview_date": yesterday})
        client.post("/api/v1/interviews", json={"user_id": "user-1", "score": 91, "interview_date": _iso_today()})

        response = client.get("/api/v1/analytics/user-1")

        assert response.status_code == 200
        data = response.json()
        assert data["user_id"] == "user-1"
        assert data["total_interviews"] == 2
        assert data["avg_score"] == 71
        assert data["score_improvement"] == 41
        assert data["last_interview_date"] == _iso_today()
        assert data["updated_at"] is not None

    @pytest.mark.integration
    def test_refresh_without_history(self, client):
        response = client.post("/api/v1/analytics/nobody/refresh")

        assert response.status_code == 200
        assert response.json() == {"user_id": "nobody", "updated": False, "analytics": None}
        assert client.get("/api/v1/analytics/nobody").status_code == 404

    @pytest.mark.integration
    def test_refresh_with_history(self, client, create_interview):
        create_interview(user_id="user-9", marks=85)

        response = client.post("/api/v1/analytics/user-9/refresh")

        assert response.status_code == 200
        assert response.json()["updated"] is True
        assert response.json()["analytics"]["best_score"] == 85

    @pytest.mark.integration
    def test_refresh_fetch_failure(self, client):
        with patch.object(AnalyticsRepository, "fetch_history", side_effect=AnalyticsFetchError("down")):
            response = client.post("/api/v1/analytics/user-1/refresh")
        assert response.status_code == 503


class TestHealthEndpoint:

    @pytest.mark.integration
    def test_health(self, client):
        response = client.get("/api/v1/health")
        assert response.status_code == 200
        assert response.json()["database"] == "connected"
