"""
Custom exception hierarchy for the Practice Analytics service.
"""

from typing import Dict, Any

class PracticeAnalyticsException(Exception):
    """Base exception for the Practice Analytics service."""
    def __init__(self, message: str, context: Dict[str, Any] = None):
        super().__init__(message)
        self.context = context or {}

class ConfigurationError(PracticeAnalyticsException):
    """Raised when there are configuration issues."""
    pass

class AnalyticsError(PracticeAnalyticsException):
    """Base exception for analytics refresh errors."""
    pass

class AnalyticsFetchError(AnalyticsError):
    """Raised when a user's interview history cannot be retrieved."""
    pass

class AnalyticsUpsertError(AnalyticsError):
    """Raised when a computed snapshot cannot be persisted."""
    pass

class AnalyticsComputationError(AnalyticsError):
    """Raised when a snapshot cannot be computed from the fetched history."""
    pass

class MalformedFeedbackError(PracticeAnalyticsException):
    """Raised when a feedback payload cannot be parsed."""
    pass
