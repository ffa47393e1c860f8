"""
Database package for the Practice Analytics service.
"""
from . import models
from .models import Base, Interview, UserAnalytics

__all__ = ["Base", "Interview", "UserAnalytics", "models"]
