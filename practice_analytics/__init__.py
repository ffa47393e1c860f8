"""
Practice Analytics service.

Recomputes a candidate's longitudinal interview-practice snapshot every time
an interview completes.
"""

__version__ = "1.0.0"
