"""Lesson lifecycle, attendance, submission scoring and analytics."""
from .lifecycle import LessonLifecycle
from .attendance import AttendanceTracker, AttendanceResult
from .submissions import SubmissionEngine
from .analytics import AnalyticsAggregator
from .history import StudentHistory

__all__ = [
    "LessonLifecycle",
    "AttendanceTracker",
    "AttendanceResult",
    "SubmissionEngine",
    "AnalyticsAggregator",
    "StudentHistory",
]
