"""Lesson analytics for teachers.

Both views are computed from scratch on every call. The live view is meant
to be polled; the server keeps no per-viewer state between calls.
"""
import logging
from typing import Sequence

from sqlalchemy.orm import Session

from classroom.auth.models import Requester
from classroom.groups.schemas import UserResponse
from classroom.models import Attendance, Lesson, Submission, User, UserRole
from classroom.permissions import require_group_owner, require_role
from .lifecycle import LessonLifecycle
from .schemas import Attendee, LessonAnalytics, LiveLessonView, StudentScore
from .scoring import round_half_up

logger = logging.getLogger(__name__)


def average_score(scores: Sequence[int]) -> int:
    """Rounded mean of the scores, or 0 when nobody has submitted."""
    if not scores:
        return 0
    return round_half_up(sum(scores) / len(scores))


class AnalyticsAggregator:
    def __init__(self, db: Session):
        self.db = db
        self.lessons = LessonLifecycle(db)

    def _owned_lesson(self, requester: Requester, lesson_id: int) -> Lesson:
        require_role(requester, UserRole.teacher, "Forbidden: Only teachers can view analytics.")
        lesson = self.lessons.get_lesson(lesson_id)
        require_group_owner(requester, lesson.group)
        return lesson

    def _attendees(self, lesson_id: int) -> list[User]:
        return (
            self.db.query(User)
            .join(Attendance, Attendance.student_id == User.id)
            .filter(Attendance.lesson_id == lesson_id)
            .order_by(Attendance.join_time, Attendance.id)
            .all()
        )

    def _submitters(self, lesson_id: int) -> list[User]:
        return (
            self.db.query(User)
            .join(Submission, Submission.student_id == User.id)
            .filter(Submission.lesson_id == lesson_id)
            .order_by(Submission.submitted_at, Submission.id)
            .all()
        )

    def get_analytics(self, requester: Requester, lesson_id: int) -> LessonAnalytics:
        """Class average, per-student scores and attendance for a lesson."""
        lesson = self._owned_lesson(requester, lesson_id)
        rows = (
            self.db.query(Submission.score, User.id, User.name)
            .join(User, Submission.student_id == User.id)
            .filter(Submission.lesson_id == lesson.id)
            .order_by(Submission.id)
            .all()
        )
        submissions = [
            StudentScore(student_id=student_id, student_name=name, score=score)
            for score, student_id, name in rows
        ]
        attendees = [Attendee(id=user.id, student_name=user.name) for user in self._attendees(lesson.id)]
        return LessonAnalytics(
            average_score=average_score([entry.score for entry in submissions]),
            submissions=submissions,
            attendees=attendees,
            attendee_count=len(attendees),
            submission_count=len(submissions),
        )

    def get_live(self, requester: Requester, lesson_id: int) -> LiveLessonView:
        """Who has joined and who has submitted, as of this call."""
        lesson = self._owned_lesson(requester, lesson_id)
        return LiveLessonView(
            attendees=[UserResponse.model_validate(user) for user in self._attendees(lesson.id)],
            submitters=[UserResponse.model_validate(user) for user in self._submitters(lesson.id)],
        )
