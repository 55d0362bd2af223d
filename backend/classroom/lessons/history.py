"""A student's past lessons and scores."""
from sqlalchemy import select
from sqlalchemy.orm import Session

from classroom.auth.models import Requester
from classroom.models import Lesson, LessonTask, Submission, Task, UserRole
from classroom.permissions import require_role
from .schemas import LessonHistoryEntry


def first_task_title():
    """Title of the task at the lowest position of the enclosing lesson."""
    return (
        select(Task.title)
        .join(LessonTask, LessonTask.task_id == Task.id)
        .where(LessonTask.lesson_id == Lesson.id)
        .order_by(LessonTask.position)
        .limit(1)
        .correlate(Lesson)
        .scalar_subquery()
    )


class StudentHistory:
    def __init__(self, db: Session):
        self.db = db

    def lesson_history(self, requester: Requester) -> list[LessonHistoryEntry]:
        """Submitted lessons, newest first, titled by their first task."""
        require_role(requester, UserRole.student, "Forbidden: Only students can view their history.")
        rows = (
            self.db.query(Lesson.id, Lesson.start_time, Submission.score, first_task_title())
            .join(Submission, Submission.lesson_id == Lesson.id)
            .filter(Submission.student_id == requester.id)
            .order_by(Lesson.start_time.desc(), Lesson.id.desc())
            .all()
        )
        return [
            LessonHistoryEntry(lesson_id=lesson_id, start_time=start_time, score=score, task_title=title)
            for lesson_id, start_time, score, title in rows
        ]
