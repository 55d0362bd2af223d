"""Attendance tracking: one join record per student per lesson."""
import logging
from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from classroom.auth.models import Requester
from classroom.errors import InternalError
from classroom.models import Attendance, UserRole
from classroom.permissions import require_group_member, require_role
from .lifecycle import LessonLifecycle

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AttendanceResult:
    already_marked: bool

    @property
    def message(self) -> str:
        if self.already_marked:
            return "Attendance already marked"
        return "Attendance marked"


class AttendanceTracker:
    def __init__(self, db: Session):
        self.db = db
        self.lessons = LessonLifecycle(db)

    def mark_attendance(self, requester: Requester, lesson_id: int) -> AttendanceResult:
        """Record that the student joined the lesson.

        Safe to call repeatedly: a second call for the same student hits the
        uniqueness constraint and reports ``already_marked`` instead of failing.
        """
        require_role(requester, UserRole.student, "Forbidden: Only students can mark attendance.")
        lesson = self.lessons.get_lesson(lesson_id)
        require_group_member(requester, lesson.group)

        self.db.add(Attendance(lesson_id=lesson.id, student_id=requester.id))
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            logger.debug(f"Student {requester.id} already marked present for lesson {lesson_id}")
            return AttendanceResult(already_marked=True)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Error marking attendance for lesson {lesson_id}: {e}")
            raise InternalError() from e
        logger.info(f"Student {requester.id} joined lesson {lesson_id}")
        return AttendanceResult(already_marked=False)
