"""Answer submission: grade once, store once."""
import logging
from typing import Sequence

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from classroom.auth.models import Requester
from classroom.errors import ConflictError, InternalError, InvalidInputError, NotFoundError
from classroom.models import Answer, Submission, UserRole
from classroom.permissions import require_group_member, require_role
from .lifecycle import LessonLifecycle
from .scoring import flatten_questions, score_answers

logger = logging.getLogger(__name__)

SUBMIT_FORBIDDEN = "Forbidden: Only students can submit answers."


class SubmissionEngine:
    def __init__(self, db: Session):
        self.db = db
        self.lessons = LessonLifecycle(db)

    def submit_answers(self, requester: Requester, lesson_id: int, answers: Sequence[Answer]) -> Submission:
        """Score the student's answers across every task of the lesson and store them.

        Question indexes address the lesson's tasks concatenated in lesson
        order. A second submission for the same lesson is a ``ConflictError``.
        """
        require_role(requester, UserRole.student, SUBMIT_FORBIDDEN)
        if answers is None or not isinstance(answers, (list, tuple)):
            raise InvalidInputError("Answers are required")

        lesson = self.lessons.get_lesson(lesson_id)
        require_group_member(requester, lesson.group)
        tasks = self.lessons.tasks_for_lesson(lesson)
        if not tasks:
            raise NotFoundError("Task not found for this lesson")

        questions = flatten_questions(task.questions for task in tasks)
        score = score_answers(questions, answers)

        submission = Submission(
            lesson_id=lesson.id,
            student_id=requester.id,
            answers=list(answers),
            score=score,
        )
        self.db.add(submission)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.info(f"Student {requester.id} tried to resubmit lesson {lesson_id}")
            raise ConflictError("You have already submitted answers for this lesson.") from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Error submitting answers for lesson {lesson_id}: {e}")
            raise InternalError() from e

        self.db.refresh(submission)
        logger.info(f"Student {requester.id} submitted lesson {lesson_id} with score {score}")
        return submission
