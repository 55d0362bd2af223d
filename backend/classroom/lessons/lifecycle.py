"""Lesson lifecycle: opening lessons and resolving their tasks."""
import logging
from typing import Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from classroom.auth.models import Requester
from classroom.errors import InternalError, InvalidInputError, NotFoundError
from classroom.groups.service import GroupDirectory
from classroom.models import Lesson, LessonTask, Task, UserRole
from classroom.permissions import require_group_access, require_group_owner, require_role
from classroom.tasks.service import TaskStore

logger = logging.getLogger(__name__)

START_FORBIDDEN = "Forbidden: Only teachers can start lessons."


def validate_task_ids(task_ids: Sequence[int]) -> list[int]:
    """Reject an empty, non-positive or repeated task id list."""
    if not task_ids:
        raise InvalidInputError("groupId and a non-empty taskIds list are required")
    ids = list(task_ids)
    if any(not isinstance(task_id, int) or task_id <= 0 for task_id in ids):
        raise InvalidInputError("taskIds must be positive integers")
    if len(set(ids)) != len(ids):
        raise InvalidInputError("taskIds must not repeat a task")
    return ids


class LessonLifecycle:
    def __init__(self, db: Session):
        self.db = db
        self.groups = GroupDirectory(db)
        self.tasks = TaskStore(db)

    def get_lesson(self, lesson_id: int) -> Lesson:
        lesson = self.db.get(Lesson, lesson_id)
        if lesson is None:
            raise NotFoundError("Lesson not found")
        return lesson

    def start_lesson(self, requester: Requester, group_id: int, task_ids: Sequence[int]) -> Lesson:
        """Open a lesson for a group with tasks in the given order.

        The lesson row and all of its task rows are committed together or
        not at all.
        """
        require_role(requester, UserRole.teacher, START_FORBIDDEN)
        group = self.groups.get_group(group_id)
        require_group_owner(requester, group)
        ids = validate_task_ids(task_ids)
        tasks = self.tasks.get_tasks_by_ids(ids)

        lesson = Lesson(group_id=group.id)
        lesson.lesson_tasks = [
            LessonTask(task_id=task.id, position=position)
            for position, task in enumerate(tasks)
        ]
        try:
            self.db.add(lesson)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Error starting lesson for group {group_id}: {e}")
            raise InternalError() from e

        self.db.refresh(lesson)
        logger.info(f"Teacher {requester.id} started lesson {lesson.id} for group {group_id} with tasks {ids}")
        return lesson

    def tasks_for_lesson(self, lesson: Lesson) -> list[Task]:
        """Tasks of a lesson in association order, without access checks."""
        return lesson.tasks

    def get_tasks_for_lesson(self, requester: Requester, lesson_id: int) -> list[Task]:
        lesson = self.get_lesson(lesson_id)
        require_group_access(requester, lesson.group)
        return self.tasks_for_lesson(lesson)

    def active_lesson_for_group(self, requester: Requester, group_id: int) -> Lesson:
        """Most recently started lesson of the group that has not ended."""
        group = self.groups.get_group_for(requester, group_id)
        lesson = (
            self.db.query(Lesson)
            .filter(Lesson.group_id == group.id, Lesson.end_time.is_(None))
            .order_by(Lesson.start_time.desc(), Lesson.id.desc())
            .first()
        )
        if lesson is None:
            raise NotFoundError("No active lesson for this group")
        return lesson
