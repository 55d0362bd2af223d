"""Task store: immutable question sets authored by teachers."""
import logging
from typing import Optional, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from classroom.auth.models import Requester
from classroom.errors import ForbiddenError, InternalError, InvalidInputError, NotFoundError
from classroom.models import Question, Task, UserRole
from classroom.permissions import require_role

logger = logging.getLogger(__name__)

CREATE_FORBIDDEN = "Forbidden: Only teachers can create tasks."


class TaskStore:
    def __init__(self, db: Session):
        self.db = db

    def create_task(
        self,
        requester: Requester,
        title: str,
        description: Optional[str],
        questions: Sequence[Question],
    ) -> Task:
        """Create a task. Tasks cannot be edited afterwards."""
        require_role(requester, UserRole.teacher, CREATE_FORBIDDEN)
        if not title or not title.strip():
            raise InvalidInputError("Missing required fields: title and questions are required.")
        if not questions:
            raise InvalidInputError("Missing required fields: title and questions are required.")

        task = Task(
            title=title.strip(),
            description=description,
            questions=list(questions),
            teacher_id=requester.id,
        )
        self.db.add(task)
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Error creating task: {e}")
            raise InternalError() from e
        self.db.refresh(task)
        logger.info(f"Teacher {requester.id} created task {task.id} with {task.question_count} questions")
        return task

    def list_tasks(self, requester: Requester) -> list[Task]:
        """List the requesting teacher's own tasks."""
        require_role(requester, UserRole.teacher, "Forbidden: Only teachers can view all tasks.")
        return (
            self.db.query(Task)
            .filter(Task.teacher_id == requester.id)
            .order_by(Task.id)
            .all()
        )

    def get_task(self, requester: Requester, task_id: int) -> Task:
        """Fetch a task, answer key included, for the teacher who wrote it."""
        require_role(requester, UserRole.teacher, "Forbidden: Only teachers can view task details.")
        task = self.db.get(Task, task_id)
        if task is None:
            raise NotFoundError("Task not found")
        if task.teacher_id != requester.id:
            raise ForbiddenError("Forbidden: You did not create this task.")
        return task

    def get_tasks_by_ids(self, task_ids: Sequence[int]) -> list[Task]:
        """Fetch tasks in the order requested; any missing id is ``NotFoundError``."""
        found = {
            task.id: task
            for task in self.db.query(Task).filter(Task.id.in_(set(task_ids))).all()
        }
        missing = [task_id for task_id in task_ids if task_id not in found]
        if missing:
            raise NotFoundError(f"Task not found: {', '.join(str(i) for i in missing)}")
        return [found[task_id] for task_id in task_ids]
