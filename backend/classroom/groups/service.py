"""Read access to teacher-owned groups and their rosters."""
import logging
from typing import Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from classroom.auth.models import Requester
from classroom.errors import InternalError, InvalidInputError, NotFoundError
from classroom.models import Group, GroupStudent, User, UserRole
from classroom.permissions import require_group_access, require_role

logger = logging.getLogger(__name__)

CREATE_FORBIDDEN = "Forbidden: Only teachers can create groups."


class GroupDirectory:
    def __init__(self, db: Session):
        self.db = db

    def get_group(self, group_id: int) -> Group:
        group = self.db.get(Group, group_id)
        if group is None:
            raise NotFoundError("Group not found")
        return group

    def get_group_for(self, requester: Requester, group_id: int) -> Group:
        """Fetch a group the requester owns or belongs to."""
        group = self.get_group(group_id)
        require_group_access(requester, group)
        return group

    def list_groups(self, requester: Requester) -> list[Group]:
        """Teachers see groups they own; students see groups they are on."""
        if requester.is_teacher:
            query = self.db.query(Group).filter(Group.teacher_id == requester.id)
        else:
            query = (
                self.db.query(Group)
                .join(GroupStudent, GroupStudent.group_id == Group.id)
                .filter(GroupStudent.student_id == requester.id)
            )
        return query.order_by(Group.id).all()

    def create_group(self, requester: Requester, name: str, student_ids: Sequence[int] = ()) -> Group:
        require_role(requester, UserRole.teacher, CREATE_FORBIDDEN)
        if not name or not name.strip():
            raise InvalidInputError("Group name is required")

        wanted = list(dict.fromkeys(student_ids))
        students = []
        if wanted:
            students = (
                self.db.query(User)
                .filter(User.id.in_(wanted))
                .order_by(User.id)
                .all()
            )
            if len(students) != len(wanted) or not all(user.is_student for user in students):
                raise InvalidInputError("Every group member must be an existing student")

        group = Group(name=name.strip(), teacher_id=requester.id, students=students)
        self.db.add(group)
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Error creating group: {e}")
            raise InternalError() from e
        self.db.refresh(group)
        logger.info(f"Teacher {requester.id} created group {group.id} with {len(students)} students")
        return group
