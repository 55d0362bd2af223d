"""Role and ownership checks shared by the services and routers."""
from fastapi import Depends

from classroom.auth.models import Requester
from classroom.auth.service import get_current_user
from classroom.errors import ForbiddenError
from classroom.models import Group, UserRole


def require_role(requester: Requester, role: UserRole, message: str) -> Requester:
    """Raise ``ForbiddenError`` unless the requester has ``role``."""
    if requester.role != role:
        raise ForbiddenError(message)
    return requester


def role_required(role: UserRole, message: str):
    """Route dependency rejecting other roles before the request body is validated."""
    def dependency(current_user: Requester = Depends(get_current_user)) -> Requester:
        return require_role(current_user, role, message)
    return dependency


def require_group_owner(requester: Requester, group: Group) -> None:
    if not group.is_owned_by(requester.id):
        raise ForbiddenError("Forbidden: You do not own this group.")


def require_group_member(requester: Requester, group: Group) -> None:
    if not group.has_student(requester.id):
        raise ForbiddenError("Forbidden: You are not a member of this group.")


def require_group_access(requester: Requester, group: Group) -> None:
    """Allow the owning teacher or a student on the roster."""
    if requester.is_teacher:
        require_group_owner(requester, group)
    else:
        require_group_member(requester, group)
