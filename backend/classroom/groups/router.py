"""Group endpoints."""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from classroom.auth import Requester, get_current_user
from classroom.database import get_db
from classroom.lessons.lifecycle import LessonLifecycle
from classroom.lessons.schemas import LessonResponse
from .schemas import GroupCreate, GroupDetail, GroupResponse
from classroom.models import UserRole
from classroom.permissions import role_required
from .service import CREATE_FORBIDDEN, GroupDirectory

router = APIRouter(prefix="/groups", tags=["Groups"])


def get_group_directory(db: Session = Depends(get_db)) -> GroupDirectory:
    return GroupDirectory(db)


@router.get("", response_model=list[GroupResponse])
async def list_groups(
    current_user: Requester = Depends(get_current_user),
    directory: GroupDirectory = Depends(get_group_directory),
):
    """List groups for the current teacher or student."""
    return directory.list_groups(current_user)


@router.post("", response_model=GroupDetail, status_code=status.HTTP_201_CREATED)
async def create_group(
    group_data: GroupCreate,
    current_user: Requester = Depends(role_required(UserRole.teacher, CREATE_FORBIDDEN)),
    directory: GroupDirectory = Depends(get_group_directory),
):
    return directory.create_group(current_user, group_data.name, group_data.student_ids)


@router.get("/{group_id}", response_model=GroupDetail)
async def get_group(
    group_id: int,
    current_user: Requester = Depends(get_current_user),
    directory: GroupDirectory = Depends(get_group_directory),
):
    """Group info including students."""
    return directory.get_group_for(current_user, group_id)


@router.get("/{group_id}/active-lesson", response_model=LessonResponse)
async def get_active_lesson(
    group_id: int,
    current_user: Requester = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return LessonLifecycle(db).active_lesson_for_group(current_user, group_id)
