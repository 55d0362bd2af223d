"""Task endpoints."""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from classroom.auth import Requester, get_current_user
from classroom.database import get_db
from classroom.models import UserRole
from classroom.permissions import role_required
from .schemas import TaskCreate, TaskResponse
from .service import CREATE_FORBIDDEN, TaskStore

router = APIRouter(prefix="/tasks", tags=["Tasks"])


def get_task_store(db: Session = Depends(get_db)) -> TaskStore:
    return TaskStore(db)


@router.get("", response_model=list[TaskResponse])
async def list_tasks(
    current_user: Requester = Depends(get_current_user),
    store: TaskStore = Depends(get_task_store),
):
    """List tasks authored by the current teacher."""
    return store.list_tasks(current_user)


@router.post("", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
async def create_task(
    task_data: TaskCreate,
    current_user: Requester = Depends(role_required(UserRole.teacher, CREATE_FORBIDDEN)),
    store: TaskStore = Depends(get_task_store),
):
    return store.create_task(current_user, task_data.title, task_data.description, task_data.questions)


@router.get("/{task_id}", response_model=TaskResponse)
async def get_task(
    task_id: int,
    current_user: Requester = Depends(get_current_user),
    store: TaskStore = Depends(get_task_store),
):
    """Get one of the current teacher's tasks by id."""
    return store.get_task(current_user, task_id)
