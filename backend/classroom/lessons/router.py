"""Lesson endpoints for teachers and students."""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from classroom.auth import Requester, get_current_user
from classroom.database import get_db
from classroom.models import UserRole
from classroom.permissions import role_required
from classroom.tasks.schemas import StudentTaskResponse, TaskResponse
from .analytics import AnalyticsAggregator
from .attendance import AttendanceTracker
from .history import StudentHistory
from .lifecycle import START_FORBIDDEN, LessonLifecycle
from .schemas import (
    AttendanceResponse, LessonAnalytics, LessonHistoryEntry, LessonResponse,
    LiveLessonView, StartLessonRequest, SubmissionResponse, SubmitAnswersRequest,
)
from .submissions import SUBMIT_FORBIDDEN, SubmissionEngine

router = APIRouter(prefix="/lessons", tags=["Lessons"])
student_router = APIRouter(prefix="/student", tags=["Student"])


def get_lifecycle(db: Session = Depends(get_db)) -> LessonLifecycle:
    return LessonLifecycle(db)


def get_attendance_tracker(db: Session = Depends(get_db)) -> AttendanceTracker:
    return AttendanceTracker(db)


def get_submission_engine(db: Session = Depends(get_db)) -> SubmissionEngine:
    return SubmissionEngine(db)


def get_analytics(db: Session = Depends(get_db)) -> AnalyticsAggregator:
    return AnalyticsAggregator(db)


@router.post("/start", response_model=LessonResponse, status_code=status.HTTP_201_CREATED)
async def start_lesson(
    request: StartLessonRequest,
    current_user: Requester = Depends(role_required(UserRole.teacher, START_FORBIDDEN)),
    lifecycle: LessonLifecycle = Depends(get_lifecycle),
):
    """Start a lesson for a group with one or more tasks."""
    return lifecycle.start_lesson(current_user, request.group_id, request.task_ids)


@router.get("/{lesson_id}/tasks", response_model=None)
async def get_tasks_for_lesson(
    lesson_id: int,
    current_user: Requester = Depends(get_current_user),
    lifecycle: LessonLifecycle = Depends(get_lifecycle),
):
    """Tasks of a lesson in the order their questions are numbered.

    Students get the questions without their answer key.
    """
    tasks = lifecycle.get_tasks_for_lesson(current_user, lesson_id)
    view = StudentTaskResponse if current_user.is_student else TaskResponse
    return [view.model_validate(task) for task in tasks]


@router.post("/{lesson_id}/attend", response_model=AttendanceResponse)
async def mark_attendance(
    lesson_id: int,
    current_user: Requester = Depends(get_current_user),
    tracker: AttendanceTracker = Depends(get_attendance_tracker),
):
    result = tracker.mark_attendance(current_user, lesson_id)
    return AttendanceResponse(message=result.message, already_marked=result.already_marked)


@router.post("/{lesson_id}/submit", response_model=SubmissionResponse, status_code=status.HTTP_201_CREATED)
async def submit_answers(
    lesson_id: int,
    request: SubmitAnswersRequest,
    current_user: Requester = Depends(role_required(UserRole.student, SUBMIT_FORBIDDEN)),
    engine: SubmissionEngine = Depends(get_submission_engine),
):
    """Submit the student's answers. Only the first submission is accepted."""
    return engine.submit_answers(current_user, lesson_id, request.answers)


@router.get("/{lesson_id}/analytics", response_model=LessonAnalytics)
async def get_lesson_analytics(
    lesson_id: int,
    current_user: Requester = Depends(get_current_user),
    aggregator: AnalyticsAggregator = Depends(get_analytics),
):
    """Scores per student and the class average."""
    return aggregator.get_analytics(current_user, lesson_id)


@router.get("/{lesson_id}/live", response_model=LiveLessonView)
async def get_live_lesson(
    lesson_id: int,
    current_user: Requester = Depends(get_current_user),
    aggregator: AnalyticsAggregator = Depends(get_analytics),
):
    """Attendees and submitters so far. Clients poll this endpoint."""
    return aggregator.get_live(current_user, lesson_id)


@student_router.get("/lessons/history", response_model=list[LessonHistoryEntry])
async def get_lesson_history(
    current_user: Requester = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Past lessons and scores for the logged-in student."""
    return StudentHistory(db).lesson_history(current_user)
