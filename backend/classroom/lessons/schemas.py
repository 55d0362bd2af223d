"""Request and response schemas for lessons."""
from datetime import datetime
from typing import Optional

from classroom.groups.schemas import UserResponse
from classroom.models.questions import Answer, CamelModel


class StartLessonRequest(CamelModel):
    group_id: int
    task_ids: list[int]


class LessonResponse(CamelModel):
    id: int
    group_id: int
    start_time: datetime
    end_time: Optional[datetime] = None


class SubmitAnswersRequest(CamelModel):
    answers: list[Answer]


class SubmissionResponse(CamelModel):
    id: int
    lesson_id: int
    student_id: int
    answers: list[Answer]
    score: int
    submitted_at: datetime


class AttendanceResponse(CamelModel):
    message: str
    already_marked: bool


class StudentScore(CamelModel):
    student_id: int
    student_name: str
    score: int


class Attendee(CamelModel):
    id: int
    student_name: str


class LessonAnalytics(CamelModel):
    average_score: int
    submissions: list[StudentScore]
    attendees: list[Attendee]
    attendee_count: int
    submission_count: int


class LiveLessonView(CamelModel):
    attendees: list[UserResponse]
    submitters: list[UserResponse]


class LessonHistoryEntry(CamelModel):
    lesson_id: int
    start_time: datetime
    score: int
    task_title: Optional[str] = None
