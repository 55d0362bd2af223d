"""Request and response schemas for tasks."""
from typing import Optional

from classroom.models.questions import CamelModel, QuestionList


class TaskCreate(CamelModel):
    title: str
    description: Optional[str] = None
    questions: QuestionList


class TaskResponse(CamelModel):
    """A task as its author sees it, answer key included."""
    id: int
    title: str
    description: Optional[str] = None
    questions: QuestionList
    teacher_id: int


class QuestionPrompt(CamelModel):
    """A question as shown to students: no ``correctAnswer``."""
    type: str
    question: str
    options: list[str]


class StudentTaskResponse(CamelModel):
    id: int
    title: str
    description: Optional[str] = None
    questions: list[QuestionPrompt]
