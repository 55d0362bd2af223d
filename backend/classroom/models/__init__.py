"""SQLAlchemy models for the classroom lesson service."""

from .enums import UserRole, QuestionType
from .user import User, Group, GroupStudent
from .questions import Answer, MultipleChoiceQuestion, OpenEndedQuestion, Question, QuestionList
from .task import Task
from .lesson import Lesson, LessonTask, Attendance, Submission

__all__ = [
    "UserRole",
    "QuestionType",
    "User",
    "Group",
    "GroupStudent",
    "Answer",
    "MultipleChoiceQuestion",
    "OpenEndedQuestion",
    "Question",
    "QuestionList",
    "Task",
    "Lesson",
    "LessonTask",
    "Attendance",
    "Submission",
]
