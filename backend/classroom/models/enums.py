"""Shared enums for models and auth."""
import enum

class UserRole(enum.Enum):
    teacher = "teacher"
    student = "student"


class QuestionType(enum.Enum):
    multiple_choice = "multiple-choice"
    open_ended = "open-ended"
