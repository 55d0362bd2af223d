"""Lesson, lesson task association, attendance and submission models."""

from datetime import datetime, UTC

from sqlalchemy import Column, DateTime, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import relationship

from ..database import Base
from .questions import AnswerListType


def utcnow() -> datetime:
    return datetime.now(UTC)


class Lesson(Base):
    """A teaching session binding one group to an ordered set of tasks.

    ``end_time`` stays null while the lesson is active. No operation sets it
    yet; a lesson is active from creation onwards.
    """
    __tablename__ = "lessons"

    id = Column(Integer, primary_key=True, index=True)
    group_id = Column(Integer, ForeignKey("groups.id"), nullable=False, index=True)
    start_time = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    end_time = Column(DateTime(timezone=True), nullable=True)

    # Relationships
    group = relationship("Group", back_populates="lessons")
    lesson_tasks = relationship(
        "LessonTask",
        back_populates="lesson",
        order_by="LessonTask.position",
        cascade="all, delete-orphan",
    )
    attendance = relationship("Attendance", back_populates="lesson")
    submissions = relationship("Submission", back_populates="lesson")

    def __repr__(self):
        return f"<Lesson(id={self.id}, group_id={self.group_id})>"

    @property
    def is_active(self) -> bool:
        return self.end_time is None

    @property
    def tasks(self):
        """Tasks in association order."""
        return [link.task for link in self.lesson_tasks]


class LessonTask(Base):
    """Join row placing a task at a position within a lesson."""
    __tablename__ = "lesson_tasks"
    __table_args__ = (UniqueConstraint("lesson_id", "task_id", name="uq_lesson_task"),)

    id = Column(Integer, primary_key=True)
    lesson_id = Column(Integer, ForeignKey("lessons.id"), nullable=False, index=True)
    task_id = Column(Integer, ForeignKey("tasks.id"), nullable=False)
    position = Column(Integer, nullable=False)

    lesson = relationship("Lesson", back_populates="lesson_tasks")
    task = relationship("Task")


class Attendance(Base):
    __tablename__ = "attendance"
    __table_args__ = (UniqueConstraint("lesson_id", "student_id", name="uq_attendance_lesson_student"),)

    id = Column(Integer, primary_key=True)
    lesson_id = Column(Integer, ForeignKey("lessons.id"), nullable=False, index=True)
    student_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    join_time = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    lesson = relationship("Lesson", back_populates="attendance")
    student = relationship("User")

    def __repr__(self):
        return f"<Attendance(lesson_id={self.lesson_id}, student_id={self.student_id})>"


class Submission(Base):
    """A student's finalized answers and computed score for a lesson. Write-once."""
    __tablename__ = "submissions"
    __table_args__ = (UniqueConstraint("lesson_id", "student_id", name="uq_submission_lesson_student"),)

    id = Column(Integer, primary_key=True)
    lesson_id = Column(Integer, ForeignKey("lessons.id"), nullable=False, index=True)
    student_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    answers = Column(AnswerListType, nullable=False)
    score = Column(Integer, nullable=False)
    submitted_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    lesson = relationship("Lesson", back_populates="submissions")
    student = relationship("User")

    def __repr__(self):
        return f"<Submission(lesson_id={self.lesson_id}, student_id={self.student_id}, score={self.score})>"
