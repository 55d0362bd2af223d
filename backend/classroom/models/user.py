"""User, Group and roster models."""

from sqlalchemy import Column, String, DateTime, ForeignKey, Enum as SQLEnum, Integer, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..database import Base
from .enums import UserRole


class User(Base):
    """A teacher or student. ``personal_id`` is the login identifier."""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    role = Column(SQLEnum(UserRole, name="user_role"), nullable=False)
    personal_id = Column(String(64), unique=True, index=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    owned_groups = relationship("Group", back_populates="teacher")
    tasks = relationship("Task", back_populates="teacher")

    def __repr__(self):
        return f"<User(id={self.id}, name='{self.name}', role={self.role.value})>"

    @property
    def is_student(self) -> bool:
        return self.role == UserRole.student


class Group(Base):
    """A teacher-owned roster of students."""
    __tablename__ = "groups"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    teacher_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    teacher = relationship("User", back_populates="owned_groups")
    students = relationship("User", secondary="group_students", order_by="User.id")
    lessons = relationship("Lesson", back_populates="group", order_by="Lesson.start_time")

    def __repr__(self):
        return f"<Group(id={self.id}, name='{self.name}')>"

    def is_owned_by(self, user_id: int) -> bool:
        return self.teacher_id == user_id

    def has_student(self, user_id: int) -> bool:
        return any(student.id == user_id for student in self.students)


class GroupStudent(Base):
    __tablename__ = "group_students"
    __table_args__ = (UniqueConstraint("group_id", "student_id", name="uq_group_student"),)

    id = Column(Integer, primary_key=True)
    group_id = Column(Integer, ForeignKey("groups.id"), nullable=False)
    student_id = Column(Integer, ForeignKey("users.id"), nullable=False)
